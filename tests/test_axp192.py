import pytest

from tftkit.axp192 import AXP192


class FakeBus:
    def __init__(self, registers=None):
        self.registers = dict(registers or {})
        self.writes = []
        self.addresses = set()

    def read_byte_data(self, address, register):
        self.addresses.add(address)
        return self.registers.get(register, 0)

    def write_byte_data(self, address, register, value):
        self.addresses.add(address)
        self.writes.append((register, value))
        self.registers[register] = value


def test_power_on_write_sequence():
    bus = FakeBus({0x12: 0x00, 0x31: 0x00})
    AXP192(bus).power_on()
    assert bus.writes == [
        (0x28, 0xCC),
        (0x84, 0xF2),
        (0x82, 0xFF),
        (0x33, 0xC0),
        (0x12, 0x4D),
        (0x36, 0x0C),
        (0x91, 0xF0),
        (0x90, 0x02),
        (0x30, 0x80),
        (0x39, 0xFC),
        (0x35, 0xA2),
        (0x32, 0x46),
        (0x31, 0x04),
    ]
    assert bus.addresses == {0x34}


def test_power_on_clears_bit4_of_power_control():
    bus = FakeBus({0x12: 0x10})
    AXP192(bus).power_on()
    assert bus.registers[0x12] & 0x10 == 0
    assert bus.registers[0x12] & 0x4D == 0x4D


def test_power_on_keeps_high_bits_of_poweroff_voltage():
    bus = FakeBus({0x31: 0xF3})
    AXP192(bus).power_on()
    assert bus.registers[0x31] & 0xF8 == 0xF3 & 0xF8
    assert bus.registers[0x31] & 0x07 == 1 << 2


def test_screen_breath_clamps_to_twelve():
    bus = FakeBus({0x28: 0x0C})
    AXP192(bus).screen_breath(20)
    assert bus.registers[0x28] == 0xCC


@pytest.mark.parametrize("brightness", [0, 5, 12])
def test_screen_breath_keeps_low_nibble(brightness):
    bus = FakeBus({0x28: 0x3A})
    AXP192(bus).screen_breath(brightness)
    assert bus.registers[0x28] & 0x0F == 0x3A & 0x0F
    assert bus.registers[0x28] >> 4 == brightness


def test_screen_breath_rejects_negative():
    with pytest.raises(ValueError):
        AXP192(FakeBus()).screen_breath(-1)


@pytest.mark.parametrize(
    "method, value",
    [
        ("enable_coulomb_counter", 0x80),
        ("disable_coulomb_counter", 0x00),
        ("stop_coulomb_counter", 0xC0),
        ("clear_coulomb_counter", 0xA0),
    ],
)
def test_coulomb_counter_commands(method, value):
    bus = FakeBus()
    getattr(AXP192(bus), method)()
    assert bus.writes == [(0xB8, value)]


def test_write_rejects_out_of_range_value():
    with pytest.raises(ValueError):
        AXP192(FakeBus()).write(0x28, 0x100)


def test_custom_address_and_read():
    bus = FakeBus({0x28: 0x5A})
    chip = AXP192(bus, address=0x35)
    assert chip.read(0x28) == 0x5A
    assert bus.addresses == {0x35}