"""The AXP192 power management chip, driven over an I2C register bus."""

from __future__ import annotations

import logging
from typing import Protocol

log = logging.getLogger(__name__)

_REG_LDO23_VOLTAGE = 0x28
_REG_COULOMB_CONTROL = 0xB8


class _RegisterBus(Protocol):
    def read_byte_data(self, address: int, register: int) -> int: ...

    def write_byte_data(self, address: int, register: int, value: int) -> None: ...


class AXP192:
    """Register-level control of an AXP192 on an SMBus-style bus."""

    ADDRESS = 0x34
    MAX_BRIGHTNESS = 12

    def __init__(self, bus: _RegisterBus, address: int = ADDRESS) -> None:
        self.bus = bus
        self.address = address

    def read(self, reg: int) -> int:
        """Read one register."""
        return self.bus.read_byte_data(self.address, reg) & 0xFF

    def write(self, reg: int, value: int) -> None:
        """Write one register."""
        if not 0 <= value <= 0xFF:
            raise ValueError(f"register value out of range: {value}")
        self.bus.write_byte_data(self.address, reg, value)

    def _write_and_check(self, reg: int, value: int) -> None:
        self.write(reg, value)
        log.debug("data(0x%02x)=%x", reg, self.read(reg))

    def power_on(self) -> None:
        """Configure rails, ADC, charging and protection for the display board."""
        self._write_and_check(0x28, 0xCC)  # LDO2 and LDO3 at 3.0 V
        self._write_and_check(0x84, 0xF2)  # ADC sample rate 200 Hz
        self._write_and_check(0x82, 0xFF)  # all ADCs enabled
        self._write_and_check(0x33, 0xC0)  # charge to 4.2 V, 100 mA

        data = self.read(0x12)
        log.info("data(0x12)=%x", data)
        data = (data & 0xEF) | 0x4D  # enable LDO2, LDO3, DCDC1, DCDC3
        log.info("data(0x12)=%x", data)
        self.write(0x12, data)

        self.write(0x36, 0x0C)  # 128 ms power on, 4 s power off
        self.write(0x91, 0xF0)  # RTC voltage 3.3 V
        self.write(0x90, 0x02)  # GPIO0 as LDO
        self.write(0x30, 0x80)  # no VBUS hold limit
        self.write(0x39, 0xFC)  # temperature protection
        self.write(0x35, 0xA2)  # RTC battery charge
        self.write(0x32, 0x46)  # battery detection

        data = self.read(0x31)
        log.info("data(0x31)=%x", data)
        data = (data & 0xF8) | (1 << 2)  # power-off voltage 3.0 V
        log.info("data(0x31)=%x", data)
        self.write(0x31, data)

    def screen_breath(self, brightness: int) -> None:
        """Set the backlight level, 0 to 12; larger values are clamped."""
        if brightness < 0:
            raise ValueError(f"brightness must not be negative: {brightness}")
        brightness = min(brightness, self.MAX_BRIGHTNESS)
        current = self.read(_REG_LDO23_VOLTAGE)
        self.write(_REG_LDO23_VOLTAGE, (current & 0x0F) | (brightness << 4))

    def enable_coulomb_counter(self) -> None:
        """Enable the coulomb counter."""
        self.write(_REG_COULOMB_CONTROL, 0x80)

    def disable_coulomb_counter(self) -> None:
        """Disable the coulomb counter."""
        self.write(_REG_COULOMB_CONTROL, 0x00)

    def stop_coulomb_counter(self) -> None:
        """Stop the coulomb counter."""
        self.write(_REG_COULOMB_CONTROL, 0xC0)

    def clear_coulomb_counter(self) -> None:
        """Clear the coulomb counter."""
        self.write(_REG_COULOMB_CONTROL, 0xA0)