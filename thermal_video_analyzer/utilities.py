"""Colour key packing and temperature unit conversions."""

from typing import Tuple


def pack_rgb(r: int, g: int, b: int) -> int:
    """Pack 8-bit R, G, B into a 24-bit key (r<<16 | g<<8 | b)."""
    return (int(r) << 16) | (int(g) << 8) | int(b)


def unpack_rgb(key: int) -> Tuple[int, int, int]:
    """Inverse of pack_rgb."""
    return (key >> 16) & 0xFF, (key >> 8) & 0xFF, key & 0xFF


def is_channel(value: int) -> bool:
    return 0 <= value <= 255


class UnitConversion:
    """Temperature conversions from °C to °F and K."""

    @staticmethod
    def c2k(c):
        return c + 273.15

    @staticmethod
    def c2f(c):
        return c * (9.0 / 5.0) + 32

    @staticmethod
    def from_celsius(c, unit):
        """Convert °C to 'C', 'F' or 'K'. None passes through."""
        if c is None:
            return None
        if unit == 'C':
            return c
        if unit == 'F':
            return UnitConversion.c2f(c)
        if unit == 'K':
            return UnitConversion.c2k(c)
        raise ValueError(f"Unsupported temperature unit: {unit}")

    @staticmethod
    def unitlabel(unit):
        if unit == 'C':
            return '°C'
        if unit == 'K':
            return 'K'
        if unit == 'F':
            return '°F'
        return None
