"""Conversions between the views of a 32-bit console word."""

from __future__ import annotations

import struct

_MASK = 0xFFFFFFFF


def to_unsigned(value: int) -> int:
    """Return the word's raw 32-bit pattern as a non-negative int."""
    return value & _MASK


def to_signed(value: int) -> int:
    """Interpret the low 32 bits of value as a two's-complement integer."""
    value &= _MASK
    return value - (1 << 32) if value & 0x80000000 else value


def word_to_float(value: int) -> float:
    """Interpret the word's bits as an IEEE single-precision float."""
    return struct.unpack("<f", struct.pack("<I", to_unsigned(value)))[0]


def float_to_word(value: float) -> int:
    """Return the bit pattern of value stored as a single-precision float."""
    return struct.unpack("<I", struct.pack("<f", value))[0]