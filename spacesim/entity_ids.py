"""Encoding of entity (index, generation) pairs into single integers."""

from __future__ import annotations

from typing import Tuple

_U32 = 0xFFFFFFFF
_FACTOR = 1_000_000


def proper_encode_entity(index: int, generation: int) -> int:
    """Pack index into the high 32 bits and generation into the low 32 bits."""
    return ((index & _U32) << 32) | (generation & _U32)


def proper_decode_entity(value: int) -> Tuple[int, int]:
    """Split a packed value into ``(index, generation)``."""
    value &= (1 << 64) - 1
    return (value >> 32) & _U32, value & _U32


def encode_entity(index: int, generation: int) -> int:
    """Readable encoding ``generation * 1_000_000 + index``; ambiguous for large indexes."""
    return generation * _FACTOR + index


def decode_entity(value: int) -> Tuple[int, int]:
    """Inverse of ``encode_entity``: return ``(index, generation)``."""
    quotient = abs(value) // _FACTOR
    if value < 0:
        quotient = -quotient
    remainder = value - quotient * _FACTOR
    return remainder & _U32, quotient & _U32