"""32- and 64-bit cyclic redundancy checks compatible with the Unix ``cksum`` command."""

from __future__ import annotations

_POLY = 0x04C11DB7
_MASK32 = 0xFFFFFFFF
_MASK64 = 0xFFFFFFFFFFFFFFFF


def _build_table() -> tuple[int, ...]:
    table = []
    for byte in range(256):
        crc = byte << 24
        for _ in range(8):
            crc = ((crc << 1) ^ _POLY) if crc & 0x80000000 else (crc << 1)
            crc &= _MASK32
        table.append(crc)
    return tuple(table)


_TABLE = _build_table()


def _as_bytes(data) -> bytes:
    return memoryview(data).tobytes()


def cksum32(data, crc: int = 0) -> int:
    """Fold the bytes of ``data`` into a running 32-bit CRC."""
    crc &= _MASK32
    for byte in _as_bytes(data):
        crc = ((crc << 8) ^ _TABLE[((crc >> 24) ^ byte) & 0xFF]) & _MASK32
    return crc


def cksum64(data, crc: int = 0) -> int:
    """Fold the bytes of ``data`` into a running 64-bit CRC."""
    crc &= _MASK64
    for byte in _as_bytes(data):
        index = (crc ^ byte) & 0xFF
        crc = (crc >> 8) ^ (_TABLE[index] << 32)
    return crc & _MASK64


def length_cksum32(length: int, crc: int) -> int:
    """Fold a byte count into a 32-bit CRC and complement the result."""
    crc &= _MASK32
    while length > 0:
        crc = ((crc << 8) ^ _TABLE[((crc >> 24) ^ length) & 0xFF]) & _MASK32
        length >>= 8
    return ~crc & _MASK32


def length_cksum64(length: int, crc: int) -> int:
    """Fold a byte count into a 64-bit CRC and complement the result."""
    crc &= _MASK64
    while length > 0:
        index = (crc ^ length) & 0xFF
        crc = (crc >> 8) ^ (_TABLE[index] << 32)
        length >>= 8
    return ~crc & _MASK64


def crc32(data, crc: int = 0) -> int:
    """Return the ``cksum``-style CRC of ``data`` including its length.

    Empty input leaves ``crc`` unchanged.
    """
    raw = _as_bytes(data)
    if not raw:
        return crc
    return length_cksum32(len(raw), cksum32(raw, crc))


def crc64(data, crc: int = 0) -> int:
    """Return the 64-bit CRC of ``data`` including its length.

    Empty input leaves ``crc`` unchanged.
    """
    raw = _as_bytes(data)
    if not raw:
        return crc
    return length_cksum64(len(raw), cksum64(raw, crc))