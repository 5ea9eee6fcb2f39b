"""Stable least-significant-bit radix sorting of 32- and 64-bit keys."""

from __future__ import annotations

import operator
import struct
from enum import IntEnum
from typing import Iterable, Sequence


class SortKind(IntEnum):
    """How the values being sorted are to be interpreted."""

    UINT32 = 0
    INT32 = 1
    FLOAT64 = 2
    FLOAT32 = 3
    INT64 = 4
    UINT64 = 5

    @property
    def bits(self) -> int:
        """Width of the key in bits."""
        wide = (SortKind.FLOAT64, SortKind.INT64, SortKind.UINT64)
        return 64 if self in wide else 32

    @property
    def is_float(self) -> bool:
        return self in (SortKind.FLOAT32, SortKind.FLOAT64)

    @property
    def is_signed(self) -> bool:
        return self in (SortKind.INT32, SortKind.INT64)

    @classmethod
    def from_mode(cls, mode: int) -> "SortKind":
        """Return the kind selected by the last decimal digit of ``mode``."""
        try:
            return cls(mode % 10)
        except ValueError:
            raise ValueError(f"unknown sort method in mode {mode}") from None


def sort_key(value, kind: SortKind | int) -> int:
    """Map ``value`` to an unsigned integer whose order matches the value's.

    Floats are ordered by their IEEE bit pattern, so ``-0.0`` comes
    before ``0.0``.
    """
    kind = SortKind(kind)
    bits = kind.bits
    sign = 1 << (bits - 1)
    mask = (1 << bits) - 1

    if kind.is_float:
        float_fmt, uint_fmt = ("<d", "<Q") if bits == 64 else ("<f", "<I")
        try:
            packed = struct.pack(float_fmt, float(value))
        except (OverflowError, struct.error) as exc:
            raise ValueError(f"{value!r} does not fit a {kind.name} key") from exc
        (raw,) = struct.unpack(uint_fmt, packed)
        return raw ^ (mask if raw & sign else sign)

    number = operator.index(value)
    if kind.is_signed:
        if not -sign <= number < sign:
            raise ValueError(f"{number} does not fit a {kind.name} key")
        return (number & mask) ^ sign
    if not 0 <= number <= mask:
        raise ValueError(f"{number} does not fit a {kind.name} key")
    return number


def radix_argsort(
    values: Sequence,
    kind: SortKind | int,
    index: Iterable[int] | None = None,
) -> list[int]:
    """Return the positions of ``values`` in stable ascending order.

    When ``index`` is given it is the starting order and the result is a
    stable rearrangement of it; otherwise the positions start as
    ``0, 1, ..., n-1``. Bit columns that are all zero or all one are
    skipped.
    """
    kind = SortKind(kind)
    keys = [sort_key(value, kind) for value in values]
    size = len(keys)
    if index is None:
        order = list(range(size))
    else:
        order = list(index)
        for position in order:
            if not 0 <= position < size:
                raise IndexError(f"index entry {position} out of range for {size} values")

    count = len(order)
    if count == 0:
        return order

    for bit in range(kind.bits):
        mask = 1 << bit
        ones = sum(1 for position in order if keys[position] & mask)
        if 0 < ones < count:
            zeros_part = [p for p in order if not keys[p] & mask]
            ones_part = [p for p in order if keys[p] & mask]
            order = zeros_part + ones_part
    return order