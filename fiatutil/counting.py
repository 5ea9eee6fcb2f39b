"""Stable counting sort that works through keys in 16-bit digits."""

from __future__ import annotations

from typing import Iterable, Sequence

from .radix import SortKind, sort_key

_DIGIT_BITS = 16
_DIGIT_MASK = (1 << _DIGIT_BITS) - 1


def counting_argsort(
    values: Sequence,
    kind: SortKind | int,
    index: Iterable[int] | None = None,
    reverse: bool = False,
) -> list[int]:
    """Return the positions of ``values`` in stable sorted order.

    Keys are distributed into buckets 16 bits at a time, least
    significant digit first; a digit that is equal for every value is
    skipped. With ``reverse`` the order is descending, equal values still
    keeping their starting order. When ``index`` is given it is the
    starting order and the result is a rearrangement of it.
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
    if not order:
        return order

    local_keys = [keys[position] for position in order]
    local = list(range(len(order)))

    for shift in range(0, kind.bits, _DIGIT_BITS):
        digits = [(key >> shift) & _DIGIT_MASK for key in local_keys]
        low, high = min(digits), max(digits)
        if low == high:
            continue
        buckets: list[list[int]] = [[] for _ in range(high - low + 1)]
        for item in local:
            digit = digits[item]
            slot = high - digit if reverse else digit - low
            buckets[slot].append(item)
        local = [item for bucket in buckets for item in bucket]

    return [order[item] for item in local]


def counting_sort(
    values: Iterable,
    kind: SortKind | int,
    reverse: bool = False,
) -> list:
    """Return ``values`` sorted by counting sort, ascending unless ``reverse``."""
    data = list(values)
    return [data[position] for position in counting_argsort(data, kind, reverse=reverse)]