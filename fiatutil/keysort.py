"""Sorting of one-dimensional arrays and of records by one or more key columns."""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Sequence

from .counting import counting_argsort, counting_sort
from .gnome import gnome_argsort
from .quick import quick_argsort
from .radix import SortKind, radix_argsort, sort_key


class SortMethod(Enum):
    """Algorithm used to order a key column."""

    RADIX = "radix"
    HEAP = "heap"
    QUICK = "quick"
    COUNTING = "counting"
    GNOME = "gnome"


DEFAULT_METHOD = SortMethod.RADIX

# Only these give a correct result when several keys are sorted one after another.
_MULTIKEY_METHODS = frozenset({SortMethod.RADIX, SortMethod.QUICK, SortMethod.COUNTING})

_UNSIGNED_KIND = {32: SortKind.UINT32, 64: SortKind.UINT64}


def _method(method: SortMethod | str | None) -> SortMethod:
    if method is None:
        return DEFAULT_METHOD
    return SortMethod(method)


def _start_order(index: Iterable[int] | None, size: int) -> list[int]:
    if index is None:
        return list(range(size))
    order = list(index)
    if len(order) != size:
        raise ValueError(f"index has {len(order)} entries, expected {size}")
    for position in order:
        if not 0 <= position < size:
            raise IndexError(f"index entry {position} out of range for {size} values")
    return order


def heapsort_indices(values: Sequence, index: Iterable[int] | None = None) -> list[int]:
    """Return positions of ``values`` in ascending order using heapsort.

    ``index`` is the starting arrangement of positions. Heapsort is not
    stable: equal values may come out in any order.
    """
    data = list(values)
    heap = _start_order(index, len(data))
    size = len(heap)
    if size < 2:
        return heap

    left = size // 2 + 1
    right = size
    while True:
        if left > 1:
            left -= 1
            item = heap[left - 1]
        else:
            item = heap[right - 1]
            heap[right - 1] = heap[0]
            right -= 1
            if right == 1:
                heap[0] = item
                break
        pivot = data[item]
        slot = left
        child = 2 * left
        while child <= right:
            if child < right and data[heap[child - 1]] < data[heap[child]]:
                child += 1
            if pivot < data[heap[child - 1]]:
                heap[slot - 1] = heap[child - 1]
                slot = child
                child *= 2
            else:
                child = right + 1
        heap[slot - 1] = item
    return heap


def _sort_column(
    column: list,
    kind: SortKind,
    method: SortMethod,
    order: list[int],
    descending: bool,
) -> list[int]:
    if method is SortMethod.COUNTING:
        return counting_argsort(column, kind, order, reverse=descending)

    keys = [sort_key(value, kind) for value in column]
    if descending:
        mask = (1 << kind.bits) - 1
        keys = [mask - key for key in keys]

    if method is SortMethod.RADIX:
        return radix_argsort(keys, _UNSIGNED_KIND[kind.bits], order)
    if method is SortMethod.QUICK:
        return quick_argsort(keys, order)
    if method is SortMethod.HEAP:
        return heapsort_indices(keys, order)
    return gnome_argsort(keys, order)


def keysort_2d(
    rows: Sequence[Sequence],
    kind: SortKind | int,
    key: int = 1,
    multikey: Iterable[int] | None = None,
    method: SortMethod | str | None = None,
    index: Iterable[int] | None = None,
    init: bool = False,
) -> list:
    """Sort records by one or more key columns.

    Columns are numbered from 1; a negative number sorts that column in
    descending order and 0 is skipped. ``multikey`` lists keys from most
    to least significant and overrides ``key``. With several keys a method
    that cannot sort key after key is replaced by the default method.

    Without ``index`` the rows are returned reordered. With ``index`` the
    rows are left alone and the reordered index is returned; ``init``
    restarts the index at ``0, 1, ..., n-1`` first.
    """
    kind = SortKind(kind)
    records = list(rows)
    size = len(records)
    if size == 0:
        return [] if index is None else list(index)

    keys = list(multikey) if multikey is not None else [key]
    chosen = _method(method)
    if len(keys) > 1 and chosen not in _MULTIKEY_METHODS:
        chosen = DEFAULT_METHOD

    if index is not None and init:
        _start_order(index, size)
        order = list(range(size))
    else:
        order = _start_order(index, size)

    for signed_key in reversed(keys):
        column_number = abs(signed_key)
        if column_number == 0:
            continue
        column = [record[column_number - 1] for record in records]
        order = _sort_column(column, kind, chosen, order, signed_key < 0)

    if index is None:
        return [records[position] for position in order]
    return order


def keysort_1d(
    values: Sequence,
    kind: SortKind | int,
    method: SortMethod | str | None = None,
    descending: bool = False,
    index: Iterable[int] | None = None,
    init: bool = False,
) -> list:
    """Sort a one-dimensional array.

    Without ``index`` the sorted values are returned. With ``index`` the
    values are left alone and the index, rearranged so that it visits the
    values in order, is returned; ``init`` restarts it at
    ``0, 1, ..., n-1`` first. Equal values keep their order except with
    heapsort.
    """
    kind = SortKind(kind)
    data = list(values)
    chosen = _method(method)
    if not data:
        return [] if index is None else list(index)

    if chosen is SortMethod.QUICK and index is None and not init:
        keys = [sort_key(value, kind) for value in data]
        return [data[position] for position in quick_argsort(keys, reverse=descending)]

    if chosen is SortMethod.COUNTING:
        if index is None:
            return counting_sort(data, kind, reverse=descending)
        if init:
            _start_order(index, len(data))
            start = list(range(len(data)))
        else:
            start = _start_order(index, len(data))
        return counting_argsort(data, kind, start, reverse=descending)

    records = [(value,) for value in data]
    result = keysort_2d(
        records,
        kind,
        key=-1 if descending else 1,
        method=chosen,
        index=index,
        init=init,
    )
    if index is None:
        return [record[0] for record in result]
    return result