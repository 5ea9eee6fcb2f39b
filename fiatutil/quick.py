"""Comparison sorting with stable index ordering, and merging of sorted halves."""

from __future__ import annotations

from typing import Callable, Iterable, Sequence


def _require_ordered(values: Iterable) -> None:
    if any(value != value for value in values):
        raise ValueError("values must be totally ordered; NaN found")


def _start_order(size: int, index: Iterable[int] | None) -> list[int]:
    if index is None:
        return list(range(size))
    order = list(index)
    for position in order:
        if not 0 <= position < size:
            raise IndexError(f"index entry {position} out of range for {size} values")
    return order


def quick_argsort(
    values: Sequence,
    index: Iterable[int] | None = None,
    reverse: bool = False,
) -> list[int]:
    """Return positions of ``values`` in stable order.

    Equal values keep their order in ``index`` (or in ``values`` when no
    index is given), in ascending and descending order alike.
    """
    data = list(values)
    _require_ordered(data)
    order = _start_order(len(data), index)
    return sorted(order, key=data.__getitem__, reverse=reverse)


def quick_sort(values: Iterable, reverse: bool = False) -> list:
    """Return ``values`` sorted, ascending unless ``reverse``."""
    data = list(values)
    _require_ordered(data)
    return sorted(data, reverse=reverse)


def _merge(left: list, right: list, left_first: Callable[[object, object], bool]) -> list:
    merged = []
    i = j = 0
    while i < len(left) and j < len(right):
        if left_first(left[i], right[j]):
            merged.append(left[i])
            i += 1
        else:
            merged.append(right[j])
            j += 1
    merged.extend(left[i:])
    merged.extend(right[j:])
    return merged


def _check_split(split: int, size: int) -> None:
    if not 0 <= split <= size:
        raise ValueError(f"split {split} out of range for {size} items")


def merge_halves(values: Sequence, split: int, reverse: bool = False) -> list:
    """Merge the sorted runs ``values[:split]`` and ``values[split:]``.

    Both runs must be in the requested order; on a tie the element of the
    second run comes first.
    """
    data = list(values)
    _check_split(split, len(data))
    left, right = data[:split], data[split:]
    if not left or not right:
        return data
    if reverse:
        if left[-1] >= right[0]:
            return data
        return _merge(left, right, lambda a, b: a > b)
    if left[-1] <= right[0]:
        return data
    return _merge(left, right, lambda a, b: a < b)


def merge_index_halves(
    values: Sequence,
    index: Sequence[int],
    split: int,
    rank: Sequence[int] | None = None,
    reverse: bool = False,
) -> list[int]:
    """Merge two sorted runs of positions into ``values``.

    ``index[:split]`` and ``index[split:]`` must each be ordered by the
    values they point at. Ties are broken by ``rank[position]``, lower
    first; by default the rank is the position's place in ``index``.
    """
    data = list(values)
    order = _start_order(len(data), index)
    _check_split(split, len(order))
    if rank is None:
        ranks: dict[int, int] | Sequence[int] = {p: k for k, p in enumerate(order)}
    else:
        ranks = rank
    left, right = order[:split], order[split:]
    if not left or not right:
        return order

    if reverse:
        if data[left[-1]] >= data[right[0]]:
            return order

        def left_first(a: int, b: int) -> bool:
            if data[a] != data[b]:
                return data[a] > data[b]
            return ranks[a] <= ranks[b]

    else:
        if data[left[-1]] <= data[right[0]]:
            return order

        def left_first(a: int, b: int) -> bool:
            if data[a] != data[b]:
                return data[a] < data[b]
            return ranks[a] <= ranks[b]

    return _merge(left, right, left_first)