"""Gnome sort: a stable exchange sort that steps back after each swap."""

from __future__ import annotations

from typing import Iterable, Sequence


def _require_ordered(values: Sequence) -> None:
    if any(value != value for value in values):
        raise ValueError("values must be totally ordered; NaN found")


def gnome_sort(values: Iterable) -> list:
    """Return the values in ascending order, equal values keeping their order."""
    data = list(values)
    _require_ordered(data)
    position = 0
    while position < len(data):
        if position == 0 or data[position - 1] <= data[position]:
            position += 1
        else:
            data[position - 1], data[position] = data[position], data[position - 1]
            position -= 1
    return data


def gnome_argsort(values: Sequence, index: Iterable[int] | None = None) -> list[int]:
    """Return positions of ``values`` in stable ascending order.

    When ``index`` is given it is the starting order to be rearranged.
    """
    data = list(values)
    _require_ordered(data)
    if index is None:
        order = list(range(len(data)))
    else:
        order = list(index)
        for entry in order:
            if not 0 <= entry < len(data):
                raise IndexError(f"index entry {entry} out of range for {len(data)} values")
    position = 0
    while position < len(order):
        if position == 0 or data[order[position - 1]] <= data[order[position]]:
            position += 1
        else:
            order[position - 1], order[position] = order[position], order[position - 1]
            position -= 1
    return order