import math

import pytest
from hypothesis import given
from hypothesis import strategies as st

from fiatutil.gnome import gnome_argsort, gnome_sort


def test_sort_does_not_touch_input():
    values = [3, 1, 2]
    result = gnome_sort(values)
    assert result == [1, 2, 3]
    assert values == [3, 1, 2]


def test_sort_empty():
    assert gnome_sort([]) == []


def test_argsort_ties_keep_order():
    values = [3, 1, 3, 1]
    assert gnome_argsort(values) == [1, 3, 0, 2]


def test_argsort_with_index_subset():
    values = [9, 4, 7, 1]
    order = gnome_argsort(values, [0, 2, 1])
    assert [values[i] for i in order] == [4, 7, 9]
    assert sorted(order) == [0, 1, 2]


def test_argsort_index_out_of_range():
    with pytest.raises(IndexError):
        gnome_argsort([1, 2, 3], [0, 3])


def test_nan_is_rejected():
    with pytest.raises(ValueError):
        gnome_sort([1.0, math.nan])
    with pytest.raises(ValueError):
        gnome_argsort([math.nan, 2.0])


@given(st.lists(st.integers()))
def test_sort_matches_sorted(values):
    assert gnome_sort(values) == sorted(values)


@given(st.lists(st.floats(allow_nan=False)))
def test_float_sort_matches_sorted(values):
    assert gnome_sort(values) == sorted(values)


@given(st.lists(st.integers(min_value=-5, max_value=5)))
def test_argsort_is_stable(values):
    assert gnome_argsort(values) == sorted(range(len(values)), key=values.__getitem__)


@given(st.lists(st.text(max_size=3)))
def test_argsort_orders_strings(values):
    order = gnome_argsort(values)
    assert [values[i] for i in order] == sorted(values)