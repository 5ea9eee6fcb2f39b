import pytest
from hypothesis import given
from hypothesis import strategies as st

from fiatutil.crc import (
    cksum32,
    cksum64,
    crc32,
    crc64,
    length_cksum32,
    length_cksum64,
)


def test_cksum32_single_byte_hits_table_entries():
    assert cksum32(b"\x01") == 0x04C11DB7
    assert cksum32(b"\xff") == 0xB1F740B4


def test_cksum64_single_byte_shifts_table_entry():
    assert cksum64(b"\x01") == 0x04C11DB7 << 32


def test_crc32_matches_unix_cksum():
    assert crc32(b"123456789") == 930766865


def test_length_cksum32_of_nothing_is_complement():
    assert length_cksum32(0, 0) == 0xFFFFFFFF
    assert length_cksum64(0, 0) == 0xFFFFFFFFFFFFFFFF


def test_empty_data_leaves_crc_unchanged():
    assert cksum32(b"", 1234) == 1234
    assert cksum64(b"", 1234) == 1234
    assert crc32(b"", 77) == 77
    assert crc64(b"", 77) == 77


def test_accepts_bytearray_and_memoryview():
    assert crc32(bytearray(b"abc")) == crc32(b"abc")
    assert crc64(memoryview(b"abc")) == crc64(b"abc")


def test_rejects_non_buffer():
    with pytest.raises(TypeError):
        crc32(5)


def test_crc32_is_cksum_then_length():
    data = b"hello world"
    assert crc32(data) == length_cksum32(len(data), cksum32(data, 0))


def test_crc64_is_cksum_then_length():
    data = b"hello world"
    assert crc64(data) == length_cksum64(len(data), cksum64(data, 0))


def test_length_changes_result():
    assert crc32(b"\x00") != crc32(b"\x00\x00")
    assert crc64(b"\x00") != crc64(b"\x00\x00")


@given(st.binary(), st.binary())
def test_cksum32_is_incremental(a, b):
    assert cksum32(a + b) == cksum32(b, cksum32(a))


@given(st.binary(), st.binary())
def test_cksum64_is_incremental(a, b):
    assert cksum64(a + b) == cksum64(b, cksum64(a))


@given(st.binary(min_size=1))
def test_results_fit_their_width(data):
    assert 0 <= crc32(data) <= 0xFFFFFFFF
    assert 0 <= crc64(data) <= 0xFFFFFFFFFFFFFFFF


@given(st.binary(min_size=1), st.integers(min_value=0, max_value=255))
def test_single_byte_flip_changes_crc32(data, position_seed):
    position = position_seed % len(data)
    flipped = bytearray(data)
    flipped[position] ^= 0x01
    assert crc32(bytes(flipped)) != crc32(data)