import re
from unittest import mock

import pytest

from fiatutil.binding import (
    apply_binding,
    cpu_mask_string,
    dump_binding,
    parse_bind_line,
    read_bind_mask,
)


def test_cpu_mask_string_marks_selected_cpus():
    assert cpu_mask_string({0, 2}, 4) == "1010"


def test_cpu_mask_string_ignores_cpus_beyond_count():
    result = cpu_mask_string({1, 9}, 3)
    assert result == "010"
    assert len(result) == 3


def test_cpu_mask_string_negative_count():
    with pytest.raises(ValueError):
        cpu_mask_string({0}, -1)


def test_parse_bind_line_first_group():
    assert parse_bind_line("1100 0011\n", 0) == {0, 1}


def test_parse_bind_line_second_group():
    assert parse_bind_line("1100 0011\n", 1) == {2, 3}


def test_parse_bind_line_nonzero_digits_count_as_set():
    assert parse_bind_line("0920", 0) == {1, 2}


def test_parse_bind_line_missing_group():
    with pytest.raises(ValueError):
        parse_bind_line("1100\n", 1)


def test_parse_bind_line_negative_thread():
    with pytest.raises(ValueError):
        parse_bind_line("1", -1)


def test_mask_round_trip():
    cpus = {0, 3, 5}
    assert parse_bind_line(cpu_mask_string(cpus, 8), 0) == cpus


def test_read_bind_mask_by_rank(tmp_path):
    bind = tmp_path / "bind.txt"
    bind.write_text("1000 0100\n0010 0001\n")
    assert read_bind_mask(bind, rank=1, thread=0) == {2}
    assert read_bind_mask(bind, rank=1, thread=1) == {3}
    assert read_bind_mask(bind, rank=0, thread=1) == {1}


def test_read_bind_mask_missing_file(tmp_path):
    assert read_bind_mask(tmp_path / "absent.txt") is None


def test_read_bind_mask_too_few_lines(tmp_path):
    bind = tmp_path / "bind.txt"
    bind.write_text("1\n")
    with pytest.raises(ValueError):
        read_bind_mask(bind, rank=3)


def test_read_bind_mask_uses_environment(tmp_path, monkeypatch):
    bind = tmp_path / "env_bind.txt"
    bind.write_text("0110\n")
    monkeypatch.setenv("EC_LINUX_BIND", str(bind))
    assert read_bind_mask() == {1, 2}


def test_read_bind_mask_default_file_name(tmp_path, monkeypatch):
    monkeypatch.delenv("EC_LINUX_BIND", raising=False)
    monkeypatch.chdir(tmp_path)
    (tmp_path / "linux_bind.txt").write_text("001\n")
    assert read_bind_mask() == {2}


def test_apply_binding_sets_affinity(tmp_path):
    bind = tmp_path / "bind.txt"
    bind.write_text("11\n")
    with mock.patch("os.sched_setaffinity", create=True) as setter:
        result = apply_binding(0, 0, bind)
    assert result == {0, 1}
    setter.assert_called_once_with(0, {0, 1})


def test_apply_binding_without_file(tmp_path):
    with mock.patch("os.sched_setaffinity", create=True) as setter:
        result = apply_binding(0, 0, tmp_path / "absent.txt")
    assert result is None
    assert setter.call_count == 0


def test_apply_binding_refused(tmp_path):
    bind = tmp_path / "bind.txt"
    bind.write_text("0000\n")
    with mock.patch("os.sched_setaffinity", create=True, side_effect=OSError):
        assert apply_binding(0, 0, bind) is None


def test_dump_binding_writes_rank_file(tmp_path):
    target = dump_binding(7, tmp_path)
    assert target.name == "linux_bind.000007.txt"
    text = target.read_text()
    assert text.startswith(" rank =      7 host = ")
    assert text.endswith("\n")
    match = re.search(r"ncpu = +(\d+) nomp = +1 mask = ([01]+)$", text.rstrip("\n"))
    assert match is not None
    assert len(match.group(2)) == int(match.group(1))