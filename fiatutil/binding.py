"""Binding of a process to CPUs described by a text file of bit masks.

Each line of the binding file belongs to one rank, counted from 0. A line
holds one group of digits per thread; in a group the n-th digit tells
whether CPU n is used (anything but ``0``) or not (``0``).
"""

from __future__ import annotations

import os
import socket
from pathlib import Path
from typing import Iterable

BIND_ENV = "EC_LINUX_BIND"
DEFAULT_BIND_FILE = "linux_bind.txt"


def _configured_cpus() -> int:
    try:
        count = os.sysconf("SC_NPROCESSORS_CONF")
    except (AttributeError, ValueError, OSError):
        count = -1
    if count is None or count <= 0:
        count = os.cpu_count() or 1
    return count


def _current_cpus() -> set[int]:
    getaffinity = getattr(os, "sched_getaffinity", None)
    if getaffinity is None:
        return set(range(_configured_cpus()))
    return set(getaffinity(0))


def cpu_mask_string(cpus: Iterable[int], ncpu: int | None = None) -> str:
    """Return a ``0``/``1`` string with one character per configured CPU."""
    if ncpu is None:
        ncpu = _configured_cpus()
    if ncpu < 0:
        raise ValueError(f"ncpu must not be negative, got {ncpu}")
    chosen = set(cpus)
    return "".join("1" if cpu in chosen else "0" for cpu in range(ncpu))


def parse_bind_line(line: str, thread: int = 0) -> set[int]:
    """Return the CPUs selected for ``thread`` on one line of a binding file.

    Raises ValueError when the line ends before the thread's group.
    """
    if thread < 0:
        raise ValueError(f"thread must not be negative, got {thread}")
    pos = 0
    end = len(line)
    for _ in range(thread):
        while pos < end and line[pos].isdigit():
            pos += 1
        while pos < end and not line[pos].isdigit():
            pos += 1
        if pos >= end:
            raise ValueError("unexpected end of line while reading binding file")
    cpus: set[int] = set()
    cpu = 0
    while pos < end and line[pos].isdigit():
        if line[pos] != "0":
            cpus.add(cpu)
        cpu += 1
        pos += 1
    return cpus


def _bind_path(path: str | os.PathLike | None) -> Path:
    if path is None:
        path = os.environ.get(BIND_ENV) or DEFAULT_BIND_FILE
    return Path(path)


def read_bind_mask(
    path: str | os.PathLike | None = None,
    rank: int = 0,
    thread: int = 0,
) -> set[int] | None:
    """Read the CPU set of ``rank`` and ``thread`` from a binding file.

    The file defaults to ``$EC_LINUX_BIND`` or ``linux_bind.txt``. A file
    that cannot be opened gives None; a file with fewer lines than
    ``rank + 1`` raises ValueError.
    """
    if rank < 0:
        raise ValueError(f"rank must not be negative, got {rank}")
    bind_path = _bind_path(path)
    try:
        handle = open(bind_path)
    except OSError:
        return None
    with handle:
        for number, line in enumerate(handle):
            if number == rank:
                return parse_bind_line(line, thread)
    raise ValueError(f"unexpected EOF while reading {bind_path}")


def apply_binding(
    rank: int = 0,
    thread: int = 0,
    path: str | os.PathLike | None = None,
) -> set[int] | None:
    """Bind this process to the CPUs the binding file gives it.

    Returns the CPU set that was applied, or None when there is no
    binding file, the platform cannot set affinity, or the system refused
    the set.
    """
    cpus = read_bind_mask(path, rank, thread)
    if cpus is None:
        return None
    setaffinity = getattr(os, "sched_setaffinity", None)
    if setaffinity is None:
        return None
    try:
        setaffinity(0, cpus)
    except OSError:
        return None
    return cpus


def dump_binding(rank: int, directory: str | os.PathLike = ".") -> Path:
    """Write this process's CPU binding to ``linux_bind.<rank>.txt``.

    Returns the path of the file written.
    """
    ncpu = _configured_cpus()
    try:
        host = socket.gethostname()
    except OSError:
        host = "unknown"
    nomp = 1
    mask = cpu_mask_string(_current_cpus(), ncpu)
    target = Path(directory) / f"linux_bind.{rank:06d}.txt"
    text = (
        f" rank = {rank:6d}"
        f" host = {host:>9s}"
        f" ncpu = {ncpu:2d}"
        f" nomp = {nomp:2d}"
        f" mask = {mask}"
        "\n"
    )
    target.write_text(text)
    return target