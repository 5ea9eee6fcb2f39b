"""Process memory and stack usage read from the Linux ``/proc`` filesystem."""

from __future__ import annotations

import mmap
from dataclasses import dataclass, fields
from pathlib import Path

STATM_PATH = "/proc/self/statm"
STATUS_PATH = "/proc/self/status"
STAT_PATH = "/proc/self/stat"

_DEFAULT_PAGESIZE = 4096
_STARTSTACK_FIELD = 27
_KSTKESP_FIELD = 28


@dataclass(frozen=True)
class Statm:
    """Memory figures from ``statm``, all in pages."""

    size: int
    resident: int
    shared: int
    trs: int
    drs: int
    lrs: int
    dt: int


def parse_statm(text: str) -> Statm:
    """Parse the seven integers of a ``statm`` line."""
    tokens = text.split()
    count = len(fields(Statm))
    if len(tokens) < count:
        raise ValueError(f"statm needs {count} fields, got {len(tokens)}")
    try:
        values = [int(token) for token in tokens[:count]]
    except ValueError as exc:
        raise ValueError(f"malformed statm line: {text!r}") from exc
    return Statm(*values)


def read_statm(path: str | Path = STATM_PATH) -> Statm | None:
    """Read a ``statm`` file; None when it cannot be opened."""
    try:
        text = Path(path).read_text()
    except OSError:
        return None
    return parse_statm(text)


def read_status_kib(field: str, path: str | Path = STATUS_PATH) -> int:
    """Return the ``<field>: N kB`` value of a ``status`` file in bytes.

    Only the first line naming the field is looked at; a missing file,
    field or unreadable value gives 0.
    """
    prefix = field if field.endswith(":") else field + ":"
    try:
        with open(path) as handle:
            for line in handle:
                if line.startswith(prefix):
                    parts = line.split()
                    if len(parts) >= 2:
                        try:
                            return int(parts[1]) * 1024
                        except ValueError:
                            return 0
                    return 0
    except OSError:
        return 0
    return 0


def vm_peak(path: str | Path = STATUS_PATH) -> int:
    """Peak virtual memory size in bytes."""
    return read_status_kib("VmPeak", path)


def stack_usage_from_status(path: str | Path = STATUS_PATH) -> int:
    """Stack size in bytes as reported by the ``VmStk`` field."""
    return read_status_kib("VmStk", path)


def stack_usage_from_stat(path: str | Path = STAT_PATH) -> int:
    """Stack depth in bytes: start of stack minus the current stack pointer.

    Raises OSError when the file cannot be read and ValueError when it
    lacks the two stack columns.
    """
    tokens = Path(path).read_text().split()
    if len(tokens) <= _KSTKESP_FIELD:
        raise ValueError(f"stat has {len(tokens)} fields, need {_KSTKESP_FIELD + 1}")
    try:
        start = int(tokens[_STARTSTACK_FIELD])
        pointer = int(tokens[_KSTKESP_FIELD])
    except ValueError as exc:
        raise ValueError("malformed stack columns in stat") from exc
    return start - pointer


def max_rss() -> int:
    """Maximum resident set size of this process in bytes."""
    try:
        import resource
    except ImportError:
        return 0
    try:
        usage = resource.getrusage(resource.RUSAGE_SELF)
    except OSError:
        return 0
    return int(usage.ru_maxrss) * 1024


def _page_size() -> int:
    size = mmap.PAGESIZE
    return size if size > 0 else _DEFAULT_PAGESIZE


class MemoryTracker:
    """Tracks heap, resident and stack growth relative to the first reading."""

    def __init__(
        self,
        statm_path: str | Path = STATM_PATH,
        status_path: str | Path = STATUS_PATH,
    ) -> None:
        self.statm_path = statm_path
        self.status_path = status_path
        self._statm_unavailable = False
        self._base_size: int | None = None
        self._base_resident: int | None = None
        self._pagesize = _DEFAULT_PAGESIZE
        self._max_heap = 0
        self._max_current_heap = 0
        self._max_stack = 0

    def _statm(self) -> Statm | None:
        if self._statm_unavailable:
            return None
        statm = read_statm(self.statm_path)
        if statm is None:
            self._statm_unavailable = True
        return statm

    def heap(self) -> int:
        """Growth of total program size in bytes since the first reading."""
        statm = self._statm()
        if statm is None:
            return 0
        if self._base_size is None:
            self._base_size = statm.size
            self._pagesize = _page_size()
        grown = (statm.size - self._base_size) * self._pagesize
        self._max_heap = max(self._max_heap, grown)
        return grown

    def max_heap(self) -> int:
        """Largest heap growth seen so far, including a fresh reading."""
        self._max_heap = max(self._max_heap, self.heap())
        return self._max_heap

    def current_heap(self) -> int:
        """Current heap growth, also recorded as a running maximum."""
        grown = self.heap()
        self._max_current_heap = max(self._max_current_heap, grown)
        return grown

    def resident(self) -> int:
        """Growth of resident size in bytes since the first reading."""
        statm = self._statm()
        if statm is None:
            return 0
        if self._base_resident is None:
            self._base_resident = statm.resident
            self._pagesize = _page_size()
        return (statm.resident - self._base_resident) * self._pagesize

    def stack(self) -> int:
        """Current stack size in bytes."""
        used = stack_usage_from_status(self.status_path)
        self._max_stack = max(self._max_stack, used)
        return used

    def max_stack(self) -> int:
        """Largest stack size seen so far, including a fresh reading."""
        self._max_stack = max(self._max_stack, self.stack())
        return self._max_stack