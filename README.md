# fiatutil

Small building blocks for numerical and HPC-style Python programs.

## Modules

- `fiatutil.crc`: checksums built on the polynomial of the Unix `cksum` command.
  `cksum32` and `cksum64` fold bytes into a running CRC; `length_cksum32` and
  `length_cksum64` fold in a byte count and complement the result; `crc32` and
  `crc64` do both. `crc32(data, 0)` gives the same value as `cksum`. Empty input
  leaves the CRC unchanged.
- `fiatutil.memory`: process memory figures read from `/proc/self`.
  `Statm`, `parse_statm` and `read_statm` handle `statm`; `read_status_kib`,
  `vm_peak` and `stack_usage_from_status` read fields of `status`;
  `stack_usage_from_stat` reads the stack columns of `stat`; `max_rss` uses
  `resource.getrusage`. `MemoryTracker` reports heap, resident and stack growth
  since its first reading (`heap`, `max_heap`, `current_heap`, `resident`,
  `stack`, `max_stack`).
- `fiatutil.radix`: `SortKind` (unsigned, signed and IEEE float keys of 32 or 64
  bits, chosen from the last digit of a mode with `SortKind.from_mode`),
  `sort_key`, which maps a value to an unsigned integer of the same order, and
  `radix_argsort`, a stable bitwise radix argsort.
- `fiatutil.counting`: `counting_argsort` and `counting_sort`, a stable sort over
  16-bit digits, ascending or descending.
- `fiatutil.gnome`: `gnome_sort` and `gnome_argsort`.
- `fiatutil.quick`: `quick_sort`, `quick_argsort` (stable), and `merge_halves` /
  `merge_index_halves` for joining two sorted runs.
- `fiatutil.keysort`: `keysort_1d` for one-dimensional sequences and
  `keysort_2d` for rows sorted by one or several key columns, with a choice of
  `SortMethod` (`RADIX`, `HEAP`, `QUICK`, `COUNTING`, `GNOME`); `heapsort_indices`
  on its own. Columns are numbered from 1; a negative column sorts descending.
- `fiatutil.binding`: CPU affinity from a bind file with one line per rank and
  one group of `0`/`1` digits per thread (`parse_bind_line`, `read_bind_mask`,
  `apply_binding`), and `dump_binding`, which writes the current mask to
  `linux_bind.<rank>.txt`. The file defaults to `$EC_LINUX_BIND` or
  `linux_bind.txt`.

## Install

    pip install .

For the tests:

    pip install ".[test]"
    pytest

## Examples

Checksum a byte string the way `cksum` does:

```python
from fiatutil.crc import crc32

print(crc32(b"hello\n", 0))
```

Sort rows by the second column in descending order, then by the first.
The rows are returned in a new list:

```python
from fiatutil.keysort import keysort_2d
from fiatutil.radix import SortKind

rows = [[3, 1], [1, 2], [2, 2]]
print(keysort_2d(rows, SortKind.INT32, multikey=[-2, 1]))
# [[1, 2], [2, 2], [3, 1]]
```

Pass `index` to get a reordered list of positions instead of reordered rows.

Watch the memory of the running process:

```python
from fiatutil.memory import MemoryTracker, max_rss

tracker = MemoryTracker()
print(tracker.heap(), tracker.resident(), tracker.stack(), max_rss())
```

## Limits

- The `/proc` readings need Linux; where the files are missing,
  `MemoryTracker` and the `status` readers report 0.
- `apply_binding` returns None and changes nothing where the platform cannot set
  CPU affinity or there is no bind file. It binds the whole process, not
  individual threads, and `dump_binding` always records one thread.
- Sorting runs in a single thread; there is no parallel sort.
- There is no command-line tool; everything is used from Python.