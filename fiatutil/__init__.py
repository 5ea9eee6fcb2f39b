"""cksum-compatible checksums, /proc memory probes, key sorting algorithms and CPU binding helpers."""

__version__ = "0.1.0"
__all__ = ["binding", "counting", "crc", "gnome", "keysort", "memory", "quick", "radix"]