"""Line-oriented parsers for the kernel and OS text sources.

Each parser accepts the full text of one source and either returns a typed
value or raises :class:`ParseMalformed`. None of them touch the filesystem.
"""

from __future__ import annotations

from hostdash.errors import ParseMalformed

CPU_TICK_FIELDS = (
    "user",
    "nice",
    "system",
    "idle",
    "iowait",
    "irq",
    "softirq",
    "steal",
)

_QUOTES = ("'", '"')


def parse_cpu_ticks(text: str) -> list[int]:
    """Return the eight tick counters from the first line of ``/proc/stat``.

    Missing or non-numeric counters read as 0; trailing guest fields are ignored.
    """
    lines = text.splitlines()
    if not lines or not lines[0].strip():
        raise ParseMalformed("cpu counter line is empty")
    parts = lines[0].split()
    if not parts[0].startswith("cpu"):
        raise ParseMalformed(f"unexpected cpu label {parts[0]!r}")
    values = parts[1 : 1 + len(CPU_TICK_FIELDS)]
    ticks = [_non_negative_int(value) for value in values]
    ticks.extend([0] * (len(CPU_TICK_FIELDS) - len(ticks)))
    return ticks


def parse_colon_fields(text: str) -> dict[str, int]:
    """Parse ``Key:  <int> [unit]`` lines, as found in ``/proc/meminfo``."""
    data: dict[str, int] = {}
    for line in text.splitlines():
        key, sep, rest = line.partition(":")
        if not sep or not key.strip():
            continue
        parts = rest.split()
        if not parts or not parts[0].isdecimal():
            continue
        data[key.strip()] = int(parts[0])
    return data


def parse_env_fields(text: str) -> dict[str, str]:
    """Parse ``KEY=value`` / ``KEY="value"`` lines, as found in os-release."""
    data: dict[str, str] = {}
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        key = key.strip()
        if not sep or not key:
            continue
        data[key] = _unquote(value.strip())
    return data


def parse_df_usage(text: str) -> tuple[int, int]:
    """Return ``(total_bytes, used_bytes)`` from ``df -B1`` output."""
    lines = text.strip().splitlines()
    if len(lines) < 2:
        raise ParseMalformed("df output has no data line")
    fields = lines[1].split()
    if len(fields) < 3:
        raise ParseMalformed(f"df data line has {len(fields)} fields, expected at least 3")
    total_raw, used_raw = fields[1], fields[2]
    if not total_raw.isdecimal() or not used_raw.isdecimal():
        raise ParseMalformed(f"df sizes are not byte counts: {total_raw!r}, {used_raw!r}")
    return int(total_raw), int(used_raw)


def _non_negative_int(value: str) -> int:
    if value.isdecimal():
        return int(value)
    return 0


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] in _QUOTES and value[-1] == value[0]:
        return value[1:-1]
    return value
