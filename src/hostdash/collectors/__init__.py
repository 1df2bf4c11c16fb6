"""Leaf collectors, one per telemetry source."""

from .cpu import CpuLoadSampler, ProcStatReader, compute_cpu_percent
from .distro import DISTRO_ALIASES, DistroIdentifier
from .memory import MemInfoReader
from .storage import StorageProbe

__all__ = [
    "CpuLoadSampler",
    "DISTRO_ALIASES",
    "DistroIdentifier",
    "MemInfoReader",
    "ProcStatReader",
    "StorageProbe",
    "compute_cpu_percent",
]
