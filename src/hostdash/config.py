from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from hostdash.collectors.cpu import DEFAULT_SAMPLE_MS
from hostdash.collectors.distro import DEFAULT_ICON_BASE_URL, DEFAULT_OS_RELEASE_PATH
from hostdash.collectors.storage import DEFAULT_MOUNT_POINT, DEFAULT_TIMEOUT_S


@dataclass(frozen=True, slots=True)
class HostdashConfig:
    host: str
    port: int
    cpu_sample_ms: int
    storage_mount: str
    df_timeout_s: float
    proc_root: Path
    os_release_path: Path
    icon_base_url: str
    log_level: str

    @property
    def stat_path(self) -> Path:
        return self.proc_root / "stat"

    @property
    def meminfo_path(self) -> Path:
        return self.proc_root / "meminfo"


def load_config() -> HostdashConfig:
    cpu_sample_ms = _env_int("HOSTDASH_CPU_SAMPLE_MS", DEFAULT_SAMPLE_MS)
    if cpu_sample_ms <= 0:
        cpu_sample_ms = DEFAULT_SAMPLE_MS
    df_timeout_s = _env_float("HOSTDASH_DF_TIMEOUT", DEFAULT_TIMEOUT_S)
    if df_timeout_s <= 0:
        df_timeout_s = DEFAULT_TIMEOUT_S
    return HostdashConfig(
        host=os.getenv("HOSTDASH_HOST", "0.0.0.0"),
        port=_env_int("PORT", 3000),
        cpu_sample_ms=cpu_sample_ms,
        storage_mount=os.getenv("HOSTDASH_STORAGE_MOUNT", DEFAULT_MOUNT_POINT),
        df_timeout_s=df_timeout_s,
        proc_root=Path(os.getenv("HOSTDASH_PROC_ROOT", "/proc")),
        os_release_path=Path(os.getenv("HOSTDASH_OS_RELEASE", DEFAULT_OS_RELEASE_PATH)),
        icon_base_url=os.getenv("HOSTDASH_ICON_BASE_URL", DEFAULT_ICON_BASE_URL),
        log_level=os.getenv("HOSTDASH_LOG_LEVEL", "INFO").upper(),
    )


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default
