from __future__ import annotations

import logging

from hostdash.errors import TelemetryError
from hostdash.models import DistroInfo
from hostdash.parsers import parse_env_fields
from hostdash.ports import FileReader, LocalFileReader

LOGGER = logging.getLogger(__name__)

DEFAULT_OS_RELEASE_PATH = "/etc/os-release"
DEFAULT_DISTRO_NAME = "Linux"
DEFAULT_ICON_BASE_URL = (
    "https://raw.githubusercontent.com/haroeris01/walkxcode-dashboard-icons/refs/heads/main/png"
)

# os-release ID -> icon name in the dashboard-icons repository
DISTRO_ALIASES: dict[str, str] = {
    "arch": "arch-linux",
    "opensuse-leap": "opensuse",
    "opensuse-tumbleweed": "opensuse",
    "raspbian": "raspberry-pi",
    "rhel": "red-hat",
    "linuxmint": "linux-mint",
    "pop": "pop-os",
    "elementary": "elementary-os",
}


def icon_alias(distro_id: str) -> str:
    key = distro_id.strip().lower()
    return DISTRO_ALIASES.get(key, key)


class DistroIdentifier:
    def __init__(
        self,
        reader: FileReader | None = None,
        path: str = DEFAULT_OS_RELEASE_PATH,
        icon_base_url: str = DEFAULT_ICON_BASE_URL,
    ) -> None:
        self.reader = reader or LocalFileReader()
        self.path = path
        self.icon_base_url = icon_base_url.rstrip("/")

    def icon_url(self, distro_id: str) -> str:
        return f"{self.icon_base_url}/{icon_alias(distro_id)}.png"

    def identify(self) -> DistroInfo:
        try:
            fields = parse_env_fields(self.reader.read_text(self.path))
        except TelemetryError as exc:
            LOGGER.warning("os release unavailable, reporting generic distro: %s", exc)
            return DistroInfo(name=DEFAULT_DISTRO_NAME)
        name = fields.get("PRETTY_NAME") or DEFAULT_DISTRO_NAME
        distro_id = fields.get("ID", "").strip()
        icon = self.icon_url(distro_id) if distro_id else None
        return DistroInfo(name=name, icon_url=icon)
