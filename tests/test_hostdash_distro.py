from __future__ import annotations

import pytest

from hostdash.collectors.distro import (
    DEFAULT_ICON_BASE_URL,
    DISTRO_ALIASES,
    DistroIdentifier,
    icon_alias,
)
from hostdash.errors import SourceUnavailable
from hostdash.models import DistroInfo


class DictReader:
    def __init__(self, files: dict[str, str]) -> None:
        self.files = files

    def read_text(self, path: str) -> str:
        if path not in self.files:
            raise SourceUnavailable(path, "missing")
        return self.files[path]


def _identify(text: str, **kwargs) -> DistroInfo:
    return DistroIdentifier(DictReader({"/etc/os-release": text}), **kwargs).identify()


def test_arch_maps_through_alias_table() -> None:
    info = _identify('NAME="Arch Linux"\nPRETTY_NAME="Arch Linux"\nID=arch\n')

    assert info.name == "Arch Linux"
    assert info.icon_url == f"{DEFAULT_ICON_BASE_URL}/arch-linux.png"


def test_unknown_id_passes_through() -> None:
    info = _identify('PRETTY_NAME="Mystery OS 1.0"\nID=unknownxyz\n')

    assert info.icon_url is not None
    assert info.icon_url.endswith("/unknownxyz.png")


def test_id_is_lowercased_and_unquoted() -> None:
    info = _identify('PRETTY_NAME="Linux Mint 21"\nID="LinuxMint"\n')

    assert info.icon_url == f"{DEFAULT_ICON_BASE_URL}/linux-mint.png"


@pytest.mark.parametrize(("distro_id", "alias"), sorted(DISTRO_ALIASES.items()))
def test_alias_table_entries(distro_id: str, alias: str) -> None:
    assert icon_alias(distro_id) == alias


def test_missing_pretty_name_uses_generic_label() -> None:
    info = _identify("ID=debian\n")

    assert info.name == "Linux"
    assert info.icon_url == f"{DEFAULT_ICON_BASE_URL}/debian.png"


def test_missing_id_has_no_icon() -> None:
    info = _identify('PRETTY_NAME="Custom Build"\n')

    assert info == DistroInfo(name="Custom Build", icon_url=None)


def test_unreadable_release_file_is_generic() -> None:
    info = DistroIdentifier(DictReader({})).identify()

    assert info == DistroInfo(name="Linux", icon_url=None)


def test_custom_icon_base_url() -> None:
    info = _identify("ID=pop\n", icon_base_url="https://icons.example/png/")

    assert info.icon_url == "https://icons.example/png/pop-os.png"
