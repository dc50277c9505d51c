"""
Shared test fixtures and configuration.

``catalog`` is a small in-memory catalog covering every engine path:

    ubuntu   (debian)   apt 10 default, flatpak 5, snap 4, script 0
    fedora   (rhel)     flatpak 6, snap 2
    brokenos (debian)   broken 10 default, flatpak 5
    lonely   (debian)   no sources
    nixos    (nixos)    nix 10 default, flatpak 5
    windows  (windows)  winget 10 default, script 0
"""

from __future__ import annotations

import textwrap
from collections.abc import Iterable
from pathlib import Path

import pytest

from distrocmd.adapters.memory import InMemoryCatalog
from distrocmd.core.models.catalog import (
    Application,
    DistroSource,
    Distribution,
    Package,
    Source,
)

FLATHUB_SETUP = "flatpak remote-add --if-not-exists flathub https://dl.flathub.org/repo/flathub.flatpakrepo"
OBS_PPA = "add-apt-repository -y ppa:obsproject/obs-studio"
OBS_PPA_REMOVE = "add-apt-repository -y --remove ppa:obsproject/obs-studio"


class RecordingCatalog(InMemoryCatalog):
    """In-memory catalog that records which reader queries were made."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.call_log: list[str] = []

    def get_distro(self, slug: str) -> Distribution | None:
        self.call_log.append("get_distro")
        return super().get_distro(slug)

    def get_distro_sources(self, distro_id: str) -> list[DistroSource]:
        self.call_log.append("get_distro_sources")
        return super().get_distro_sources(distro_id)

    def get_available_packages(self, app_ids: Iterable[str]) -> list[Package]:
        self.call_log.append("get_available_packages")
        return super().get_available_packages(app_ids)

    def get_sources(self, ids: Iterable[str]) -> list[Source]:
        self.call_log.append("get_sources")
        return super().get_sources(ids)

    def get_applications(self, app_ids: Iterable[str]) -> list[Application]:
        self.call_log.append("get_applications")
        return super().get_applications(app_ids)

    def list_sources(self) -> list[Source]:
        self.call_log.append("list_sources")
        return super().list_sources()

    def list_distros(self) -> list[Distribution]:
        self.call_log.append("list_distros")
        return super().list_distros()


def make_sources() -> list[Source]:
    return [
        Source.model_validate({
            "slug": "apt", "name": "APT", "category": "native",
            "install_template": "apt install -y {packages}",
            "remove_template": "apt remove -y {packages}",
            "dependency_cleanup_command": "apt autoremove -y",
            "requires_sudo": True, "priority": 10,
        }),
        Source.model_validate({
            "slug": "flatpak", "name": "Flatpak", "category": "universal",
            "install_template": "flatpak install -y flathub {packages}",
            "remove_template": "flatpak uninstall -y {packages}",
            "setup_command": FLATHUB_SETUP,
            "cleanup_command": "flatpak remote-delete flathub",
            "dependency_cleanup_command": "flatpak uninstall --unused -y",
            "priority": 5,
        }),
        Source.model_validate({
            "slug": "snap", "name": "Snap", "category": "universal",
            "install_template": "snap install {packages}",
            "setup_command": {"rhel": "dnf install -y snapd"},
            "requires_sudo": True, "priority": 4,
        }),
        Source.model_validate({
            "slug": "broken", "name": "Broken", "category": "native",
            "install_template": "broken-pm install",
            "remove_template": "broken-pm remove",
            "requires_sudo": True, "priority": 1,
        }),
        Source.model_validate({
            "slug": "nix", "name": "Nix", "category": "native",
            "install_template": "nix-env -iA {packages}",
            "remove_template": "nix-env -e {packages}",
            "priority": 10,
            "install_methods": {
                "nix-shell": {"install_template": "nix-shell -p {packages}", "ephemeral": True},
                "nix-env": {
                    "install_template": "nix-env -iA {packages}",
                    "remove_template": "nix-env -e {packages}",
                    "package_prefix": "nixpkgs.",
                    "setup_command": "nix-channel --update",
                    "cleanup_command": "nix-collect-garbage -d",
                },
                "nix-flakes": {
                    "install_template": "nix profile install {packages}",
                    "remove_template": "nix profile remove {packages}",
                    "package_prefix": "nixpkgs#",
                    "cleanup_command": "nix-collect-garbage -d",
                },
            },
        }),
        Source.model_validate({
            "slug": "winget", "name": "Winget", "category": "native",
            "install_template": "winget install {packages}",
            "remove_template": "winget uninstall {packages}",
            "requires_sudo": True, "priority": 10,
        }),
        Source.model_validate({
            "slug": "script", "name": "Install script", "category": "script",
            "kind": "script", "priority": 0,
        }),
    ]


def make_distros() -> tuple[list[Distribution], list[DistroSource]]:
    distros = [
        Distribution(id="ubuntu", slug="ubuntu", name="Ubuntu", family="debian"),
        Distribution(id="fedora", slug="fedora", name="Fedora", family="rhel"),
        Distribution(id="brokenos", slug="brokenos", name="BrokenOS", family="debian"),
        Distribution(id="lonely", slug="lonely", name="Lonely Linux", family="debian"),
        Distribution(id="nixos", slug="nixos", name="NixOS", family="nixos"),
        Distribution(id="windows", slug="windows", name="Windows", family="windows"),
    ]
    links = [
        DistroSource(distro_id="ubuntu", source_id="apt", priority=10, is_default=True),
        DistroSource(distro_id="ubuntu", source_id="flatpak", priority=5),
        DistroSource(distro_id="ubuntu", source_id="snap", priority=4),
        DistroSource(distro_id="ubuntu", source_id="script", priority=0),
        DistroSource(distro_id="fedora", source_id="flatpak", priority=6),
        DistroSource(distro_id="fedora", source_id="snap", priority=2),
        DistroSource(distro_id="brokenos", source_id="broken", priority=10, is_default=True),
        DistroSource(distro_id="brokenos", source_id="flatpak", priority=5),
        DistroSource(distro_id="nixos", source_id="nix", priority=10, is_default=True),
        DistroSource(distro_id="nixos", source_id="flatpak", priority=5),
        DistroSource(distro_id="windows", source_id="winget", priority=10, is_default=True),
        DistroSource(distro_id="windows", source_id="script", priority=0),
    ]
    return distros, links


def make_apps() -> tuple[list[Application], list[Package]]:
    apps = [
        Application(id="firefox", slug="firefox", display_name="Firefox", category="browsers"),
        Application(id="vlc", slug="vlc", display_name="VLC", category="media"),
        Application(id="steam", slug="steam", display_name="Steam", category="gaming"),
        Application(id="obs", slug="obs", display_name="OBS Studio", category="media"),
        Application(
            id="obscure-tool", slug="obscure-tool", display_name="Obscure Tool",
            manual_instructions="Build from source: https://example.org/obscure-tool",
        ),
        Application(id="retro", slug="retro", display_name="Retro"),
        Application(id="rustup", slug="rustup", display_name="Rustup"),
        Application(id="omz", slug="omz", display_name="Oh My Zsh"),
    ]

    def pkg(app_id: str, source_id: str, identifier: str, **extra) -> Package:
        return Package.model_validate({
            "app_id": app_id, "source_id": source_id, "identifier": identifier, **extra,
        })

    packages = [
        pkg("firefox", "apt", "firefox"),
        pkg("firefox", "flatpak", "org.mozilla.firefox"),
        pkg("firefox", "snap", "firefox"),
        pkg("firefox", "broken", "firefox"),
        pkg("firefox", "nix", "firefox"),
        pkg("firefox", "winget", "Mozilla.Firefox"),
        pkg("vlc", "apt", "vlc"),
        pkg("vlc", "flatpak", "org.videolan.VLC"),
        pkg("vlc", "nix", "vlc"),
        pkg("vlc", "winget", "VideoLAN.VLC"),
        pkg("steam", "flatpak", "com.valvesoftware.Steam"),
        pkg("obs", "apt", "obs-studio", setup_command=OBS_PPA, cleanup_command=OBS_PPA_REMOVE),
        pkg("obs", "flatpak", "com.obsproject.Studio"),
        pkg("retro", "apt", "retro", is_available=False),
        pkg(
            "rustup", "script", "rustup",
            script_url={"linux": "https://sh.rustup.rs", "windows": "https://win.rustup.rs/rustup-init.exe"},
            uninstall={"linux": "rustup self uninstall -y", "windows": "rustup self uninstall -y"},
        ),
        pkg(
            "omz", "script", "oh-my-zsh",
            script_url={"linux": "https://example.org/omz/install.sh"},
            uninstall={"manual_instructions": "Run uninstall_oh_my_zsh from a zsh session"},
        ),
    ]
    return apps, packages


def make_catalog() -> RecordingCatalog:
    distros, links = make_distros()
    apps, packages = make_apps()
    return RecordingCatalog(
        sources=make_sources(),
        applications=apps,
        packages=packages,
        distros=distros,
        distro_sources=links,
    )


@pytest.fixture
def catalog() -> RecordingCatalog:
    """Fresh in-memory catalog per test."""
    return make_catalog()


CATALOG_YAML = textwrap.dedent("""\
    sources:
      - slug: apt
        name: APT
        install_template: "apt install -y {packages}"
        remove_template: "apt remove -y {packages}"
        dependency_cleanup_command: "apt autoremove -y"
        requires_sudo: true
        priority: 10
      - slug: flatpak
        name: Flatpak
        category: universal
        install_template: "flatpak install -y flathub {packages}"
        remove_template: "flatpak uninstall -y {packages}"
        setup_command: "flatpak remote-add --if-not-exists flathub https://dl.flathub.org/repo/flathub.flatpakrepo"
        priority: 5
    distros:
      - slug: ubuntu
        name: Ubuntu
        family: debian
        sources:
          - {source: apt, priority: 10, default: true}
          - {source: flatpak, priority: 5}
      - slug: fedora
        name: Fedora
        family: rhel
        sources:
          - flatpak
    apps:
      - slug: firefox
        display_name: Firefox
        packages:
          apt: firefox
          flatpak: org.mozilla.firefox
      - slug: steam
        display_name: Steam
        packages:
          flatpak: {identifier: com.valvesoftware.Steam}
      - slug: obscure-tool
        display_name: Obscure Tool
        manual_instructions: "Build it from source"
""")


@pytest.fixture
def catalog_file(tmp_path: Path) -> Path:
    """A small valid catalog.yml on disk."""
    path = tmp_path / "catalog.yml"
    path.write_text(CATALOG_YAML, encoding="utf-8")
    return path


@pytest.fixture
def project_root() -> Path:
    """Return the repository root directory."""
    return Path(__file__).parent.parent
