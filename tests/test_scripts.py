"""
Tests for downloadable script rendering.
"""

from distrocmd.core.models import Distribution, InstallResult, ManualStep
from distrocmd.core.services.command_engine import (
    MODE_UNINSTALL,
    generate_install_commands,
    generate_uninstall_commands,
    render_script,
)

from tests.conftest import FLATHUB_SETUP


def test_bash_install_script(catalog):
    result = generate_install_commands(catalog, {
        "distroSlug": "ubuntu", "appIds": ["firefox", "steam", "obscure-tool"],
    })
    content, filename = render_script(result, catalog.get_distro("ubuntu"))

    assert filename == "distrocmd-install.sh"
    lines = content.splitlines()
    assert lines[0] == "#!/usr/bin/env bash"
    assert "set -e" in lines
    assert "#   Obscure Tool: No package available for Ubuntu" in lines
    # setup runs before the installs it enables
    assert lines.index(FLATHUB_SETUP) < lines.index("flatpak install -y flathub com.valvesoftware.Steam")
    assert content.endswith("\n")


def test_uninstall_order(catalog):
    result = generate_uninstall_commands(catalog, {
        "distroSlug": "ubuntu", "appIds": ["steam"],
        "includeSetupCleanup": True, "includeDependencyCleanup": True,
    })
    content, filename = render_script(result, catalog.get_distro("ubuntu"), MODE_UNINSTALL)

    assert filename == "distrocmd-uninstall.sh"
    lines = content.splitlines()
    remove = lines.index("flatpak uninstall -y com.valvesoftware.Steam")
    orphans = lines.index("flatpak uninstall --unused -y")
    repo = lines.index("flatpak remote-delete flathub")
    assert remove < orphans < repo


def test_nixos_shebang(catalog):
    result = generate_install_commands(catalog, {"distroSlug": "nixos", "appIds": ["vlc"]})
    content, _ = render_script(result, catalog.get_distro("nixos"))
    assert content.startswith("#!/run/current-system/sw/bin/bash\n")


def test_powershell_script(catalog):
    result = generate_install_commands(catalog, {"distroSlug": "windows", "appIds": ["firefox"]})
    content, filename = render_script(result, catalog.get_distro("windows"))
    assert filename == "distrocmd-install.ps1"
    assert "$ErrorActionPreference = 'Stop'" in content
    assert "winget install Mozilla.Firefox" in content
    assert "#!" not in content


def test_manual_steps_become_comments():
    result = InstallResult(manual_steps=[ManualStep("x", "X Tool", "Download it")])
    content, _ = render_script(result, Distribution(id="arch", slug="arch", name="Arch", family="arch"))
    assert "#   X Tool: Download it" in content
