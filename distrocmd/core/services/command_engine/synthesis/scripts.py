"""
L3 Synthesis — Render a result as a downloadable shell script.

Bash for POSIX families, PowerShell for Windows. Warnings and manual
steps are carried over as comments so the script is self-explaining.
"""

from __future__ import annotations

from distrocmd.core.models.catalog import Distribution
from distrocmd.core.models.result import InstallResult, UninstallResult
from distrocmd.core.services.command_engine.domain.templating import os_for_family
from distrocmd.core.services.command_engine.synthesis.command_synthesis import (
    MODE_INSTALL,
    Mode,
)

NIXOS_SHEBANG = "#!/run/current-system/sw/bin/bash"
BASH_SHEBANG = "#!/usr/bin/env bash"

_TITLES = {
    "install": "Bulk Package Installer",
    "uninstall": "Bulk Package Uninstaller",
}


def _comment_block(title: str, lines: list[str]) -> list[str]:
    if not lines:
        return []
    return [f"# {title}:", *(f"#   {line}" for line in lines), ""]


def _section(lines: list[str]) -> list[str]:
    return [*lines, ""] if lines else []


def _body(result: InstallResult | UninstallResult, mode: Mode) -> list[str]:
    if mode == MODE_INSTALL:
        assert isinstance(result, InstallResult)
        return _section(result.setup_commands) + _section(result.commands)
    assert isinstance(result, UninstallResult)
    # Packages go first, then their orphans, then the repositories they came from.
    return (
        _section(result.commands)
        + _section(result.dependency_cleanup_commands)
        + _section(result.cleanup_commands)
    )


def render_script(
    result: InstallResult | UninstallResult,
    distro: Distribution,
    mode: Mode = MODE_INSTALL,
) -> tuple[str, str]:
    """Render ``result`` as a script for ``distro``.

    Returns:
        ``(content, filename)``, e.g. ``(..., "distrocmd-install.sh")``.
    """
    title = _TITLES[mode]
    notes = _comment_block("Warnings", result.warnings) + _comment_block(
        "Manual steps",
        [f"{m.app_name}: {m.instructions}" for m in result.manual_steps],
    )

    if os_for_family(distro.family) == "windows":
        header = [
            f"# distrocmd - {title} for {distro.name}",
            "$ErrorActionPreference = 'Stop'",
            "",
            f'Write-Host "{title}" -ForegroundColor Cyan',
            "",
        ]
        ext = "ps1"
    else:
        shebang = NIXOS_SHEBANG if distro.family == "nixos" else BASH_SHEBANG
        header = [
            shebang,
            f"# distrocmd - {title} for {distro.name}",
            "set -e",
            "",
            f'echo "{title}"',
            "",
        ]
        ext = "sh"

    content = "\n".join(header + notes + _body(result, mode)).rstrip("\n") + "\n"
    return content, f"distrocmd-{mode}.{ext}"
