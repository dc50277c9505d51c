"""
L0 Data — Platform families, reason codes and fixed command shapes.

Pure data. No logic. No imports beyond stdlib.
"""

from __future__ import annotations

# Families whose target OS is Windows (PowerShell, no sudo).
WINDOWS_FAMILIES: frozenset[str] = frozenset({"windows"})

# Families whose package manager needs an explicit install-method choice.
METHOD_DRIVEN_FAMILIES: frozenset[str] = frozenset({"nixos"})

# Privilege-elevation prefix per OS kind. Empty = no prefix; Windows
# commands are expected to run from an elevated PowerShell.
ELEVATION_PREFIX: dict[str, str] = {
    "linux": "sudo",
    "windows": "",
}

# Characters that make a line a compound shell expression. Such lines
# are elevated as a whole (``sudo sh -c '...'``) rather than per word.
SHELL_OPERATORS: tuple[str, ...] = ("&&", "||", "|", ";", ">", "<", "$(", "`")

# ── Source preferences ──────────────────────────────────────────

PREFERENCE_AUTO = "auto"
PREFERENCE_NATIVE = "native"

# ── Unresolved reason codes ─────────────────────────────────────

REASON_UNKNOWN_APP = "unknown_application"
REASON_NO_PACKAGE = "no_package"
REASON_NO_DISTRO_SOURCES = "no_distro_sources"
REASON_TEMPLATE_ERROR = "template_error"
REASON_UNINSTALL_UNSUPPORTED = "uninstall_unsupported"
REASON_NO_SCRIPT = "no_script"

# Human-readable warning text per reason. ``{distro}``, ``{source}``
# and ``{os}`` are filled in by the reporting layer.
REASON_MESSAGES: dict[str, str] = {
    REASON_UNKNOWN_APP: "Unknown application",
    REASON_NO_PACKAGE: "No package available for {distro}",
    REASON_NO_DISTRO_SOURCES: "{distro} has no configured sources",
    REASON_TEMPLATE_ERROR: "Source {source} has a malformed command template",
    REASON_UNINSTALL_UNSUPPORTED: "Uninstall not supported for {source} source",
    REASON_NO_SCRIPT: "No {mode} script available for {os}",
}

# ── Script-source command shapes ────────────────────────────────

SCRIPT_INSTALL_LINUX = "curl -fsSL {url} | bash"
SCRIPT_INSTALL_WINDOWS = "irm {url} | iex"
SCRIPT_INSTALL_WINDOWS_EXE = "irm {url} -OutFile installer.exe; .\\installer.exe"
