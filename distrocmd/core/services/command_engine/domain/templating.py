"""
L1 Domain — Command templates, identifier quoting and privilege elevation (pure).

Templates carry exactly one ``{packages}`` placeholder. Identifiers
are admin-controlled but never trusted to be shell-safe, so each one
is quoted before substitution. No I/O.
"""

from __future__ import annotations

import re
import shlex
from collections.abc import Iterable

from distrocmd.core.errors import TemplateError
from distrocmd.core.models.catalog import PACKAGES_PLACEHOLDER
from distrocmd.core.services.command_engine.data.constants import (
    ELEVATION_PREFIX,
    SHELL_OPERATORS,
    WINDOWS_FAMILIES,
)

# PowerShell treats these as plain words; anything else gets single-quoted.
_PS_SAFE = re.compile(r"^[A-Za-z0-9_.\-+@:/=,]+$")


def os_for_family(family: str) -> str:
    """Map a distro family to the OS kind used for quoting and elevation."""
    return "windows" if family in WINDOWS_FAMILIES else "linux"


def validate_template(source_slug: str, template: str | None) -> str:
    """Check the one-placeholder contract and return the template.

    Raises:
        TemplateError: Empty template, or zero / several placeholders.
    """
    if not template or not template.strip():
        raise TemplateError(source_slug, "command template is empty")
    count = template.count(PACKAGES_PLACEHOLDER)
    if count != 1:
        raise TemplateError(
            source_slug,
            f"template must contain exactly one {PACKAGES_PLACEHOLDER} "
            f"placeholder, found {count}: {template!r}",
        )
    return template


def quote_identifier(identifier: str, os_name: str = "linux") -> str:
    """Quote one package identifier for the target shell.

    POSIX shells use ``shlex.quote``; PowerShell single-quotes with
    embedded quotes doubled. Safe identifiers pass through unchanged
    on both.
    """
    if os_name == "windows":
        if _PS_SAFE.match(identifier):
            return identifier
        return "'" + identifier.replace("'", "''") + "'"
    return shlex.quote(identifier)


def render_template(
    source_slug: str,
    template: str | None,
    identifiers: Iterable[str],
    os_name: str = "linux",
    prefix: str = "",
) -> str:
    """Substitute quoted identifiers into a template.

    Args:
        source_slug: For error messages only.
        template: Command template with one ``{packages}`` placeholder.
        identifiers: Package identifiers, in output order.
        os_name: ``"linux"`` or ``"windows"``.
        prefix: Prepended to every identifier before quoting
            (e.g. ``"nixpkgs."``).

    Returns:
        The rendered command line.

    Raises:
        TemplateError: If the template breaks the placeholder contract.
    """
    template = validate_template(source_slug, template)
    ids = list(identifiers)
    if not ids:
        raise TemplateError(source_slug, "no package identifiers to render")
    package_list = " ".join(quote_identifier(f"{prefix}{i}", os_name) for i in ids)
    return template.replace(PACKAGES_PLACEHOLDER, package_list).strip()


def is_elevated(command: str, os_name: str = "linux") -> bool:
    """Whether the line already starts with the elevation prefix."""
    prefix = ELEVATION_PREFIX.get(os_name, "")
    if not prefix:
        return False
    return command == prefix or command.startswith(prefix + " ")


def is_compound(command: str) -> bool:
    """Whether a line chains or redirects (``&&``, pipes, ``;``, ...)."""
    return any(op in command for op in SHELL_OPERATORS)


def elevate(command: str, os_name: str = "linux", compound: bool | None = None) -> str:
    """Prefix a command line with the platform's elevation idiom, once.

    Compound lines (pipes, ``&&``, redirects) are wrapped whole in
    ``sudo sh -c '...'`` so every part runs elevated. Rendered lines
    pass ``compound`` from their template, since quoted identifiers
    may contain operator characters.
    """
    prefix = ELEVATION_PREFIX.get(os_name, "")
    if not prefix:
        return command
    if compound is None:
        compound = is_compound(command)
    if compound:
        # A leading "sudo" only covers the first part of a chain.
        if command.startswith(f"{prefix} sh -c "):
            return command
        return f"{prefix} sh -c {shlex.quote(command)}"
    if is_elevated(command, os_name):
        return command
    return f"{prefix} {command}"
