"""
L1 Domain — Install-method variants for declarative package managers.

Some families (NixOS) have no single natural install command. The
caller picks a method:

    ephemeral    nix-shell   packages vanish with the shell, nothing to remove
    persistent   nix-env     classic install, classic uninstall
    declarative  nix-flakes  needs the flakes toggle, removal is a profile edit

Sources that declare ``install_methods`` get the matching variant on
those families. Every other source, and every other family, uses the
source's own templates.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from distrocmd.core.models.catalog import FamilyCommand, Source
from distrocmd.core.models.request import (
    DEFAULT_INSTALL_METHOD,
    INSTALL_METHOD_ALIASES,
)
from distrocmd.core.services.command_engine.data.constants import (
    METHOD_DRIVEN_FAMILIES,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EffectiveCommands:
    """The templates actually used for one source on one distro."""

    install_template: str
    remove_template: str | None
    setup_command: FamilyCommand | None
    cleanup_command: FamilyCommand | None
    package_prefix: str = ""
    ephemeral: bool = False
    method: str | None = None     # None when no method choice applied


def resolve_install_method(family: str, requested: str | None) -> str | None:
    """The method in force for a family, or None if the family has no choice.

    Omitted or unknown methods default to ephemeral, the only choice
    that changes nothing permanently.
    """
    if family not in METHOD_DRIVEN_FAMILIES:
        return None
    if requested:
        method = INSTALL_METHOD_ALIASES.get(requested)
        if method:
            return method
        logger.debug("Unknown install method %r, using %s", requested, DEFAULT_INSTALL_METHOD)
    return DEFAULT_INSTALL_METHOD


def effective_commands(
    source: Source,
    family: str,
    install_method: str | None = None,
) -> EffectiveCommands:
    """Pick the template set for ``source`` on a distro of ``family``."""
    method = resolve_install_method(family, install_method)

    if method is not None and source.install_methods:
        variants = {
            INSTALL_METHOD_ALIASES.get(key, key): variant
            for key, variant in source.install_methods.items()
        }
        variant = variants.get(method)
        if variant is not None:
            return EffectiveCommands(
                install_template=variant.install_template,
                remove_template=None if variant.ephemeral else variant.remove_template,
                setup_command=variant.setup_command,
                cleanup_command=None if variant.ephemeral else variant.cleanup_command,
                package_prefix=variant.package_prefix,
                ephemeral=variant.ephemeral,
                method=method,
            )
        logger.warning(
            "Source '%s' has no '%s' install method, using its base templates",
            source.slug, method,
        )

    return EffectiveCommands(
        install_template=source.install_template,
        remove_template=source.remove_template,
        setup_command=source.setup_command,
        cleanup_command=source.cleanup_command,
    )
