"""
L3 Synthesis — Render install/uninstall commands per source group.

Transforms a Resolution into command lines:

  - apps sharing a source form one group → one command line per group
  - setup commands (install) and their inverse cleanup commands
    (uninstall) are emitted once per source, never per app
  - per-package setup (PPA, COPR) is emitted once per distinct line
  - lines of ``requires_sudo`` sources are elevated exactly once
  - a malformed template only takes its own group down

Cleanup is derived from the *current* assignment: it reverses what
each source's setup would imply today, not what was run at install.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Literal

from distrocmd.core.errors import TemplateError
from distrocmd.core.models.catalog import FamilyCommand, Package, Source
from distrocmd.core.models.result import ManualStep
from distrocmd.core.services.command_engine.data.constants import (
    REASON_NO_SCRIPT,
    REASON_TEMPLATE_ERROR,
    REASON_UNINSTALL_UNSUPPORTED,
    SCRIPT_INSTALL_LINUX,
    SCRIPT_INSTALL_WINDOWS,
    SCRIPT_INSTALL_WINDOWS_EXE,
)
from distrocmd.core.services.command_engine.domain.install_methods import (
    EffectiveCommands,
    effective_commands,
    resolve_install_method,
)
from distrocmd.core.services.command_engine.domain.ranking import rank_key
from distrocmd.core.services.command_engine.domain.templating import (
    elevate,
    is_compound,
    render_template,
)
from distrocmd.core.services.command_engine.resolver.snapshot import CatalogSnapshot
from distrocmd.core.services.command_engine.resolver.source_resolution import Resolution

logger = logging.getLogger(__name__)

Mode = Literal["install", "uninstall"]

MODE_INSTALL: Mode = "install"
MODE_UNINSTALL: Mode = "uninstall"


@dataclass(frozen=True)
class SynthesisOptions:
    """Knobs that change what gets emitted, not how sources are chosen."""

    install_method: str | None = None
    include_setup_cleanup: bool = False
    include_dependency_cleanup: bool = False


@dataclass
class SourceGroup:
    """All apps resolved to one source, in request order."""

    source: Source
    app_ids: list[str] = field(default_factory=list)
    packages: list[Package] = field(default_factory=list)

    @property
    def identifiers(self) -> list[str]:
        return [p.identifier for p in self.packages]


@dataclass
class Synthesis:
    """Rendered command lines plus what could not be rendered."""

    mode: Mode = MODE_INSTALL
    commands: list[str] = field(default_factory=list)
    setup_commands: list[str] = field(default_factory=list)
    cleanup_commands: list[str] = field(default_factory=list)
    dependency_cleanup_commands: list[str] = field(default_factory=list)
    groups: list[SourceGroup] = field(default_factory=list)        # rendered groups only
    unresolved: dict[str, str] = field(default_factory=dict)       # app_id → reason code
    manual_steps: list[ManualStep] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)


def _append_once(target: list[str], line: str | None) -> None:
    if line and line not in target:
        target.append(line)


def group_assignments(snapshot: CatalogSnapshot, resolution: Resolution) -> list[SourceGroup]:
    """Group resolved apps by source, best-ranked source first."""
    groups: dict[str, SourceGroup] = {}
    for app_id in resolution.app_ids:
        source_id = resolution.assignments.get(app_id)
        if source_id is None:
            continue
        group = groups.get(source_id)
        if group is None:
            group = groups[source_id] = SourceGroup(source=snapshot.sources[source_id])
        group.app_ids.append(app_id)
        group.packages.append(snapshot.packages[(app_id, source_id)])

    return sorted(
        groups.values(),
        key=lambda g: rank_key(g.source, snapshot.links[g.source.id]),
    )


def synthesize(
    snapshot: CatalogSnapshot,
    resolution: Resolution,
    mode: Mode = MODE_INSTALL,
    options: SynthesisOptions | None = None,
) -> Synthesis:
    """Render every source group of a resolution.

    Args:
        snapshot: The catalog snapshot the resolution was made against.
        resolution: Output of ``resolve_snapshot``.
        mode: ``"install"`` or ``"uninstall"``.
        options: Install method and uninstall cleanup switches.

    Returns:
        Synthesis with commands, setup/cleanup lines, rendered groups
        and the apps that fell out during rendering.
    """
    options = options or SynthesisOptions()
    result = Synthesis(mode=mode)

    # An ephemeral run emits no cleanup lines for any source.
    if resolve_install_method(snapshot.family, options.install_method) == "ephemeral":
        options = replace(options, include_setup_cleanup=False, include_dependency_cleanup=False)

    for group in group_assignments(snapshot, resolution):
        source = group.source
        eff = effective_commands(source, snapshot.family, options.install_method)

        if source.kind == "script":
            _synthesize_script_group(snapshot, group, mode, result)
            continue

        try:
            if mode == MODE_INSTALL:
                _synthesize_install_group(snapshot, group, eff, result)
            else:
                _synthesize_uninstall_group(snapshot, group, eff, options, result)
        except TemplateError as e:
            logger.error("Skipping source '%s': %s", source.slug, e)
            for app_id in group.app_ids:
                result.unresolved[app_id] = REASON_TEMPLATE_ERROR

    logger.info(
        "Synthesized %s: %d commands across %d sources, %d apps dropped",
        mode, len(result.commands), len(result.groups), len(result.unresolved),
    )
    return result


# ── Template sources ────────────────────────────────────────────────


def _family_line(
    command: FamilyCommand | None,
    family: str,
    source: Source,
    os_name: str,
) -> str | None:
    """Resolve a family-dependent command and elevate it if needed."""
    if command is None:
        return None
    line = command.for_family(family)
    if not line:
        return None
    return elevate(line, os_name) if source.requires_sudo else line


def _elevate_rendered(line: str, template: str | None, source: Source, os_name: str) -> str:
    if not source.requires_sudo:
        return line
    return elevate(line, os_name, compound=is_compound(template or ""))


def _synthesize_install_group(
    snapshot: CatalogSnapshot,
    group: SourceGroup,
    eff: EffectiveCommands,
    result: Synthesis,
) -> None:
    source = group.source
    os_name = snapshot.os_name

    # Render first: a broken template must not leave setup lines behind.
    line = render_template(
        source.slug, eff.install_template, group.identifiers,
        os_name=os_name, prefix=eff.package_prefix,
    )

    for pkg in group.packages:
        _append_once(
            result.setup_commands,
            _family_line(pkg.setup_command, snapshot.family, source, os_name),
        )
    _append_once(
        result.setup_commands,
        _family_line(eff.setup_command, snapshot.family, source, os_name),
    )

    result.commands.append(_elevate_rendered(line, eff.install_template, source, os_name))
    result.groups.append(group)


def _synthesize_uninstall_group(
    snapshot: CatalogSnapshot,
    group: SourceGroup,
    eff: EffectiveCommands,
    options: SynthesisOptions,
    result: Synthesis,
) -> None:
    source = group.source
    os_name = snapshot.os_name

    if eff.ephemeral:
        result.notes.append(
            f"{source.name}: {eff.method} installs leave nothing behind - no uninstall needed"
        )
        result.groups.append(group)
        return

    if not eff.remove_template:
        for app_id in group.app_ids:
            result.unresolved[app_id] = REASON_UNINSTALL_UNSUPPORTED
        return

    # The install prefix (e.g. "nixpkgs.") is not part of the installed name.
    line = render_template(
        source.slug, eff.remove_template, group.identifiers, os_name=os_name,
    )

    if options.include_setup_cleanup:
        for pkg in group.packages:
            _append_once(
                result.cleanup_commands,
                _family_line(pkg.cleanup_command, snapshot.family, source, os_name),
            )
        _append_once(
            result.cleanup_commands,
            _family_line(eff.cleanup_command, snapshot.family, source, os_name),
        )

    result.commands.append(_elevate_rendered(line, eff.remove_template, source, os_name))

    if options.include_dependency_cleanup and source.supports_dependency_cleanup:
        dep = source.dependency_cleanup_command or ""
        _append_once(
            result.dependency_cleanup_commands,
            elevate(dep, os_name) if source.requires_sudo else dep,
        )

    result.groups.append(group)


# ── Script sources ──────────────────────────────────────────────────


def _script_install_line(url: str, os_name: str) -> str:
    if os_name == "windows":
        if url.lower().endswith(".exe"):
            return SCRIPT_INSTALL_WINDOWS_EXE.format(url=url)
        return SCRIPT_INSTALL_WINDOWS.format(url=url)
    return SCRIPT_INSTALL_LINUX.format(url=url)


def _synthesize_script_group(
    snapshot: CatalogSnapshot,
    group: SourceGroup,
    mode: Mode,
    result: Synthesis,
) -> None:
    """Script sources run one installer per package, never batched."""
    source = group.source
    os_name = snapshot.os_name
    kept = SourceGroup(source=source)

    for app_id, pkg in zip(group.app_ids, group.packages):
        line: str | None = None
        manual: str | None = None

        if mode == MODE_INSTALL:
            url = pkg.script_url.for_os(os_name)
            line = _script_install_line(url, os_name) if url else None
        elif pkg.uninstall is not None:
            line = pkg.uninstall.for_os(os_name)
            if not line:
                manual = pkg.uninstall.manual_instructions

        if line:
            result.commands.append(elevate(line, os_name) if source.requires_sudo else line)
        elif manual:
            result.manual_steps.append(ManualStep(
                app_id=app_id,
                app_name=snapshot.app_name(app_id),
                instructions=manual,
            ))
        else:
            result.unresolved[app_id] = REASON_NO_SCRIPT
            continue

        kept.app_ids.append(app_id)
        kept.packages.append(pkg)

    if kept.app_ids:
        result.groups.append(kept)
