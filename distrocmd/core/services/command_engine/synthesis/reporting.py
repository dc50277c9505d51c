"""
L3 Synthesis — Warnings, manual steps and the per-source breakdown.

Turns the reason codes collected by the resolver and the synthesizer
into the user-facing parts of a result. Manual steps only ever quote
instructions stored in the catalog; nothing is made up here.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from distrocmd.core.models.result import BreakdownEntry, ManualStep
from distrocmd.core.services.command_engine.data.constants import (
    REASON_MESSAGES,
    REASON_UNKNOWN_APP,
)
from distrocmd.core.services.command_engine.resolver.snapshot import CatalogSnapshot
from distrocmd.core.services.command_engine.resolver.source_resolution import Resolution
from distrocmd.core.services.command_engine.synthesis.command_synthesis import (
    MODE_INSTALL,
    Mode,
    Synthesis,
)


@dataclass
class Report:
    warnings: list[str] = field(default_factory=list)
    manual_steps: list[ManualStep] = field(default_factory=list)
    breakdown: list[BreakdownEntry] = field(default_factory=list)
    unresolved: dict[str, str] = field(default_factory=dict)


def reason_text(
    reason: str,
    snapshot: CatalogSnapshot,
    app_id: str,
    resolution: Resolution,
    mode: Mode,
) -> str:
    """Human-readable text for a reason code."""
    template = REASON_MESSAGES.get(reason, reason)
    source_id = resolution.assignments.get(app_id)
    source = snapshot.sources.get(source_id) if source_id else None
    return template.format(
        distro=snapshot.distro.name,
        source=source.name if source else "unknown",
        os=snapshot.os_name.capitalize(),
        mode=mode,
    )


def build_report(
    snapshot: CatalogSnapshot,
    resolution: Resolution,
    synthesis: Synthesis,
    mode: Mode = MODE_INSTALL,
) -> Report:
    """Merge resolver and synthesizer outcomes into one report.

    Every requested app ends up in exactly one of ``breakdown`` or
    ``unresolved``; warnings follow request order.
    """
    unresolved: dict[str, str] = {}
    for app_id in resolution.app_ids:
        reason = resolution.unresolved.get(app_id) or synthesis.unresolved.get(app_id)
        if reason:
            unresolved[app_id] = reason

    report = Report(unresolved=unresolved)

    for app_id, reason in unresolved.items():
        text = reason_text(reason, snapshot, app_id, resolution, mode)
        report.warnings.append(f"{snapshot.app_name(app_id)}: {text}")

        if mode != MODE_INSTALL or reason == REASON_UNKNOWN_APP:
            continue
        app = snapshot.applications.get(app_id)
        if app is not None and app.manual_instructions:
            report.manual_steps.append(ManualStep(
                app_id=app_id,
                app_name=app.display_name,
                instructions=app.manual_instructions,
            ))

    report.warnings.extend(synthesis.notes)
    report.manual_steps.extend(synthesis.manual_steps)

    for group in synthesis.groups:
        report.breakdown.append(BreakdownEntry(
            source=group.source.slug,
            source_name=group.source.name,
            package_identifiers=group.identifiers,
            app_ids=list(group.app_ids),
        ))

    return report
