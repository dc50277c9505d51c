"""
L4 Orchestration — Request-level entry points.

One call = one snapshot → resolve → synthesize → report. Nothing is
cached between calls; the reader is the only collaborator.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from distrocmd.adapters.base import CatalogReader
from distrocmd.core.errors import InvalidInputError
from distrocmd.core.models.request import InstallRequest, UninstallRequest
from distrocmd.core.models.result import InstallResult, UninstallResult
from distrocmd.core.services.command_engine.resolver.snapshot import load_snapshot
from distrocmd.core.services.command_engine.resolver.source_resolution import (
    resolve_snapshot,
)
from distrocmd.core.services.command_engine.synthesis.command_synthesis import (
    MODE_INSTALL,
    MODE_UNINSTALL,
    SynthesisOptions,
    synthesize,
)
from distrocmd.core.services.command_engine.synthesis.reporting import build_report

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=BaseModel)


def _describe_validation_error(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "request"
        parts.append(f"{loc}: {err.get('msg', 'invalid value')}")
    return "; ".join(parts)


def parse_request(payload: Any, model: type[R]) -> R:
    """Validate a raw JSON-ish payload into a request model.

    Raises:
        InvalidInputError: Payload missing, wrong shape, or out of bounds.
    """
    if isinstance(payload, model):
        return payload
    if not isinstance(payload, dict):
        raise InvalidInputError("Request body must be a JSON object")
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise InvalidInputError(_describe_validation_error(e)) from e


def generate_install_commands(
    reader: CatalogReader,
    request: InstallRequest | dict,
) -> InstallResult:
    """Install commands for the requested apps on one distro.

    Raises:
        NotFoundError: Unknown distro.
        InvalidInputError: Bad request shape or unknown preference.
    """
    req = parse_request(request, InstallRequest)
    snapshot = load_snapshot(reader, req.distro_slug, req.app_ids)
    resolution = resolve_snapshot(snapshot, req.app_ids, req.source_preference)
    synthesis = synthesize(
        snapshot, resolution, MODE_INSTALL,
        SynthesisOptions(install_method=req.install_method),
    )
    report = build_report(snapshot, resolution, synthesis, MODE_INSTALL)

    if report.unresolved:
        logger.info(
            "%s: %d of %d apps unresolved",
            snapshot.distro.slug, len(report.unresolved), len(resolution.app_ids),
        )

    return InstallResult(
        commands=synthesis.commands,
        setup_commands=synthesis.setup_commands,
        breakdown=report.breakdown,
        warnings=report.warnings,
        manual_steps=report.manual_steps,
        unresolved=report.unresolved,
    )


def generate_uninstall_commands(
    reader: CatalogReader,
    request: UninstallRequest | dict,
) -> UninstallResult:
    """Uninstall commands, plus optional setup and dependency cleanup.

    Raises:
        NotFoundError: Unknown distro.
        InvalidInputError: Bad request shape or unknown preference.
    """
    req = parse_request(request, UninstallRequest)
    snapshot = load_snapshot(reader, req.distro_slug, req.app_ids)
    resolution = resolve_snapshot(snapshot, req.app_ids, req.source_preference)
    synthesis = synthesize(
        snapshot, resolution, MODE_UNINSTALL,
        SynthesisOptions(
            install_method=req.install_method,
            include_setup_cleanup=req.include_setup_cleanup,
            include_dependency_cleanup=req.include_dependency_cleanup,
        ),
    )
    report = build_report(snapshot, resolution, synthesis, MODE_UNINSTALL)

    return UninstallResult(
        commands=synthesis.commands,
        cleanup_commands=synthesis.cleanup_commands,
        dependency_cleanup_commands=synthesis.dependency_cleanup_commands,
        breakdown=report.breakdown,
        warnings=report.warnings,
        manual_steps=report.manual_steps,
        unresolved=report.unresolved,
    )
