"""
L2 Resolver — Choose one source per requested application.

Resolution order, per app:
  1. Candidates: sources linked to the distro that also carry an
     available package for the app.
  2. A non-``auto`` preference that matches a candidate (by slug,
     else by source category) narrows the field to those matches.
  3. The field is ranked (see ``domain.ranking``) and the first wins.
  4. No candidates → the app is unresolved.

A preference that matches nothing for an app is ignored for that app
only. It never fails the call.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from distrocmd.adapters.base import CatalogReader
from distrocmd.core.errors import InvalidInputError
from distrocmd.core.models.catalog import Distribution, Source
from distrocmd.core.services.command_engine.data.constants import (
    PREFERENCE_AUTO,
    PREFERENCE_NATIVE,
    REASON_NO_DISTRO_SOURCES,
    REASON_NO_PACKAGE,
    REASON_UNKNOWN_APP,
)
from distrocmd.core.services.command_engine.domain.ranking import rank_sources
from distrocmd.core.services.command_engine.resolver.snapshot import (
    CatalogSnapshot,
    load_snapshot,
)

logger = logging.getLogger(__name__)

_PREFERENCE_PATTERN = re.compile(r"^[a-z0-9][a-z0-9._-]*$")


@dataclass
class Resolution:
    """Outcome of source resolution for one request."""

    distro: Distribution
    app_ids: list[str] = field(default_factory=list)            # request order, deduped
    assignments: dict[str, str] = field(default_factory=dict)   # app_id → source_id
    unresolved: dict[str, str] = field(default_factory=dict)    # app_id → reason code
    preference: str = PREFERENCE_AUTO

    @property
    def resolved_count(self) -> int:
        return len(self.assignments)


def normalize_preference(preference: str | None, catalog_sources: list[Source]) -> str:
    """Validate a source preference against the live catalog.

    Accepts ``auto``, ``native``, any source slug, or any source
    category present in the catalog. Comparison is case-insensitive.

    Raises:
        InvalidInputError: Malformed or unknown preference.
    """
    if preference is None:
        return PREFERENCE_AUTO
    if not isinstance(preference, str):
        raise InvalidInputError("sourcePreference must be a string")

    value = preference.strip().lower()
    if not value:
        return PREFERENCE_AUTO
    if not _PREFERENCE_PATTERN.match(value):
        raise InvalidInputError(f"Malformed source preference: {preference!r}")
    if value in (PREFERENCE_AUTO, PREFERENCE_NATIVE):
        return value

    known = {s.slug.lower() for s in catalog_sources}
    known |= {s.category.lower() for s in catalog_sources if s.category}
    if value not in known:
        raise InvalidInputError(
            f"Unknown source preference '{preference}'. "
            f"Use 'auto', 'native', a source slug or a source category."
        )
    return value


def candidate_sources(snapshot: CatalogSnapshot, app_id: str) -> list[Source]:
    """Ranked sources that are linked to the distro and carry the app."""
    usable = [
        snapshot.sources[source_id]
        for (a, source_id) in snapshot.packages
        if a == app_id and source_id in snapshot.links and source_id in snapshot.sources
    ]
    return rank_sources(usable, snapshot.links)


def _apply_preference(candidates: list[Source], preference: str) -> list[Source]:
    """Narrow ranked candidates to the preferred ones, if any match."""
    if preference == PREFERENCE_AUTO:
        return candidates
    by_slug = [s for s in candidates if s.slug.lower() == preference]
    if by_slug:
        return by_slug
    by_category = [s for s in candidates if s.category.lower() == preference]
    if by_category:
        return by_category
    return candidates


def resolve_snapshot(
    snapshot: CatalogSnapshot,
    app_ids: list[str],
    source_preference: str | None = PREFERENCE_AUTO,
) -> Resolution:
    """Resolve every app against an already-loaded snapshot (pure).

    Raises:
        InvalidInputError: Empty app list, or a bad preference.
    """
    ordered = list(dict.fromkeys(a for a in app_ids if a))
    if not ordered:
        raise InvalidInputError("No applications selected.")

    preference = normalize_preference(source_preference, snapshot.catalog_sources)
    resolution = Resolution(distro=snapshot.distro, app_ids=ordered, preference=preference)

    for app_id in ordered:
        if app_id not in snapshot.applications:
            resolution.unresolved[app_id] = REASON_UNKNOWN_APP
            continue

        if not snapshot.links:
            resolution.unresolved[app_id] = REASON_NO_DISTRO_SOURCES
            continue

        candidates = candidate_sources(snapshot, app_id)
        if not candidates:
            resolution.unresolved[app_id] = REASON_NO_PACKAGE
            continue

        preferred = _apply_preference(candidates, preference)
        if preference != PREFERENCE_AUTO and preferred is candidates:
            logger.debug(
                "Preference '%s' not usable for %s on %s, falling back to ranking",
                preference, app_id, snapshot.distro.slug,
            )
        chosen = preferred[0]
        resolution.assignments[app_id] = chosen.id
        logger.debug("Resolved %s → %s", app_id, chosen.slug)

    logger.info(
        "Resolved %d/%d apps for %s (preference=%s)",
        resolution.resolved_count, len(ordered), snapshot.distro.slug, preference,
    )
    return resolution


def resolve(
    reader: CatalogReader,
    distro_slug: str,
    app_ids: list[str],
    source_preference: str | None = PREFERENCE_AUTO,
) -> Resolution:
    """Load a snapshot and resolve the apps in one call.

    Raises:
        NotFoundError: Unknown distro.
        InvalidInputError: Empty app list, or a bad preference.
    """
    if not [a for a in app_ids if a]:
        raise InvalidInputError("No applications selected.")
    snapshot = load_snapshot(reader, distro_slug, app_ids)
    return resolve_snapshot(snapshot, app_ids, source_preference)
