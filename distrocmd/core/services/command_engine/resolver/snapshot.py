"""
L2 Resolver — Per-call catalog snapshot.

Everything one resolution call needs is read through the catalog
reader exactly once, into local dicts, and thrown away when the call
returns. Nothing here outlives the call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from distrocmd.adapters.base import CatalogReader
from distrocmd.core.errors import NotFoundError
from distrocmd.core.models.catalog import (
    Application,
    DistroSource,
    Distribution,
    Package,
    Source,
)
from distrocmd.core.services.command_engine.domain.templating import os_for_family

logger = logging.getLogger(__name__)


@dataclass
class CatalogSnapshot:
    """A consistent view of the catalog rows touched by one request."""

    distro: Distribution
    links: dict[str, DistroSource] = field(default_factory=dict)           # source_id →
    sources: dict[str, Source] = field(default_factory=dict)               # source_id →
    applications: dict[str, Application] = field(default_factory=dict)     # app_id →
    packages: dict[tuple[str, str], Package] = field(default_factory=dict)  # (app_id, source_id) →
    catalog_sources: list[Source] = field(default_factory=list)            # every source, for preferences

    @property
    def family(self) -> str:
        return self.distro.family

    @property
    def os_name(self) -> str:
        return os_for_family(self.distro.family)

    def app_name(self, app_id: str) -> str:
        """Display name of an app, or its id when unknown."""
        app = self.applications.get(app_id)
        return app.display_name if app else app_id


def load_snapshot(
    reader: CatalogReader,
    distro_slug: str,
    app_ids: list[str],
) -> CatalogSnapshot:
    """Read the rows for one request.

    Raises:
        NotFoundError: If the distro slug is unknown.
    """
    distro = reader.get_distro(distro_slug)
    if distro is None:
        raise NotFoundError(
            f"Distribution '{distro_slug}' not found. "
            "Please select a valid distribution."
        )

    links: dict[str, DistroSource] = {}
    for link in reader.get_distro_sources(distro.id):
        if link.source_id in links:
            logger.warning(
                "Distro '%s' links source '%s' twice; keeping the first link",
                distro.slug, link.source_id,
            )
            continue
        links[link.source_id] = link

    packages: dict[tuple[str, str], Package] = {}
    for pkg in reader.get_available_packages(app_ids):
        key = (pkg.app_id, pkg.source_id)
        if key in packages:
            logger.warning(
                "App '%s' has more than one package on source '%s'; keeping '%s'",
                pkg.app_id, pkg.source_id, packages[key].identifier,
            )
            continue
        packages[key] = pkg

    source_ids = set(links) | {source_id for _, source_id in packages}
    sources = {s.id: s for s in reader.get_sources(sorted(source_ids))}
    applications = {a.id: a for a in reader.get_applications(app_ids)}

    for source_id in [sid for sid in links if sid not in sources]:
        logger.warning(
            "Distro '%s' links unknown source '%s'; ignoring the link",
            distro.slug, source_id,
        )
        del links[source_id]

    snapshot = CatalogSnapshot(
        distro=distro,
        links=links,
        sources=sources,
        applications=applications,
        packages=packages,
        catalog_sources=reader.list_sources(),
    )
    logger.debug(
        "Snapshot for %s: %d linked sources, %d packages, %d/%d apps known",
        distro.slug, len(links), len(packages), len(applications), len(app_ids),
    )
    return snapshot
