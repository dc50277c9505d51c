"""
In-memory catalog reader — backs the YAML catalog and the test suite.

Holds plain lists of catalog models and answers the reader queries
with simple scans. Queries never mutate the instance, so one reader
can serve every web request; reload the catalog to see admin edits.
"""

from __future__ import annotations

from collections.abc import Iterable

from distrocmd.adapters.base import CatalogReader
from distrocmd.core.models.catalog import (
    Application,
    DistroSource,
    Distribution,
    Package,
    Source,
)


class InMemoryCatalog(CatalogReader):
    """Catalog reader over in-process lists."""

    def __init__(
        self,
        sources: Iterable[Source] = (),
        applications: Iterable[Application] = (),
        packages: Iterable[Package] = (),
        distros: Iterable[Distribution] = (),
        distro_sources: Iterable[DistroSource] = (),
        backend_name: str = "memory",
    ):
        self._name = backend_name
        self._sources = list(sources)
        self._applications = list(applications)
        self._packages = list(packages)
        self._distros = list(distros)
        self._distro_sources = list(distro_sources)

    @property
    def name(self) -> str:
        return self._name

    # ── Reader protocol ─────────────────────────────────────────────

    def get_distro(self, slug: str) -> Distribution | None:
        for distro in self._distros:
            if distro.slug == slug:
                return distro
        return None

    def get_distro_sources(self, distro_id: str) -> list[DistroSource]:
        return [ds for ds in self._distro_sources if ds.distro_id == distro_id]

    def get_available_packages(self, app_ids: Iterable[str]) -> list[Package]:
        wanted = set(app_ids)
        return [p for p in self._packages if p.app_id in wanted and p.is_available]

    def get_sources(self, ids: Iterable[str]) -> list[Source]:
        wanted = set(ids)
        return [s for s in self._sources if s.id in wanted]

    def get_applications(self, app_ids: Iterable[str]) -> list[Application]:
        wanted = set(app_ids)
        return [a for a in self._applications if a.id in wanted]

    def list_sources(self) -> list[Source]:
        return list(self._sources)

    def list_distros(self) -> list[Distribution]:
        return list(self._distros)

    # ── Raw access (catalog checks) ─────────────────────────────────

    @property
    def all_packages(self) -> list[Package]:
        """Every package row, available or not."""
        return list(self._packages)

    @property
    def all_applications(self) -> list[Application]:
        return list(self._applications)

    @property
    def all_distro_sources(self) -> list[DistroSource]:
        return list(self._distro_sources)
