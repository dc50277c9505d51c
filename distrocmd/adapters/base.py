"""
Catalog reader base — the data-access contract of the command engine.

The engine never talks to a database or file directly. Everything it
knows about sources, packages and distributions comes through this
interface, read once per resolution call.

To add a new backend:
    1. Subclass CatalogReader
    2. Implement every abstract method
    3. Hand an instance to the orchestrator
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from distrocmd.core.models.catalog import (
    Application,
    DistroSource,
    Distribution,
    Package,
    Source,
)


class CatalogReader(ABC):
    """Read-only view over the admin-managed catalog tables."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Backend identifier (e.g. 'memory', 'yaml')."""

    @abstractmethod
    def get_distro(self, slug: str) -> Distribution | None:
        """Look up a distribution by slug. None if unknown."""

    @abstractmethod
    def get_distro_sources(self, distro_id: str) -> list[DistroSource]:
        """All DistroSource links of a distribution (may be empty)."""

    @abstractmethod
    def get_available_packages(self, app_ids: Iterable[str]) -> list[Package]:
        """Packages with ``is_available`` set, for the given apps."""

    @abstractmethod
    def get_sources(self, ids: Iterable[str]) -> list[Source]:
        """Sources by id. Unknown ids are skipped."""

    @abstractmethod
    def get_applications(self, app_ids: Iterable[str]) -> list[Application]:
        """Applications by id. Unknown ids are skipped."""

    @abstractmethod
    def list_sources(self) -> list[Source]:
        """Every source in the catalog."""

    @abstractmethod
    def list_distros(self) -> list[Distribution]:
        """Every distribution in the catalog."""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
