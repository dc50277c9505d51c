"""
Catalog loader — reads catalog.yml into an in-memory catalog reader.

This is the primary entry point for loading catalog data. It reads
YAML, validates every row against the Pydantic models, and returns
a reader the command engine can query.

Expected layout::

    sources:
      - slug: apt
        name: APT
        install_template: "apt install -y {packages}"
        requires_sudo: true
    distros:
      - slug: ubuntu
        name: Ubuntu
        family: debian
        sources:
          - {source: apt, priority: 10, default: true}
    apps:
      - slug: firefox
        display_name: Firefox
        packages:
          apt: firefox
          flatpak: {identifier: org.mozilla.firefox}
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from distrocmd.adapters.memory import InMemoryCatalog
from distrocmd.core.models.catalog import (
    Application,
    DistroSource,
    Distribution,
    Package,
    Source,
)

logger = logging.getLogger(__name__)

# Default catalog filename
CATALOG_FILE = "catalog.yml"

# Environment variable that points at a catalog file
CATALOG_ENV_VAR = "DCMD_CATALOG"


class ConfigError(Exception):
    """Raised when the catalog file is invalid or missing."""


def find_catalog_file(start_dir: Path | None = None) -> Path | None:
    """Locate catalog.yml: ``DCMD_CATALOG`` first, then walk up from start_dir.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to the catalog file, or None if not found.
    """
    env_path = os.environ.get(CATALOG_ENV_VAR)
    if env_path:
        return Path(env_path)

    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CATALOG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_catalog(path: Path | None = None) -> InMemoryCatalog:
    """Load and validate a catalog file.

    Args:
        path: Explicit path to catalog.yml. If None, searches for one.

    Returns:
        InMemoryCatalog holding every validated row.

    Raises:
        ConfigError: If the file is missing or invalid.
    """
    if path is None:
        path = find_catalog_file()

    if path is None:
        raise ConfigError(
            f"No {CATALOG_FILE} found. "
            f"Pass --catalog or set {CATALOG_ENV_VAR}."
        )

    if not path.is_file():
        raise ConfigError(f"Catalog file not found: {path}")

    logger.debug("Loading catalog from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    catalog = catalog_from_dict(data, backend_name=f"yaml:{path.name}")
    logger.info(
        "Loaded catalog %s: %d sources, %d distros, %d apps",
        path, len(catalog.list_sources()), len(catalog.list_distros()),
        len(catalog.all_applications),
    )
    return catalog


def catalog_from_dict(data: dict[str, Any], backend_name: str = "memory") -> InMemoryCatalog:
    """Build a catalog reader from an already-parsed mapping.

    Raises:
        ConfigError: If any row fails validation.
    """
    try:
        sources = [Source.model_validate(s) for s in _as_list(data, "sources")]
    except ValidationError as e:
        raise ConfigError(f"Invalid source definition: {e}") from e

    source_ids = {s.slug: s.id for s in sources}

    distros: list[Distribution] = []
    distro_sources: list[DistroSource] = []
    for raw_distro in _as_list(data, "distros"):
        links = raw_distro.get("sources") or []
        fields = {k: v for k, v in raw_distro.items() if k != "sources"}
        try:
            distro = Distribution.model_validate(fields)
        except ValidationError as e:
            raise ConfigError(f"Invalid distro definition: {e}") from e
        distros.append(distro)

        for link in links:
            if isinstance(link, str):
                link = {"source": link}
            elif not isinstance(link, dict):
                raise ConfigError(f"Distro '{distro.slug}': source links must be slugs or mappings")
            slug = link.get("source", "")
            if slug not in source_ids:
                logger.warning(
                    "Distro '%s' links unknown source '%s'", distro.slug, slug,
                )
            try:
                distro_sources.append(DistroSource.model_validate({
                    "distro_id": distro.id,
                    "source_id": source_ids.get(slug, slug),
                    "priority": link.get("priority", 0),
                    "is_default": link.get("default", link.get("is_default", False)),
                }))
            except ValidationError as e:
                raise ConfigError(
                    f"Distro '{distro.slug}': invalid link to '{slug}': {e}"
                ) from e

    applications: list[Application] = []
    packages: list[Package] = []
    for raw_app in _as_list(data, "apps"):
        pkg_map = raw_app.get("packages") or {}
        fields = {k: v for k, v in raw_app.items() if k != "packages"}
        try:
            app = Application.model_validate(fields)
        except ValidationError as e:
            raise ConfigError(f"Invalid app definition: {e}") from e
        applications.append(app)

        if not isinstance(pkg_map, dict):
            raise ConfigError(f"App '{app.slug}': packages must be a mapping of source → package")

        for source_slug, entry in pkg_map.items():
            if isinstance(entry, str):
                entry = {"identifier": entry}
            elif not isinstance(entry, dict):
                raise ConfigError(f"App '{app.slug}': package for '{source_slug}' must be a string or mapping")
            try:
                packages.append(Package.model_validate({
                    **entry,
                    "app_id": app.id,
                    "source_id": source_ids.get(source_slug, source_slug),
                }))
            except ValidationError as e:
                raise ConfigError(
                    f"App '{app.slug}': invalid package for '{source_slug}': {e}"
                ) from e

    return InMemoryCatalog(
        sources=sources,
        applications=applications,
        packages=packages,
        distros=distros,
        distro_sources=distro_sources,
        backend_name=backend_name,
    )


def _as_list(data: dict[str, Any], key: str) -> list[dict[str, Any]]:
    """Fetch a top-level list of mappings, rejecting anything else."""
    value = data.get(key) or []
    if not isinstance(value, list) or not all(isinstance(v, dict) for v in value):
        raise ConfigError(f"'{key}' must be a list of mappings")
    return value


class CatalogFile:
    """A catalog file that is re-read whenever it changes on disk.

    The engine reads one snapshot per call; this wrapper only decides
    which snapshot that is, so admin edits show up without a restart.
    """

    def __init__(self, path: Path):
        self.path = path
        self._mtime: float | None = None
        self._catalog: InMemoryCatalog | None = None

    def current(self) -> InMemoryCatalog:
        """Return the catalog, reloading it if the file changed."""
        try:
            mtime = self.path.stat().st_mtime
        except OSError as e:
            raise ConfigError(f"Cannot stat {self.path}: {e}") from e

        if self._catalog is None or mtime != self._mtime:
            self._catalog = load_catalog(self.path)
            self._mtime = mtime
        return self._catalog
