"""
Catalog check use case — validate catalog.yml and report data issues.

Loading only proves the rows are well-formed. This pass looks for the
admin mistakes the engine would otherwise discover one request at a
time: broken templates, dangling links, duplicate packages.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from distrocmd.adapters.memory import InMemoryCatalog
from distrocmd.core.config.catalog_loader import (
    ConfigError,
    find_catalog_file,
    load_catalog,
)
from distrocmd.core.errors import TemplateError
from distrocmd.core.services.command_engine.domain.templating import validate_template


@dataclass
class CatalogCheckResult:
    """Result of catalog validation."""

    valid: bool = False
    catalog_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    source_count: int = 0
    distro_count: int = 0
    app_count: int = 0
    package_count: int = 0

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "catalog_path": str(self.catalog_path) if self.catalog_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "source_count": self.source_count,
            "distro_count": self.distro_count,
            "app_count": self.app_count,
            "package_count": self.package_count,
        }


def check_catalog(catalog_path: Path | None = None) -> CatalogCheckResult:
    """Load a catalog file and validate its contents.

    Args:
        catalog_path: Optional explicit path to catalog.yml.

    Returns:
        CatalogCheckResult with validation status and any issues.
    """
    result = CatalogCheckResult()

    if catalog_path is None:
        catalog_path = find_catalog_file()
    if catalog_path is None:
        result.errors.append("No catalog.yml found.")
        return result
    result.catalog_path = catalog_path

    try:
        catalog = load_catalog(catalog_path)
    except ConfigError as e:
        result.errors.append(str(e))
        return result

    check_catalog_data(catalog, result)
    return result


def check_catalog_data(
    catalog: InMemoryCatalog,
    result: CatalogCheckResult | None = None,
) -> CatalogCheckResult:
    """Run the semantic checks on an already-loaded catalog."""
    result = result or CatalogCheckResult()

    sources = catalog.list_sources()
    distros = catalog.list_distros()
    apps = catalog.all_applications
    packages = catalog.all_packages
    links = catalog.all_distro_sources

    result.source_count = len(sources)
    result.distro_count = len(distros)
    result.app_count = len(apps)
    result.package_count = len(packages)

    sources_by_id = {s.id: s for s in sources}
    app_ids = {a.id for a in apps}
    distro_ids = {d.id for d in distros}

    # ── Templates ──
    for source in sources:
        if source.kind == "script":
            continue
        _check_template(result, source.slug, "install_template", source.install_template)
        if source.remove_template:
            _check_template(result, source.slug, "remove_template", source.remove_template)
        else:
            result.warnings.append(f"Source '{source.slug}' has no remove_template (uninstall unsupported)")
        for method, variant in source.install_methods.items():
            _check_template(
                result, source.slug, f"install_methods.{method}.install_template",
                variant.install_template,
            )
            if variant.remove_template:
                _check_template(
                    result, source.slug, f"install_methods.{method}.remove_template",
                    variant.remove_template,
                )

    # ── Uniqueness ──
    for label, values in (
        ("source slug", [s.slug for s in sources]),
        ("distro slug", [d.slug for d in distros]),
        ("app slug", [a.slug for a in apps]),
    ):
        dupes = sorted({v for v in values if values.count(v) > 1})
        if dupes:
            result.errors.append(f"Duplicate {label}s: {', '.join(dupes)}")

    seen_pairs: set[tuple[str, str]] = set()
    for pkg in packages:
        pair = (pkg.app_id, pkg.source_id)
        if pair in seen_pairs:
            result.errors.append(
                f"App '{pkg.app_id}' has more than one package on source '{pkg.source_id}'"
            )
        seen_pairs.add(pair)

    # ── References ──
    for pkg in packages:
        if pkg.source_id not in sources_by_id:
            result.errors.append(
                f"Package '{pkg.identifier}' of app '{pkg.app_id}' references "
                f"unknown source '{pkg.source_id}'"
            )
        if pkg.app_id not in app_ids:
            result.errors.append(
                f"Package '{pkg.identifier}' references unknown app '{pkg.app_id}'"
            )
        source = sources_by_id.get(pkg.source_id)
        if source is not None and source.kind == "script" and not (
            pkg.script_url.linux or pkg.script_url.windows
        ):
            result.warnings.append(
                f"Package '{pkg.identifier}' on script source '{source.slug}' has no script_url"
            )

    defaults: dict[str, int] = {}
    for link in links:
        if link.source_id not in sources_by_id:
            result.errors.append(
                f"Distro '{link.distro_id}' links unknown source '{link.source_id}'"
            )
        if link.distro_id not in distro_ids:
            result.errors.append(f"Link to source '{link.source_id}' has unknown distro '{link.distro_id}'")
        if link.is_default:
            defaults[link.distro_id] = defaults.get(link.distro_id, 0) + 1

    for distro in distros:
        if defaults.get(distro.id, 0) > 1:
            result.warnings.append(
                f"Distro '{distro.slug}' has {defaults[distro.id]} default sources; "
                "ranking falls back to source slug between them"
            )
        if not any(link.distro_id == distro.id for link in links):
            result.warnings.append(f"Distro '{distro.slug}' has no sources configured")

    result.valid = len(result.errors) == 0
    return result


def _check_template(result: CatalogCheckResult, slug: str, field_name: str, template: str | None) -> None:
    try:
        validate_template(slug, template)
    except TemplateError as e:
        result.errors.append(f"{e} ({field_name})")
