"""
CLI commands for the catalog file.

Thin wrappers over ``distrocmd.core.use_cases.catalog_check`` and the
catalog loader.
"""

from __future__ import annotations

import json
import sys

import click


@click.group()
def catalog() -> None:
    """Catalog — validate catalog.yml, list distributions."""


@catalog.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def catalog_check(ctx: click.Context, as_json: bool) -> None:
    """Validate catalog.yml (templates, links, duplicates)."""
    from distrocmd.core.use_cases.catalog_check import check_catalog

    result = check_catalog(catalog_path=ctx.obj.get("catalog_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    if result.valid:
        click.secho("✅ Catalog is valid", fg="green", bold=True)
        click.echo(f"   File: {result.catalog_path}")
        click.echo(
            f"   Sources: {result.source_count}  Distros: {result.distro_count}  "
            f"Apps: {result.app_count}  Packages: {result.package_count}"
        )
    else:
        click.secho("❌ Catalog errors:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")

    if not result.valid:
        click.echo()
        sys.exit(1)

    click.echo()


@catalog.command("distros")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def catalog_distros(ctx: click.Context, as_json: bool) -> None:
    """List the distributions and their ranked sources."""
    from distrocmd.core.config.catalog_loader import ConfigError, load_catalog
    from distrocmd.core.services.command_engine.domain.ranking import rank_sources

    try:
        reader = load_catalog(ctx.obj.get("catalog_path"))
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    sources = reader.list_sources()
    rows = []
    for distro in reader.list_distros():
        links = {ds.source_id: ds for ds in reader.get_distro_sources(distro.id)}
        ranked = rank_sources(sources, links)
        rows.append({
            "slug": distro.slug,
            "name": distro.name,
            "family": distro.family,
            "sources": [s.slug for s in ranked],
        })

    if as_json:
        click.echo(json.dumps(rows, indent=2))
        return

    click.secho(f"🐧 Distributions: {len(rows)}", fg="cyan", bold=True)
    for row in rows:
        click.echo(f"   • {row['slug']} ({row['family']})  → {', '.join(row['sources']) or '-'}")
