"""
distrocmd — CLI entrypoint.

Usage:
    distrocmd --help
    distrocmd install ubuntu firefox vlc
    distrocmd uninstall fedora steam --deps --setup-cleanup
    distrocmd catalog check
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from distrocmd import __version__
from distrocmd.core.observability.logging_config import level_from_flags, setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="distrocmd")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--catalog",
    "-c",
    "catalog_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to catalog.yml (default: $DCMD_CATALOG or auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    catalog_path: str | None,
) -> None:
    """distrocmd — install/uninstall commands for any distribution."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["catalog_path"] = Path(catalog_path) if catalog_path else None

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level=level_from_flags(debug=debug, verbose=verbose, quiet=quiet),
        quiet_third_party=not debug,
    )


def _load_reader(ctx: click.Context):  # type: ignore[no-untyped-def]
    """Load the catalog or exit with a red error."""
    from distrocmd.core.config.catalog_loader import ConfigError, load_catalog

    try:
        return load_catalog(ctx.obj.get("catalog_path"))
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)


def _print_lines(title: str, lines: list[str], color: str) -> None:
    if not lines:
        return
    click.secho(f"   {title}:", fg=color, bold=True)
    for line in lines:
        click.echo(f"     {line}")
    click.echo()


def _print_report(result, quiet: bool) -> None:  # type: ignore[no-untyped-def]
    if result.warnings:
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")
        click.echo()

    if result.manual_steps:
        click.secho("📝 Manual steps:", fg="cyan")
        for step in result.manual_steps:
            click.echo(f"   • {step.app_name}: {step.instructions}")
        click.echo()

    if not quiet and result.breakdown:
        click.secho("   Sources:", fg="white", bold=True)
        for entry in result.breakdown:
            click.echo(f"     • {entry.source_name}: {', '.join(entry.package_identifiers)}")
        click.echo()


def _write_script(result, distro_slug: str, mode: str, reader, script_path: str) -> None:  # type: ignore[no-untyped-def]
    from distrocmd.core.services.command_engine import render_script

    distro = reader.get_distro(distro_slug)
    content, filename = render_script(result, distro, mode)
    target = Path(script_path)
    if target.is_dir():
        target = target / filename
    target.write_text(content, encoding="utf-8")
    click.secho(f"💾 Script written to {target}", fg="cyan")


@cli.command()
@click.argument("distro")
@click.argument("apps", nargs=-1, required=True)
@click.option("--prefer", "preference", default="auto", help="Source slug, category, 'native' or 'auto'.")
@click.option("--method", "install_method", default=None, help="Install method (nixos): ephemeral, persistent, declarative.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option("--script", "script_path", type=click.Path(), default=None, help="Also write a shell script (file or directory).")
@click.pass_context
def install(
    ctx: click.Context,
    distro: str,
    apps: tuple[str, ...],
    preference: str,
    install_method: str | None,
    as_json: bool,
    script_path: str | None,
) -> None:
    """Print install commands for APPS on DISTRO.

    Examples:

        distrocmd install ubuntu firefox vlc

        distrocmd install fedora steam --prefer flatpak

        distrocmd install nixos firefox --method persistent
    """
    from distrocmd.core.errors import EngineError
    from distrocmd.core.services.command_engine import MODE_INSTALL, generate_install_commands

    reader = _load_reader(ctx)
    try:
        result = generate_install_commands(reader, {
            "distroSlug": distro,
            "appIds": list(apps),
            "sourcePreference": preference,
            "installMethod": install_method,
        })
    except EngineError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    if script_path:
        _write_script(result, distro, MODE_INSTALL, reader, script_path)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    quiet = ctx.obj.get("quiet", False)
    if not quiet:
        click.secho(f"\n📦 Install on {distro}", fg="cyan", bold=True)
        click.echo()

    _print_lines("Setup", result.setup_commands, "white")
    _print_lines("Commands", result.commands, "green")
    _print_report(result, quiet)


@cli.command()
@click.argument("distro")
@click.argument("apps", nargs=-1, required=True)
@click.option("--prefer", "preference", default="auto", help="Source slug, category, 'native' or 'auto'.")
@click.option("--method", "install_method", default=None, help="Install method (nixos): ephemeral, persistent, declarative.")
@click.option("--deps", "include_deps", is_flag=True, help="Also remove orphaned dependencies.")
@click.option("--setup-cleanup", "include_setup", is_flag=True, help="Also undo repository setup.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option("--script", "script_path", type=click.Path(), default=None, help="Also write a shell script (file or directory).")
@click.pass_context
def uninstall(
    ctx: click.Context,
    distro: str,
    apps: tuple[str, ...],
    preference: str,
    install_method: str | None,
    include_deps: bool,
    include_setup: bool,
    as_json: bool,
    script_path: str | None,
) -> None:
    """Print uninstall commands for APPS on DISTRO."""
    from distrocmd.core.errors import EngineError
    from distrocmd.core.services.command_engine import MODE_UNINSTALL, generate_uninstall_commands

    reader = _load_reader(ctx)
    try:
        result = generate_uninstall_commands(reader, {
            "distroSlug": distro,
            "appIds": list(apps),
            "sourcePreference": preference,
            "installMethod": install_method,
            "includeDependencyCleanup": include_deps,
            "includeSetupCleanup": include_setup,
        })
    except EngineError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    if script_path:
        _write_script(result, distro, MODE_UNINSTALL, reader, script_path)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    quiet = ctx.obj.get("quiet", False)
    if not quiet:
        click.secho(f"\n🗑️  Uninstall on {distro}", fg="cyan", bold=True)
        click.echo()

    _print_lines("Commands", result.commands, "green")
    _print_lines("Dependency cleanup", result.dependency_cleanup_commands, "white")
    _print_lines("Setup cleanup", result.cleanup_commands, "white")
    _print_report(result, quiet)


@cli.command()
@click.option("--host", default="127.0.0.1", help="Bind address.")
@click.option("--port", "-p", default=8000, type=int, help="Port number.")
@click.pass_context
def web(ctx: click.Context, host: str, port: int) -> None:
    "Start the JSON API server."
    from distrocmd.core.config.catalog_loader import find_catalog_file
    from distrocmd.ui.web.server import create_app, run_server

    catalog_path: Path | None = ctx.obj.get("catalog_path") or find_catalog_file()
    if catalog_path is None:
        click.secho("❌ No catalog.yml found. Pass --catalog or set DCMD_CATALOG.", fg="red")
        sys.exit(1)

    app = create_app(catalog_path=catalog_path)
    debug = ctx.obj.get("debug", False)

    click.echo()
    click.secho("⚡ distrocmd — API server", bold=True)
    click.echo(f"   Endpoint: http://{host}:{port}/api/generate")
    click.echo(f"   Catalog:  {catalog_path}")
    if debug:
        click.secho("   Logging: DEBUG (all output)", fg="yellow")
    click.echo()

    run_server(app, host=host, port=port, debug=debug)


# ── Register sub-command groups from distrocmd/ui/cli/ ────────────

from distrocmd.ui.cli.catalog import catalog  # noqa: E402

cli.add_command(catalog)


if __name__ == "__main__":
    cli()
