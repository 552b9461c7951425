"""CLI entry point: archsentinel.

Usage:
    archsentinel                                # check ./package.json
    archsentinel --path app/package.json --group
    archsentinel -s -nf                         # only supported + not found
    archsentinel --json                         # machine-readable result
"""

from __future__ import annotations

import asyncio
import json
import sys
from dataclasses import replace
from pathlib import Path

import click

from archsentinel.core.config import DisplayOptions, Settings
from archsentinel.core.logging import setup_logging
from archsentinel.engines.resolver.orchestrator import resolve
from archsentinel.exceptions import ManifestError
from archsentinel.manifest import load_dependency_names
from archsentinel.render import render_lines


def _progress(completed: int, total: int) -> None:
    if not sys.stderr.isatty():
        return
    end = "\n" if completed == total else ""
    click.echo(f"\rChecked {completed}/{total}{end}", nl=False, err=True)


def _build_settings(concurrency: int | None, timeout: float | None) -> Settings:
    try:
        settings = Settings.from_env()
    except ValueError as exc:
        raise click.UsageError(f"invalid ARCHSENTINEL_* setting: {exc}") from exc

    overrides: dict[str, object] = {}
    if concurrency is not None:
        overrides["concurrency"] = concurrency
    if timeout is not None:
        overrides["timeout"] = timeout
    if not overrides:
        return settings
    try:
        return replace(settings, **overrides)
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc


@click.command()
@click.option(
    "-p",
    "--path",
    "manifest_path",
    default="package.json",
    show_default=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to the project's package.json",
)
@click.option("-s", "--supported", is_flag=True, help="Show supported libraries")
@click.option("-ns", "--not-supported", is_flag=True, help="Show not supported libraries")
@click.option("-nf", "--not-found", is_flag=True, help="Show libraries that could not be classified")
@click.option("-g", "--group", is_flag=True, help="Group libraries by status")
@click.option("--json", "as_json", is_flag=True, help="Output the result as JSON")
@click.option("--include-dev", is_flag=True, help="Also check devDependencies")
@click.option("--concurrency", type=int, default=None, help="Max libraries checked at once")
@click.option("--timeout", type=float, default=None, help="Per-request timeout in seconds")
@click.option(
    "--fail-on-unsupported",
    is_flag=True,
    help="Exit with status 1 if any library is not supported",
)
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(
    manifest_path: Path,
    supported: bool,
    not_supported: bool,
    not_found: bool,
    group: bool,
    as_json: bool,
    include_dev: bool,
    concurrency: int | None,
    timeout: float | None,
    fail_on_unsupported: bool,
    verbose: bool,
) -> None:
    """Check package.json dependencies for React Native New Architecture support."""
    setup_logging("DEBUG" if verbose else None)
    settings = _build_settings(concurrency, timeout)

    try:
        names = load_dependency_names(manifest_path, include_dev=include_dev)
    except ManifestError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(2)

    if not as_json:
        click.echo(f"{len(names)} libraries found\n")
        click.echo("Checking libraries...\n")

    result = asyncio.run(resolve(names, settings, on_progress=_progress))

    if as_json:
        click.echo(json.dumps(result.as_dict(), indent=2))
    else:
        options = DisplayOptions(
            show_supported=supported,
            show_not_supported=not_supported,
            show_not_found=not_found,
            group=group,
        )
        for line in render_lines(result, options):
            click.echo(line)

    if fail_on_unsupported and result.not_supported:
        sys.exit(1)


if __name__ == "__main__":
    main()
