"""Text report for a ResolutionResult."""

from __future__ import annotations

import click

from archsentinel.core.config import DisplayOptions
from archsentinel.engines.resolver.models import (
    ResolutionResult,
    ResolutionStatus,
    ResolvedDependency,
)

_COLORS = {
    ResolutionStatus.SUPPORTED: "green",
    ResolutionStatus.NOT_SUPPORTED: "red",
    ResolutionStatus.NOT_FOUND: "yellow",
}

GROUP_TITLES = {
    ResolutionStatus.SUPPORTED: "Supported Libraries",
    ResolutionStatus.NOT_SUPPORTED: "Not Supported Libraries",
    ResolutionStatus.NOT_FOUND: "Not Found Libraries",
}

_GROUP_ORDER = (
    ResolutionStatus.SUPPORTED,
    ResolutionStatus.NOT_SUPPORTED,
    ResolutionStatus.NOT_FOUND,
)


def selected_statuses(options: DisplayOptions) -> list[ResolutionStatus]:
    if options.show_all:
        return list(_GROUP_ORDER)
    selected = []
    if options.show_supported:
        selected.append(ResolutionStatus.SUPPORTED)
    if options.show_not_supported:
        selected.append(ResolutionStatus.NOT_SUPPORTED)
    if options.show_not_found:
        selected.append(ResolutionStatus.NOT_FOUND)
    return selected


def verdict_text(dep: ResolvedDependency) -> str:
    if dep.status is ResolutionStatus.SUPPORTED:
        return "true (full JS)" if dep.source == "source" else "true"
    if dep.status is ResolutionStatus.NOT_SUPPORTED:
        if dep.source == "source":
            return "false (has native dependencies, you must ask the owner)"
        return "false"
    return "not found"


def render_lines(result: ResolutionResult, options: DisplayOptions) -> list[str]:
    """Build the report lines, filtered and optionally grouped by status."""
    statuses = selected_statuses(options)
    lines: list[str] = []

    if options.group:
        for status in statuses:
            names = sorted(result.names_for(status))
            lines.append(click.style(GROUP_TITLES[status], fg=_COLORS[status], bold=True))
            lines.extend(f"  - {name}" for name in names)
            lines.append("")
    else:
        wanted = set(statuses)
        for dep in sorted(result.dependencies, key=lambda d: d.name):
            if dep.status not in wanted:
                continue
            verdict = click.style(verdict_text(dep), fg=_COLORS[dep.status])
            lines.append(f"Library: {dep.name}, supports new architecture: {verdict}")
        if lines:
            lines.append("")

    lines.append(summary_line(result))
    return lines


def summary_line(result: ResolutionResult) -> str:
    return (
        f"Total: {result.total} | "
        f"Supported: {click.style(str(result.supported), fg='green')} | "
        f"Not Supported: {click.style(str(result.not_supported), fg='red')} | "
        f"Not Found: {click.style(str(result.not_found), fg='yellow')}"
    )
