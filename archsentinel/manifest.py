"""Read dependency names from a project's package.json."""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path

from archsentinel.exceptions import ManifestError

# The platform package itself is never checked.
IGNORED_LIBRARIES = ("react-native",)


def parse_dependency_names(
    content: str,
    *,
    include_dev: bool = False,
    ignored: Iterable[str] = IGNORED_LIBRARIES,
) -> list[str]:
    """Return dependency names declared in package.json *content*, in file order."""
    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ManifestError(f"invalid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ManifestError("package.json must contain a JSON object")

    sections = ["dependencies"]
    if include_dev:
        sections.append("devDependencies")

    skip = set(ignored)
    names: list[str] = []
    for key in sections:
        section = data.get(key) or {}
        if not isinstance(section, dict):
            raise ManifestError(f"'{key}' must be an object")
        for name in section:
            if name not in skip and name not in names:
                names.append(name)
    return names


def load_dependency_names(
    path: Path,
    *,
    include_dev: bool = False,
    ignored: Iterable[str] = IGNORED_LIBRARIES,
) -> list[str]:
    """Read *path* and return its dependency names, minus *ignored*."""
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ManifestError(f"cannot read {path}: {exc.strerror or exc}") from exc
    try:
        return parse_dependency_names(content, include_dev=include_dev, ignored=ignored)
    except ManifestError as exc:
        raise ManifestError(f"{path}: {exc}") from exc
