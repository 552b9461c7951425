"""Repository URL utilities."""

from __future__ import annotations

import re
from urllib.parse import urlsplit

RAW_CONTENT_HOST = "raw.githubusercontent.com"

# npm "repository" shorthand: github:owner/repo, gitlab:owner/repo, bitbucket:owner/repo
_SHORTHAND_HOSTS = {
    "github": "github.com",
    "gitlab": "gitlab.com",
    "bitbucket": "bitbucket.org",
}
_BARE_SHORTHAND_RE = re.compile(r"^[\w.-]+/[\w.-]+$")
_SCP_LIKE_RE = re.compile(r"^(?:[\w.-]+@)?([\w.-]+):(?!//)(.+)$")


def split_repository_url(raw_url: str) -> tuple[str, str, str] | None:
    """Extract ``(host, owner, name)`` from a registry repository URL.

    Strips a ``git+`` prefix and a trailing ``.git`` suffix, then handles:
      - https://github.com/owner/repo (anything below the repo is ignored)
      - git://github.com/owner/repo, ssh://git@github.com/owner/repo
      - git@github.com:owner/repo
      - github.com/owner/repo (host path without a scheme)
      - github:owner/repo and the bare owner/repo shorthand

    Returns None if no owner/name pair can be recovered.
    """
    url = raw_url.strip()
    if url.startswith("git+"):
        url = url[len("git+") :]
    url = url.split("#", 1)[0].rstrip("/")
    if url.endswith(".git"):
        url = url[: -len(".git")]
    if not url:
        return None

    prefix, sep, rest = url.partition(":")
    if sep and prefix in _SHORTHAND_HOSTS:
        return _from_path(_SHORTHAND_HOSTS[prefix], rest)

    if _BARE_SHORTHAND_RE.match(url):
        return _from_path("github.com", url)

    if "://" not in url:
        # github.com/owner/repo
        host, _, path = url.partition("/")
        if "." in host and ":" not in host and "/" in path:
            return _from_path(host, path)
        m = _SCP_LIKE_RE.match(url)
        if m is None:
            return None
        return _from_path(m.group(1), m.group(2))

    parts = urlsplit(url)
    if not parts.hostname:
        return None
    return _from_path(parts.hostname, parts.path)


def is_github_host(host: str) -> bool:
    return host.lower() in ("github.com", "www.github.com")


def _from_path(host: str, path: str) -> tuple[str, str, str] | None:
    segments = [s for s in path.split("/") if s]
    if len(segments) < 2:
        return None
    owner, name = segments[0], segments[1]
    if name.endswith(".git"):
        name = name[: -len(".git")]
    if not name:
        return None
    return host.lower(), owner, name
