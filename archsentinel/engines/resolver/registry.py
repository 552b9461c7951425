"""npm registry lookup — recover a dependency's source repository."""

from __future__ import annotations

from urllib.parse import quote

import structlog

from archsentinel.engines.resolver.fetcher import BoundedFetcher
from archsentinel.engines.resolver.models import RepositoryReference
from archsentinel.exceptions import ResolverError

log = structlog.get_logger("archsentinel.engine")


class RepositoryResolver:
    """Read the ``repository`` field of a package from the registry."""

    def __init__(self, fetcher: BoundedFetcher, base_url: str) -> None:
        self._fetcher = fetcher
        self._base_url = base_url.rstrip("/")

    def package_url(self, name: str) -> str:
        # Scoped names (@scope/pkg) travel as a single encoded path segment.
        return f"{self._base_url}/{quote(name, safe='@')}"

    async def resolve(self, name: str) -> RepositoryReference | None:
        """Return the normalized repository of *name*, or None.

        Errors never escape: a failed lookup is logged and reported as None.
        """
        try:
            payload = await self._fetcher.get_json(self.package_url(name))
        except ResolverError as exc:
            log.info("registry.lookup_failed", library=name, error=str(exc))
            return None

        raw_url = _repository_url(payload)
        if raw_url is None:
            log.debug("registry.no_repository", library=name)
            return None

        ref = RepositoryReference.parse(raw_url)
        if ref is None:
            log.info("registry.unparseable_repository", library=name, url=raw_url)
        return ref


def _repository_url(payload: object) -> str | None:
    if not isinstance(payload, dict):
        return None
    repository = payload.get("repository")
    # npm accepts both {"type": "git", "url": "..."} and a bare string
    if isinstance(repository, str):
        return repository or None
    if isinstance(repository, dict):
        url = repository.get("url")
        if isinstance(url, str) and url:
            return url
    return None
