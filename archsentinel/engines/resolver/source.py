"""Source analyzer — classify a dependency from its own package.json."""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from archsentinel.engines.resolver.fetcher import BoundedFetcher
from archsentinel.engines.resolver.models import (
    RepositoryReference,
    SourceManifestSnapshot,
    SourceVerdict,
)
from archsentinel.exceptions import ResolverError

log = structlog.get_logger("archsentinel.engine")

MANIFEST_FILE = "package.json"


class SourceAnalyzer:
    """Fetch a repository's manifest branch by branch and look for native deps."""

    def __init__(
        self,
        fetcher: BoundedFetcher,
        branches: Sequence[str],
        native_marker: str,
    ) -> None:
        self._fetcher = fetcher
        self._branches = tuple(branches)
        self._native_marker = native_marker

    async def analyze(self, ref: RepositoryReference) -> SourceVerdict:
        snapshot = await self.fetch_manifest(ref)
        if snapshot is None:
            return SourceVerdict.NOT_FOUND
        return self.classify(snapshot)

    def classify(self, snapshot: SourceManifestSnapshot) -> SourceVerdict:
        native = snapshot.native_dependencies(self._native_marker)
        if native:
            log.debug("source.native_deps", branch=snapshot.branch, native=native)
            return SourceVerdict.NATIVE_DEPS
        return SourceVerdict.FULL_JS

    async def fetch_manifest(self, ref: RepositoryReference) -> SourceManifestSnapshot | None:
        """Try each candidate branch in order; the first readable manifest wins."""
        raw_base = ref.raw_base
        if raw_base is None:
            log.info("source.unsupported_host", repo=ref.url)
            return None

        for branch in self._branches:
            url = f"{raw_base}/{branch}/{MANIFEST_FILE}"
            try:
                data = await self._fetcher.get_json(url)
            except ResolverError as exc:
                log.debug("source.branch_failed", repo=ref.url, branch=branch, error=str(exc))
                continue
            if not isinstance(data, dict):
                log.debug("source.branch_failed", repo=ref.url, branch=branch, error="not an object")
                continue
            return SourceManifestSnapshot.from_manifest(branch, data)

        log.info("source.exhausted", repo=ref.url, branches=list(self._branches))
        return None
