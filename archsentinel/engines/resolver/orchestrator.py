"""ResolutionOrchestrator — per-dependency pipeline + bounded fan-out + aggregation."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Iterable

import structlog

from archsentinel.core.config import Settings
from archsentinel.engines.resolver.directory import DirectoryLookup
from archsentinel.engines.resolver.fetcher import BoundedFetcher
from archsentinel.engines.resolver.models import (
    ResolutionResult,
    ResolutionStatus,
    ResolvedDependency,
    SourceVerdict,
)
from archsentinel.engines.resolver.registry import RepositoryResolver
from archsentinel.engines.resolver.source import SourceAnalyzer

log = structlog.get_logger("archsentinel.engine")

ProgressCallback = Callable[[int, int], None]


class ResultAggregator:
    """Single point through which concurrent tasks record their verdicts."""

    def __init__(self, total: int, on_progress: ProgressCallback | None = None) -> None:
        self._result = ResolutionResult(total=total)
        self._lock = asyncio.Lock()
        self._completed = 0
        self._on_progress = on_progress

    @property
    def completed(self) -> int:
        return self._completed

    async def record(self, dep: ResolvedDependency) -> None:
        async with self._lock:
            self._result.names_for(dep.status).append(dep.name)
            self._result.dependencies.append(dep)
            self._completed += 1
            completed = self._completed

        if self._on_progress is not None:
            try:
                self._on_progress(completed, self._result.total)
            except Exception:
                log.warning("orchestrator.progress_callback_failed", exc_info=True)

    def result(self) -> ResolutionResult:
        return self._result


class ResolutionOrchestrator:
    """Drive Directory → Registry → Source for every dependency name.

    Each name is resolved independently; a failure in one pipeline ends as
    ``NOT_FOUND`` for that name and never affects the others.
    """

    def __init__(self, fetcher: BoundedFetcher, settings: Settings) -> None:
        self._settings = settings
        self._directory = DirectoryLookup(fetcher, settings.directory_url)
        self._registry = RepositoryResolver(fetcher, settings.registry_url)
        self._source = SourceAnalyzer(fetcher, settings.branches, settings.native_marker)

    async def resolve(
        self,
        names: Iterable[str],
        on_progress: ProgressCallback | None = None,
    ) -> ResolutionResult:
        """Resolve every name with at most ``settings.concurrency`` in flight.

        Duplicate names are resolved once. Waits for all tasks; nothing is
        cancelled once started.
        """
        unique = list(dict.fromkeys(names))
        aggregator = ResultAggregator(len(unique), on_progress)
        if not unique:
            return aggregator.result()

        sem = asyncio.Semaphore(self._settings.concurrency)

        async def _run_one(name: str) -> None:
            async with sem:
                try:
                    dep = await self.resolve_one(name)
                except Exception as exc:
                    log.error(
                        "orchestrator.task_failed", library=name, error=str(exc), exc_info=True
                    )
                    dep = ResolvedDependency(
                        name=name,
                        status=ResolutionStatus.NOT_FOUND,
                        detail=f"{type(exc).__name__}: {exc}",
                    )
            await aggregator.record(dep)

        await asyncio.gather(*(_run_one(name) for name in unique))

        result = aggregator.result()
        log.info(
            "orchestrator.done",
            total=result.total,
            supported=result.supported,
            not_supported=result.not_supported,
            not_found=result.not_found,
        )
        return result

    async def resolve_one(self, name: str) -> ResolvedDependency:
        """Walk the pipeline for one name until a terminal verdict."""
        verdict = await self._directory.lookup(name)
        if verdict is not None:
            status = (
                ResolutionStatus.SUPPORTED if verdict.supported else ResolutionStatus.NOT_SUPPORTED
            )
            return ResolvedDependency(name=name, status=status, source="directory")

        ref = await self._registry.resolve(name)
        if ref is None:
            return ResolvedDependency(
                name=name, status=ResolutionStatus.NOT_FOUND, detail="no repository"
            )

        source_verdict = await self._source.analyze(ref)
        return ResolvedDependency(
            name=name,
            status=status_for_source(source_verdict),
            source="source",
            detail=ref.url,
        )


def status_for_source(verdict: SourceVerdict) -> ResolutionStatus:
    if verdict is SourceVerdict.FULL_JS:
        return ResolutionStatus.SUPPORTED
    if verdict is SourceVerdict.NATIVE_DEPS:
        return ResolutionStatus.NOT_SUPPORTED
    if verdict is SourceVerdict.NOT_FOUND:
        return ResolutionStatus.NOT_FOUND
    raise ValueError(f"unhandled source verdict: {verdict!r}")


async def resolve(
    names: Iterable[str],
    settings: Settings,
    on_progress: ProgressCallback | None = None,
) -> ResolutionResult:
    """Resolve *names* with a fetcher that lives for this call only."""
    async with BoundedFetcher(settings) as fetcher:
        return await ResolutionOrchestrator(fetcher, settings).resolve(names, on_progress)
