"""Resolution engine — classify dependencies for New Architecture support."""

from archsentinel.engines.resolver.fetcher import BoundedFetcher
from archsentinel.engines.resolver.models import (
    ResolutionResult,
    ResolutionStatus,
    ResolvedDependency,
    SourceVerdict,
)
from archsentinel.engines.resolver.orchestrator import ResolutionOrchestrator, resolve

__all__ = [
    "BoundedFetcher",
    "ResolutionOrchestrator",
    "ResolutionResult",
    "ResolutionStatus",
    "ResolvedDependency",
    "SourceVerdict",
    "resolve",
]
