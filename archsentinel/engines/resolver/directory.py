"""React Native Directory lookup."""

from __future__ import annotations

import structlog
from pydantic import ValidationError

from archsentinel.engines.resolver.fetcher import BoundedFetcher
from archsentinel.engines.resolver.models import (
    DirectoryRecord,
    DirectoryResponse,
    DirectoryVerdict,
)
from archsentinel.exceptions import ParseError, ResolverError

log = structlog.get_logger("archsentinel.engine")


class DirectoryLookup:
    """Query the compatibility directory for a single dependency."""

    def __init__(self, fetcher: BoundedFetcher, base_url: str) -> None:
        self._fetcher = fetcher
        self._base_url = base_url

    async def lookup(self, name: str) -> DirectoryVerdict | None:
        """Return the directory verdict for *name*, or None if it has no usable entry.

        The first library record wins. A record carrying none of the three
        compatibility flags counts as a miss, as do fetch and parse failures.
        """
        try:
            payload = await self._fetcher.get_json(self._base_url, params={"search": name})
            record = _first_record(payload)
        except ResolverError as exc:
            log.info("directory.lookup_failed", library=name, error=str(exc))
            return None

        if record is None:
            log.debug("directory.miss", library=name)
            return None

        if not record.has_signal:
            log.debug("directory.no_signal", library=name)
            return None

        log.debug("directory.hit", library=name, supported=record.supported)
        return DirectoryVerdict(supported=record.supported)


def _first_record(payload: object) -> DirectoryRecord | None:
    """Validate the envelope and the first record only; later records are never read."""
    if not isinstance(payload, dict):
        raise ParseError(f"expected a JSON object, got {type(payload).__name__}")
    try:
        response = DirectoryResponse.model_validate(payload)
        if not response.libraries:
            return None
        return DirectoryRecord.model_validate(response.libraries[0])
    except ValidationError as exc:
        raise ParseError(f"unexpected directory payload: {exc.error_count()} error(s)") from exc
