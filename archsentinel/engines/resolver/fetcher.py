"""Bounded async JSON fetcher — per-call timeout and retry of transient failures."""

from __future__ import annotations

import asyncio
from typing import Any

import httpx
import structlog

from archsentinel.core.config import Settings
from archsentinel.exceptions import FetchTimeoutError, NetworkError, ParseError, ResolverError

log = structlog.get_logger("archsentinel.engine")

_USER_AGENT = "archsentinel/0.1"


class BoundedFetcher:
    """Thin async wrapper around ``httpx.AsyncClient`` shared by every lookup.

    Every attempt is raced against ``settings.timeout``. Timeouts, transport
    errors, 5xx and 429 responses are retried up to ``settings.max_attempts``
    attempts in total; other non-success responses fail at once.
    """

    def __init__(
        self,
        settings: Settings,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            headers={"Accept": "application/json", "User-Agent": _USER_AGENT},
            timeout=settings.timeout,
            follow_redirects=True,
        )

    # ── lifecycle ──────────────────────────────────────────────────────────

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> BoundedFetcher:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    # ── public ─────────────────────────────────────────────────────────────

    async def get_json(self, url: str, params: dict[str, Any] | None = None) -> Any:
        """GET *url* and return the decoded JSON body.

        Raises :class:`FetchTimeoutError` or :class:`NetworkError` once the
        attempts are exhausted, :class:`ParseError` if the body is not JSON.
        """
        response = await self._request_with_retry(url, params)
        try:
            return response.json()
        except ValueError as exc:
            raise ParseError(f"invalid JSON from {url}: {exc}") from exc

    # ── internal ───────────────────────────────────────────────────────────

    async def _request_with_retry(
        self,
        url: str,
        params: dict[str, Any] | None = None,
    ) -> httpx.Response:
        max_attempts = self._settings.max_attempts
        last_exc: ResolverError | None = None
        for attempt in range(max_attempts):
            try:
                resp = await asyncio.wait_for(
                    self._client.get(url, params=params),
                    timeout=self._settings.timeout,
                )
            except (asyncio.TimeoutError, httpx.TimeoutException):
                log.warning(
                    "fetcher.timeout",
                    url=url,
                    attempt=attempt + 1,
                    max_attempts=max_attempts,
                )
                last_exc = FetchTimeoutError(url, self._settings.timeout)
            except httpx.HTTPError as exc:
                log.warning(
                    "fetcher.transport_error",
                    url=url,
                    error=str(exc),
                    attempt=attempt + 1,
                    max_attempts=max_attempts,
                )
                last_exc = NetworkError(url, f"{type(exc).__name__}: {exc}")
            else:
                if 200 <= resp.status_code < 300:
                    return resp
                reason = f"HTTP {resp.status_code}"
                if not self._is_transient(resp.status_code):
                    raise NetworkError(url, reason, status_code=resp.status_code)
                log.warning(
                    "fetcher.server_error",
                    url=url,
                    status=resp.status_code,
                    attempt=attempt + 1,
                    max_attempts=max_attempts,
                )
                last_exc = NetworkError(url, reason, status_code=resp.status_code)

            if attempt < max_attempts - 1 and self._settings.retry_backoff > 0:
                await asyncio.sleep(self._settings.retry_backoff * (2**attempt))

        raise last_exc  # type: ignore[misc]

    @staticmethod
    def _is_transient(status_code: int) -> bool:
        return status_code >= 500 or status_code == 429
