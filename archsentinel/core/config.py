"""Runtime settings — read once from ``ARCHSENTINEL_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

DEFAULT_DIRECTORY_URL = "https://reactnative.directory/api/libraries"
DEFAULT_REGISTRY_URL = "https://registry.npmjs.org"
DEFAULT_BRANCHES = ("master", "main")
DEFAULT_NATIVE_MARKER = "react-native"


def _env_float(key: str, default: float) -> float:
    return float(os.environ.get(key, default))


def _env_int(key: str, default: int) -> int:
    return int(os.environ.get(key, default))


def _env_list(key: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.environ.get(key)
    if raw is None:
        return default
    return tuple(part.strip() for part in raw.split(",") if part.strip())


@dataclass(frozen=True)
class Settings:
    """Endpoints, retry policy and concurrency bound for one run."""

    directory_url: str = DEFAULT_DIRECTORY_URL
    registry_url: str = DEFAULT_REGISTRY_URL
    timeout: float = 10.0
    max_attempts: int = 3
    retry_backoff: float = 0.0  # seconds; delay = backoff * 2**attempt
    concurrency: int = 10
    branches: tuple[str, ...] = field(default=DEFAULT_BRANCHES)
    native_marker: str = DEFAULT_NATIVE_MARKER

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {self.max_attempts}")
        if self.retry_backoff < 0:
            raise ValueError(f"retry_backoff must be >= 0, got {self.retry_backoff}")
        if self.concurrency < 1:
            raise ValueError(f"concurrency must be >= 1, got {self.concurrency}")
        if not self.branches:
            raise ValueError("at least one candidate branch is required")
        if not self.native_marker:
            raise ValueError("native_marker must not be empty")

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            directory_url=os.environ.get("ARCHSENTINEL_DIRECTORY_URL", DEFAULT_DIRECTORY_URL),
            registry_url=os.environ.get("ARCHSENTINEL_REGISTRY_URL", DEFAULT_REGISTRY_URL),
            timeout=_env_float("ARCHSENTINEL_TIMEOUT", 10.0),
            max_attempts=_env_int("ARCHSENTINEL_MAX_ATTEMPTS", 3),
            retry_backoff=_env_float("ARCHSENTINEL_RETRY_BACKOFF", 0.0),
            concurrency=_env_int("ARCHSENTINEL_CONCURRENCY", 10),
            branches=_env_list("ARCHSENTINEL_BRANCHES", DEFAULT_BRANCHES),
            native_marker=os.environ.get("ARCHSENTINEL_NATIVE_MARKER", DEFAULT_NATIVE_MARKER),
        )


@dataclass(frozen=True)
class DisplayOptions:
    """Which statuses the report shows, and whether it groups them.

    When no status flag is set every status is shown.
    """

    show_supported: bool = False
    show_not_supported: bool = False
    show_not_found: bool = False
    group: bool = False

    @property
    def show_all(self) -> bool:
        return not (self.show_supported or self.show_not_supported or self.show_not_found)
