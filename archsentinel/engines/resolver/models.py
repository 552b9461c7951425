"""Data models for the resolution engine."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from archsentinel.core.github import RAW_CONTENT_HOST, is_github_host, split_repository_url


class ResolutionStatus(enum.Enum):
    """Terminal verdict for one dependency."""

    SUPPORTED = "supported"
    NOT_SUPPORTED = "not_supported"
    NOT_FOUND = "not_found"


class SourceVerdict(enum.Enum):
    """Outcome of inspecting a dependency's own package.json."""

    FULL_JS = "full_js"
    NATIVE_DEPS = "native_deps"
    NOT_FOUND = "not_found"


# ── directory payloads ───────────────────────────────────────────────────


class GitHubInfo(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    new_architecture: bool | str | None = Field(default=None, alias="newArchitecture")


class DirectoryRecord(BaseModel):
    """One library entry from React Native Directory.

    Flags are treated as truthy values; non-boolean markers are kept as-is.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    expo_go: bool | str | None = Field(default=None, alias="expoGo")
    new_architecture: bool | str | None = Field(default=None, alias="newArchitecture")
    github: GitHubInfo | None = None

    @property
    def has_signal(self) -> bool:
        """True when at least one of the three compatibility fields is present."""
        return any(
            value is not None
            for value in (self.expo_go, self.new_architecture, self.github_new_architecture)
        )

    @property
    def supported(self) -> bool:
        return bool(self.expo_go or self.new_architecture or self.github_new_architecture)

    @property
    def github_new_architecture(self) -> bool | str | None:
        return self.github.new_architecture if self.github is not None else None


class DirectoryResponse(BaseModel):
    """Search envelope; records stay raw so only the first one is validated."""

    model_config = ConfigDict(extra="ignore")

    libraries: list[Any] = Field(default_factory=list)


@dataclass(frozen=True)
class DirectoryVerdict:
    """The directory had an entry for the dependency."""

    supported: bool


# ── repository / manifest ────────────────────────────────────────────────


@dataclass(frozen=True)
class RepositoryReference:
    """Normalized source repository address."""

    scheme: str
    host: str
    owner: str
    name: str

    @classmethod
    def parse(cls, raw_url: str) -> RepositoryReference | None:
        parts = split_repository_url(raw_url)
        if parts is None:
            return None
        host, owner, name = parts
        return cls(scheme="https", host=host, owner=owner, name=name)

    @property
    def url(self) -> str:
        return f"{self.scheme}://{self.host}/{self.owner}/{self.name}"

    @property
    def raw_base(self) -> str | None:
        """Raw-content base URL; only GitHub repositories have one."""
        if not is_github_host(self.host):
            return None
        return f"https://{RAW_CONTENT_HOST}/{self.owner}/{self.name}"

    def __str__(self) -> str:
        return self.url


@dataclass(frozen=True)
class SourceManifestSnapshot:
    """Declared dependency names from a fetched package.json."""

    branch: str
    dependency_names: frozenset[str]

    @classmethod
    def from_manifest(cls, branch: str, data: dict[str, Any]) -> SourceManifestSnapshot:
        names: set[str] = set()
        for key in ("dependencies", "devDependencies"):
            section = data.get(key)
            if isinstance(section, dict):
                names.update(str(n) for n in section)
        return cls(branch=branch, dependency_names=frozenset(names))

    def native_dependencies(self, marker: str) -> list[str]:
        return sorted(n for n in self.dependency_names if marker in n)


# ── results ──────────────────────────────────────────────────────────────

ResolutionSource = Literal["directory", "source"]


@dataclass
class ResolvedDependency:
    """Verdict for one dependency plus where it came from."""

    name: str
    status: ResolutionStatus
    source: ResolutionSource | None = None
    detail: str | None = None


@dataclass
class ResolutionResult:
    """Aggregate of all verdicts for one run.

    ``total == supported + not_supported + not_found`` and each name appears in
    exactly one of the three name lists.
    """

    total: int = 0
    supported_names: list[str] = field(default_factory=list)
    not_supported_names: list[str] = field(default_factory=list)
    not_found_names: list[str] = field(default_factory=list)
    dependencies: list[ResolvedDependency] = field(default_factory=list)

    @property
    def supported(self) -> int:
        return len(self.supported_names)

    @property
    def not_supported(self) -> int:
        return len(self.not_supported_names)

    @property
    def not_found(self) -> int:
        return len(self.not_found_names)

    def names_for(self, status: ResolutionStatus) -> list[str]:
        if status is ResolutionStatus.SUPPORTED:
            return self.supported_names
        if status is ResolutionStatus.NOT_SUPPORTED:
            return self.not_supported_names
        if status is ResolutionStatus.NOT_FOUND:
            return self.not_found_names
        raise ValueError(f"unknown status: {status!r}")

    def as_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "supported": self.supported,
            "notSupported": self.not_supported,
            "notFound": self.not_found,
            "supportedNames": list(self.supported_names),
            "notSupportedNames": list(self.not_supported_names),
            "notFoundNames": list(self.not_found_names),
        }
