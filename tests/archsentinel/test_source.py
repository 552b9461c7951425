"""Tests for the source analyzer's branch fallback and native-dependency check."""

from __future__ import annotations

import httpx
import pytest

from archsentinel.engines.resolver.models import (
    RepositoryReference,
    SourceManifestSnapshot,
    SourceVerdict,
)
from archsentinel.engines.resolver.source import SourceAnalyzer
from tests.archsentinel.fakes import RAW_HOST, open_fetcher

REF = RepositoryReference("https", "github.com", "acme", "lib")


async def _analyze(services, ref=REF, branches=("master", "main")) -> SourceVerdict:
    async with open_fetcher(services.handler) as fetcher:
        return await SourceAnalyzer(fetcher, branches, "react-native").analyze(ref)


def _raw_paths(services) -> list[str]:
    return [r.url.path for r in services.requests if r.url.host == RAW_HOST]


class TestSnapshot:
    def test_unions_runtime_and_dev_dependencies(self):
        snap = SourceManifestSnapshot.from_manifest(
            "main",
            {
                "dependencies": {"a": "1"},
                "devDependencies": {"b": "2"},
                "peerDependencies": {"c": "3"},
            },
        )
        assert snap.dependency_names == frozenset({"a", "b"})

    def test_tolerates_missing_or_odd_sections(self):
        snap = SourceManifestSnapshot.from_manifest("main", {"dependencies": ["not", "a", "dict"]})
        assert snap.dependency_names == frozenset()

    def test_native_dependencies_match_substring(self):
        snap = SourceManifestSnapshot.from_manifest(
            "main",
            {"dependencies": {"@react-native-community/netinfo": "*", "lodash": "*"}},
        )
        assert snap.native_dependencies("react-native") == ["@react-native-community/netinfo"]


class TestSourceAnalyzer:
    @pytest.mark.anyio
    async def test_full_js(self, services):
        services.add_manifest("acme/lib", "master", {"dependencies": {"lodash": "^4.0.0"}})
        assert await _analyze(services) is SourceVerdict.FULL_JS

    @pytest.mark.anyio
    async def test_native_in_dependencies(self, services):
        services.add_manifest("acme/lib", "master", {"dependencies": {"react-native-camera": "*"}})
        assert await _analyze(services) is SourceVerdict.NATIVE_DEPS

    @pytest.mark.anyio
    async def test_native_in_dev_dependencies(self, services):
        services.add_manifest(
            "acme/lib",
            "master",
            {"dependencies": {"lodash": "*"}, "devDependencies": {"react-native": "0.73.0"}},
        )
        assert await _analyze(services) is SourceVerdict.NATIVE_DEPS

    @pytest.mark.anyio
    async def test_empty_manifest_is_full_js(self, services):
        services.add_manifest("acme/lib", "master", {"name": "lib"})
        assert await _analyze(services) is SourceVerdict.FULL_JS

    @pytest.mark.anyio
    async def test_primary_branch_tried_first(self, services):
        services.add_manifest("acme/lib", "master", {"dependencies": {"lodash": "*"}})
        services.add_manifest("acme/lib", "main", {"dependencies": {"react-native-x": "*"}})
        assert await _analyze(services) is SourceVerdict.FULL_JS
        assert _raw_paths(services) == ["/acme/lib/master/package.json"]

    @pytest.mark.anyio
    async def test_falls_back_to_secondary_branch(self, services):
        services.add_manifest("acme/lib", "main", {"dependencies": {"react-native-x": "*"}})
        assert await _analyze(services) is SourceVerdict.NATIVE_DEPS
        assert _raw_paths(services) == [
            "/acme/lib/master/package.json",
            "/acme/lib/main/package.json",
        ]

    @pytest.mark.anyio
    async def test_invalid_json_on_primary_advances(self, services):
        services.raw["/acme/lib/master/package.json"] = httpx.Response(200, text="<!doctype html>")
        services.add_manifest("acme/lib", "main", {"dependencies": {"lodash": "*"}})
        assert await _analyze(services) is SourceVerdict.FULL_JS

    @pytest.mark.anyio
    async def test_non_object_manifest_advances(self, services):
        services.add_manifest("acme/lib", "master", ["not", "an", "object"])
        services.add_manifest("acme/lib", "main", {"dependencies": {"react-native-y": "*"}})
        assert await _analyze(services) is SourceVerdict.NATIVE_DEPS

    @pytest.mark.anyio
    async def test_network_error_on_primary_advances(self, services):
        services.raw["/acme/lib/master/package.json"] = httpx.ConnectError("reset")
        services.add_manifest("acme/lib", "main", {"dependencies": {}})
        assert await _analyze(services) is SourceVerdict.FULL_JS

    @pytest.mark.anyio
    async def test_all_branches_fail(self, services):
        assert await _analyze(services) is SourceVerdict.NOT_FOUND
        assert len(_raw_paths(services)) == 2

    @pytest.mark.anyio
    async def test_custom_branch_order(self, services):
        services.add_manifest("acme/lib", "develop", {"dependencies": {}})
        verdict = await _analyze(services, branches=("develop", "main"))
        assert verdict is SourceVerdict.FULL_JS
        assert _raw_paths(services) == ["/acme/lib/develop/package.json"]

    @pytest.mark.anyio
    async def test_non_github_repository_is_not_found(self, services):
        ref = RepositoryReference("https", "gitlab.com", "acme", "lib")
        assert await _analyze(services, ref=ref) is SourceVerdict.NOT_FOUND
        assert services.requests == []
