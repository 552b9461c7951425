"""Tests for settings and display options."""

from __future__ import annotations

import os
from dataclasses import replace
from unittest.mock import patch

import pytest

from archsentinel.core.config import DEFAULT_BRANCHES, DisplayOptions, Settings


class TestSettings:
    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            s = Settings.from_env()
        assert s.directory_url == "https://reactnative.directory/api/libraries"
        assert s.registry_url == "https://registry.npmjs.org"
        assert s.timeout == 10.0
        assert s.max_attempts == 3
        assert s.retry_backoff == 0.0
        assert s.branches == DEFAULT_BRANCHES == ("master", "main")
        assert s.native_marker == "react-native"

    def test_env_overrides(self):
        env = {
            "ARCHSENTINEL_TIMEOUT": "2.5",
            "ARCHSENTINEL_MAX_ATTEMPTS": "5",
            "ARCHSENTINEL_CONCURRENCY": "4",
            "ARCHSENTINEL_BRANCHES": "main, develop ,",
            "ARCHSENTINEL_RETRY_BACKOFF": "0.25",
        }
        with patch.dict(os.environ, env, clear=True):
            s = Settings.from_env()
        assert s.timeout == 2.5
        assert s.max_attempts == 5
        assert s.concurrency == 4
        assert s.branches == ("main", "develop")
        assert s.retry_backoff == 0.25

    @pytest.mark.parametrize(
        "field,value",
        [
            ("timeout", 0),
            ("max_attempts", 0),
            ("retry_backoff", -1.0),
            ("concurrency", 0),
            ("branches", ()),
            ("native_marker", ""),
        ],
    )
    def test_rejects_invalid_values(self, field, value):
        with pytest.raises(ValueError):
            replace(Settings(), **{field: value})

    def test_non_numeric_env_value(self):
        with patch.dict(os.environ, {"ARCHSENTINEL_TIMEOUT": "soon"}, clear=True):
            with pytest.raises(ValueError):
                Settings.from_env()


class TestDisplayOptions:
    def test_show_all_when_nothing_selected(self):
        assert DisplayOptions().show_all
        assert DisplayOptions(group=True).show_all

    def test_any_flag_narrows(self):
        assert not DisplayOptions(show_not_found=True).show_all
