"""Shared fixtures for archsentinel tests."""

import pytest

from tests.archsentinel.fakes import FakeServices


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture
def services() -> FakeServices:
    return FakeServices()
