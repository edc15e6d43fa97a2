"""Fixtures for browser-free tests."""

import pytest

from autoheal.common import ConfigLoader
from autoheal.ui_testing.framework.resolver import ResolveOptions, SelectorResolver

from .fakes import FakePage


@pytest.fixture
def fake_page() -> FakePage:
    return FakePage()


@pytest.fixture
def resolver() -> SelectorResolver:
    """Resolver with a 10ms per-attempt timeout and no deadline."""
    return SelectorResolver(ResolveOptions(timeout_ms=10))


@pytest.fixture
def reset_config():
    """Forget the active config loader before and after the test."""
    ConfigLoader.reset()
    yield
    ConfigLoader.reset()
