"""
Repository-level pytest configuration.

Keeps local runs predictable: logging is initialized once from
config/config.yaml and artifact directories are created up front. Every
value can still be overridden through environment variables
(e.g. BROWSER_HEADLESS=false, E2E_ENABLED=true).
"""

from __future__ import annotations

from pathlib import Path
from typing import Generator

import pytest

from autoheal.common import ensure_directory, get_config, init_logger


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


@pytest.fixture(scope="session", autouse=True)
def _session_setup() -> Generator[None, None, None]:
    """Initialize logging and the artifacts directory for the session."""
    init_logger()
    ensure_directory(get_config("artifacts.dir", "test-results"))
    yield
