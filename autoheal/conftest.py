"""
================================================================================
Root Pytest Configuration
================================================================================

Registers the project-wide markers, tags tests by directory and keeps live
end-to-end scenarios out of the default run.

================================================================================
"""

import pytest

from autoheal.common import get_config


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for deployment"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )
    config.addinivalue_line(
        "markers", "P2: Medium priority tests - edge cases and minor features"
    )
    config.addinivalue_line(
        "markers", "P3: Low priority tests - extensive validation"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression test suite"
    )
    config.addinivalue_line(
        "markers", "e2e: Live scenarios against the demo shop (needs network)"
    )

    # Domain markers
    config.addinivalue_line(
        "markers", "ui: Tests that drive a real browser"
    )
    config.addinivalue_line(
        "markers", "unit: Tests with no browser or network"
    )
    config.addinivalue_line(
        "markers", "selfheal: Tests of the self-healing resolver"
    )


def pytest_collection_modifyitems(config, items):
    """
    Modify collected test items.

    Adds 'ui' / 'unit' markers by directory and skips 'e2e' tests unless
    e2e.enabled (E2E_ENABLED) is set.
    """
    run_e2e = get_config("e2e.enabled", False)
    skip_e2e = pytest.mark.skip(reason="e2e disabled (set E2E_ENABLED=true to run)")

    for item in items:
        path = str(item.fspath).replace("\\", "/")
        if "ui_testing" in path:
            item.add_marker(pytest.mark.ui)
        if "/unit/" in path:
            item.add_marker(pytest.mark.unit)

        if "e2e" in item.keywords and not run_e2e:
            item.add_marker(skip_e2e)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "autoheal - Self-Healing UI Test Harness",
        f"Base URL: {get_config('app.base_url', '')}",
        f"Browser: {get_config('browser.type', 'chromium')} "
        f"(headless={get_config('browser.headless', True)})",
        "=" * 60,
        "",
    ]
