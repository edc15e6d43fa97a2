"""
================================================================================
UI Testing Pytest Configuration
================================================================================

Fixtures for browser management, scenario contexts and page objects.

Key Features:
- One browser and one isolated context per test
- Tracing / video per config (trace kept for failed tests)
- Screenshot attached to Allure on failure
- Tests are skipped when no Playwright browser is installed

================================================================================
"""

from __future__ import annotations

from typing import AsyncGenerator

import allure
import pytest
from loguru import logger
from playwright.async_api import BrowserContext, Page
from playwright.async_api import Error as PlaywrightError

from autoheal.common import get_config
from autoheal.ui_testing.framework.browser_manager import BrowserManager
from autoheal.ui_testing.framework.resolver import ResolveOptions, SelectorResolver
from autoheal.ui_testing.pages.sauce_demo_page import SauceDemoPage
from autoheal.ui_testing.steps.context import ScenarioContext


def _failed(request: pytest.FixtureRequest) -> bool:
    report = getattr(request.node, "rep_call", None)
    return bool(report and report.failed)


# ================================================================================
# Browser Fixtures
# ================================================================================

@pytest.fixture
async def browser_manager() -> AsyncGenerator[BrowserManager, None]:
    """
    Browser manager built from the `browser` config section.

    Skips the test when the configured browser cannot be launched
    (run `playwright install chromium` first).
    """
    manager = BrowserManager.from_config()
    try:
        await manager.start()
    except PlaywrightError as e:
        pytest.skip(f"Browser not available: {str(e).splitlines()[0]}")
    yield manager
    await manager.close()


@pytest.fixture
async def context(
    browser_manager: BrowserManager,
    request: pytest.FixtureRequest,
) -> AsyncGenerator[BrowserContext, None]:
    """Isolated browser context; the trace is saved when the test failed."""
    context = await browser_manager.new_context()
    yield context
    trace_path = await browser_manager.finish_context(context, request.node.name, _failed(request))
    if trace_path:
        allure.attach.file(str(trace_path), name="trace", extension="zip")


@pytest.fixture
async def page(context: BrowserContext, request: pytest.FixtureRequest) -> AsyncGenerator[Page, None]:
    """Page for one test; a full-page screenshot is attached on failure."""
    page = await context.new_page()
    yield page
    if _failed(request):
        try:
            screenshot = await page.screenshot(full_page=True)
            allure.attach(
                screenshot,
                name="failure_screenshot",
                attachment_type=allure.attachment_type.PNG,
            )
        except PlaywrightError as e:
            logger.warning(f"Failed to capture screenshot on failure: {e}")


@pytest.fixture
def fast_resolver() -> SelectorResolver:
    """Resolver with short per-attempt timeouts for local-HTML tests."""
    return SelectorResolver(ResolveOptions(default_timeout_ms=500, slow_timeout_ms=800, deadline_ms=15000))


@pytest.fixture
async def scenario(page: Page, request: pytest.FixtureRequest) -> AsyncGenerator[ScenarioContext, None]:
    """Scenario context on the configured application."""
    ctx = ScenarioContext(
        page=page,
        name=request.node.name,
        base_url=get_config("app.base_url", ""),
    )
    yield ctx
    allure.attach(
        ctx.get_health_report(),
        name="self-heal health report",
        attachment_type=allure.attachment_type.TEXT,
    )


@pytest.fixture
def sauce_demo(scenario: ScenarioContext) -> SauceDemoPage:
    return scenario.pages.sauce_demo


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Expose each phase's report on the item (rep_setup, rep_call, rep_teardown)."""
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)


# ================================================================================
# Utility Fixtures
# ================================================================================

@pytest.fixture
def test_data():
    """
    Provides common test data for UI tests.
    """
    return {
        "valid_user": {
            "username": "standard_user",
            "password": "secret_sauce",
        },
        "locked_user": {
            "username": "locked_out_user",
            "password": "secret_sauce",
        },
        "invalid_user": {
            "username": "invalid_user",
            "password": "wrong_password",
        },
        "products": {
            "backpack": "Sauce Labs Backpack",
            "bike_light": "Sauce Labs Bike Light",
        },
        "customer": {
            "first_name": "John",
            "last_name": "Doe",
            "postal_code": "12345",
        },
    }

