"""
================================================================================
Verification Steps
================================================================================

"Then ..." steps. Text, title and URL checks use Playwright's `expect`;
element and field checks go through the self-healing resolver with the
read-only VERIFY_VISIBLE / VERIFY_VALUE actions.

================================================================================
"""

from __future__ import annotations

import re
import time
from pathlib import Path
from typing import Optional, Sequence

import allure
from playwright.async_api import expect

from autoheal.common import ensure_directory, get_config
from autoheal.ui_testing.framework.actions import ActionKind
from autoheal.ui_testing.framework.resolver import ResolutionResult

from .context import ScenarioContext


RESULT_SELECTORS: Sequence[str] = (
    ".search-result",
    "[data-testid*='result']",
    ".result",
    "[class*='result']",
)

ITEM_SELECTORS: Sequence[str] = (
    ".item",
    "[class*='item']",
    ".product",
    ".result",
    "li",
)


# =============================================================================
# Text, title and URL
# =============================================================================

@allure.step("Then I should see '{text}'")
async def i_should_see(ctx: ScenarioContext, text: str, timeout: int = 30000) -> None:
    await expect(ctx.page.get_by_text(text).first).to_be_visible(timeout=timeout)


@allure.step("Then I should not see '{text}'")
async def i_should_not_see(ctx: ScenarioContext, text: str, timeout: int = 10000) -> None:
    await expect(ctx.page.get_by_text(text).first).not_to_be_visible(timeout=timeout)


@allure.step("Then the page title should be '{expected_title}'")
async def the_page_title_should_be(ctx: ScenarioContext, expected_title: str) -> None:
    await expect(ctx.page).to_have_title(expected_title)


@allure.step("Then the page title should contain '{title_text}'")
async def the_page_title_should_contain(ctx: ScenarioContext, title_text: str) -> None:
    await expect(ctx.page).to_have_title(re.compile(re.escape(title_text), re.IGNORECASE))


@allure.step("Then the URL should be '{expected_url}'")
async def the_url_should_be(ctx: ScenarioContext, expected_url: str) -> None:
    await expect(ctx.page).to_have_url(expected_url)


@allure.step("Then the URL should contain '{url_part}'")
async def the_url_should_contain(ctx: ScenarioContext, url_part: str) -> None:
    await expect(ctx.page).to_have_url(re.compile(re.escape(url_part)))


# =============================================================================
# Elements and fields
# =============================================================================

@allure.step("Then the '{element_text}' element should be visible")
async def the_element_should_be_visible(ctx: ScenarioContext, element_text: str) -> ResolutionResult:
    return await ctx.resolve(element_text, ActionKind.VERIFY_VISIBLE)


@allure.step("Then the '{element_text}' element should not be visible")
async def the_element_should_not_be_visible(ctx: ScenarioContext, element_text: str) -> None:
    await expect(ctx.page.get_by_text(element_text).first).not_to_be_visible(timeout=10000)


@allure.step("Then the '{button_text}' button should be enabled")
async def the_button_should_be_enabled(ctx: ScenarioContext, button_text: str) -> None:
    await expect(ctx.page.locator("button").filter(has_text=button_text).first).to_be_enabled()


@allure.step("Then the '{button_text}' button should be disabled")
async def the_button_should_be_disabled(ctx: ScenarioContext, button_text: str) -> None:
    await expect(ctx.page.locator("button").filter(has_text=button_text).first).to_be_disabled()


@allure.step("Then the '{field_name}' field should contain '{expected_value}'")
async def the_field_should_contain(
    ctx: ScenarioContext,
    field_name: str,
    expected_value: str,
) -> ResolutionResult:
    return await ctx.resolve(field_name, ActionKind.VERIFY_VALUE, expected_value)


@allure.step("Then the '{field_name}' field should be empty")
async def the_field_should_be_empty(ctx: ScenarioContext, field_name: str) -> ResolutionResult:
    return await ctx.resolve(field_name, ActionKind.VERIFY_VALUE, "")


@allure.step("Then the '{element_text}' element should have '{attribute}' attribute with value '{value}'")
async def the_element_should_have_attribute(
    ctx: ScenarioContext,
    element_text: str,
    attribute: str,
    value: str,
) -> None:
    await expect(ctx.page.get_by_text(element_text).first).to_have_attribute(attribute, value)


# =============================================================================
# Counts
# =============================================================================

async def _first_selector_with_count(
    ctx: ScenarioContext,
    selectors: Sequence[str],
    minimum: int,
    exact: bool,
) -> Optional[str]:
    for selector in selectors:
        count = await ctx.page.locator(selector).count()
        if (count == minimum) if exact else (count >= minimum):
            return selector
    return None


@allure.step("Then I should see at least {expected_count} search results")
async def i_should_see_at_least_results(ctx: ScenarioContext, expected_count: int) -> str:
    selector = await _first_selector_with_count(ctx, RESULT_SELECTORS, expected_count, exact=False)
    assert selector is not None, f"Expected at least {expected_count} results, but found fewer"
    return selector


@allure.step("Then I should see exactly {expected_count} items")
async def i_should_see_exactly_items(ctx: ScenarioContext, expected_count: int) -> str:
    selector = await _first_selector_with_count(ctx, ITEM_SELECTORS, expected_count, exact=True)
    assert selector is not None, f"Expected exactly {expected_count} items"
    return selector


# =============================================================================
# Timing and artifacts
# =============================================================================

@allure.step("Then the page should load within {seconds} seconds")
async def the_page_should_load_within(ctx: ScenarioContext, seconds: float) -> float:
    started = time.monotonic()
    await ctx.page.wait_for_load_state("networkidle")
    load_time = time.monotonic() - started
    assert load_time <= seconds, f"Page took {load_time:.2f}s to load (limit {seconds}s)"
    return load_time


@allure.step("Then I take a screenshot named '{screenshot_name}'")
async def i_take_a_screenshot_named(ctx: ScenarioContext, screenshot_name: str) -> Path:
    screenshot_dir = Path(ensure_directory(
        str(Path(get_config("artifacts.dir", "test-results")) / "screenshots")
    ))
    path = screenshot_dir / f"{screenshot_name}_{int(time.time() * 1000)}.png"
    await ctx.page.screenshot(path=str(path), full_page=True)
    allure.attach.file(str(path), name=screenshot_name, attachment_type=allure.attachment_type.PNG)
    return path


__all__ = [
    "i_should_see",
    "i_should_not_see",
    "the_page_title_should_be",
    "the_page_title_should_contain",
    "the_url_should_be",
    "the_url_should_contain",
    "the_element_should_be_visible",
    "the_element_should_not_be_visible",
    "the_button_should_be_enabled",
    "the_button_should_be_disabled",
    "the_field_should_contain",
    "the_field_should_be_empty",
    "the_element_should_have_attribute",
    "i_should_see_at_least_results",
    "i_should_see_exactly_items",
    "the_page_should_load_within",
    "i_take_a_screenshot_named",
]
