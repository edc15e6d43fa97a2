"""
================================================================================
Common Steps
================================================================================

Generic scenario steps for any web page. Each function corresponds to one
Gherkin phrase (shown in its Allure step title) and receives the scenario's
ScenarioContext explicitly.

Element-addressing steps go through the self-healing resolver, so a step
can name an element by its label or text instead of a selector.

================================================================================
"""

from __future__ import annotations

import allure
from loguru import logger

from autoheal.ui_testing.framework.actions import ActionKind
from autoheal.ui_testing.framework.resolver import ResolutionResult

from .context import ScenarioContext


# Target description used for the search box, which is found by role
SEARCH_BOX = "search"


# =============================================================================
# Navigation
# =============================================================================

@allure.step("Given I am on the '{page_name}' page")
async def i_am_on_the_page(ctx: ScenarioContext, page_name: str) -> None:
    """Open a known page object and make it the current page."""
    page_object = ctx.pages.get_page(page_name)
    await page_object.open()
    ctx.current_page = page_object


@allure.step("Given I navigate to '{url}'")
async def i_navigate_to(ctx: ScenarioContext, url: str) -> None:
    await ctx.page.goto(url)
    await ctx.page.wait_for_load_state("networkidle")
    logger.debug(f"Navigated to: {url}")


# =============================================================================
# Pointer actions
# =============================================================================

@allure.step("When I click on '{element_text}'")
async def i_click_on(ctx: ScenarioContext, element_text: str) -> ResolutionResult:
    return await ctx.resolve(element_text, ActionKind.CLICK)


@allure.step("When I click the '{link_text}' link")
async def i_click_the_link(ctx: ScenarioContext, link_text: str) -> None:
    await ctx.page.locator("a").filter(has_text=link_text).first.click()


@allure.step("When I double click on '{element_text}'")
async def i_double_click_on(ctx: ScenarioContext, element_text: str) -> ResolutionResult:
    return await ctx.resolve(element_text, ActionKind.DOUBLE_CLICK)


@allure.step("When I right click on '{element_text}'")
async def i_right_click_on(ctx: ScenarioContext, element_text: str) -> ResolutionResult:
    return await ctx.resolve(element_text, ActionKind.RIGHT_CLICK)


@allure.step("When I hover on '{element_text}'")
async def i_hover_on(ctx: ScenarioContext, element_text: str) -> ResolutionResult:
    return await ctx.resolve(element_text, ActionKind.HOVER)


@allure.step("When I drag '{source_text}' and drop on '{target_text}'")
async def i_drag_and_drop(ctx: ScenarioContext, source_text: str, target_text: str) -> ResolutionResult:
    return await ctx.resolve(source_text, ActionKind.DRAG_TO, target_text)


# =============================================================================
# Keyboard and form input
# =============================================================================

@allure.step("When I enter '{text}' in the '{field_name}' field")
async def i_enter_text_in_field(ctx: ScenarioContext, text: str, field_name: str) -> ResolutionResult:
    return await ctx.resolve(field_name, ActionKind.FILL, text)


@allure.step("When I type '{text}'")
async def i_type(ctx: ScenarioContext, text: str) -> None:
    await ctx.page.keyboard.type(text)


@allure.step("When I press '{key}'")
async def i_press(ctx: ScenarioContext, key: str) -> None:
    await ctx.page.keyboard.press(key)


@allure.step("When I select '{option_text}' from '{dropdown_name}' dropdown")
async def i_select_from_dropdown(
    ctx: ScenarioContext,
    option_text: str,
    dropdown_name: str,
) -> ResolutionResult:
    return await ctx.resolve(dropdown_name, ActionKind.SELECT, option_text)


@allure.step("When I upload file '{file_path}' to '{field_name}'")
async def i_upload_file(ctx: ScenarioContext, file_path: str, field_name: str) -> ResolutionResult:
    return await ctx.resolve(field_name, ActionKind.UPLOAD, file_path)


@allure.step("When I search for '{search_term}'")
async def i_search_for(ctx: ScenarioContext, search_term: str) -> None:
    """Type into the page's search box and submit with Enter."""
    await ctx.resolve(SEARCH_BOX, ActionKind.SEARCH, search_term)


# =============================================================================
# Waits and scrolling
# =============================================================================

@allure.step("When I wait for {seconds} seconds")
async def i_wait_for_seconds(ctx: ScenarioContext, seconds: float) -> None:
    await ctx.page.wait_for_timeout(seconds * 1000)


@allure.step("When I wait for '{element_text}' to be visible")
async def i_wait_for_visible(ctx: ScenarioContext, element_text: str, timeout: int = 30000) -> None:
    await ctx.page.get_by_text(element_text).first.wait_for(state="visible", timeout=timeout)


@allure.step("When I wait for page to load")
async def i_wait_for_page_to_load(ctx: ScenarioContext) -> None:
    await ctx.page.wait_for_load_state("networkidle")


@allure.step("When I scroll down")
async def i_scroll_down(ctx: ScenarioContext) -> None:
    await ctx.page.keyboard.press("PageDown")


@allure.step("When I scroll up")
async def i_scroll_up(ctx: ScenarioContext) -> None:
    await ctx.page.keyboard.press("PageUp")


@allure.step("When I scroll to '{element_text}'")
async def i_scroll_to(ctx: ScenarioContext, element_text: str) -> None:
    await ctx.page.get_by_text(element_text).first.scroll_into_view_if_needed()


__all__ = [
    "i_am_on_the_page",
    "i_navigate_to",
    "i_click_on",
    "i_click_the_link",
    "i_double_click_on",
    "i_right_click_on",
    "i_hover_on",
    "i_drag_and_drop",
    "i_enter_text_in_field",
    "i_type",
    "i_press",
    "i_select_from_dropdown",
    "i_upload_file",
    "i_search_for",
    "i_wait_for_seconds",
    "i_wait_for_visible",
    "i_wait_for_page_to_load",
    "i_scroll_down",
    "i_scroll_up",
    "i_scroll_to",
]
