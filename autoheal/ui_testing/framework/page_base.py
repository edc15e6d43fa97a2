"""
================================================================================
Base Page Object
================================================================================

Foundation class for Page Object Model implementation.

Provides:
    - Navigation relative to the application base URL
    - Direct selector interactions with visibility waits
    - Self-healing interactions by human-readable description
    - Screenshot and failure capture

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union

import allure
from loguru import logger
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page

from autoheal.common import ensure_directory, get_config

from .actions import ActionKind
from .resolver import ResolutionResult, ResolveOptions, SelectorResolver


class BasePage:
    """
    Base class for all page objects.

    Usage:
        class LoginPage(BasePage):
            URL_PATH = "/"
            USERNAME = "[data-test='username']"

            async def login(self, username: str, password: str):
                await self.fill_text(self.USERNAME, username)
                ...
    """

    # Override in subclasses
    URL_PATH: str = "/"
    PAGE_TITLE: str = ""

    def __init__(
        self,
        page: Page,
        base_url: str = "",
        resolver: Optional[SelectorResolver] = None,
    ):
        """
        Initialize page object.

        Args:
            page: Playwright Page object
            base_url: Base URL for the application (defaults to `app.base_url`)
            resolver: Self-healing resolver (defaults to one built from config)
        """
        self.page = page
        if not base_url:
            base_url = get_config("app.base_url", "https://www.saucedemo.com")
        self.base_url = base_url.rstrip("/")
        self.resolver = resolver or SelectorResolver(ResolveOptions.from_config())

    @property
    def url(self) -> str:
        """Get full page URL."""
        return f"{self.base_url}{self.URL_PATH}"

    async def open(self) -> "BasePage":
        """Navigate to this page and wait for it to settle."""
        await self.navigate()
        return self

    async def navigate(self, wait_for: str = "networkidle") -> None:
        """
        Navigate to this page.

        Args:
            wait_for: Wait condition - 'load', 'domcontentloaded', 'networkidle'
        """
        await self.navigate_to(self.URL_PATH, wait_for=wait_for)

    async def navigate_to(self, path: str, wait_for: str = "networkidle") -> None:
        """Navigate to a path below the base URL."""
        full_url = f"{self.base_url}{path}"
        with allure.step(f"Navigate to {path}"):
            await self.page.goto(full_url, wait_until=wait_for)
            logger.debug(f"Navigated to: {full_url}")

    async def wait_for_page_load(self, state: str = "networkidle", timeout: int = 15000) -> None:
        """Wait for the page to reach a stable load state."""
        await self.page.wait_for_load_state(state, timeout=timeout)

    # =========================================================================
    # Direct Selector Interactions
    # =========================================================================

    async def click_element(self, selector: str, timeout: int = 5000) -> None:
        """Wait for an element to be visible, then click it."""
        await self.page.wait_for_selector(selector, state="visible", timeout=timeout)
        await self.page.click(selector, timeout=timeout)

    async def fill_text(self, selector: str, text: str, timeout: int = 5000) -> None:
        """Wait for an input to be visible, then fill it."""
        await self.page.wait_for_selector(selector, state="visible", timeout=timeout)
        await self.page.fill(selector, text, timeout=timeout)

    async def get_text(self, selector: str, timeout: int = 5000) -> str:
        """Text content of the first visible match."""
        await self.page.wait_for_selector(selector, state="visible", timeout=timeout)
        return (await self.page.locator(selector).first.text_content() or "").strip()

    async def get_all_texts(self, selector: str) -> List[str]:
        """Stripped text content of every match, in document order."""
        texts = await self.page.locator(selector).all_text_contents()
        return [text.strip() for text in texts]

    async def is_element_visible(self, selector: str, timeout: int = 5000) -> bool:
        """Check if an element becomes visible within the timeout."""
        try:
            await self.page.locator(selector).first.wait_for(state="visible", timeout=timeout)
            return True
        except PlaywrightError:
            return False

    async def select_option_by_label(self, selector: str, label: str, timeout: int = 5000) -> None:
        """Select a dropdown option by its visible label."""
        await self.page.wait_for_selector(selector, state="visible", timeout=timeout)
        await self.page.select_option(selector, label=label, timeout=timeout)

    # =========================================================================
    # Self-Healing Interactions
    # =========================================================================

    async def heal(
        self,
        target: str,
        action: Union[str, ActionKind] = ActionKind.CLICK,
        payload: Optional[str] = None,
    ) -> ResolutionResult:
        """
        Act on an element by description instead of selector.

        Args:
            target: Human-readable description ("Checkout", "First Name")
            action: Action to perform once found
            payload: Value for fill/select/etc.
        """
        with allure.step(f"Self-heal {ActionKind.parse(action).value}: {target}"):
            return await self.resolver.resolve_and_act(target, action, self.page, payload)

    # =========================================================================
    # Screenshot and Debug Utilities
    # =========================================================================

    async def screenshot(
        self,
        name: str,
        full_page: bool = False,
        attach_to_allure: bool = True,
    ) -> Path:
        """
        Take screenshot and optionally attach to Allure.

        Args:
            name: Screenshot name (without extension)
            full_page: Capture full scrollable page
            attach_to_allure: Whether to attach to Allure report

        Returns:
            Path to saved screenshot
        """
        screenshot_dir = Path(ensure_directory(
            str(Path(get_config("artifacts.dir", "test-results")) / "screenshots")
        ))
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = screenshot_dir / f"{name}_{timestamp}.png"

        await self.page.screenshot(path=str(filepath), full_page=full_page)

        if attach_to_allure:
            allure.attach.file(
                str(filepath),
                name=name,
                attachment_type=allure.attachment_type.PNG,
            )

        logger.debug(f"Screenshot saved: {filepath}")
        return filepath


__all__ = [
    "BasePage",
]
