"""
================================================================================
SauceDemo Login Page Object (Async / Playwright)
================================================================================

Login form of the SauceDemo shop. Selectors use the site's stable
`data-test` attributes.

================================================================================
"""

from __future__ import annotations

import allure

from autoheal.ui_testing.framework.page_base import BasePage


class LoginPage(BasePage):
    """SauceDemo login page object (async)."""

    URL_PATH = "/"
    PAGE_TITLE = "Swag Labs"

    USERNAME_FIELD = "[data-test='username']"
    PASSWORD_FIELD = "[data-test='password']"
    LOGIN_BUTTON = "[data-test='login-button']"
    ERROR_MESSAGE = "[data-test='error']"

    @allure.step("Login (username={username})")
    async def login(self, username: str, password: str) -> None:
        """Fill credentials and submit the form."""
        await self.fill_text(self.USERNAME_FIELD, username)
        await self.fill_text(self.PASSWORD_FIELD, password)
        await self.click_element(self.LOGIN_BUTTON)

    async def get_error_message(self) -> str:
        """Text of the login error banner."""
        return await self.get_text(self.ERROR_MESSAGE)
