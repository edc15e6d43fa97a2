"""
================================================================================
SauceDemo Checkout Page Object (Async / Playwright)
================================================================================

Covers all three checkout steps: customer information, overview and the
completion screen.

================================================================================
"""

from __future__ import annotations

from typing import List

import allure

from autoheal.ui_testing.framework.page_base import BasePage


class CheckoutPage(BasePage):
    """SauceDemo checkout page object (async)."""

    URL_PATH = "/checkout-step-one.html"
    OVERVIEW_PATH = "/checkout-step-two.html"
    COMPLETE_PATH = "/checkout-complete.html"
    PAGE_TITLE = "Checkout: Your Information"

    # Step one
    FIRST_NAME_FIELD = "[data-test='firstName']"
    LAST_NAME_FIELD = "[data-test='lastName']"
    POSTAL_CODE_FIELD = "[data-test='postalCode']"
    CONTINUE_BUTTON = "[data-test='continue']"
    CANCEL_BUTTON = "[data-test='cancel']"
    ERROR_MESSAGE = "[data-test='error']"

    # Overview
    FINISH_BUTTON = "[data-test='finish']"
    ITEM_NAME = ".inventory_item_name"
    SUBTOTAL = ".summary_subtotal_label"
    TAX = ".summary_tax_label"
    TOTAL = ".summary_total_label"

    # Complete
    COMPLETE_HEADER = ".complete-header"
    COMPLETE_TEXT = ".complete-text"
    BACK_HOME_BUTTON = "[data-test='back-to-products']"

    @allure.step("Fill customer info ({first_name} {last_name}, {postal_code})")
    async def fill_customer_info(self, first_name: str, last_name: str, postal_code: str) -> None:
        await self.fill_text(self.FIRST_NAME_FIELD, first_name)
        await self.fill_text(self.LAST_NAME_FIELD, last_name)
        await self.fill_text(self.POSTAL_CODE_FIELD, postal_code)

    @allure.step("Continue to overview")
    async def continue_to_overview(self) -> None:
        await self.click_element(self.CONTINUE_BUTTON)

    @allure.step("Cancel checkout")
    async def cancel(self) -> None:
        await self.click_element(self.CANCEL_BUTTON)

    async def get_error_message(self) -> str:
        return await self.get_text(self.ERROR_MESSAGE)

    async def get_overview_item_names(self) -> List[str]:
        return await self.get_all_texts(self.ITEM_NAME)

    async def get_subtotal(self) -> str:
        return await self.get_text(self.SUBTOTAL)

    async def get_tax(self) -> str:
        return await self.get_text(self.TAX)

    async def get_total(self) -> str:
        return await self.get_text(self.TOTAL)

    @allure.step("Finish purchase")
    async def finish_purchase(self) -> None:
        await self.click_element(self.FINISH_BUTTON)

    async def get_completion_message(self) -> str:
        return await self.get_text(self.COMPLETE_HEADER)

    @allure.step("Back to products")
    async def back_to_home(self) -> None:
        await self.click_element(self.BACK_HOME_BUTTON)
