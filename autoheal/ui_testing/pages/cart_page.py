"""
================================================================================
SauceDemo Cart Page Object (Async / Playwright)
================================================================================
"""

from __future__ import annotations

from typing import List

import allure

from autoheal.ui_testing.framework.page_base import BasePage


class CartPage(BasePage):
    """SauceDemo shopping cart page object (async)."""

    URL_PATH = "/cart.html"
    PAGE_TITLE = "Your Cart"

    TITLE = ".title"
    CART_ITEM = ".cart_item"
    ITEM_NAME = ".inventory_item_name"
    ITEM_PRICE = ".inventory_item_price"
    REMOVE_BUTTON = "button[data-test^='remove']"
    CONTINUE_SHOPPING_BUTTON = "[data-test='continue-shopping']"
    CHECKOUT_BUTTON = "[data-test='checkout']"

    async def get_title(self) -> str:
        return await self.get_text(self.TITLE)

    async def get_item_names(self) -> List[str]:
        return await self.get_all_texts(self.ITEM_NAME)

    async def get_item_prices(self) -> List[str]:
        return await self.get_all_texts(self.ITEM_PRICE)

    @allure.step("Remove '{item_name}' from cart")
    async def remove_item(self, item_name: str) -> None:
        row = self.page.locator(self.CART_ITEM).filter(has_text=item_name).first
        await row.locator(self.REMOVE_BUTTON).click()

    @allure.step("Continue shopping")
    async def continue_shopping(self) -> None:
        await self.click_element(self.CONTINUE_SHOPPING_BUTTON)

    @allure.step("Proceed to checkout")
    async def proceed_to_checkout(self) -> None:
        await self.click_element(self.CHECKOUT_BUTTON)

    async def is_empty(self) -> bool:
        return await self.page.locator(self.CART_ITEM).count() == 0
