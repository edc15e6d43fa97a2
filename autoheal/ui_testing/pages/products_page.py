"""
================================================================================
SauceDemo Products Page Object (Async / Playwright)
================================================================================

Inventory listing: add/remove products, cart badge, sorting and the
product name/price lists used by sorting checks.

================================================================================
"""

from __future__ import annotations

from typing import List

import allure
from loguru import logger

from autoheal.ui_testing.framework.page_base import BasePage


class ProductsPage(BasePage):
    """SauceDemo inventory page object (async)."""

    URL_PATH = "/inventory.html"
    PAGE_TITLE = "Products"

    TITLE = ".title"
    INVENTORY_ITEM = ".inventory_item"
    PRODUCT_NAME = ".inventory_item_name"
    PRODUCT_PRICE = ".inventory_item_price"
    ADD_TO_CART_BUTTON = "button[data-test^='add-to-cart']"
    REMOVE_BUTTON = "button[data-test^='remove']"
    CART_BADGE = ".shopping_cart_badge"
    CART_ICON = ".shopping_cart_link"
    SORT_CONTAINER = "[data-test='product-sort-container'], [data-test='product_sort_container']"

    def _product_card(self, product_name: str):
        return self.page.locator(self.INVENTORY_ITEM).filter(has_text=product_name).first

    async def get_title(self) -> str:
        return await self.get_text(self.TITLE)

    @allure.step("Add '{product_name}' to cart")
    async def add_product_to_cart(self, product_name: str) -> None:
        """Click 'Add to cart' inside the card of the named product."""
        await self._product_card(product_name).locator(self.ADD_TO_CART_BUTTON).click()
        logger.debug(f"Added to cart: {product_name}")

    @allure.step("Remove '{product_name}' from cart")
    async def remove_product_from_cart(self, product_name: str) -> None:
        """Click 'Remove' inside the card of the named product."""
        await self._product_card(product_name).locator(self.REMOVE_BUTTON).click()
        logger.debug(f"Removed from cart: {product_name}")

    async def get_cart_badge_count(self) -> str:
        """Cart badge text, or "0" when the badge is absent."""
        if not await self.is_element_visible(self.CART_BADGE, timeout=1000):
            return "0"
        return await self.get_text(self.CART_BADGE)

    @allure.step("Open cart")
    async def go_to_cart(self) -> None:
        await self.click_element(self.CART_ICON)

    @allure.step("Sort products by '{sort_option}'")
    async def sort_products_by(self, sort_option: str) -> None:
        await self.select_option_by_label(self.SORT_CONTAINER, sort_option)

    async def get_all_product_names(self) -> List[str]:
        return await self.get_all_texts(self.PRODUCT_NAME)

    async def get_all_product_prices(self) -> List[float]:
        """Prices as numbers, in display order ("$7.99" -> 7.99)."""
        return [float(price.lstrip("$")) for price in await self.get_all_texts(self.PRODUCT_PRICE)]

    @allure.step("Open first product")
    async def open_first_product(self) -> str:
        """Click the first product's name and return it."""
        names = await self.get_all_product_names()
        if not names:
            raise AssertionError("No products found on the page")
        await self.page.locator(self.PRODUCT_NAME).first.click()
        return names[0]
