"""
================================================================================
SauceDemo Composite Page Object (Async / Playwright)
================================================================================

Groups the individual SauceDemo pages for end-to-end flows that span
several of them (login -> add product -> checkout).

================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import allure
from playwright.async_api import Page

from autoheal.ui_testing.framework.page_base import BasePage
from autoheal.ui_testing.framework.resolver import SelectorResolver

from .cart_page import CartPage
from .checkout_page import CheckoutPage
from .login_page import LoginPage
from .products_page import ProductsPage


@dataclass(frozen=True)
class CustomerInfo:
    """Checkout form data."""
    first_name: str = "John"
    last_name: str = "Doe"
    postal_code: str = "12345"


class SauceDemoPage(BasePage):
    """Entry point combining the login, products, cart and checkout pages."""

    URL_PATH = "/"
    PAGE_TITLE = "Swag Labs"

    def __init__(
        self,
        page: Page,
        base_url: str = "",
        resolver: Optional[SelectorResolver] = None,
    ):
        super().__init__(page, base_url, resolver)
        self.login = LoginPage(page, self.base_url, self.resolver)
        self.products = ProductsPage(page, self.base_url, self.resolver)
        self.cart = CartPage(page, self.base_url, self.resolver)
        self.checkout = CheckoutPage(page, self.base_url, self.resolver)

    async def login_to_sauce_demo(self, username: str, password: str) -> None:
        await self.login.login(username, password)

    async def add_product_to_cart(self, product_name: str) -> None:
        await self.products.add_product_to_cart(product_name)

    @allure.step("Complete checkout")
    async def complete_checkout(self, customer: CustomerInfo = CustomerInfo()) -> None:
        """Cart -> customer info -> overview -> finish."""
        await self.products.go_to_cart()
        await self.cart.proceed_to_checkout()
        await self.checkout.fill_customer_info(
            customer.first_name,
            customer.last_name,
            customer.postal_code,
        )
        await self.checkout.continue_to_overview()
        await self.checkout.finish_purchase()
