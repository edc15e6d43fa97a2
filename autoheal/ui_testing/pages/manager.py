"""
================================================================================
Page Object Manager
================================================================================

Maps page names used in scenario steps ("saucedemo products") to page
object classes. Names are parsed into the closed PageName enum at the step
boundary; unknown names fail fast with UnsupportedPageError.

================================================================================
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional, Type, Union

from playwright.async_api import Page

from autoheal.ui_testing.framework.page_base import BasePage
from autoheal.ui_testing.framework.resolver import SelectorResolver

from .cart_page import CartPage
from .checkout_page import CheckoutPage
from .login_page import LoginPage
from .products_page import ProductsPage
from .sauce_demo_page import SauceDemoPage


class UnsupportedPageError(ValueError):
    """Raised when a step names a page that has no page object."""
    pass


class PageName(str, Enum):
    """Pages addressable from scenario steps."""

    SAUCEDEMO = "saucedemo"
    SAUCEDEMO_LOGIN = "saucedemo login"
    SAUCEDEMO_PRODUCTS = "saucedemo products"
    SAUCEDEMO_CART = "saucedemo cart"
    SAUCEDEMO_CHECKOUT = "saucedemo checkout"

    @classmethod
    def parse(cls, name: Union[str, "PageName"]) -> "PageName":
        if isinstance(name, cls):
            return name
        normalized = " ".join(str(name).lower().split())
        try:
            return cls(normalized)
        except ValueError:
            raise UnsupportedPageError(f"Page {name} is not supported") from None


PAGE_CLASSES: Dict[PageName, Type[BasePage]] = {
    PageName.SAUCEDEMO: SauceDemoPage,
    PageName.SAUCEDEMO_LOGIN: LoginPage,
    PageName.SAUCEDEMO_PRODUCTS: ProductsPage,
    PageName.SAUCEDEMO_CART: CartPage,
    PageName.SAUCEDEMO_CHECKOUT: CheckoutPage,
}


class PageObjectManager:
    """
    Creates page objects for one scenario's Playwright page.

    Instances are created on first use and reused for the rest of the
    scenario.

    Usage:
        >>> pages = PageObjectManager(page)
        >>> products = pages.get_page("saucedemo products")
        >>> await products.add_product_to_cart("Sauce Labs Backpack")
    """

    def __init__(
        self,
        page: Page,
        base_url: str = "",
        resolver: Optional[SelectorResolver] = None,
    ):
        self.page = page
        self.base_url = base_url
        self.resolver = resolver
        self._pages: Dict[PageName, BasePage] = {}

    def get_page(self, name: Union[str, PageName]) -> BasePage:
        page_name = PageName.parse(name)
        if page_name not in self._pages:
            page_class = PAGE_CLASSES[page_name]
            self._pages[page_name] = page_class(self.page, self.base_url, self.resolver)
        return self._pages[page_name]

    @property
    def login(self) -> LoginPage:
        return self.get_page(PageName.SAUCEDEMO_LOGIN)

    @property
    def products(self) -> ProductsPage:
        return self.get_page(PageName.SAUCEDEMO_PRODUCTS)

    @property
    def cart(self) -> CartPage:
        return self.get_page(PageName.SAUCEDEMO_CART)

    @property
    def checkout(self) -> CheckoutPage:
        return self.get_page(PageName.SAUCEDEMO_CHECKOUT)

    @property
    def sauce_demo(self) -> SauceDemoPage:
        return self.get_page(PageName.SAUCEDEMO)


__all__ = [
    "PageName",
    "PageObjectManager",
    "UnsupportedPageError",
    "PAGE_CLASSES",
]
