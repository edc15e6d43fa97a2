"""
================================================================================
Page Objects
================================================================================

Page Object Model implementations for the SauceDemo shop.

Each page class encapsulates:
    - Element selectors
    - Page-specific actions
    - Read-back helpers used by verification steps

Author: Automation Team
License: MIT
================================================================================
"""

from .cart_page import CartPage
from .checkout_page import CheckoutPage
from .login_page import LoginPage
from .manager import PageName, PageObjectManager, UnsupportedPageError
from .products_page import ProductsPage
from .sauce_demo_page import CustomerInfo, SauceDemoPage

__all__ = [
    "CartPage",
    "CheckoutPage",
    "LoginPage",
    "ProductsPage",
    "SauceDemoPage",
    "CustomerInfo",
    "PageName",
    "PageObjectManager",
    "UnsupportedPageError",
]
