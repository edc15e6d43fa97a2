"""
================================================================================
SauceDemo Steps
================================================================================

Shop-specific steps that go through the SauceDemo page objects rather than
the self-healing resolver.

================================================================================
"""

from __future__ import annotations

from typing import List

import allure

from autoheal.ui_testing.pages.sauce_demo_page import CustomerInfo

from .context import ScenarioContext


@allure.step("When I login as '{username}'")
async def i_login_as(ctx: ScenarioContext, username: str, password: str) -> None:
    await ctx.pages.login.login(username, password)
    ctx.current_page = ctx.pages.products


@allure.step("When I click on the cart icon")
async def i_click_on_the_cart_icon(ctx: ScenarioContext) -> None:
    await ctx.pages.products.go_to_cart()
    ctx.current_page = ctx.pages.cart


@allure.step("When I click on '{action}' for '{product_name}'")
async def i_click_on_action_for_product(ctx: ScenarioContext, action: str, product_name: str) -> None:
    """Only 'Add to cart' and 'Remove' exist on a product card."""
    if action == "Add to cart":
        await ctx.pages.products.add_product_to_cart(product_name)
    elif action == "Remove":
        await ctx.pages.products.remove_product_from_cart(product_name)
    else:
        raise ValueError(f"Action {action} is not supported for {product_name}")


@allure.step("When I sort products by '{sort_option}'")
async def i_sort_products_by(ctx: ScenarioContext, sort_option: str) -> None:
    await ctx.pages.products.sort_products_by(sort_option)


@allure.step("When I click on the first product")
async def i_click_on_the_first_product(ctx: ScenarioContext) -> str:
    name = await ctx.pages.products.open_first_product()
    ctx.remember("opened_product", name)
    return name


@allure.step("When I complete checkout with default information")
async def i_complete_checkout_with_default_information(ctx: ScenarioContext) -> None:
    await ctx.pages.sauce_demo.complete_checkout(CustomerInfo())
    ctx.current_page = ctx.pages.checkout


@allure.step("When I complete checkout with '{first_name}', '{last_name}', and '{postal_code}'")
async def i_complete_checkout_with(
    ctx: ScenarioContext,
    first_name: str,
    last_name: str,
    postal_code: str,
) -> None:
    """Starts from the cart page."""
    await ctx.pages.cart.proceed_to_checkout()
    checkout = ctx.pages.checkout
    await checkout.fill_customer_info(first_name, last_name, postal_code)
    await checkout.continue_to_overview()
    await checkout.finish_purchase()
    ctx.current_page = checkout


@allure.step("Then I should see '{count}' in the cart badge")
async def i_should_see_count_in_cart_badge(ctx: ScenarioContext, count: str) -> None:
    badge = await ctx.pages.products.get_cart_badge_count()
    assert badge == count, f"Expected cart badge '{count}', got '{badge}'"


@allure.step("Then my cart should contain '{product_name}'")
async def my_cart_should_contain(ctx: ScenarioContext, product_name: str) -> None:
    names = await ctx.pages.cart.get_item_names()
    assert product_name in names, f"'{product_name}' not in cart: {names}"


@allure.step("Then my cart should have {count} item(s)")
async def my_cart_should_have_items(ctx: ScenarioContext, count: int) -> None:
    names = await ctx.pages.cart.get_item_names()
    assert len(names) == count, f"Expected {count} cart item(s), found {len(names)}: {names}"


@allure.step("Then products should be sorted by price in ascending order")
async def products_should_be_sorted_by_price_ascending(ctx: ScenarioContext) -> List[float]:
    prices = await ctx.pages.products.get_all_product_prices()
    assert prices == sorted(prices), f"Products are not sorted by price: {prices}"
    return prices


@allure.step("Then the first product should be cheaper than the last product")
async def first_product_should_be_cheaper_than_last(ctx: ScenarioContext) -> None:
    prices = await ctx.pages.products.get_all_product_prices()
    assert prices, "No products found on the page"
    assert prices[0] <= prices[-1], (
        f"First product price (${prices[0]}) is not cheaper than last product price (${prices[-1]})"
    )


__all__ = [
    "i_login_as",
    "i_click_on_the_cart_icon",
    "i_click_on_action_for_product",
    "i_sort_products_by",
    "i_click_on_the_first_product",
    "i_complete_checkout_with_default_information",
    "i_complete_checkout_with",
    "i_should_see_count_in_cart_badge",
    "my_cart_should_contain",
    "my_cart_should_have_items",
    "products_should_be_sorted_by_price_ascending",
    "first_product_should_be_cheaper_than_last",
]
