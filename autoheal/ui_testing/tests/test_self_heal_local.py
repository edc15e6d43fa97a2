"""
================================================================================
Self-Healing Resolver UI Tests (Async / Playwright)
================================================================================

Runs the resolver and the description-based steps against small HTML
documents loaded with `page.set_content`, so no network is needed. Each
document deliberately omits the "obvious" selector so the resolver has to
fall back.

================================================================================
"""

import allure
import pytest
from playwright.async_api import Page, expect

from autoheal.ui_testing.framework.actions import ActionKind
from autoheal.ui_testing.framework.resolver import ResolutionExhausted, SelectorResolver
from autoheal.ui_testing.steps import common_steps, verification_steps
from autoheal.ui_testing.steps.context import ScenarioContext


def local_html(body: str, title: str = "autoheal") -> str:
    return f"<!DOCTYPE html><html><head><title>{title}</title></head><body>{body}</body></html>"


COUNTER_SCRIPT = """
<script>
  window.clicks = {};
  document.querySelectorAll('button').forEach(b => b.addEventListener('click', () => {
    window.clicks[b.dataset.name] = (window.clicks[b.dataset.name] || 0) + 1;
  }));
</script>
"""


@pytest.fixture
def local_scenario(page: Page, fast_resolver: SelectorResolver) -> ScenarioContext:
    return ScenarioContext(page=page, name="local", base_url="http://localhost", resolver=fast_resolver)


@allure.epic("UI Testing")
@allure.feature("Self-Healing Resolver")
class TestResolverOnRealDom:

    @allure.story("Fallback")
    @allure.title("Icon button found through its aria-label")
    @allure.severity(allure.severity_level.BLOCKER)
    @pytest.mark.P0
    @pytest.mark.selfheal
    @pytest.mark.asyncio
    async def test_aria_label_fallback_clicks_once(self, page: Page, fast_resolver: SelectorResolver):
        await page.set_content(local_html(
            '<button data-name="submit" aria-label="Submit Order">&#10003;</button>' + COUNTER_SCRIPT
        ))

        result = await fast_resolver.resolve_and_act("Submit Order", ActionKind.CLICK, page)

        assert result.candidate.selector == '[aria-label="Submit Order"]'
        assert result.attempts[0].selector == "text=Submit Order"
        assert await page.evaluate("window.clicks.submit") == 1

    @allure.story("Ambiguity")
    @allure.title("Two identical buttons: the first in document order is clicked")
    @allure.severity(allure.severity_level.CRITICAL)
    @pytest.mark.P1
    @pytest.mark.selfheal
    @pytest.mark.asyncio
    async def test_first_match_wins(self, page: Page, fast_resolver: SelectorResolver):
        await page.set_content(local_html(
            '<button data-name="first">Add to cart</button>'
            '<button data-name="second">Add to cart</button>' + COUNTER_SCRIPT
        ))

        result = await fast_resolver.resolve_and_act("Add to cart", ActionKind.CLICK, page)

        assert result.candidate.index == 0
        assert await page.evaluate("window.clicks") == {"first": 1}

    @allure.story("Exhaustion")
    @allure.title("Missing element raises without touching the page")
    @allure.severity(allure.severity_level.CRITICAL)
    @pytest.mark.P1
    @pytest.mark.selfheal
    @pytest.mark.asyncio
    async def test_exhaustion_has_no_side_effect(self, page: Page, fast_resolver: SelectorResolver):
        await page.set_content(local_html('<button data-name="other">Other</button>' + COUNTER_SCRIPT))

        with pytest.raises(ResolutionExhausted, match="Could not find element: Delete account"):
            await fast_resolver.resolve_and_act("Delete account", ActionKind.CLICK, page)

        assert await page.evaluate("window.clicks") == {}

    @allure.story("Fallback")
    @allure.title("Field without a name is filled through its placeholder")
    @allure.severity(allure.severity_level.NORMAL)
    @pytest.mark.P1
    @pytest.mark.asyncio
    async def test_fill_by_placeholder(self, page: Page, fast_resolver: SelectorResolver):
        await page.set_content(local_html('<input placeholder="Email address">'))

        result = await fast_resolver.resolve_and_act("Email", ActionKind.FILL, page, payload="qa@example.com")

        assert result.candidate.selector == 'input[placeholder*="Email"]'
        await expect(page.locator("input")).to_have_value("qa@example.com")

    @allure.story("Pointer")
    @allure.title("Double click and hover through the class fallback")
    @allure.severity(allure.severity_level.NORMAL)
    @pytest.mark.P2
    @pytest.mark.asyncio
    async def test_double_click_and_hover(self, page: Page, fast_resolver: SelectorResolver):
        await page.set_content(local_html(
            '<div class="tile-editor" style="width:120px;height:40px">tile</div>'
            "<script>"
            "const t = document.querySelector('.tile-editor');"
            "t.addEventListener('dblclick', () => t.dataset.edited = 'yes');"
            "t.addEventListener('mouseenter', () => t.dataset.hovered = 'yes');"
            "</script>"
        ))

        await fast_resolver.resolve_and_act("tile-editor", ActionKind.HOVER, page)
        await fast_resolver.resolve_and_act("tile-editor", ActionKind.DOUBLE_CLICK, page)

        tile = page.locator(".tile-editor")
        await expect(tile).to_have_attribute("data-hovered", "yes")
        await expect(tile).to_have_attribute("data-edited", "yes")


@allure.epic("UI Testing")
@allure.feature("Description-Based Steps")
class TestStepsOnRealDom:

    @allure.story("Forms")
    @allure.title("Fill, select and verify a form by field names")
    @allure.severity(allure.severity_level.CRITICAL)
    @pytest.mark.P1
    @pytest.mark.asyncio
    async def test_form_steps(self, page: Page, local_scenario: ScenarioContext):
        await page.set_content(local_html(
            '<label>Country <select name="country">'
            "<option>Norway</option><option>Sweden</option></select></label>"
            '<input name="city">'
            '<input name="notes">'
        ))

        await common_steps.i_enter_text_in_field(local_scenario, "Oslo", "city")
        await common_steps.i_select_from_dropdown(local_scenario, "Sweden", "country")
        await verification_steps.the_field_should_contain(local_scenario, "city", "Oslo")
        await verification_steps.the_field_should_be_empty(local_scenario, "notes")

        await expect(page.locator("select")).to_have_value("Sweden")
        assert "No maintenance needed" in local_scenario.get_health_report()

    @allure.story("Verification")
    @allure.title("Visible element check uses the title fallback")
    @allure.severity(allure.severity_level.NORMAL)
    @pytest.mark.P2
    @pytest.mark.asyncio
    async def test_element_visible_by_title(self, page: Page, local_scenario: ScenarioContext):
        await page.set_content(local_html('<span title="Company logo">ACME</span>'))

        result = await verification_steps.the_element_should_be_visible(local_scenario, "Company logo")

        assert result.candidate.selector == '[title="Company logo"]'
        assert local_scenario.fallbacks_used() == [result]

    @allure.story("Drag and drop")
    @allure.title("Card is dropped on a column found by id")
    @allure.severity(allure.severity_level.NORMAL)
    @pytest.mark.P2
    @pytest.mark.asyncio
    async def test_drag_and_drop(self, page: Page, local_scenario: ScenarioContext):
        await page.set_content(local_html(
            '<div id="card-a" draggable="true" style="width:80px;height:30px">Card A</div>'
            '<div id="done-column" style="width:200px;height:100px;border:1px solid"></div>'
            "<script>"
            "const col = document.getElementById('done-column');"
            "col.addEventListener('dragover', e => e.preventDefault());"
            "col.addEventListener('drop', e => { e.preventDefault(); col.dataset.dropped = 'yes'; });"
            "</script>"
        ))

        result = await common_steps.i_drag_and_drop(local_scenario, "Card A", "done-column")

        assert result.candidate.selector == "text=Card A"
        assert result.destination.selector == '[id*="done-column"]'
        await expect(page.locator("#done-column")).to_have_attribute("data-dropped", "yes")

    @allure.story("Verification")
    @allure.title("Title and text checks")
    @allure.severity(allure.severity_level.MINOR)
    @pytest.mark.P3
    @pytest.mark.asyncio
    async def test_text_and_title_checks(self, page: Page, local_scenario: ScenarioContext):
        await page.set_content(local_html("<h1>Order confirmed</h1><button disabled>Pay</button>", title="Receipt"))

        await verification_steps.the_page_title_should_be(local_scenario, "Receipt")
        await verification_steps.the_page_title_should_contain(local_scenario, "rece")
        await verification_steps.i_should_see(local_scenario, "Order confirmed", timeout=2000)
        await verification_steps.i_should_not_see(local_scenario, "Payment failed", timeout=1000)
        await verification_steps.the_button_should_be_disabled(local_scenario, "Pay")
