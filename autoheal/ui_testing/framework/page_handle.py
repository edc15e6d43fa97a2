"""
================================================================================
Page Handle
================================================================================

The only capability the resolver needs from a browser: locate one element by
selector within a timeout, and perform an action on it. Playwright errors are
converted into HandleResult values here so the resolver never relies on
exceptions for its fallback search.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Optional, Protocol, runtime_checkable

from loguru import logger
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator, Page, expect
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from .actions import ActionKind


class AttemptOutcome(str, Enum):
    """Outcome of one locate or act step."""

    SUCCESS = "success"
    NOT_FOUND = "not_found"
    TIMEOUT = "timeout"
    ACTION_FAILED = "action_failed"


@dataclass(frozen=True)
class HandleResult:
    """
    Result of a page-handle call.

    Attributes:
        outcome: What happened
        element: The located element (locate only, on success)
        detail: Short error text for diagnostics
    """
    outcome: AttemptOutcome
    element: Any = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.outcome is AttemptOutcome.SUCCESS


@runtime_checkable
class PageHandle(Protocol):
    """Minimal page capability consumed by the resolver."""

    async def locate(self, selector: str, timeout_ms: int, state: str = "visible") -> HandleResult:
        ...

    async def perform(
        self,
        element: Any,
        action: ActionKind,
        payload: Optional[str],
        timeout_ms: int,
    ) -> HandleResult:
        ...

    async def drag(self, source: Any, destination: Any, timeout_ms: int) -> HandleResult:
        ...


def _short(error: BaseException, limit: int = 120) -> str:
    text = str(error).strip().splitlines()[0] if str(error).strip() else type(error).__name__
    return text[:limit]


class PlaywrightPageHandle:
    """
    PageHandle backed by a Playwright Page.

    Locating narrows every selector to its first match in document order and
    waits for it to reach the requested state ("visible" or "attached").
    """

    def __init__(self, page: Page):
        self.page = page
        self._performers: Dict[ActionKind, Callable[[Locator, Optional[str], int], Awaitable[None]]] = {
            ActionKind.CLICK: self._click,
            ActionKind.DOUBLE_CLICK: self._double_click,
            ActionKind.RIGHT_CLICK: self._right_click,
            ActionKind.HOVER: self._hover,
            ActionKind.FILL: self._fill,
            ActionKind.SELECT: self._select,
            ActionKind.SEARCH: self._search,
            ActionKind.UPLOAD: self._upload,
            ActionKind.VERIFY_VISIBLE: self._verify_visible,
            ActionKind.VERIFY_VALUE: self._verify_value,
        }

    async def locate(self, selector: str, timeout_ms: int, state: str = "visible") -> HandleResult:
        locator = self.page.locator(selector).first
        try:
            await locator.wait_for(state=state, timeout=timeout_ms)
        except PlaywrightTimeoutError as e:
            return HandleResult(AttemptOutcome.TIMEOUT, detail=_short(e))
        except PlaywrightError as e:
            # Malformed selectors (e.g. "#two words") land here
            return HandleResult(AttemptOutcome.NOT_FOUND, detail=_short(e))
        return HandleResult(AttemptOutcome.SUCCESS, element=locator)

    async def perform(
        self,
        element: Locator,
        action: ActionKind,
        payload: Optional[str],
        timeout_ms: int,
    ) -> HandleResult:
        performer = self._performers.get(action)
        if performer is None:
            raise ValueError(f"Action '{action.value}' cannot be performed on a single element")
        try:
            await performer(element, payload, timeout_ms)
        except (PlaywrightError, AssertionError) as e:
            return HandleResult(AttemptOutcome.ACTION_FAILED, detail=_short(e))
        return HandleResult(AttemptOutcome.SUCCESS, element=element)

    async def drag(self, source: Locator, destination: Locator, timeout_ms: int) -> HandleResult:
        try:
            await source.drag_to(destination, timeout=timeout_ms)
        except PlaywrightError as e:
            return HandleResult(AttemptOutcome.ACTION_FAILED, detail=_short(e))
        return HandleResult(AttemptOutcome.SUCCESS, element=destination)

    # =========================================================================
    # Performers
    # =========================================================================

    async def _click(self, element: Locator, payload: Optional[str], timeout_ms: int) -> None:
        await element.click(timeout=timeout_ms)

    async def _double_click(self, element: Locator, payload: Optional[str], timeout_ms: int) -> None:
        await element.dblclick(timeout=timeout_ms)

    async def _right_click(self, element: Locator, payload: Optional[str], timeout_ms: int) -> None:
        await element.click(button="right", timeout=timeout_ms)

    async def _hover(self, element: Locator, payload: Optional[str], timeout_ms: int) -> None:
        await element.hover(timeout=timeout_ms)

    async def _fill(self, element: Locator, payload: Optional[str], timeout_ms: int) -> None:
        await element.fill(payload or "", timeout=timeout_ms)

    async def _select(self, element: Locator, payload: Optional[str], timeout_ms: int) -> None:
        await element.select_option(label=payload, timeout=timeout_ms)

    async def _search(self, element: Locator, payload: Optional[str], timeout_ms: int) -> None:
        await element.fill(payload or "", timeout=timeout_ms)
        try:
            await element.press("Enter", timeout=timeout_ms)
        except PlaywrightError:
            # A box that did not take the search is emptied again
            await self._clear(element, timeout_ms)
            raise

    async def _clear(self, element: Locator, timeout_ms: int) -> None:
        try:
            await element.fill("", timeout=timeout_ms)
        except PlaywrightError as e:
            logger.debug(f"Could not clear field after failed search: {_short(e)}")

    async def _upload(self, element: Locator, payload: Optional[str], timeout_ms: int) -> None:
        await element.set_input_files(payload, timeout=timeout_ms)

    async def _verify_visible(self, element: Locator, payload: Optional[str], timeout_ms: int) -> None:
        # locate() already waited for visibility
        return None

    async def _verify_value(self, element: Locator, payload: Optional[str], timeout_ms: int) -> None:
        await expect(element).to_have_value(payload or "", timeout=timeout_ms)


def as_page_handle(page: Any) -> PageHandle:
    """Wrap a Playwright Page unless it already is a PageHandle."""
    if isinstance(page, PageHandle):
        return page
    return PlaywrightPageHandle(page)


__all__ = [
    "AttemptOutcome",
    "HandleResult",
    "PageHandle",
    "PlaywrightPageHandle",
    "as_page_handle",
]
