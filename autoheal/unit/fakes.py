"""
In-memory PageHandle for browser-free resolver tests.

FakePage implements the PageHandle protocol over a fixed map of
selector -> element name. Selectors that match nothing wait out the
attempt's timeout before reporting TIMEOUT, so timing behavior can be
asserted with small timeouts.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

from autoheal.ui_testing.framework.actions import ActionKind
from autoheal.ui_testing.framework.page_handle import AttemptOutcome, HandleResult


@dataclass
class FakePage:
    """
    Attributes:
        elements: selector -> element name it matches
        broken: element names whose actions fail after being located
        located: every (selector, timeout_ms, state) passed to locate, in order
        performed: every successful (action, element, payload), in order
        dragged: every successful (source, destination), in order
    """
    elements: Dict[str, str] = field(default_factory=dict)
    broken: Set[str] = field(default_factory=set)
    located: List[Tuple[str, int, str]] = field(default_factory=list)
    performed: List[Tuple[ActionKind, str, Optional[str]]] = field(default_factory=list)
    dragged: List[Tuple[str, str]] = field(default_factory=list)

    async def locate(self, selector: str, timeout_ms: int, state: str = "visible") -> HandleResult:
        self.located.append((selector, timeout_ms, state))
        element = self.elements.get(selector)
        if element is None:
            await asyncio.sleep(timeout_ms / 1000)
            return HandleResult(AttemptOutcome.TIMEOUT, detail=f"Timeout {timeout_ms}ms exceeded")
        return HandleResult(AttemptOutcome.SUCCESS, element=element)

    async def perform(
        self,
        element: str,
        action: ActionKind,
        payload: Optional[str],
        timeout_ms: int,
    ) -> HandleResult:
        if element in self.broken:
            return HandleResult(AttemptOutcome.ACTION_FAILED, detail=f"{element} rejected {action.value}")
        self.performed.append((action, element, payload))
        return HandleResult(AttemptOutcome.SUCCESS, element=element)

    async def drag(self, source: str, destination: str, timeout_ms: int) -> HandleResult:
        if source in self.broken or destination in self.broken:
            return HandleResult(AttemptOutcome.ACTION_FAILED, detail="drop rejected")
        self.dragged.append((source, destination))
        return HandleResult(AttemptOutcome.SUCCESS, element=destination)

    @property
    def located_selectors(self) -> List[str]:
        return [selector for selector, _, _ in self.located]
