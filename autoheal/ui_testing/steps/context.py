"""
================================================================================
Scenario Context
================================================================================

Per-scenario state passed explicitly to every step function: the Playwright
page, scenario variables, the page-object manager, the resolver and a log of
every self-healed interaction.

Nothing here is module-global; each scenario builds its own context and
drops it when the scenario ends.

================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

import allure
from loguru import logger

from autoheal.ui_testing.framework.actions import ActionKind
from autoheal.ui_testing.framework.page_base import BasePage
from autoheal.ui_testing.framework.resolver import (
    ResolutionExhausted,
    ResolutionResult,
    ResolveOptions,
    SelectorResolver,
)
from autoheal.ui_testing.pages.manager import PageObjectManager


def _default_resolver() -> SelectorResolver:
    return SelectorResolver(ResolveOptions.from_config())


@dataclass
class ScenarioContext:
    """
    State owned by one running scenario.

    Attributes:
        page: Playwright Page (or any PageHandle in unit tests)
        name: Scenario name, used for artifacts
        base_url: Application base URL for page objects
        resolver: Self-healing resolver used by description-based steps
        variables: Free-form values shared between steps
        current_page: Page object the scenario is currently on
        healing_log: Every successful self-healed interaction, in order
    """
    page: Any
    name: str = "scenario"
    base_url: str = ""
    resolver: SelectorResolver = field(default_factory=_default_resolver)
    variables: Dict[str, Any] = field(default_factory=dict)
    current_page: Optional[BasePage] = None
    healing_log: List[ResolutionResult] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.pages = PageObjectManager(self.page, self.base_url, self.resolver)

    async def resolve(
        self,
        target: str,
        action: Union[str, ActionKind],
        payload: Optional[str] = None,
    ) -> ResolutionResult:
        """
        Resolve a described element on this scenario's page and act on it.

        Raises:
            ResolutionExhausted: No candidate matched; diagnostics are
                attached to the Allure report before re-raising
        """
        try:
            result = await self.resolver.resolve_and_act(target, action, self.page, payload)
        except ResolutionExhausted as e:
            allure.attach(
                e.diagnostics(),
                name=f"Self-heal attempts: {target}",
                attachment_type=allure.attachment_type.TEXT,
            )
            raise
        self.healing_log.append(result)
        return result

    def fallbacks_used(self) -> List[ResolutionResult]:
        """Resolutions that needed more than the first candidate."""
        return [result for result in self.healing_log if result.used_fallback]

    def get_health_report(self) -> str:
        """
        Summarize interactions that only succeeded through a fallback.

        These are the maintenance candidates: the page no longer matches the
        most specific template for the description used in the scenario.
        """
        fallbacks = self.fallbacks_used()
        if not fallbacks:
            return "✅ All elements resolved with their first candidate. No maintenance needed."

        report_lines = [
            "⚠️ Self-Heal Health Report - Fallbacks Used:",
            "",
        ]
        for result in fallbacks:
            report_lines.extend([
                f"  [{result.target}] ({result.action.value})",
                f"    First candidate: {result.attempts[0].selector}",
                f"    Used #{len(result.attempts)}: {result.attempt.selector}",
                "",
            ])
        return "\n".join(report_lines)

    def remember(self, key: str, value: Any) -> None:
        """Store a value for later steps."""
        self.variables[key] = value
        logger.debug(f"Scenario variable set: {key}")

    def recall(self, key: str) -> Any:
        """Read a stored value; missing keys are a step error."""
        if key not in self.variables:
            raise KeyError(f"Scenario variable '{key}' was never set")
        return self.variables[key]


__all__ = [
    "ScenarioContext",
]
