"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based UI automation framework with self-healing element resolution.

Components:
    - actions: Closed set of supported interactions
    - candidates: Ordered selector templates per action
    - page_handle: Playwright adapter returning result values
    - resolver: Self-healing ordered search (first success wins)
    - page_base: Base page object
    - browser_manager: Browser lifecycle management

Author: Automation Team
License: MIT
================================================================================
"""

from .actions import ActionKind, ActionRequest, InvalidActionRequest
from .browser_manager import BrowserManager
from .candidates import CandidateSelector, SelectorDialect, generate_candidates
from .page_base import BasePage
from .page_handle import AttemptOutcome, HandleResult, PageHandle, PlaywrightPageHandle
from .resolver import (
    Attempt,
    ResolutionExhausted,
    ResolutionResult,
    ResolveOptions,
    SelectorResolver,
    resolve_and_act,
)

__all__ = [
    "ActionKind",
    "ActionRequest",
    "InvalidActionRequest",
    "BrowserManager",
    "CandidateSelector",
    "SelectorDialect",
    "generate_candidates",
    "BasePage",
    "AttemptOutcome",
    "HandleResult",
    "PageHandle",
    "PlaywrightPageHandle",
    "Attempt",
    "ResolutionExhausted",
    "ResolutionResult",
    "ResolveOptions",
    "SelectorResolver",
    "resolve_and_act",
]
