"""
================================================================================
Self-Healing Selector Resolver
================================================================================

Turns a human-readable target description ("Submit Order", "username") into
one real interaction on a live page, tolerating variation in how the target
is marked up.

Resolution walks the fixed candidate list for the action kind strictly in
order. Each candidate gets exactly one timed attempt; the first candidate
that locates an element AND completes the action wins. Locating and acting
are one step: there is no find-then-verify phase, so when a selector matches
several elements the first in document order is acted upon.

Known limitation:
    First-match-wins is kept as-is. A candidate that matches two elements
    (two "Add to cart" buttons) silently acts on the first one rather than
    reporting the page as ambiguous.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, AsyncGenerator, AsyncIterator, List, Optional, Tuple, Union

from loguru import logger

from autoheal.common import get_config

from .actions import ActionKind, ActionRequest
from .candidates import TEMPLATE_SETS, CandidateSelector, generate_candidates, generate_drag_pairs
from .page_handle import AttemptOutcome, HandleResult, PageHandle, as_page_handle


DEFAULT_TIMEOUT_MS = 3000
SLOW_TIMEOUT_MS = 5000

# Actions that get the longer per-attempt timeout
SLOW_ACTIONS = frozenset({
    ActionKind.SEARCH,
    ActionKind.SELECT,
    ActionKind.UPLOAD,
    ActionKind.VERIFY_VISIBLE,
    ActionKind.VERIFY_VALUE,
})

# File inputs are commonly hidden behind a styled button
ATTACHED_ONLY_ACTIONS = frozenset({ActionKind.UPLOAD})


@dataclass(frozen=True)
class ResolveOptions:
    """
    Timing policy for one resolution call.

    Attributes:
        timeout_ms: Per-attempt timeout for every action (overrides the two below)
        default_timeout_ms: Per-attempt timeout for pointer, fill and drag actions
        slow_timeout_ms: Per-attempt timeout for search, select, upload and checks
        deadline_ms: Overall budget for the whole call; None means unbounded.
            A deadline shorter than `exhaustion_ms(action)` can end the search
            before the last candidate is tried.
    """
    timeout_ms: Optional[int] = None
    default_timeout_ms: int = DEFAULT_TIMEOUT_MS
    slow_timeout_ms: int = SLOW_TIMEOUT_MS
    deadline_ms: Optional[int] = None

    def timeout_for(self, action: ActionKind) -> int:
        if self.timeout_ms is not None:
            return self.timeout_ms
        return self.slow_timeout_ms if action in SLOW_ACTIONS else self.default_timeout_ms

    def exhaustion_ms(self, action: ActionKind) -> int:
        """Time needed to let every candidate (or drag pair) time out once."""
        count = len(TEMPLATE_SETS[action])
        if action is ActionKind.DRAG_TO:
            count *= count
        return count * self.timeout_for(action)

    @classmethod
    def from_config(cls) -> "ResolveOptions":
        """
        Build options from the `resolver` config section.

        `resolver.deadline_ms` is opt-in: unset, null or 0 leaves the search
        unbounded so every candidate gets its attempt.
        """
        deadline = get_config("resolver.deadline_ms")
        options = cls(
            default_timeout_ms=int(get_config("resolver.timeout_ms", DEFAULT_TIMEOUT_MS)),
            slow_timeout_ms=int(get_config("resolver.slow_timeout_ms", SLOW_TIMEOUT_MS)),
            deadline_ms=int(deadline) if deadline else None,
        )
        if options.deadline_ms is not None:
            short = [a.value for a in ActionKind if options.exhaustion_ms(a) > options.deadline_ms]
            if short:
                logger.warning(
                    f"resolver.deadline_ms={options.deadline_ms} can cut off candidates for: "
                    f"{', '.join(short)}"
                )
        return options


@dataclass(frozen=True)
class Attempt:
    """
    One timed try of one candidate (or one source/destination pair).

    Attributes:
        candidate: Candidate selector (drag source for DRAG_TO)
        action: Action that was attempted
        timeout_ms: Timeout the attempt ran with
        outcome: SUCCESS, NOT_FOUND, TIMEOUT or ACTION_FAILED
        destination: Drop target candidate (DRAG_TO only)
        detail: Error text from the browser, if any
        elapsed_ms: Wall time spent on the attempt
    """
    candidate: CandidateSelector
    action: ActionKind
    timeout_ms: int
    outcome: AttemptOutcome
    destination: Optional[CandidateSelector] = None
    detail: str = ""
    elapsed_ms: float = 0.0

    @property
    def succeeded(self) -> bool:
        return self.outcome is AttemptOutcome.SUCCESS

    @property
    def selector(self) -> str:
        if self.destination is None:
            return self.candidate.selector
        return f"{self.candidate.selector} -> {self.destination.selector}"

    def describe(self) -> str:
        suffix = f" ({self.detail})" if self.detail else ""
        return f"{self.selector}: {self.outcome.value}{suffix}"


@dataclass(frozen=True)
class ResolutionResult:
    """
    Successful resolution.

    The action has already been performed exactly once on the matched element.
    """
    target: str
    action: ActionKind
    attempt: Attempt
    attempts: Tuple[Attempt, ...] = field(default_factory=tuple)
    payload: Optional[str] = None

    @property
    def candidate(self) -> CandidateSelector:
        return self.attempt.candidate

    @property
    def destination(self) -> Optional[CandidateSelector]:
        return self.attempt.destination

    @property
    def used_fallback(self) -> bool:
        """True when anything other than the first template matched."""
        return len(self.attempts) > 1


class ResolutionExhausted(Exception):
    """
    Raised when no candidate resolved.

    The message names only the human-readable target; the attempted
    candidates are available on `attempts` for diagnostics.
    """

    def __init__(self, request: ActionRequest, attempts: List[Attempt]):
        self.target = request.target
        self.action = request.action
        self.payload = request.payload
        self.attempts: Tuple[Attempt, ...] = tuple(attempts)
        if request.action is ActionKind.DRAG_TO:
            message = f"Could not drag and drop from {request.target} to {request.payload}"
        else:
            message = f"Could not find element: {request.target}"
        super().__init__(message)

    @property
    def attempted_selectors(self) -> List[str]:
        return [attempt.selector for attempt in self.attempts]

    def diagnostics(self) -> str:
        """Multi-line listing of every attempt, for reports."""
        lines = [str(self)]
        lines.extend(f"  {i + 1}. {a.describe()}" for i, a in enumerate(self.attempts))
        return "\n".join(lines)


class _Budget:
    """Overall deadline shared by all attempts of one call."""

    def __init__(self, deadline_ms: Optional[int]):
        self._expires = None if deadline_ms is None else time.monotonic() + deadline_ms / 1000

    def clip(self, timeout_ms: int) -> int:
        if self._expires is None:
            return timeout_ms
        remaining = int((self._expires - time.monotonic()) * 1000)
        return max(0, min(timeout_ms, remaining))


async def first_success(
    attempts: AsyncIterator[Attempt],
    tried: List[Attempt],
) -> Optional[Attempt]:
    """
    Consume attempts in order and stop at the first success.

    Attempts after the winner are never started. Every consumed attempt is
    appended to `tried`.
    """
    async for attempt in attempts:
        tried.append(attempt)
        if attempt.succeeded:
            return attempt
    return None


class SelectorResolver:
    """
    Self-healing resolver.

    Holds only timing options; candidate lists and attempts live for a single
    call and the page handle is passed in on every call.

    Usage:
        >>> resolver = SelectorResolver()
        >>> await resolver.resolve_and_act("Submit Order", ActionKind.CLICK, page)
        >>> await resolver.resolve_and_act("username", "fill", page, payload="standard_user")
        >>> await resolver.resolve_and_act("Card A", ActionKind.DRAG_TO, page, payload="Done")
    """

    def __init__(self, options: Optional[ResolveOptions] = None):
        self.options = options or ResolveOptions()

    async def resolve_and_act(
        self,
        target: str,
        action: Union[str, ActionKind],
        page: Any,
        payload: Optional[str] = None,
        options: Optional[ResolveOptions] = None,
    ) -> ResolutionResult:
        """
        Resolve `target` and perform `action` on the first matching candidate.

        Args:
            target: Human-readable element description
            action: ActionKind (or its name)
            page: Playwright Page or any PageHandle
            payload: Value for fill/select/search/upload/verify_value, or the
                drop target description for drag_to
            options: Timing policy for this call only

        Returns:
            ResolutionResult naming the winning candidate

        Raises:
            InvalidActionRequest: Malformed request (nothing is attempted)
            ResolutionExhausted: No candidate resolved (no action performed)
        """
        request = ActionRequest.build(target, action, payload)
        handle = as_page_handle(page)
        opts = options or self.options
        budget = _Budget(opts.deadline_ms)
        timeout_ms = opts.timeout_for(request.action)

        if request.action is ActionKind.DRAG_TO:
            attempts = self._drag_attempts(handle, request, timeout_ms, budget)
        else:
            attempts = self._attempts(handle, request, timeout_ms, budget)

        tried: List[Attempt] = []
        try:
            winner = await first_success(attempts, tried)
        finally:
            await attempts.aclose()

        if winner is None:
            error = ResolutionExhausted(request, tried)
            logger.error(f"❌ Self-heal exhausted {len(tried)} candidates: {error}")
            raise error

        result = ResolutionResult(
            target=request.target,
            action=request.action,
            attempt=winner,
            attempts=tuple(tried),
            payload=request.payload,
        )
        if result.used_fallback:
            logger.warning(
                f"⚠️ Self-heal: {request.action.value} '{request.target}' "
                f"used fallback #{len(tried)}: {winner.selector}"
            )
        else:
            logger.info(
                f"Self-heal: {request.action.value} '{request.target}' using {winner.selector}"
            )
        return result

    async def _attempts(
        self,
        handle: PageHandle,
        request: ActionRequest,
        timeout_ms: int,
        budget: _Budget,
    ) -> AsyncGenerator[Attempt, None]:
        state = "attached" if request.action in ATTACHED_ONLY_ACTIONS else "visible"
        for candidate in generate_candidates(request.target, request.action):
            attempt_timeout = budget.clip(timeout_ms)
            if attempt_timeout <= 0:
                logger.warning(f"Resolution deadline reached for '{request.target}'")
                return
            started = time.monotonic()
            located = await handle.locate(candidate.selector, attempt_timeout, state)
            if located.ok:
                acted = await handle.perform(
                    located.element,
                    request.action,
                    request.payload,
                    max(1, budget.clip(attempt_timeout)),
                )
            else:
                acted = located
            yield self._record(candidate, None, request.action, attempt_timeout, acted, started)

    async def _drag_attempts(
        self,
        handle: PageHandle,
        request: ActionRequest,
        timeout_ms: int,
        budget: _Budget,
    ) -> AsyncGenerator[Attempt, None]:
        for source, destination in generate_drag_pairs(request.target, request.payload):
            attempt_timeout = budget.clip(timeout_ms)
            if attempt_timeout <= 0:
                logger.warning(
                    f"Resolution deadline reached for '{request.target}' -> '{request.payload}'"
                )
                return
            started = time.monotonic()
            outcome = await handle.locate(source.selector, attempt_timeout)
            if outcome.ok:
                dragged = outcome.element
                outcome = await handle.locate(destination.selector, max(1, budget.clip(attempt_timeout)))
                if outcome.ok:
                    outcome = await handle.drag(
                        dragged, outcome.element, max(1, budget.clip(attempt_timeout))
                    )
            yield self._record(source, destination, request.action, attempt_timeout, outcome, started)

    @staticmethod
    def _record(
        candidate: CandidateSelector,
        destination: Optional[CandidateSelector],
        action: ActionKind,
        timeout_ms: int,
        result: HandleResult,
        started: float,
    ) -> Attempt:
        attempt = Attempt(
            candidate=candidate,
            destination=destination,
            action=action,
            timeout_ms=timeout_ms,
            outcome=result.outcome,
            detail=result.detail,
            elapsed_ms=(time.monotonic() - started) * 1000,
        )
        if not attempt.succeeded:
            logger.debug(f"Self-heal attempt failed: {attempt.describe()}")
        return attempt


async def resolve_and_act(
    target: str,
    action: Union[str, ActionKind],
    page: Any,
    payload: Optional[str] = None,
    options: Optional[ResolveOptions] = None,
) -> ResolutionResult:
    """Module-level shortcut for `SelectorResolver().resolve_and_act(...)`."""
    return await SelectorResolver().resolve_and_act(target, action, page, payload, options)


__all__ = [
    "DEFAULT_TIMEOUT_MS",
    "SLOW_TIMEOUT_MS",
    "ResolveOptions",
    "Attempt",
    "ResolutionResult",
    "ResolutionExhausted",
    "SelectorResolver",
    "first_success",
    "resolve_and_act",
]
