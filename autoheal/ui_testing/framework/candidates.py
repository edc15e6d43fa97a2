"""
================================================================================
Candidate Selector Templates
================================================================================

Fixed, ordered selector templates per action kind. A target description is
substituted into every template of its action kind to produce the candidate
list the resolver walks through.

Ordering is specificity-first: exact text or exact attribute matches come
before attribute-substring matches, which come before structural XPath
matches. The order is part of the observable behavior and must not change.

Placeholders:
    {raw}    target inserted verbatim (text= and #id / .class forms)
    {css}    target escaped for a double-quoted CSS string
    {xpath}  target rendered as an XPath string literal

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Tuple

from .actions import ActionKind


class SelectorDialect(str, Enum):
    """Which attribute or query form a template matches on."""

    TEXT = "text"
    ARIA_LABEL = "aria-label"
    PLACEHOLDER = "placeholder"
    ID = "id"
    CLASS = "class"
    NAME = "name"
    TITLE = "title"
    ALT = "alt"
    HAS_TEXT = "has-text"
    NEAR = "near"
    XPATH = "xpath"
    FIXED = "fixed"


def css_string(value: str) -> str:
    """Escape a value for use inside a double-quoted CSS string."""
    return value.replace("\\", "\\\\").replace('"', '\\"')


def xpath_literal(value: str) -> str:
    """Render a value as an XPath 1.0 string literal."""
    if '"' not in value:
        return f'"{value}"'
    if "'" not in value:
        return f"'{value}'"
    parts = value.split('"')
    return "concat(" + ", '\"', ".join(f'"{part}"' for part in parts) + ")"


@dataclass(frozen=True)
class SelectorTemplate:
    """One selector pattern with the dialect it matches on."""
    dialect: SelectorDialect
    pattern: str

    def render(self, target: str) -> str:
        return self.pattern.format(
            raw=target,
            css=css_string(target),
            xpath=xpath_literal(target),
        )


@dataclass(frozen=True)
class CandidateSelector:
    """
    A concrete selector derived from a target description.

    Attributes:
        index: Position in the priority order (0 is tried first)
        dialect: Template dialect that produced it
        selector: Playwright selector string
    """
    index: int
    dialect: SelectorDialect
    selector: str

    def __str__(self) -> str:
        return self.selector


def _t(dialect: SelectorDialect, pattern: str) -> SelectorTemplate:
    return SelectorTemplate(dialect, pattern)


D = SelectorDialect

# Click, double-click, right-click and hover share one set
POINTER_TEMPLATES: Tuple[SelectorTemplate, ...] = (
    _t(D.TEXT, "text={raw}"),
    _t(D.ARIA_LABEL, '[aria-label="{css}"]'),
    _t(D.PLACEHOLDER, '[placeholder*="{css}"]'),
    _t(D.ID, '[id*="{css}"]'),
    _t(D.CLASS, '[class*="{css}"]'),
    _t(D.XPATH, "xpath=//*[contains(text(),{xpath})]"),
)

FILL_TEMPLATES: Tuple[SelectorTemplate, ...] = (
    _t(D.NAME, 'input[name="{css}"]'),
    _t(D.ID, 'input[id*="{css}"]'),
    _t(D.PLACEHOLDER, 'input[placeholder*="{css}"]'),
    _t(D.NAME, 'textarea[name="{css}"]'),
    _t(D.ID, 'textarea[id*="{css}"]'),
    _t(D.ARIA_LABEL, '[aria-label*="{css}"]'),
    _t(D.XPATH, "xpath=//input[contains(@placeholder,{xpath})]"),
    _t(D.XPATH, "xpath=//input[contains(@name,{xpath})]"),
    _t(D.XPATH, "xpath=//input[contains(@id,{xpath})]"),
)

SELECT_TEMPLATES: Tuple[SelectorTemplate, ...] = (
    _t(D.NAME, 'select[name="{css}"]'),
    _t(D.ID, 'select[id*="{css}"]'),
    _t(D.NEAR, 'select:near(:text("{css}"))'),
    _t(D.ARIA_LABEL, '[aria-label*="{css}"]'),
    _t(D.XPATH, "xpath=//select[contains(@name,{xpath})]"),
    _t(D.XPATH, "xpath=//select[contains(@id,{xpath})]"),
)

# Used for both the drag source and the drop target
DRAG_TEMPLATES: Tuple[SelectorTemplate, ...] = (
    _t(D.TEXT, "text={raw}"),
    _t(D.ARIA_LABEL, '[aria-label="{css}"]'),
    _t(D.ID, '[id*="{css}"]'),
    _t(D.CLASS, '[class*="{css}"]'),
    _t(D.XPATH, "xpath=//*[contains(text(),{xpath})]"),
)

# Search boxes are found by role, not by description
SEARCH_TEMPLATES: Tuple[SelectorTemplate, ...] = (
    _t(D.FIXED, 'input[type="search"]'),
    _t(D.FIXED, 'input[name="q"]'),
    _t(D.FIXED, 'input[name="search"]'),
    _t(D.FIXED, 'input[placeholder*="search"]'),
    _t(D.FIXED, 'input[placeholder*="Search"]'),
    _t(D.FIXED, '[role="searchbox"]'),
)

UPLOAD_TEMPLATES: Tuple[SelectorTemplate, ...] = (
    _t(D.NAME, 'input[type="file"][name="{css}"]'),
    _t(D.ID, 'input[type="file"][id="{css}"]'),
    _t(D.NEAR, 'input[type="file"]:near(:text("{css}"))'),
)

VISIBLE_TEMPLATES: Tuple[SelectorTemplate, ...] = (
    _t(D.TEXT, "text={raw}"),
    _t(D.ARIA_LABEL, '[aria-label="{css}"]'),
    _t(D.TITLE, '[title="{css}"]'),
    _t(D.ALT, '[alt="{css}"]'),
    _t(D.ID, "#{raw}"),
    _t(D.CLASS, ".{raw}"),
    _t(D.HAS_TEXT, 'button:has-text("{css}")'),
    _t(D.HAS_TEXT, 'a:has-text("{css}")'),
)

VALUE_TEMPLATES: Tuple[SelectorTemplate, ...] = (
    _t(D.NAME, 'input[name="{css}"]'),
    _t(D.ID, 'input[id="{css}"]'),
    _t(D.NAME, 'textarea[name="{css}"]'),
    _t(D.ID, 'textarea[id="{css}"]'),
    _t(D.ARIA_LABEL, '[aria-label*="{css}"]'),
)

TEMPLATE_SETS: Dict[ActionKind, Tuple[SelectorTemplate, ...]] = {
    ActionKind.CLICK: POINTER_TEMPLATES,
    ActionKind.DOUBLE_CLICK: POINTER_TEMPLATES,
    ActionKind.RIGHT_CLICK: POINTER_TEMPLATES,
    ActionKind.HOVER: POINTER_TEMPLATES,
    ActionKind.FILL: FILL_TEMPLATES,
    ActionKind.SELECT: SELECT_TEMPLATES,
    ActionKind.DRAG_TO: DRAG_TEMPLATES,
    ActionKind.SEARCH: SEARCH_TEMPLATES,
    ActionKind.UPLOAD: UPLOAD_TEMPLATES,
    ActionKind.VERIFY_VISIBLE: VISIBLE_TEMPLATES,
    ActionKind.VERIFY_VALUE: VALUE_TEMPLATES,
}


def generate_candidates(target: str, action: ActionKind) -> List[CandidateSelector]:
    """
    Build the ordered candidate list for a target and action.

    The list is generated fresh on every call.

    Args:
        target: Human-readable element description
        action: Action kind selecting the template set

    Returns:
        Candidates in priority order
    """
    return [
        CandidateSelector(index=i, dialect=template.dialect, selector=template.render(target))
        for i, template in enumerate(TEMPLATE_SETS[action])
    ]


def generate_drag_pairs(
    source: str,
    destination: str,
) -> List[Tuple[CandidateSelector, CandidateSelector]]:
    """
    Build every (source, destination) pair in priority order.

    The source candidate varies slowest: all destinations are paired with the
    first source before the second source is considered.
    """
    sources = generate_candidates(source, ActionKind.DRAG_TO)
    destinations = generate_candidates(destination, ActionKind.DRAG_TO)
    return [(src, dst) for src in sources for dst in destinations]


__all__ = [
    "SelectorDialect",
    "SelectorTemplate",
    "CandidateSelector",
    "TEMPLATE_SETS",
    "css_string",
    "xpath_literal",
    "generate_candidates",
    "generate_drag_pairs",
]
