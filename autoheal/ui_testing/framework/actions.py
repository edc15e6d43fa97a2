"""
================================================================================
Action Kinds
================================================================================

Closed set of interactions the self-healing resolver can perform, plus the
validated request object built at the step boundary.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class InvalidActionRequest(ValueError):
    """Raised when a resolution request is malformed (empty target, missing payload)."""
    pass


class ActionKind(str, Enum):
    """Interactions supported by the resolver."""

    CLICK = "click"
    FILL = "fill"
    SELECT = "select"
    HOVER = "hover"
    DOUBLE_CLICK = "double_click"
    RIGHT_CLICK = "right_click"
    DRAG_TO = "drag_to"
    SEARCH = "search"
    UPLOAD = "upload"
    VERIFY_VISIBLE = "verify_visible"
    VERIFY_VALUE = "verify_value"

    @property
    def requires_payload(self) -> bool:
        """Whether the action needs a value (text, option, file, drop target)."""
        return self in _PAYLOAD_ACTIONS

    @property
    def is_mutating(self) -> bool:
        """Whether performing the action changes page state."""
        return self not in _READ_ONLY_ACTIONS

    @classmethod
    def parse(cls, name: Union[str, "ActionKind"]) -> "ActionKind":
        """
        Parse a free-text action name.

        Accepts enum values and common spellings: "doubleClick",
        "double click", "double-click" and "DOUBLE_CLICK" all map to
        DOUBLE_CLICK.

        Raises:
            InvalidActionRequest: If the name is not a supported action
        """
        if isinstance(name, cls):
            return name
        snake = re.sub(r"(?<=[a-z])(?=[A-Z])", "_", str(name).strip())
        normalized = re.sub(r"[\s\-]+", "_", snake).lower()
        try:
            return cls(normalized)
        except ValueError:
            supported = ", ".join(kind.value for kind in cls)
            raise InvalidActionRequest(
                f"Unsupported action '{name}'. Supported: {supported}"
            ) from None


_PAYLOAD_ACTIONS = frozenset({
    ActionKind.FILL,
    ActionKind.SELECT,
    ActionKind.DRAG_TO,
    ActionKind.SEARCH,
    ActionKind.UPLOAD,
    ActionKind.VERIFY_VALUE,
})

_READ_ONLY_ACTIONS = frozenset({
    ActionKind.HOVER,
    ActionKind.VERIFY_VISIBLE,
    ActionKind.VERIFY_VALUE,
})


@dataclass(frozen=True)
class ActionRequest:
    """
    A validated request to resolve a target and act on it.

    Attributes:
        target: Human-readable description of the element (label, name, text)
        action: What to do once the element is found
        payload: Text to type, option label, search term, file path,
            expected value, or the drop target description for DRAG_TO
    """
    target: str
    action: ActionKind
    payload: Optional[str] = None

    @classmethod
    def build(
        cls,
        target: str,
        action: Union[str, ActionKind],
        payload: Optional[str] = None,
    ) -> "ActionRequest":
        """Validate raw step arguments and build a request."""
        kind = ActionKind.parse(action)
        if not isinstance(target, str) or not target.strip():
            raise InvalidActionRequest("Target description must be non-empty text")
        if kind.requires_payload and payload is None:
            raise InvalidActionRequest(f"Action '{kind.value}' requires a payload")
        if kind is ActionKind.DRAG_TO and not str(payload).strip():
            raise InvalidActionRequest("Drop target description must be non-empty text")
        return cls(target=target, action=kind, payload=payload)


__all__ = [
    "ActionKind",
    "ActionRequest",
    "InvalidActionRequest",
]
