"""
Per-thread expanded replies state.

The state maps a top-level comment id to whether its flattened replies are
shown. It changes only through two actions, applied by a pure reducer, and is
held by an explicit store owned by the host application.
"""

from types import MappingProxyType
from typing import Annotated, Any, Literal, Mapping, Optional, Union

import structlog
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

logger = structlog.get_logger(__name__)

EXPANDED_REPLIES_SET = "EXPANDED_REPLIES_SET"
EXPANDED_REPLIES_TOGGLE = "EXPANDED_REPLIES_TOGGLE"

ExpandedRepliesState = dict[str, bool]


class SetExpandedReplies(BaseModel):
    """Overwrite the expanded flag of a thread."""

    model_config = ConfigDict(frozen=True)

    type: Literal["EXPANDED_REPLIES_SET"] = EXPANDED_REPLIES_SET
    id: str
    expanded: bool


class ToggleExpandedReplies(BaseModel):
    """Flip the expanded flag of a thread; an unknown thread counts as collapsed."""

    model_config = ConfigDict(frozen=True)

    type: Literal["EXPANDED_REPLIES_TOGGLE"] = EXPANDED_REPLIES_TOGGLE
    id: str


ExpandedRepliesAction = Annotated[
    Union[SetExpandedReplies, ToggleExpandedReplies],
    Field(discriminator="type"),
]

_action_adapter: TypeAdapter = TypeAdapter(ExpandedRepliesAction)


def set_expanded_replies(comment_id: str, expanded: bool) -> SetExpandedReplies:
    return SetExpandedReplies(id=comment_id, expanded=expanded)


def toggle_expanded_replies(comment_id: str) -> ToggleExpandedReplies:
    return ToggleExpandedReplies(id=comment_id)


def parse_action(payload: Mapping[str, Any]) -> Optional[Union[SetExpandedReplies, ToggleExpandedReplies]]:
    """
    Decode an action from its wire form.

    Args:
        payload: A dict such as ``{"type": "EXPANDED_REPLIES_TOGGLE", "id": "c1"}``

    Returns:
        The decoded action, or None when the payload is not an expanded
        replies action
    """
    try:
        return _action_adapter.validate_python(payload)
    except ValidationError as e:
        payload_type = payload.get("type") if isinstance(payload, Mapping) else type(payload).__name__
        logger.debug("action_payload_rejected", payload_type=payload_type, errors=e.error_count())
        return None


def expanded_replies(state: Mapping[str, bool], action: Any) -> ExpandedRepliesState:
    """
    Apply one action to the expanded replies state.

    The input mapping is never modified. Anything that is not an expanded
    replies action leaves the state as it was.

    Args:
        state: Current state
        action: The action to apply

    Returns:
        The next state
    """
    if isinstance(action, SetExpandedReplies):
        return {**state, action.id: action.expanded}
    if isinstance(action, ToggleExpandedReplies):
        return {**state, action.id: not state.get(action.id, False)}

    return dict(state)


class ExpandedRepliesStore:
    """
    Holds the expanded replies state for one application session.

    Actions are applied one at a time in dispatch order.
    """

    def __init__(self, initial: Optional[Mapping[str, bool]] = None):
        """
        Initialize the store.

        Args:
            initial: Starting state. Defaults to every thread collapsed.
        """
        self._state: ExpandedRepliesState = dict(initial or {})

    @property
    def state(self) -> Mapping[str, bool]:
        """Read-only view of the current state."""
        return MappingProxyType(self._state)

    def dispatch(self, action: Any) -> Mapping[str, bool]:
        """Apply an action and return the new state."""
        self._state = expanded_replies(self._state, action)
        return self.state

    def dispatch_payload(self, payload: Mapping[str, Any]) -> Mapping[str, bool]:
        """Decode a wire action and apply it. Unrecognised payloads are ignored."""
        action = parse_action(payload)
        if action is None:
            return self.state
        return self.dispatch(action)

    def is_expanded(self, comment_id: str) -> bool:
        return self._state.get(comment_id, False)

    def set(self, comment_id: str, expanded: bool) -> bool:
        self.dispatch(set_expanded_replies(comment_id, expanded))
        return self.is_expanded(comment_id)

    def toggle(self, comment_id: str) -> bool:
        self.dispatch(toggle_expanded_replies(comment_id))
        return self.is_expanded(comment_id)
