"""Interaction state of a previously rendered message.

Chat platforms send back the values of all interactive elements when a user
clicks a button or picks a dropdown option. The container keeps a read-only
copy of those values so a re-render can restore the user's selection. It
holds plain strings only and never references platform objects.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class Container:
    """Snapshot of the previous selections.

    Attributes:
        selects_block_id: ID of the block holding the dropdowns
        fields: Field identifier mapped to its selected value
    """

    selects_block_id: str = ""
    fields: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    def get_selects_block_id(self) -> str:
        return self.selects_block_id

    def get_field(self, name: str) -> str:
        return self.fields.get(name, "")


def get_selects_block_id(state: Optional[Container]) -> str:
    """Return the dropdown block ID, or an empty string without prior state."""
    if state is None:
        return ""
    return state.get_selects_block_id()


def get_field(state: Optional[Container], name: str) -> str:
    """Return a previous field value, or an empty string without prior state."""
    if state is None:
        return ""
    return state.get_field(name)


def extract_slack_state(payload: Optional[Mapping[str, Any]]) -> Optional[Container]:
    """Build a container from a Slack ``state`` payload.

    The payload maps block IDs to action IDs to action values::

        {"values": {"block-1": {"x run kubectl get pods": {
            "type": "static_select",
            "selected_option": {"value": "@idx:2"}}}}}

    The selected option wins over a plain ``value``; actions with neither are
    skipped. When several blocks are present the last one is taken as the
    dropdown block.

    Args:
        payload: Slack state, with or without the top-level ``values`` key

    Returns:
        Container, or None when no payload was given
    """
    if payload is None:
        return None

    blocks = payload.get("values", payload) or {}
    block_id = ""
    fields = {}
    for current_block_id, actions in blocks.items():
        block_id = current_block_id
        for action_id, action in (actions or {}).items():
            value = _action_value(action)
            if value:
                fields[action_id] = value

    return Container(selects_block_id=block_id, fields=MappingProxyType(fields))


def _action_value(action: Any) -> str:
    if not isinstance(action, Mapping):
        return ""
    selected = action.get("selected_option")
    if isinstance(selected, Mapping) and selected.get("value"):
        return str(selected["value"])
    if action.get("value"):
        return str(action["value"])
    return ""
