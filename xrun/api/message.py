"""Platform-neutral interactive message model.

Renderers build these objects; a chat adapter turns them into Slack or Teams
blocks. Nothing here is retained between invocations.
"""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

# Replaced by the chat adapter with the bot mention for the target platform.
BOT_NAME_PLACEHOLDER = "{{BotName}}"


class ButtonStyle(str, Enum):
    """Visual style of a button."""

    DEFAULT = ""
    PRIMARY = "primary"
    DANGER = "danger"


class SelectType(str, Enum):
    """Dropdown flavours."""

    STATIC = "static"


@dataclass
class Body:
    """Message body, either a code block or plain text."""

    code_block: str = ""
    plaintext: str = ""


@dataclass
class Base:
    """Generic section fields."""

    header: str = ""
    description: str = ""
    body: Body = field(default_factory=Body)


@dataclass
class OptionItem:
    """Single dropdown option."""

    name: str
    value: str


@dataclass
class OptionGroup:
    """Options shown under a common label."""

    name: str
    options: List[OptionItem] = field(default_factory=list)


@dataclass
class Select:
    """Dropdown definition.

    Attributes:
        type: Dropdown flavour
        name: Placeholder/label
        command: Command dispatched when an option is chosen
        option_groups: Available options
        initial_option: Pre-selected option, must be one of ``option_groups``
    """

    type: SelectType = SelectType.STATIC
    name: str = ""
    command: str = ""
    option_groups: List[OptionGroup] = field(default_factory=list)
    initial_option: Optional[OptionItem] = None


@dataclass
class Selects:
    """Group of dropdowns rendered in a single block.

    The ``id`` identifies the block so that the next interaction can update it.
    """

    id: str = ""
    items: List[Select] = field(default_factory=list)

    def are_options_defined(self) -> bool:
        """Return True if at least one dropdown is defined."""
        return len(self.items) > 0


@dataclass
class Button:
    """Action button."""

    name: str = ""
    command: str = ""
    description: str = ""
    url: str = ""
    style: ButtonStyle = ButtonStyle.DEFAULT


@dataclass
class Section:
    """Message section."""

    base: Base = field(default_factory=Base)
    buttons: List[Button] = field(default_factory=list)
    selects: Selects = field(default_factory=Selects)

    def is_empty(self) -> bool:
        return self == Section()


@dataclass
class Message:
    """Interactive message returned to the chat layer.

    Attributes:
        sections: Ordered message sections
        base_body: Body rendered above all sections
        only_visible_for_you: Show the message only to the requesting user
        replace_original: Update the message the user interacted with
    """

    sections: List[Section] = field(default_factory=list)
    base_body: Body = field(default_factory=Body)
    only_visible_for_you: bool = False
    replace_original: bool = False

    def has_sections(self) -> bool:
        return len(self.sections) != 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert the message to plain data for serialization."""
        return asdict(self, dict_factory=_enum_values)


def _enum_values(items: List[tuple]) -> Dict[str, Any]:
    return {key: value.value if isinstance(value, Enum) else value for key, value in items}


class ButtonBuilder:
    """Shortcuts for building command buttons."""

    def for_command_without_desc(
        self, name: str, cmd: str, style: ButtonStyle = ButtonStyle.DEFAULT
    ) -> Button:
        """Return a button that dispatches ``cmd`` to the bot."""
        return Button(name=name, command=f"{BOT_NAME_PLACEHOLDER} {cmd}", style=style)


def new_code_block_message(msg: str, only_visible_for_you: bool) -> Message:
    """Return a message with ``msg`` wrapped in a code block."""
    return Message(
        base_body=Body(code_block=msg),
        only_visible_for_you=only_visible_for_you,
    )


def new_plaintext_message(msg: str, only_visible_for_you: bool) -> Message:
    """Return a message with ``msg`` as plain text."""
    return Message(
        base_body=Body(plaintext=msg),
        only_visible_for_you=only_visible_for_you,
    )
