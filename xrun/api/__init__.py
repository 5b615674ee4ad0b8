"""Interactive message model shared by renderers and chat adapters."""

from xrun.api.message import (
    BOT_NAME_PLACEHOLDER,
    Base,
    Body,
    Button,
    ButtonBuilder,
    ButtonStyle,
    Message,
    OptionGroup,
    OptionItem,
    Section,
    Select,
    Selects,
    SelectType,
    new_code_block_message,
    new_plaintext_message,
)

__all__ = [
    "BOT_NAME_PLACEHOLDER",
    "Base",
    "Body",
    "Button",
    "ButtonBuilder",
    "ButtonStyle",
    "Message",
    "OptionGroup",
    "OptionItem",
    "Section",
    "Select",
    "Selects",
    "SelectType",
    "new_code_block_message",
    "new_plaintext_message",
]
