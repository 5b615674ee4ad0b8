"""Template model, lookup and sources."""

from xrun.template.loader import FileTemplateSource, TemplateSource
from xrun.template.matcher import find_with_prefix
from xrun.template.model import (
    PARSER_TABLE_PREFIX,
    TUTORIAL_TYPE,
    WRAPPER_TYPE,
    CommandMatchers,
    Paginate,
    ParseMessage,
    Select,
    Template,
    TemplateKind,
    Trigger,
    TutorialMessage,
    WrapMessage,
)

__all__ = [
    "FileTemplateSource",
    "TemplateSource",
    "find_with_prefix",
    "PARSER_TABLE_PREFIX",
    "TUTORIAL_TYPE",
    "WRAPPER_TYPE",
    "CommandMatchers",
    "Paginate",
    "ParseMessage",
    "Select",
    "Template",
    "TemplateKind",
    "Trigger",
    "TutorialMessage",
    "WrapMessage",
]
