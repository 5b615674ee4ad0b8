"""Directive parsing for user commands.

Users steer rendering with in-band tokens embedded in the command text:

- ``@raw``      return the command output as-is
- ``@idx:<N>``  row picked in a dropdown (resolved from interaction state)
- ``@page:<N>`` page requested from a paginated message

The tokens are removed before the command is executed.
"""

import re
from dataclasses import dataclass

BUILTIN_CMD_PREFIX = "x run"

RAW_OUTPUT_INDICATOR = "@raw"
SELECT_INDEX_INDICATOR = "@idx:"
PAGE_INDEX_INDICATOR = "@page:"

_RAW_RE = re.compile(re.escape(RAW_OUTPUT_INDICATOR))
_SELECT_INDEX_RE = re.compile(re.escape(SELECT_INDEX_INDICATOR) + r"(\d+)")
_PAGE_INDEX_RE = re.compile(re.escape(PAGE_INDEX_INDICATOR) + r"(\d+)")

_HYPERLINK_WITH_TEXT_RE = re.compile(r"<(?:https?|mailto):[^|>\s]+\|([^>]+)>")
_HYPERLINK_RE = re.compile(r"<((?:https?|mailto):[^|>\s]+)>")
_QUOTES = str.maketrans({"“": '"', "”": '"', "‘": '"', "’": '"'})


@dataclass(frozen=True)
class Command:
    """Command to execute together with the rendering flags parsed from it."""

    to_execute: str
    is_raw_required: bool = False
    page_index: int = 0


def parse(raw: str) -> Command:
    """Strip directive tokens from ``raw`` and return the resulting command.

    Only the first ``@page:`` occurrence is honoured, but every occurrence of
    every token is removed from the command text.

    Args:
        raw: Command typed by the user, e.g. ``"kubectl get pods @raw"``

    Returns:
        Command with the normalized text and the parsed flags
    """
    is_raw_required = _RAW_RE.search(raw) is not None

    page_index = 0
    page_match = _PAGE_INDEX_RE.search(raw)
    if page_match:
        page_index = _to_int(page_match.group(1))

    return Command(
        to_execute=_strip_indicators(raw),
        is_raw_required=is_raw_required,
        page_index=page_index,
    )


def normalize(raw: str) -> str:
    """Undo chat-client formatting applied to a typed command.

    Removes hyperlink markup (``<https://a|a>`` becomes ``a``) and replaces
    typographic quotes with plain double quotes.
    """
    out = _HYPERLINK_WITH_TEXT_RE.sub(r"\1", raw)
    out = _HYPERLINK_RE.sub(r"\1", out)
    out = out.translate(_QUOTES)
    return out.strip()


def _strip_indicators(raw: str) -> str:
    # Removing one token can join the halves of another, so repeat until stable.
    out = raw
    while True:
        stripped = out
        for pattern in (_RAW_RE, _SELECT_INDEX_RE, _PAGE_INDEX_RE):
            stripped = pattern.sub("", stripped)
        stripped = stripped.strip()
        if stripped == out:
            return out
        out = stripped


def _to_int(digits: str) -> int:
    try:
        return int(digits)
    except ValueError:
        return 0
