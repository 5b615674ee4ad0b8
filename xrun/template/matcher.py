"""Template lookup for an executed command."""

import re
from typing import Iterable, Optional, Tuple

from xrun.template.model import Template


def find_with_prefix(templates: Iterable[Template], command: str) -> Tuple[Optional[Template], bool]:
    """Return the first template triggered by ``command``.

    Templates are checked in configured order and the first hit wins, so more
    specific prefixes must be listed before broader ones. A template matches
    when its prefix starts ``command``; templates without a prefix fall back to
    their regular expression. Invalid expressions never match.

    Args:
        templates: Loaded templates in configured order
        command: Command without directive tokens

    Returns:
        Tuple of (template, found)
    """
    for template in templates:
        matchers = template.trigger.command
        if matchers.prefix:
            if command.startswith(matchers.prefix):
                return template, True
        elif matchers.regex:
            try:
                if re.search(matchers.regex, command):
                    return template, True
            except re.error:
                continue

    return None, False
