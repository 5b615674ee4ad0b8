"""Paginated menu of predefined commands."""

from typing import List, Optional, Tuple

from xrun.api.message import Base, Button, ButtonBuilder, ButtonStyle, Message, Section
from xrun.command import BUILTIN_CMD_PREFIX, PAGE_INDEX_INDICATOR
from xrun.renderer import Render
from xrun.state import Container
from xrun.template.model import Template, TutorialMessage


class TutorialWrapper(Render):
    """Renders ``tutorial`` templates. The command output is ignored."""

    def render_message(
        self,
        cmd: str,
        output: str,
        state: Optional[Container],
        template: Template,
    ) -> Message:
        msg = template.tutorial_message
        current_page = msg.paginate.current_page
        start, stop = page_window(len(msg.buttons), msg.paginate.page, current_page)

        return Message(
            only_visible_for_you=True,
            replace_original=current_page > 0,
            sections=[
                Section(base=Base(header=msg.header)),
                Section(buttons=list(msg.buttons[start:stop])),
                Section(buttons=self._pagination_buttons(msg, cmd, stop)),
            ],
        )

    def _pagination_buttons(self, msg: TutorialMessage, cmd: str, stop: int) -> List[Button]:
        all_items = len(msg.buttons)
        page_index = msg.paginate.current_page
        if all_items <= msg.paginate.page:
            return []

        btn_builder = ButtonBuilder()
        out = []
        if page_index > 0:
            out.append(btn_builder.for_command_without_desc(
                "Prev", f"{BUILTIN_CMD_PREFIX} {cmd} {PAGE_INDEX_INDICATOR}{max(page_index - 1, 0)}",
            ))
        if stop < all_items:
            out.append(btn_builder.for_command_without_desc(
                "Next", f"{BUILTIN_CMD_PREFIX} {cmd} {PAGE_INDEX_INDICATOR}{page_index + 1}",
                ButtonStyle.PRIMARY,
            ))
        return out


def page_window(total: int, page_size: int, page: int) -> Tuple[int, int]:
    """Return the ``[start, stop)`` slice of ``page`` clamped to ``total`` items."""
    start = min(page * page_size, max(total - 1, 0))
    stop = min(start + page_size, total)
    return start, stop
