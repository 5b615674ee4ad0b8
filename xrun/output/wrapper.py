"""Passthrough rendering: raw output followed by static buttons."""

from typing import Optional

from xrun.api.message import Base, Body, Message, Section
from xrun.renderer import Render
from xrun.state import Container
from xrun.template.model import Template


class CommandWrapper(Render):
    """Renders ``wrapper`` templates."""

    def render_message(
        self,
        cmd: str,
        output: str,
        state: Optional[Container],
        template: Template,
    ) -> Message:
        return Message(
            only_visible_for_you=True,
            sections=[
                Section(base=Base(body=Body(code_block=output))),
                Section(buttons=list(template.wrap_message.buttons)),
            ],
        )
