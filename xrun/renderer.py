"""Renderer interface and the registry used to pick one per template type."""

import re
import threading
from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from xrun.api.message import Message
from xrun.errors import RegistryConflictError, RenderDispatchError
from xrun.state import Container
from xrun.template.model import Template


class Render(ABC):
    """Knows how to render a given command output."""

    @abstractmethod
    def render_message(
        self,
        cmd: str,
        output: str,
        state: Optional[Container],
        template: Template,
    ) -> Message:
        """Turn command output into a message.

        Args:
            cmd: Executed command, without directive tokens
            output: Command output with ANSI sequences removed
            state: Selections of the message the user interacted with, if any
            template: Template matched for ``cmd``

        Returns:
            Message ready for the chat adapter
        """
        pass


class RendererRegistry:
    """Maps template types to renderers.

    Keys are either exact template types or regular expressions matched
    against the type, e.g. ``parser:table:.*``. Registration is expected to
    finish before serving requests. Writers are serialized by a lock and
    publish a new read-only mapping, so lookups never block.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._renderers: Mapping[str, Render] = MappingProxyType({})

    def register(self, name: str, render: Render) -> None:
        """Register ``render`` under ``name``.

        Raises:
            RegistryConflictError: If ``name`` is already registered
        """
        with self._lock:
            if name in self._renderers:
                raise RegistryConflictError(f"conflicts: {name!r} was already registered")
            updated = dict(self._renderers)
            updated[name] = render
            self._renderers = MappingProxyType(updated)

    def register_all(self, renderers: Dict[str, Render]) -> None:
        for name, render in renderers.items():
            self.register(name, render)

    def get(self, template_type: str) -> Render:
        """Return the renderer for ``template_type``.

        Exact keys win; otherwise the first key whose pattern matches the
        type is used. Keys that are not valid patterns are skipped.

        Raises:
            RenderDispatchError: If no key matches
        """
        renderers = self._renderers

        render = renderers.get(template_type)
        if render is not None:
            return render

        for key, render in renderers.items():
            try:
                if re.search(key, template_type):
                    return render
            except re.error:
                continue

        raise RenderDispatchError(template_type, self.available_renderers())

    def available_renderers(self) -> str:
        return " | ".join(sorted(self._renderers))
