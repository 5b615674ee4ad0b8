"""Orchestration of a single ``x run`` invocation.

parse directives -> load templates -> match template -> execute command ->
raw output, or render with the renderer registered for the template type.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional

from xrun.api.message import Message, new_code_block_message
from xrun.command import parse
from xrun.config import Config
from xrun.executor import CommandRunner
from xrun.renderer import RendererRegistry
from xrun.state import Container
from xrun.template.loader import TemplateSource
from xrun.template.matcher import find_with_prefix
from xrun.template.model import TemplateKind
from xrun.utils.ansi import strip_ansi
from xrun.utils.logging import get_logger


@dataclass
class ExecuteOutput:
    """Result of an invocation."""

    message: Message = field(default_factory=Message)


class Runner:
    """Runs a command and renders its output according to the matching template.

    The runner holds no per-request state, so a single instance can serve
    concurrent invocations.
    """

    def __init__(
        self,
        registry: RendererRegistry,
        template_source: TemplateSource,
        command_runner: CommandRunner,
        logger=None,
    ):
        self.registry = registry
        self.template_source = template_source
        self.command_runner = command_runner
        self.logger = logger or get_logger("xrun.runner")

    def run(
        self,
        cfg: Config,
        state: Optional[Container],
        tool: str,
        env: Optional[Dict[str, str]] = None,
    ) -> ExecuteOutput:
        """Execute ``tool`` and render its output.

        Args:
            cfg: Configuration holding the template references
            state: Selections of the message the user interacted with, if any
            tool: Command typed by the user, possibly with directive tokens
            env: Extra environment for the executed command

        Returns:
            ExecuteOutput with the message to post

        Raises:
            TemplateLoadError: If templates cannot be loaded
            CommandExecutionError: If the command fails
            RenderDispatchError: If no renderer handles the template type
            TemplateRenderError: If a row template fails
        """
        cmd = parse(tool)

        templates = self.template_source.load(cfg.templates)
        template, found = find_with_prefix(templates, cmd.to_execute)

        out = ""
        if not found or not template.skip_command_execution:
            try:
                out = self.command_runner.execute(cmd.to_execute, env)
            except Exception as e:
                self.logger.error("failed to run command", command=cmd.to_execute, error=str(e))
                raise
            out = strip_ansi(out)

        if cmd.is_raw_required:
            self.logger.info("Raw output was explicitly requested", command=cmd.to_execute)
            return ExecuteOutput(message=new_code_block_message(out, True))

        if not found:
            self.logger.info("Templates config not found for command", command=cmd.to_execute)
            return ExecuteOutput(message=new_code_block_message(out, True))

        self.logger.info(
            "Command template matched",
            command=cmd.to_execute,
            type=template.type,
            kind=template.kind.value,
        )
        if template.kind is TemplateKind.TUTORIAL:
            template = template.with_current_page(cmd.page_index)

        render = self.registry.get(template.type)
        message = render.render_message(cmd.to_execute, out, state, template)
        return ExecuteOutput(message=message)
