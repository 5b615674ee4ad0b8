"""
Command-line interface for xrun.

Runs the rendering pipeline locally, which is handy for trying out templates
without a chat platform.
"""
import json
from pathlib import Path
from typing import Dict, List, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from xrun import __version__
from xrun.api.message import Message, Section
from xrun.command import normalize
from xrun.config import Config, load_config
from xrun.errors import XRunError
from xrun.executor import SubprocessCommandRunner
from xrun.output import new_default_registry
from xrun.runner import Runner
from xrun.state import extract_slack_state
from xrun.template.loader import FileTemplateSource
from xrun.utils.logging import configure_logging

app = typer.Typer(
    name="xrun",
    help="Render CLI output as interactive chat messages",
    add_completion=False,
)

console = Console()


def build_runner(config: Config) -> Runner:
    """Wire a runner with the built-in renderers and collaborators."""
    return Runner(
        registry=new_default_registry(),
        template_source=FileTemplateSource(timeout=config.templates_download_timeout_seconds),
        command_runner=SubprocessCommandRunner(
            dependency_dir=config.dependency_dir,
            timeout=config.command_timeout_seconds,
        ),
    )


def _parse_env(items: List[str]) -> Dict[str, str]:
    env = {}
    for item in items:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"expected KEY=VALUE, got {item!r}", param_hint="--env")
        env[key] = value
    return env


@app.command()
def version() -> None:
    """Display the version of xrun."""
    typer.echo(f"xrun version {__version__}")


@app.command(context_settings={"allow_extra_args": True, "ignore_unknown_options": True})
def run(
    command: List[str] = typer.Argument(..., help="Command to run, e.g. kubectl get pods"),
    state_file: Optional[Path] = typer.Option(
        None, "--state", "-s", help="JSON file with the Slack state of the previous message"
    ),
    templates: Optional[List[str]] = typer.Option(
        None, "--template", "-t", help="Template file, directory or URL (repeatable)"
    ),
    env: Optional[List[str]] = typer.Option(
        None, "--env", "-e", help="Extra environment variable KEY=VALUE (repeatable)"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the message as JSON"),
) -> None:
    """Run a command and render its output."""
    config = load_config()
    if templates:
        config = config.model_copy(update={"templates": list(templates)})
    configure_logging(config.log_level)

    state = None
    if state_file is not None:
        try:
            state = extract_slack_state(json.loads(state_file.read_text(encoding="utf-8")))
        except (OSError, json.JSONDecodeError) as e:
            typer.echo(f"Error: cannot read state file: {e}", err=True)
            raise typer.Exit(1)

    tool = normalize(" ".join(command))
    try:
        output = build_runner(config).run(config, state, tool, _parse_env(env or []))
    except XRunError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(output.message.to_dict(), indent=2))
    else:
        print_message(output.message)


def print_message(message: Message) -> None:
    """Print ``message`` to the terminal."""
    if message.base_body.code_block:
        console.print(Syntax(message.base_body.code_block, "text", theme="monokai", word_wrap=True))
    if message.base_body.plaintext:
        console.print(message.base_body.plaintext)

    for section in message.sections:
        _print_section(section)


def _print_section(section: Section) -> None:
    base = section.base
    if base.header:
        console.print(f"[bold]{base.header}[/bold]")
    if base.description:
        console.print(base.description)
    if base.body.code_block:
        console.print(Panel(Syntax(base.body.code_block, "text", theme="monokai", word_wrap=True)))
    if base.body.plaintext:
        console.print(base.body.plaintext)

    for select in section.selects.items:
        table = Table(title=select.name, show_header=True)
        table.add_column("Option")
        table.add_column("Value", style="dim")
        table.add_column("Selected")
        for group in select.option_groups:
            for option in group.options:
                selected = "✓" if select.initial_option == option else ""
                table.add_row(option.name, option.value, selected)
        console.print(table)

    if section.buttons:
        table = Table(title="Buttons", show_header=True)
        table.add_column("Name")
        table.add_column("Command", style="dim")
        for button in section.buttons:
            table.add_row(button.name, button.command or button.url)
        console.print(table)


if __name__ == "__main__":
    app()
