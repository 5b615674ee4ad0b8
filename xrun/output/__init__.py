"""Renderers for the supported template types."""

from typing import Dict, Optional

from xrun.expression import ExpressionEvaluator
from xrun.output.table import TableCommandParser
from xrun.output.tutorial import TutorialWrapper
from xrun.output.wrapper import CommandWrapper
from xrun.renderer import Render, RendererRegistry
from xrun.template.model import PARSER_TABLE_PREFIX, TUTORIAL_TYPE, WRAPPER_TYPE


def default_renderers(evaluator: Optional[ExpressionEvaluator] = None) -> Dict[str, Render]:
    """Return the built-in renderers keyed by template type pattern."""
    return {
        f"{PARSER_TABLE_PREFIX}.*": TableCommandParser(evaluator),
        WRAPPER_TYPE: CommandWrapper(),
        TUTORIAL_TYPE: TutorialWrapper(),
    }


def new_default_registry(evaluator: Optional[ExpressionEvaluator] = None) -> RendererRegistry:
    """Return a registry populated with the built-in renderers."""
    registry = RendererRegistry()
    registry.register_all(default_renderers(evaluator))
    return registry


__all__ = [
    "CommandWrapper",
    "TableCommandParser",
    "TutorialWrapper",
    "default_renderers",
    "new_default_registry",
]
