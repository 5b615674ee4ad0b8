"""Template schema describing how a command output is turned into a message.

Expected YAML structure:
```yaml
templates:
  - trigger:
      command: "helm list"          # or {prefix: ..., regex: ...}
    type: "parser:table:space"
    message:
      selects:
        - name: "Release"
          keyTpl: "{{ namespace }}/{{ name }}"
      actions:
        notes: "helm get notes {{ name }} -n {{ namespace }}"
      preview: |
        Name:      {{ name }}
        Namespace: {{ namespace }}
```

The shape of ``message`` depends on ``type``: table parsers use selects,
actions and preview; ``wrapper`` uses buttons; ``tutorial`` uses header,
buttons and pagination.
"""

from enum import Enum
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from xrun.api.message import Button

PARSER_TABLE_PREFIX = "parser:table:"
WRAPPER_TYPE = "wrapper"
TUTORIAL_TYPE = "tutorial"


class TemplateKind(Enum):
    """Rendering strategy family derived from a template type."""

    TABLE = "table"
    TUTORIAL = "tutorial"
    WRAPPER = "wrapper"
    CUSTOM = "custom"

    @classmethod
    def from_type(cls, template_type: str) -> "TemplateKind":
        if template_type.startswith(PARSER_TABLE_PREFIX):
            return cls.TABLE
        if template_type == TUTORIAL_TYPE:
            return cls.TUTORIAL
        if template_type == WRAPPER_TYPE:
            return cls.WRAPPER
        return cls.CUSTOM


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class CommandMatchers(_Frozen):
    """Ways of matching an executed command."""

    prefix: str = Field(default="", description="Command prefix, e.g. 'kubectl get pods'")
    regex: str = Field(default="", description="Regular expression searched in the command")


class Trigger(_Frozen):
    """Condition under which a template applies."""

    command: CommandMatchers = Field(default_factory=CommandMatchers)

    @field_validator("command", mode="before")
    @classmethod
    def _prefix_shorthand(cls, value: Any) -> Any:
        if isinstance(value, str):
            return {"prefix": value}
        return value


class Select(_Frozen):
    """Dropdown whose options are rendered from table rows."""

    name: str
    key_tpl: str = Field(alias="keyTpl")


class ParseMessage(_Frozen):
    """Rendering options for table parser templates."""

    selects: List[Select] = Field(default_factory=list)
    actions: Dict[str, str] = Field(default_factory=dict)
    preview: str = ""


class WrapMessage(_Frozen):
    """Static buttons appended to the raw command output."""

    buttons: List[Button] = Field(default_factory=list)


class Paginate(_Frozen):
    """Pagination settings of a tutorial message.

    ``current_page`` is never read from YAML; it comes from the ``@page:``
    directive of the current invocation.
    """

    page: int = Field(default=5, ge=1)
    current_page: int = Field(default=0, ge=0, exclude=True)


class TutorialMessage(_Frozen):
    """Paginated list of predefined command buttons."""

    header: str = ""
    buttons: List[Button] = Field(default_factory=list)
    paginate: Paginate = Field(default_factory=Paginate)


class Template(_Frozen):
    """Binding between a command trigger and a rendering strategy."""

    type: str
    trigger: Trigger = Field(default_factory=Trigger)
    skip_command_execution: bool = False
    parse_message: ParseMessage = Field(default_factory=ParseMessage)
    wrap_message: WrapMessage = Field(default_factory=WrapMessage)
    tutorial_message: TutorialMessage = Field(default_factory=TutorialMessage)

    @model_validator(mode="before")
    @classmethod
    def _route_message(cls, data: Any) -> Any:
        """Decode ``message`` into the field matching the template type."""
        if not isinstance(data, dict):
            return data

        data = dict(data)
        message = data.pop("message", None) or {}
        kind = TemplateKind.from_type(str(data.get("type", "")))

        if kind is TemplateKind.TUTORIAL:
            data["skip_command_execution"] = True
        if not message:
            return data

        if kind is TemplateKind.TABLE:
            data["parse_message"] = message
        elif kind is TemplateKind.WRAPPER:
            data["wrap_message"] = message
        elif kind is TemplateKind.TUTORIAL:
            data["tutorial_message"] = message
        return data

    @property
    def kind(self) -> TemplateKind:
        return TemplateKind.from_type(self.type)

    def with_current_page(self, page: int) -> "Template":
        """Return a copy of the template positioned on ``page``."""
        paginate = self.tutorial_message.paginate.model_copy(update={"current_page": max(page, 0)})
        tutorial = self.tutorial_message.model_copy(update={"paginate": paginate})
        return self.model_copy(update={"tutorial_message": tutorial})
