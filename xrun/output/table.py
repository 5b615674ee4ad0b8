"""Interactive rendering of tabular command output.

The message has three sections:

1. dropdowns listing the table rows (one per configured select)
2. a preview of the selected row
3. the actions available for the selected row

Choosing a row re-runs the command; the previous choice is read back from the
interaction state so the same row stays selected.
"""

from typing import Dict, List, Optional, Tuple

from xrun.api.message import (
    BOT_NAME_PLACEHOLDER,
    Base,
    Body,
    ButtonBuilder,
    Message,
    OptionGroup,
    OptionItem,
    Section,
    Select,
    Selects,
    SelectType,
    new_plaintext_message,
)
from xrun.command import BUILTIN_CMD_PREFIX, RAW_OUTPUT_INDICATOR, SELECT_INDEX_INDICATOR
from xrun.expression import ExpressionEvaluator, JinjaEvaluator, render_row
from xrun.parser.space_table import Table, TableOutput, TableSpace
from xrun.renderer import Render
from xrun.state import Container, get_field, get_selects_block_id
from xrun.template.model import PARSER_TABLE_PREFIX, ParseMessage, Template
from xrun.template.model import Select as SelectTemplate
from xrun.utils.logging import get_logger

NOT_FOUND_MESSAGE = "Not found."


class TableCommandParser(Render):
    """Renders ``parser:table:*`` templates."""

    def __init__(self, evaluator: Optional[ExpressionEvaluator] = None):
        self.evaluator = evaluator or JinjaEvaluator()
        self.parsers: Dict[str, TableSpace] = {
            "space": TableSpace(),
        }
        self.logger = get_logger("xrun.output.table")

    def render_message(
        self,
        cmd: str,
        output: str,
        state: Optional[Container],
        template: Template,
    ) -> Message:
        msg = template.parse_message
        parser_type = template.type.removeprefix(PARSER_TABLE_PREFIX)
        parser = self.parsers.get(parser_type)
        if parser is None:
            return new_plaintext_message(f"parser {parser_type} is not supported", False)

        out = parser.table_separated(output)
        if not out.lines or not out.table.rows:
            return no_items_message()

        dropdowns, selected_idx = self._render_dropdowns(msg.selects, out.table, cmd, state)
        preview = self._render_preview(msg, out, selected_idx)
        actions = self._render_actions(msg, out.table, cmd, selected_idx)

        return Message(
            sections=[dropdowns, preview, actions],
            # a dropdown was used, so update the message in place
            replace_original=get_selects_block_id(state) != "",
            only_visible_for_you=True,
        )

    def _render_dropdowns(
        self,
        selects: List[SelectTemplate],
        table: Table,
        cmd: str,
        state: Optional[Container],
    ) -> Tuple[Section, int]:
        dropdowns = []
        last_selected_idx = 0
        for item in selects:
            dropdown, selected_idx = self._select_dropdown(item.name, cmd, item.key_tpl, table, state)
            if dropdown is not None:
                dropdowns.append(dropdown)
                last_selected_idx = selected_idx

        return Section(selects=Selects(id=get_selects_block_id(state), items=dropdowns)), last_selected_idx

    def _select_dropdown(
        self,
        name: str,
        cmd: str,
        key_tpl: str,
        table: Table,
        state: Optional[Container],
    ) -> Tuple[Optional[Select], int]:
        options = []
        option_rows = []
        for idx, row in enumerate(table.rows):
            key = render_row(self.evaluator, key_tpl, table.headers, row)
            if not key:
                self.logger.info("key name is empty for dropdown", select_name=name, row=idx)
                continue
            options.append(OptionItem(name=key, value=f"{SELECT_INDEX_INDICATOR}{idx}"))
            option_rows.append(idx)

        if not options:
            return None, 0

        # The command doubles as the dropdown ID, so its value can be found in the next state.
        dropdown_id = f"{BUILTIN_CMD_PREFIX} {cmd}"
        requested = min(resolve_select_idx(state, dropdown_id), len(table.rows) - 1)
        pos = nearest_option(option_rows, requested)
        idx = option_rows[pos]

        self.logger.info("Dropdown rendered", select_name=name, items_no=len(options), selected_item=idx)
        return Select(
            type=SelectType.STATIC,
            name=name,
            command=f"{BOT_NAME_PLACEHOLDER} {dropdown_id}",
            initial_option=options[pos],
            option_groups=[OptionGroup(name=name, options=options)],
        ), idx

    def _render_preview(self, msg: ParseMessage, out: TableOutput, requested_row: int) -> Section:
        requested_row = min(requested_row, len(out.table.rows) - 1)

        if msg.preview:
            preview = render_row(self.evaluator, msg.preview, out.table.headers, out.table.rows[requested_row])
        else:
            preview = f"{out.lines[0]}\n{get_preview_line(out.lines, requested_row)}"

        return Section(base=Base(body=Body(code_block=preview)))

    def _render_actions(self, msg: ParseMessage, table: Table, cmd: str, idx: int) -> Section:
        idx = min(idx, len(table.rows) - 1)

        actions = []
        for name, tpl in msg.actions.items():
            actions.append(OptionItem(name=name, value=render_row(self.evaluator, tpl, table.headers, table.rows[idx])))

        if not actions:
            return Section()

        btn_builder = ButtonBuilder()
        return Section(
            buttons=[
                btn_builder.for_command_without_desc(
                    "Raw output", f"{BUILTIN_CMD_PREFIX} {cmd} {RAW_OUTPUT_INDICATOR}"
                ),
            ],
            selects=Selects(
                items=[
                    Select(
                        type=SelectType.STATIC,
                        name="Actions",
                        command=f"{BOT_NAME_PLACEHOLDER} {BUILTIN_CMD_PREFIX}",
                        option_groups=[OptionGroup(name="Actions", options=actions)],
                    ),
                ],
            ),
        )


def resolve_select_idx(state: Optional[Container], select_id: str) -> int:
    """Return the row index previously chosen in the ``select_id`` dropdown."""
    item = get_field(state, select_id)
    if not item:
        return 0

    _, _, digits = item.partition(SELECT_INDEX_INDICATOR)
    try:
        return max(int(digits), 0)
    except ValueError:
        return 0


def nearest_option(option_rows: List[int], row: int) -> int:
    """Return the position of the option for ``row``.

    Rows without an option (empty key) resolve to the closest preceding
    option, or to the first one.
    """
    pos = 0
    for candidate, option_row in enumerate(option_rows):
        if option_row > row:
            break
        pos = candidate
    return pos


def get_preview_line(lines: List[str], idx: int) -> str:
    """Return the source line of row ``idx``, falling back to the first row."""
    if len(lines) < 2:
        return ""

    requested = idx + 1
    if requested < len(lines):
        return lines[requested]
    return lines[1]


def no_items_message() -> Message:
    return Message(sections=[Section(base=Base(body=Body(plaintext=NOT_FOUND_MESSAGE)))])
