"""Unit tests for the interactive table renderer."""

import pytest

from xrun.api.message import Base, Body, Button, Message, OptionGroup, OptionItem, Section, Select, Selects, SelectType
from xrun.errors import TemplateRenderError
from xrun.output.table import TableCommandParser, get_preview_line, nearest_option, resolve_select_idx
from xrun.state import Container
from xrun.template.model import Template

PODS = (
    "NAME    NAMESPACE   STATUS\n"
    "nginx   default     Running\n"
    "grafana monitoring  Running\n"
)

DROPDOWN_ID = "x run kubectl get pods"


def _template(**message) -> Template:
    return Template.model_validate({
        "trigger": {"command": "kubectl get pods"},
        "type": message.pop("type", "parser:table:space"),
        "message": message,
    })


def _pods_template(**overrides) -> Template:
    message = {
        "selects": [{"name": "Pods", "keyTpl": "{{ namespace }}/{{ name }}"}],
        "actions": {"logs": "kubectl logs {{ name }} -n {{ namespace }}"},
    }
    message.update(overrides)
    return _template(**message)


def _render(template, state=None, output=PODS):
    return TableCommandParser().render_message("kubectl get pods", output, state, template)


class TestTableCommandParser:
    """Tests for TableCommandParser.render_message."""

    def test_first_render(self):
        """Test the message rendered without previous state."""
        msg = _render(_pods_template())

        options = [
            OptionItem(name="default/nginx", value="@idx:0"),
            OptionItem(name="monitoring/grafana", value="@idx:1"),
        ]
        assert msg == Message(
            only_visible_for_you=True,
            replace_original=False,
            sections=[
                Section(selects=Selects(items=[
                    Select(
                        type=SelectType.STATIC,
                        name="Pods",
                        command="{{BotName}} x run kubectl get pods",
                        option_groups=[OptionGroup(name="Pods", options=options)],
                        initial_option=options[0],
                    ),
                ])),
                Section(base=Base(body=Body(code_block=(
                    "NAME    NAMESPACE   STATUS\n"
                    "nginx   default     Running"
                )))),
                Section(
                    buttons=[Button(name="Raw output", command="{{BotName}} x run kubectl get pods @raw")],
                    selects=Selects(items=[
                        Select(
                            type=SelectType.STATIC,
                            name="Actions",
                            command="{{BotName}} x run",
                            option_groups=[OptionGroup(name="Actions", options=[
                                OptionItem(name="logs", value="kubectl logs nginx -n default"),
                            ])],
                        ),
                    ]),
                ),
            ],
        )

    def test_selection_from_state(self):
        """Test that the previously chosen row is rendered."""
        state = Container(selects_block_id="block-1", fields={DROPDOWN_ID: "@idx:1"})

        msg = _render(_pods_template(), state)

        dropdowns, preview, actions = msg.sections
        assert msg.replace_original
        assert dropdowns.selects.id == "block-1"
        assert dropdowns.selects.items[0].initial_option == OptionItem(name="monitoring/grafana", value="@idx:1")
        assert preview.base.body.code_block.splitlines()[1] == "grafana monitoring  Running"
        assert actions.selects.items[0].option_groups[0].options == [
            OptionItem(name="logs", value="kubectl logs grafana -n monitoring"),
        ]

    def test_selection_beyond_rows_is_clamped(self):
        """Test that a stale index selects the last row."""
        state = Container(selects_block_id="block-1", fields={DROPDOWN_ID: "@idx:9"})

        msg = _render(_pods_template(), state)

        assert msg.sections[0].selects.items[0].initial_option.value == "@idx:1"
        assert "grafana" in msg.sections[1].base.body.code_block

    def test_rows_with_empty_key_are_skipped(self):
        """Test that rows rendering an empty key get no option."""
        tpl = _pods_template(selects=[{
            "name": "Pods",
            "keyTpl": "{% if namespace == 'default' %}{{ name }}{% endif %}",
        }])
        state = Container(selects_block_id="block-1", fields={DROPDOWN_ID: "@idx:1"})

        msg = _render(tpl, state)

        select = msg.sections[0].selects.items[0]
        assert select.option_groups[0].options == [OptionItem(name="nginx", value="@idx:0")]
        assert select.initial_option == OptionItem(name="nginx", value="@idx:0")
        assert "nginx" in msg.sections[1].base.body.code_block

    def test_last_select_drives_preview_and_actions(self):
        """Test that the row resolved by the last select is the selected row."""
        tpl = _pods_template(selects=[
            {"name": "All", "keyTpl": "{{ name }}"},
            {"name": "Default", "keyTpl": "{% if name != 'grafana' %}{{ name }}{% endif %}"},
        ])
        state = Container(selects_block_id="block-1", fields={DROPDOWN_ID: "@idx:1"})

        msg = _render(tpl, state)

        dropdowns, preview, actions = msg.sections
        assert [s.initial_option for s in dropdowns.selects.items] == [
            OptionItem(name="grafana", value="@idx:1"),
            OptionItem(name="nginx", value="@idx:0"),
        ]
        assert preview.base.body.code_block.splitlines()[1] == "nginx   default     Running"
        assert actions.selects.items[0].option_groups[0].options == [
            OptionItem(name="logs", value="kubectl logs nginx -n default"),
        ]

    def test_select_without_options_keeps_previous_row(self):
        """Test that an omitted last select leaves the earlier selection in place."""
        tpl = _pods_template(selects=[
            {"name": "All", "keyTpl": "{{ name }}"},
            {"name": "Nothing", "keyTpl": ""},
        ])
        state = Container(selects_block_id="block-1", fields={DROPDOWN_ID: "@idx:1"})

        msg = _render(tpl, state)

        dropdowns, preview, actions = msg.sections
        assert [s.name for s in dropdowns.selects.items] == ["All"]
        assert preview.base.body.code_block.splitlines()[1] == "grafana monitoring  Running"
        assert actions.selects.items[0].option_groups[0].options == [
            OptionItem(name="logs", value="kubectl logs grafana -n monitoring"),
        ]

    def test_select_without_options_is_omitted(self):
        """Test that a dropdown with no options is not rendered."""
        tpl = _pods_template(selects=[{"name": "Nothing", "keyTpl": ""}])

        msg = _render(tpl)

        assert msg.sections[0].selects.items == []
        assert not msg.sections[0].selects.are_options_defined()

    def test_preview_template(self):
        """Test that the preview template is rendered for the selected row."""
        msg = _render(_pods_template(preview="{{ name }} is {{ status }}"))

        assert msg.sections[1].base.body.code_block == "nginx is Running"

    def test_without_actions(self):
        """Test that the actions section is empty without actions."""
        msg = _render(_pods_template(actions={}))

        assert msg.sections[2].is_empty()

    def test_header_only_output(self):
        """Test that an output without rows is reported as not found."""
        msg = _render(_pods_template(), output="NAME    NAMESPACE   STATUS\n")

        assert msg == Message(sections=[Section(base=Base(body=Body(plaintext="Not found.")))])

    def test_empty_output(self):
        """Test that empty output is reported as not found."""
        msg = _render(_pods_template(), output="")

        assert msg.sections[0].base.body.plaintext == "Not found."

    def test_unsupported_parser(self):
        """Test that unknown table flavours are reported."""
        msg = _render(_template(type="parser:table:csv"))

        assert msg.base_body.plaintext == "parser csv is not supported"
        assert not msg.has_sections()

    def test_template_error_propagates(self):
        """Test that invalid row templates raise TemplateRenderError."""
        with pytest.raises(TemplateRenderError):
            _render(_pods_template(selects=[{"name": "Pods", "keyTpl": "{{ name "}]))

    def test_preview_template_error_propagates(self):
        """Test that an invalid preview template aborts the render."""
        with pytest.raises(TemplateRenderError):
            _render(_pods_template(preview="{{ name "))

    def test_action_template_error_propagates(self):
        """Test that an invalid action template aborts the render."""
        with pytest.raises(TemplateRenderError):
            _render(_pods_template(actions={"logs": "kubectl logs {{ name "}))


class TestSelectionHelpers:
    """Tests for the selection helpers."""

    @pytest.mark.parametrize(
        "fields,expected",
        [
            ({}, 0),
            ({DROPDOWN_ID: "@idx:3"}, 3),
            ({DROPDOWN_ID: "@idx:abc"}, 0),
            ({DROPDOWN_ID: "something else"}, 0),
            ({DROPDOWN_ID: "@idx:-2"}, 0),
        ],
    )
    def test_resolve_select_idx(self, fields, expected):
        """Test decoding of the stored selection."""
        assert resolve_select_idx(Container(fields=fields), DROPDOWN_ID) == expected

    def test_resolve_select_idx_without_state(self):
        """Test that no state selects the first row."""
        assert resolve_select_idx(None, DROPDOWN_ID) == 0

    @pytest.mark.parametrize(
        "row,expected",
        [(0, 0), (1, 0), (2, 1), (3, 1), (4, 2)],
    )
    def test_nearest_option(self, row, expected):
        """Test mapping rows to option positions."""
        assert nearest_option([0, 2, 4], row) == expected

    def test_nearest_option_before_first(self):
        """Test that rows before the first option pick the first option."""
        assert nearest_option([2, 3], 0) == 0

    def test_preview_line(self):
        """Test picking the source line of a row."""
        lines = ["HEADER", "row0", "row1"]

        assert get_preview_line(lines, 1) == "row1"
        assert get_preview_line(lines, 5) == "row0"
        assert get_preview_line(["HEADER"], 0) == ""
