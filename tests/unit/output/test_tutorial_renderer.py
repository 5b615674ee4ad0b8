"""Unit tests for the paginated tutorial renderer."""

import pytest

from xrun.api.message import ButtonStyle
from xrun.output.tutorial import TutorialWrapper, page_window
from xrun.template.model import Template


def _tutorial(buttons: int, page: int = 2) -> Template:
    return Template.model_validate({
        "trigger": {"command": "quickstart"},
        "type": "tutorial",
        "message": {
            "header": "Getting started",
            "paginate": {"page": page},
            "buttons": [
                {"name": f"Step {i}", "command": f"{{{{BotName}}}} x run step {i}"}
                for i in range(buttons)
            ],
        },
    })


def _render(template: Template, page: int = 0):
    return TutorialWrapper().render_message("quickstart", "", None, template.with_current_page(page))


def _names(buttons):
    return [b.name for b in buttons]


class TestTutorialWrapper:
    """Tests for TutorialWrapper.render_message."""

    def test_first_page(self):
        """Test the first page of a multi-page tutorial."""
        msg = _render(_tutorial(5))

        header, body, pagination = msg.sections
        assert header.base.header == "Getting started"
        assert _names(body.buttons) == ["Step 0", "Step 1"]
        assert len(pagination.buttons) == 1
        assert pagination.buttons[0].name == "Next"
        assert pagination.buttons[0].command == "{{BotName}} x run quickstart @page:1"
        assert pagination.buttons[0].style == ButtonStyle.PRIMARY
        assert msg.only_visible_for_you
        assert not msg.replace_original

    def test_middle_page(self):
        """Test that a middle page has both pagination buttons."""
        msg = _render(_tutorial(5), page=1)

        _, body, pagination = msg.sections
        assert _names(body.buttons) == ["Step 2", "Step 3"]
        assert _names(pagination.buttons) == ["Prev", "Next"]
        assert pagination.buttons[0].command == "{{BotName}} x run quickstart @page:0"
        assert pagination.buttons[1].command == "{{BotName}} x run quickstart @page:2"
        assert msg.replace_original

    def test_last_page(self):
        """Test that the last page has no next button."""
        msg = _render(_tutorial(5), page=2)

        _, body, pagination = msg.sections
        assert _names(body.buttons) == ["Step 4"]
        assert _names(pagination.buttons) == ["Prev"]

    def test_page_beyond_end_is_clamped(self):
        """Test that an out of range page shows the remaining buttons."""
        msg = _render(_tutorial(5), page=10)

        _, body, pagination = msg.sections
        assert _names(body.buttons) == ["Step 4"]
        assert "Next" not in _names(pagination.buttons)

    def test_single_page_has_no_pagination(self):
        """Test that pagination is omitted when all buttons fit."""
        msg = _render(_tutorial(2, page=5))

        _, body, pagination = msg.sections
        assert _names(body.buttons) == ["Step 0", "Step 1"]
        assert pagination.buttons == []

    def test_without_buttons(self):
        """Test a tutorial with no buttons."""
        msg = _render(_tutorial(0))

        assert msg.sections[1].buttons == []
        assert msg.sections[2].buttons == []


class TestPageWindow:
    """Tests for page_window."""

    @pytest.mark.parametrize(
        "total,size,page,expected",
        [
            (5, 2, 0, (0, 2)),
            (5, 2, 2, (4, 5)),
            (5, 2, 9, (4, 5)),
            (0, 3, 0, (0, 0)),
            (0, 3, 4, (0, 0)),
        ],
    )
    def test_window(self, total, size, page, expected):
        """Test the slice boundaries."""
        assert page_window(total, size, page) == expected
