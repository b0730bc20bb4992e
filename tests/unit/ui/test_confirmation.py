"""Unit tests for the confirmation gate."""

from unittest.mock import Mock, patch

import pytest

from kubectl_ai.errors import ConfirmationError
from kubectl_ai.ui.confirmation import (
    APPLY,
    CONFIRMATION_LABEL,
    CONFIRMATION_OPTIONS,
    DONT_APPLY,
    RichSelector,
    Selector,
    confirm_apply,
)


class ScriptedSelector(Selector):
    """Selector that returns a fixed answer and records calls."""

    def __init__(self, answer):
        self.answer = answer
        self.calls = []

    def select(self, label, options):
        self.calls.append((label, list(options)))
        return self.answer


def tty(is_tty=True):
    """Create a fake stdin."""
    stream = Mock()
    stream.isatty.return_value = is_tty
    return stream


class TestConfirmApply:
    """Tests for confirm_apply."""

    def test_confirmation_disabled(self):
        """Test that no prompt is shown when confirmation is disabled."""
        selector = ScriptedSelector(DONT_APPLY)

        assert confirm_apply(False, selector) is True
        assert selector.calls == []

    def test_apply_selected(self):
        """Test that choosing Apply confirms."""
        selector = ScriptedSelector(APPLY)

        assert confirm_apply(True, selector) is True
        assert selector.calls == [(CONFIRMATION_LABEL, [APPLY, DONT_APPLY])]

    def test_dont_apply_selected(self):
        """Test that choosing Don't Apply rejects."""
        assert confirm_apply(True, ScriptedSelector(DONT_APPLY)) is False

    def test_selector_error_propagates(self):
        """Test that prompt failures are not turned into a decision."""
        selector = Mock(spec=Selector)
        selector.select.side_effect = ConfirmationError("confirmation prompt aborted")

        with pytest.raises(ConfirmationError):
            confirm_apply(True, selector)

    def test_options(self):
        """Test the two option labels."""
        assert CONFIRMATION_OPTIONS == ["Apply", "Don't Apply"]


class TestRichSelector:
    """Tests for RichSelector."""

    @pytest.fixture
    def mock_console(self):
        """Create mock console."""
        return Mock()

    @patch("kubectl_ai.ui.confirmation.Prompt.ask")
    def test_select_first_option(self, mock_ask, mock_console):
        """Test selecting the first option by number."""
        mock_ask.return_value = "1"
        selector = RichSelector(mock_console, stdin=tty())

        assert selector.select(CONFIRMATION_LABEL, CONFIRMATION_OPTIONS) == APPLY
        assert mock_ask.call_args.kwargs["choices"] == ["1", "2"]

    @patch("kubectl_ai.ui.confirmation.Prompt.ask")
    def test_select_second_option(self, mock_ask, mock_console):
        """Test selecting the second option by number."""
        mock_ask.return_value = "2"
        selector = RichSelector(mock_console, stdin=tty())

        assert selector.select(CONFIRMATION_LABEL, CONFIRMATION_OPTIONS) == DONT_APPLY

    @patch("kubectl_ai.ui.confirmation.Prompt.ask")
    def test_options_displayed(self, mock_ask, mock_console):
        """Test that the label and numbered options are printed."""
        mock_ask.return_value = "1"
        selector = RichSelector(mock_console, stdin=tty())

        selector.select(CONFIRMATION_LABEL, CONFIRMATION_OPTIONS)

        printed = " ".join(str(call.args[0]) for call in mock_console.print.call_args_list)
        assert "Would you like to apply this?" in printed
        assert "1. Apply" in printed
        assert "2. Don't Apply" in printed

    @patch("kubectl_ai.ui.confirmation.Prompt.ask")
    def test_no_terminal(self, mock_ask, mock_console):
        """Test that a non-interactive stdin is a confirmation error."""
        selector = RichSelector(mock_console, stdin=tty(False))

        with pytest.raises(ConfirmationError, match="interactive terminal"):
            selector.select(CONFIRMATION_LABEL, CONFIRMATION_OPTIONS)

        mock_ask.assert_not_called()

    @patch("kubectl_ai.ui.confirmation.Prompt.ask")
    def test_keyboard_interrupt(self, mock_ask, mock_console):
        """Test that an interrupt during the prompt is a confirmation error."""
        mock_ask.side_effect = KeyboardInterrupt()
        selector = RichSelector(mock_console, stdin=tty())

        with pytest.raises(ConfirmationError, match="aborted"):
            selector.select(CONFIRMATION_LABEL, CONFIRMATION_OPTIONS)

    @patch("kubectl_ai.ui.confirmation.Prompt.ask")
    def test_end_of_input(self, mock_ask, mock_console):
        """Test that EOF during the prompt is a confirmation error."""
        mock_ask.side_effect = EOFError()
        selector = RichSelector(mock_console, stdin=tty())

        with pytest.raises(ConfirmationError):
            selector.select(CONFIRMATION_LABEL, CONFIRMATION_OPTIONS)

    def test_empty_options(self, mock_console):
        """Test that a selection needs options."""
        selector = RichSelector(mock_console, stdin=tty())

        with pytest.raises(ValueError):
            selector.select(CONFIRMATION_LABEL, [])
