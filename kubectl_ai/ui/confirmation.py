"""
Confirmation prompt shown before a manifest is applied.

The prompt itself sits behind the ``Selector`` interface so that scripted
selectors can stand in for the terminal.
"""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from typing import List, Optional, TextIO

from rich.console import Console
from rich.prompt import Prompt

from kubectl_ai.errors import ConfirmationError

APPLY = "Apply"
DONT_APPLY = "Don't Apply"
CONFIRMATION_OPTIONS = [APPLY, DONT_APPLY]
CONFIRMATION_LABEL = "Would you like to apply this? [Apply/Don't Apply]"


class Selector(ABC):
    """Single-choice selection between labelled options."""

    @abstractmethod
    def select(self, label: str, options: List[str]) -> str:
        """
        Ask the user to pick one option.

        Args:
            label: Question to display
            options: Option labels, in display order

        Returns:
            The chosen option label

        Raises:
            ConfirmationError: If no choice could be obtained
        """


class RichSelector(Selector):
    """Numbered menu on the controlling terminal."""

    def __init__(
        self,
        console: Optional[Console] = None,
        stdin: Optional[TextIO] = None
    ):
        """
        Initialize the selector.

        Args:
            console: Rich console instance (creates new one if not provided)
            stdin: Input stream checked for a terminal (defaults to sys.stdin)
        """
        self.console = console or Console()
        self.stdin = stdin

    def select(self, label: str, options: List[str]) -> str:
        if not options:
            raise ValueError("Selection must have at least one option")

        stdin = self.stdin if self.stdin is not None else sys.stdin
        if stdin is None or not stdin.isatty():
            raise ConfirmationError(
                "confirmation requires an interactive terminal; "
                "use --no-require-confirmation to apply without prompting"
            )

        self.console.print(f"\n[bold cyan]?[/bold cyan] {label}")
        for idx, option in enumerate(options, start=1):
            self.console.print(f"{idx}. {option}")

        try:
            choice = Prompt.ask(
                "\n[bold cyan]>[/bold cyan]",
                choices=[str(idx) for idx in range(1, len(options) + 1)],
                default="1",
                console=self.console,
            )
        except (KeyboardInterrupt, EOFError) as e:
            raise ConfirmationError("confirmation prompt aborted") from e

        return options[int(choice) - 1]


def confirm_apply(require_confirmation: bool, selector: Selector) -> bool:
    """
    Decide whether the generated manifest should be applied.

    Args:
        require_confirmation: When False, apply without asking
        selector: Prompt used when confirmation is required

    Returns:
        True if the manifest should be applied

    Raises:
        ConfirmationError: If the prompt could not complete
    """
    if not require_confirmation:
        return True

    result = selector.select(CONFIRMATION_LABEL, CONFIRMATION_OPTIONS)
    return result == APPLY
