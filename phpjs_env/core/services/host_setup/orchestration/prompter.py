"""
L5 Orchestration — Operator prompts.

The procedure only ever asks for a line of text; interpretation
(yes/no, channel names) happens in the domain layer. Prompts block
with no timeout.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import click


class Prompter(ABC):
    """Source of operator answers."""

    @abstractmethod
    def ask(self, question: str) -> str:
        """Show ``question`` and return the raw answer (may be empty)."""


class ClickPrompter(Prompter):
    """Interactive prompts on the controlling terminal."""

    def ask(self, question: str) -> str:
        return click.prompt(
            question,
            default="",
            show_default=False,
            prompt_suffix=" ",
        )
