"""
Prompt collaborator.

The workflow asks questions only through a ``Prompter``; ``ConsolePrompter``
is the interactive terminal implementation built on rich.
"""

from collections.abc import Callable, Sequence
from typing import Protocol

from rich.console import Console
from rich.prompt import Confirm, Prompt

Validator = Callable[[str], str | None]
Choice = tuple[str, str]  # (value, label)


class Prompter(Protocol):
    """Enumerated choices and validated free-text input."""

    def select(self, message: str, choices: Sequence[Choice], default: str | None = None) -> str: ...

    def text(self, message: str, default: str | None = None, validate: Validator | None = None) -> str: ...

    def confirm(self, message: str, default: bool = False) -> bool: ...

    def secret(self, message: str) -> str: ...


class ConsolePrompter:
    """Terminal prompter using rich prompts."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def select(self, message: str, choices: Sequence[Choice], default: str | None = None) -> str:
        """Show a numbered menu and return the value of the picked choice."""
        self.console.print(f"[bold]{message}[/bold]")
        for index, (_, label) in enumerate(choices, 1):
            self.console.print(f"  {index}) {label}")

        numbers = [str(i) for i in range(1, len(choices) + 1)]
        default_number = None
        for index, (value, _) in enumerate(choices, 1):
            if value == default:
                default_number = str(index)

        answer = Prompt.ask(
            "Enter number",
            choices=numbers,
            default=default_number or numbers[0],
            console=self.console,
        )
        return choices[int(answer) - 1][0]

    def text(self, message: str, default: str | None = None, validate: Validator | None = None) -> str:
        """Ask for free text, re-prompting while ``validate`` returns an error."""
        while True:
            if default is None:
                answer = Prompt.ask(message, console=self.console)
            else:
                answer = Prompt.ask(message, default=default, console=self.console)
            answer = (answer or "").strip()
            error = validate(answer) if validate else None
            if error is None:
                return answer
            self.console.print(f"[red]{error}[/red]")

    def confirm(self, message: str, default: bool = False) -> bool:
        return Confirm.ask(message, default=default, console=self.console)

    def secret(self, message: str) -> str:
        return Prompt.ask(message, password=True, console=self.console).strip()
