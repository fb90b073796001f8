"""Terminal prompter built on rich."""

from collections.abc import Sequence
from typing import Any

from rich.console import Console
from rich.prompt import Confirm, Prompt

from integrated_services.errors import PromptIOError
from integrated_services.observability import get_logger

from .questions import AnyQuestion, ConfirmQuestion, InputQuestion, SelectQuestion

logger = get_logger(__name__)


class RichPrompter:
    """Asks questions on the terminal.

    Enter accepts the default. Ctrl+C or a closed stdin aborts the batch.
    """

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def ask(self, questions: Sequence[AnyQuestion]) -> dict[str, Any]:
        answers: dict[str, Any] = {}
        for question in questions:
            if question.help:
                self.console.print(f"[dim]{question.help}[/dim]")
            try:
                answers[question.name] = self._ask_one(question)
            except (EOFError, KeyboardInterrupt) as e:
                logger.debug("Prompt aborted", question=question.name)
                raise PromptIOError(
                    "prompt aborted",
                    partial_answers=answers,
                    question=question.message,
                ) from e
            except OSError as e:
                raise PromptIOError(
                    f"terminal failure: {e}",
                    partial_answers=answers,
                    question=question.message,
                ) from e
        return answers

    def _ask_one(self, question: AnyQuestion) -> Any:
        if isinstance(question, ConfirmQuestion):
            return Confirm.ask(question.message, default=question.default, console=self.console)

        if isinstance(question, SelectQuestion):
            if question.default is not None and question.default in question.options:
                return Prompt.ask(
                    question.message,
                    choices=question.options,
                    default=question.default,
                    console=self.console,
                )
            return Prompt.ask(question.message, choices=question.options, console=self.console)

        if isinstance(question, InputQuestion):
            return Prompt.ask(question.message, default=question.default, console=self.console)

        raise TypeError(f"unknown question type: {type(question).__name__}")
