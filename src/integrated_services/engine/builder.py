"""Helpers shared by the interactive spec builders."""

from collections.abc import Mapping
from typing import Any, TypeVar

from integrated_services.errors import InvalidEnumChoice, InvalidNumeric, UnsupportedChoice
from integrated_services.prompts import AnyQuestion, ConfirmQuestion, Prompter, SelectQuestion

SKIP = "skip"

ChoiceT = TypeVar("ChoiceT")


def ask_one(prompter: Prompter, question: AnyQuestion) -> Any:
    """Ask a single question and return its answer.

    Raises:
        InvalidEnumChoice: A select answer is not one of the offered options.
    """
    answer = prompter.ask([question])[question.name]
    if isinstance(question, SelectQuestion) and answer not in question.options:
        raise InvalidEnumChoice(
            f"invalid choice for {question.name}",
            choice=answer,
            options=", ".join(question.options),
        )
    return answer


def ask_enabled(prompter: Prompter, component: str, default: bool) -> bool:
    """Ask whether ``component`` should be enabled."""
    return bool(
        ask_one(
            prompter,
            ConfirmQuestion(
                name="enabled",
                message=f"Do you want to enable {component}?",
                default=default,
            ),
        )
    )


def parse_unsigned(field: str, raw: str) -> int:
    """Parse a non-negative integer typed by the operator.

    Raises:
        InvalidNumeric: ``raw`` is not a non-negative integer.
    """
    text = str(raw).strip()
    # str.isdigit alone also accepts superscripts and non-ASCII digits
    if not (text.isascii() and text.isdigit()):
        raise InvalidNumeric(f"failed to parse {field}", field=field, value=raw)
    return int(text)


def choose(menu: Mapping[str, ChoiceT], answer: str, what: str) -> ChoiceT:
    """Map a select answer back onto its fixed menu entry.

    Raises:
        UnsupportedChoice: ``answer`` is not part of the menu.
    """
    try:
        return menu[answer]
    except KeyError:
        raise UnsupportedChoice(f"not supported {what}", choice=answer) from None
