"""Interactive question primitive."""

from .console import RichPrompter
from .questions import (
    AnyQuestion,
    ConfirmQuestion,
    InputQuestion,
    Prompter,
    Question,
    SelectQuestion,
)

__all__ = [
    "AnyQuestion",
    "ConfirmQuestion",
    "InputQuestion",
    "Prompter",
    "Question",
    "RichPrompter",
    "SelectQuestion",
]
