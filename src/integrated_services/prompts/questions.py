"""Question descriptors and the prompter contract.

A prompter asks a batch of questions strictly in order and returns the
answers keyed by each question's ``name``. The first failure aborts the
batch with ``PromptIOError``; answers collected before it are attached to
the error and nothing is rolled back.
"""

from collections.abc import Sequence
from typing import Any, Literal, Protocol

from pydantic import BaseModel, Field, field_validator


class Question(BaseModel):
    """Fields shared by every question kind."""

    name: str = Field(description="Key of the answer in the returned mapping")
    message: str
    help: str | None = None


class ConfirmQuestion(Question):
    """Yes/no question."""

    kind: Literal["confirm"] = "confirm"
    default: bool = False


class InputQuestion(Question):
    """Free-text question."""

    kind: Literal["input"] = "input"
    default: str = ""


class SelectQuestion(Question):
    """Single choice among fixed string options."""

    kind: Literal["select"] = "select"
    options: list[str]
    default: str | None = None

    @field_validator("options")
    @classmethod
    def validate_options(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("select question needs at least one option")
        return v


AnyQuestion = ConfirmQuestion | InputQuestion | SelectQuestion


class Prompter(Protocol):
    """Question flow primitive."""

    def ask(self, questions: Sequence[AnyQuestion]) -> dict[str, Any]:
        """Ask ``questions`` in order and return answers by question name."""
        ...
