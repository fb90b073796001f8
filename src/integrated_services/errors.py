"""Error taxonomy of the configuration engine.

Every error carries structured details (field, component, secret kind) and
an optional chain of context messages added while it travels up through the
builder, so the operator sees where in the question tree things went wrong.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any


class IntegratedServiceError(Exception):
    """Base error for the configuration engine."""

    def __init__(self, message: str, **details: Any):
        super().__init__(message)
        self.message = message
        self.details: dict[str, Any] = details
        self.context: list[str] = []

    def add_context(self, message: str) -> "IntegratedServiceError":
        """Prefix a context message, keeping the error type intact."""
        self.context.insert(0, message)
        return self

    def __str__(self) -> str:
        text = ": ".join([*self.context, self.message])
        if self.details:
            rendered = ", ".join(f"{key}={value}" for key, value in self.details.items())
            text = f"{text} ({rendered})"
        return text


class PromptIOError(IntegratedServiceError):
    """Terminal or input failure while asking questions."""

    def __init__(self, message: str, partial_answers: dict[str, Any] | None = None, **details: Any):
        super().__init__(message, **details)
        self.partial_answers = partial_answers or {}


class SchemaMismatch(IntegratedServiceError):
    """Stored document does not decode into the expected typed shape."""


class InvalidNumeric(IntegratedServiceError):
    """Operator input could not be parsed as a number."""


class InvalidEnumChoice(IntegratedServiceError):
    """Operator input is not one of the accepted values."""


class SecretLookupFailure(IntegratedServiceError):
    """Listing stored credentials failed."""


class ValidationFailure(IntegratedServiceError):
    """Built or stored spec violates a schema or business rule."""

    def __init__(self, violations: list[str], **details: Any):
        message = violations[0] if len(violations) == 1 else "; ".join(violations)
        super().__init__(message, **details)
        self.violations = violations


class UnsupportedChoice(IntegratedServiceError):
    """A value outside a fixed menu reached the builder."""


class BackendRequestError(IntegratedServiceError):
    """The Pipeline API rejected a request or could not be reached."""

    def __init__(self, message: str, status_code: int | None = None, **details: Any):
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(message, **details)
        self.status_code = status_code


@contextmanager
def error_context(message: str) -> Iterator[None]:
    """Prefix ``message`` to any engine error raised inside the block.

    Usage:
        with error_context("error during getting Grafana options"):
            grafana = ask_grafana(defaults.grafana)
    """
    try:
        yield
    except IntegratedServiceError as e:
        e.add_context(message)
        raise
