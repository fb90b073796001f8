"""Business-rule validation of typed specs.

Specs yield their violations lazily, so the default fail-fast mode stops at
the first one; ``aggregate=True`` reports them all at once.
"""

from integrated_services.errors import ValidationFailure
from integrated_services.models import ServiceSpecModel, ValidationPolicy


def collect_violations(
    spec: ServiceSpecModel,
    policy: ValidationPolicy | None = None,
) -> list[str]:
    """Every rule ``spec`` violates, in question order."""
    return list(spec.iter_violations(policy or ValidationPolicy()))


def validate_spec(
    spec: ServiceSpecModel,
    policy: ValidationPolicy | None = None,
    aggregate: bool = False,
) -> None:
    """Check ``spec`` before it is sent to the backend.

    Raises:
        ValidationFailure: On the first violation, or on all of them when
            ``aggregate`` is set.
    """
    policy = policy or ValidationPolicy()

    if aggregate:
        violations = collect_violations(spec, policy)
        if violations:
            raise ValidationFailure(violations, count=len(violations))
        return

    first = next(spec.iter_violations(policy), None)
    if first is not None:
        raise ValidationFailure([first])
