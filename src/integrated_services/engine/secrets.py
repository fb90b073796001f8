"""Selecting stored credentials by name.

Specs only ever hold secret identifiers; names are shown to the operator
while asking and mapped back to identifiers before anything is stored.
"""

from collections.abc import Sequence
from typing import Protocol

from integrated_services.errors import BackendRequestError, SecretLookupFailure
from integrated_services.models import SecretItem, SecretKind
from integrated_services.observability import get_logger
from integrated_services.prompts import Prompter, SelectQuestion

from .builder import SKIP, ask_one

logger = get_logger(__name__)


class SecretLister(Protocol):
    """Backend capability the resolver needs."""

    def list_secrets(self, kind: SecretKind | str | None = None) -> list[SecretItem]: ...


def skip_option(secrets: Sequence[SecretItem]) -> str:
    """Label of the "no secret" option, distinct from every stored secret name."""
    names = {secret.name for secret in secrets}
    label = SKIP
    while label in names:
        label = f"<{label}>"
    return label


def default_secret_name(
    secrets: Sequence[SecretItem],
    current_id: str,
    allow_skip: bool,
) -> str | None:
    """Name to preselect for ``current_id``.

    The first secret with a matching identifier wins. Without a match the
    default is the skip option when skipping is allowed, otherwise there is
    none.
    """
    if current_id:
        for secret in secrets:
            if secret.id == current_id:
                return secret.name
    return skip_option(secrets) if allow_skip else None


class SecretResolver:
    """Lets the operator pick a stored secret of a given kind."""

    def __init__(self, lister: SecretLister, prompter: Prompter):
        self.lister = lister
        self.prompter = prompter

    def resolve(self, kind: SecretKind, current_id: str = "", allow_skip: bool = True) -> str:
        """Return the identifier of the chosen secret, or "" when none was chosen.

        Raises:
            SecretLookupFailure: Listing secrets of ``kind`` failed.
        """
        kind_value = kind.value if isinstance(kind, SecretKind) else str(kind)

        try:
            secrets = self.lister.list_secrets(kind)
        except BackendRequestError as e:
            raise SecretLookupFailure(
                "failed to get secret(s)", secret_type=kind_value
            ) from e

        if not secrets:
            # TODO: offer creating a secret of this kind in place
            logger.info("No stored secrets to choose from", secret_type=kind_value)
            return ""

        skip = skip_option(secrets)
        if allow_skip and skip != SKIP:
            logger.warning(
                "A stored secret is named like the skip option",
                secret_type=kind_value,
                skip_option=skip,
            )

        options: list[str] = [skip] if allow_skip else []
        ids_by_name: dict[str, str] = {}
        for secret in secrets:
            if secret.name in ids_by_name:
                logger.warning(
                    "Secret name is ambiguous, using the last one listed",
                    secret_type=kind_value,
                    secret_name=secret.name,
                )
            else:
                options.append(secret.name)
            ids_by_name[secret.name] = secret.id

        answer = ask_one(
            self.prompter,
            SelectQuestion(
                name="secret",
                message="Provider secret:",
                options=options,
                default=default_secret_name(secrets, current_id, allow_skip),
            ),
        )

        if allow_skip and answer == skip:
            return ""
        return ids_by_name[answer]
