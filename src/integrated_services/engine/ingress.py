"""Ingress question subtree shared by every exposable component."""

from integrated_services.models import BaseIngressSpec, IngressSpecWithSecret, SecretKind
from integrated_services.prompts import ConfirmQuestion, InputQuestion, Prompter

from .builder import ask_one
from .codec import carry_extras
from .secrets import SecretResolver


def ask_ingress(prompter: Prompter, component: str, defaults: BaseIngressSpec) -> BaseIngressSpec:
    """Ask whether and where ``component`` is exposed."""
    enabled = ask_one(
        prompter,
        ConfirmQuestion(
            name="enabled",
            message=f"Do you want to enable {component} Ingress?",
            default=defaults.enabled,
        ),
    )

    domain = ""
    path = ""
    if enabled:
        answers = prompter.ask(
            [
                InputQuestion(
                    name="domain",
                    message=f"Please provide {component} Ingress domain:",
                    help="Leave empty to use cluster's IP",
                    default=defaults.domain,
                ),
                InputQuestion(
                    name="path",
                    message=f"Please provide {component} Ingress path:",
                    default=defaults.path,
                ),
            ]
        )
        domain = answers["domain"]
        path = answers["path"]

    return BaseIngressSpec(enabled=enabled, domain=domain, path=path, **carry_extras(defaults))


def ask_ingress_with_secret(
    prompter: Prompter,
    resolver: SecretResolver,
    component: str,
    defaults: IngressSpecWithSecret,
) -> IngressSpecWithSecret:
    """Ask the ingress subtree, then the htpasswd secret protecting it."""
    base = ask_ingress(prompter, component, defaults)

    secret_id = ""
    if base.enabled:
        secret_id = resolver.resolve(SecretKind.HTPASSWD, defaults.secret_id, allow_skip=True)

    return IngressSpecWithSecret(**base.model_dump(), secret_id=secret_id)
