"""
integrated-services CLI - Configure integrated services of Pipeline clusters.

Commands:
    integrated-services service list        List integrated services of a cluster
    integrated-services service get         Show the details of one service
    integrated-services service activate    Build a spec interactively and activate
    integrated-services service update      Rebuild the current spec and update
    integrated-services service deactivate  Deactivate a service

Usage::

    PIPELINE_TOKEN=... PIPELINE_ORGANIZATION_ID=1 integrated-services service get 42 monitoring
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import click
from rich.console import Console
from rich.table import Table

from integrated_services import __version__
from integrated_services.clients import PipelineClient
from integrated_services.config import LogFormat, LogLevel, Settings, get_settings
from integrated_services.engine import SecretResolver, ServiceRegistry, render_table
from integrated_services.errors import IntegratedServiceError
from integrated_services.models import ServiceStatus, ValidationPolicy
from integrated_services.observability import get_logger, setup_logging
from integrated_services.prompts import Prompter, RichPrompter
from integrated_services.services import build_registry

logger = get_logger(__name__)


class CliState:
    """Collaborators shared by every command of one invocation."""

    def __init__(
        self,
        client: PipelineClient,
        prompter: Prompter,
        console: Console | None = None,
        settings: Settings | None = None,
    ):
        self.client = client
        self.prompter = prompter
        self.console = console or Console()
        self.settings = settings or get_settings()

    @property
    def registry(self) -> ServiceRegistry:
        policy = ValidationPolicy(require_ingress_auth=self.settings.require_ingress_auth)
        return build_registry(self.prompter, SecretResolver(self.client, self.prompter), policy)


@contextmanager
def reported_errors() -> Iterator[None]:
    """Turn engine errors into a one-line message and a non-zero exit."""
    try:
        yield
    except IntegratedServiceError as e:
        logger.debug("Command failed", error_type=type(e).__name__, details=e.details)
        raise click.ClickException(str(e)) from e


@click.group()
@click.version_option(__version__, prog_name="integrated-services")
@click.option(
    "--log-level",
    type=click.Choice([level.value for level in LogLevel], case_sensitive=False),
    default=None,
    help="Override the configured log level",
)
@click.option(
    "--log-format",
    type=click.Choice([fmt.value for fmt in LogFormat], case_sensitive=False),
    default=None,
    help="Override the configured log format",
)
@click.pass_context
def main(ctx: click.Context, log_level: str | None, log_format: str | None) -> None:
    """Configure integrated services of Pipeline clusters."""
    setup_logging(log_level.upper() if log_level else None, log_format)

    if ctx.obj is None:
        settings = get_settings()
        console = Console()
        client = PipelineClient.from_settings(settings.pipeline)
        ctx.call_on_close(client.close)
        ctx.obj = CliState(client, RichPrompter(console), console, settings)


@main.group()
def service() -> None:
    """Manage integrated services of a cluster."""


@service.command("list")
@click.argument("cluster_id", type=int)
@click.pass_obj
def list_services(state: CliState, cluster_id: int) -> None:
    """List the integrated services of a cluster and their status."""
    with reported_errors():
        services = state.client.list_services(cluster_id)

    table = Table(title=f"Integrated services of cluster {cluster_id}")
    table.add_column("Service")
    table.add_column("Status")
    registry = state.registry
    for manager in registry:
        details = services.get(manager.service_name)
        status = details.status if details else ServiceStatus.INACTIVE.value
        table.add_row(manager.service_name, status)
    for name in sorted(set(services) - set(registry.names())):
        table.add_row(name, f"{services[name].status} (not supported)")
    state.console.print(table)


@service.command("get")
@click.argument("cluster_id", type=int)
@click.argument("service_name")
@click.pass_obj
def get_service(state: CliState, cluster_id: int, service_name: str) -> None:
    """Show the details of an integrated service."""
    with reported_errors():
        manager = state.registry.get(service_name)
        details = state.client.get_service(cluster_id, service_name)
        render_table(manager.write_details_table(details), state.console)


@service.command("activate")
@click.argument("cluster_id", type=int)
@click.argument("service_name")
@click.option("--all-errors", is_flag=True, help="Report every validation error, not just the first")
@click.pass_obj
def activate_service(state: CliState, cluster_id: int, service_name: str, all_errors: bool) -> None:
    """Build a spec interactively and activate the service."""
    with reported_errors():
        manager = state.registry.get(service_name)
        spec = manager.build_activate_request()
        manager.validate_spec(spec, aggregate=all_errors)
        state.client.activate_service(cluster_id, service_name, spec)
    click.echo(f"{manager.readable_name} activation requested")


@service.command("update")
@click.argument("cluster_id", type=int)
@click.argument("service_name")
@click.option("--all-errors", is_flag=True, help="Report every validation error, not just the first")
@click.pass_obj
def update_service(state: CliState, cluster_id: int, service_name: str, all_errors: bool) -> None:
    """Rebuild the current spec interactively and update the service."""
    with reported_errors():
        manager = state.registry.get(service_name)
        details = state.client.get_service(cluster_id, service_name)
        if details.status == ServiceStatus.INACTIVE.value:
            raise click.ClickException(f"{manager.readable_name} is not active, activate it first")
        spec = manager.build_update_request(details.spec)
        manager.validate_spec(spec, aggregate=all_errors)
        state.client.update_service(cluster_id, service_name, spec)
    click.echo(f"{manager.readable_name} update requested")


@service.command("deactivate")
@click.argument("cluster_id", type=int)
@click.argument("service_name")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_obj
def deactivate_service(state: CliState, cluster_id: int, service_name: str, yes: bool) -> None:
    """Deactivate an integrated service."""
    with reported_errors():
        manager = state.registry.get(service_name)
        if not yes:
            click.confirm(f"Do you want to deactivate {manager.readable_name}?", abort=True)
        state.client.deactivate_service(cluster_id, service_name)
    click.echo(f"{manager.readable_name} deactivation requested")


if __name__ == "__main__":
    main()
