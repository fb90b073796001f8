"""Display tables for integrated service details."""

from collections.abc import Iterator, Mapping
from typing import Any

from rich.console import Console
from rich.table import Table

from integrated_services.models import IngressSpecWithSecret, OutputItems


class DisplayTable:
    """Ordered sections of label/value rows.

    Built fresh for every render and never persisted.
    """

    def __init__(self) -> None:
        self._sections: dict[str, dict[str, Any]] = {}

    def add_section(self, name: str, rows: Mapping[str, Any]) -> None:
        """Add or replace a section, keeping the original position on replace."""
        self._sections[name] = dict(rows)

    def section(self, name: str) -> dict[str, Any]:
        return self._sections[name]

    def __contains__(self, name: object) -> bool:
        return name in self._sections

    def __iter__(self) -> Iterator[str]:
        return iter(self._sections)

    def __len__(self) -> int:
        return len(self._sections)

    def to_dict(self) -> dict[str, dict[str, Any]]:
        return {name: dict(rows) for name, rows in self._sections.items()}


def _render_value(value: Any) -> str:
    if isinstance(value, bool):
        return "yes" if value else "no"
    if value is None:
        return ""
    return str(value)


def render_table(table: DisplayTable, console: Console | None = None) -> None:
    """Print every section as its own two-column table."""
    console = console or Console()
    for name, rows in table.to_dict().items():
        section = Table(title=name.replace("_", " "), show_header=True, header_style="bold")
        section.add_column("Key")
        section.add_column("Value")
        for label, value in rows.items():
            section.add_row(label, _render_value(value))
        console.print(section)


def output_rows(output: OutputItems) -> dict[str, str]:
    """Endpoint rows every exposable component shows."""
    return {
        "url": output.url,
        "version": output.version,
        "serviceUrl": output.service_url,
    }


def ingress_component_rows(output: OutputItems, ingress: IngressSpecWithSecret) -> dict[str, str]:
    """Rows of an ingress-protected component.

    The secret is only shown for an enabled ingress; the operator's choice
    wins over the one the backend generated.
    """
    secret_id = ""
    if ingress.enabled:
        secret_id = ingress.secret_id or output.secret_id
    return {
        **output_rows(output),
        "secretID": secret_id,
        "path": ingress.path,
        "domain": ingress.domain,
    }
