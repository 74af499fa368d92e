"""Rester CLI - Command-line interface.

Usage:
    rester create --group <group> --api-name <class> [--base-class yes|no]
    rester send <url> [--method get] [--header K:V] [--data K=V]
"""

import json
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from rester.exceptions import ResterApiException
from rester.types import ContentType

console = Console()
app = typer.Typer(
    name="rester",
    help="Build and send REST API requests from reusable request definitions",
    no_args_is_help=True,
)

CREATE_HELP = """Generate a new API class inside a specific group folder.

Usage:
    rester create --group <group> --api-name <class> --base-class <yes or no>

Arguments:
    --group       The group package under --path where the API classes are created.
    --api-name    The name of the API class to generate.
    --base-class  'yes' (default) also creates a <Group>Base class supplying the
                  base URL; 'no' creates a standalone class with a final endpoint.

Examples:
    rester create --group Billing --api-name CreateInvoice
        - This will create the following files
            rester_apis/billing/billing_base.py (optional)
            rester_apis/billing/create_invoice.py

If the group folder doesn't exist, it will be created automatically."""


def setup_logging(verbose: bool = False) -> None:
    """Set up logging with rich handler."""
    level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_time=False, show_path=False)],
    )

    logging.getLogger("rester").setLevel(level)

    # Quiet down httpx
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


@app.command()
def create(
    group: str = typer.Option(
        None,
        "--group",
        "-g",
        help="The API group",
    ),
    api_name: str = typer.Option(
        None,
        "--api-name",
        "-n",
        help="The API class name",
    ),
    base_class: str = typer.Option(
        "yes",
        "--base-class",
        help="Whether a group base class is needed (yes or no)",
    ),
    path: Path = typer.Option(
        Path("rester_apis"),
        "--path",
        "-p",
        help="Directory holding the API groups",
    ),
) -> None:
    """Generate a new rester API group class from a template."""
    from rester.modules.scaffolding import scaffold_api

    if not group or not api_name:
        console.print(CREATE_HELP)
        return

    if base_class not in ("yes", "no"):
        console.print(f"[red]Invalid --base-class value: {base_class}[/red]")
        console.print(CREATE_HELP)
        raise typer.Exit(1)

    result = scaffold_api(path, group, api_name, base_class=base_class == "yes")

    if result.folder_created:
        console.print(f"Created directory: {result.folder}")
    else:
        console.print(f"Directory already exists: {result.folder}")

    for file_path in result.created:
        console.print(f"[green]✓[/green] Created {file_path}")
    for file_path in result.skipped:
        console.print(f"[yellow]•[/yellow] Skipped existing {file_path}")


def _parse_pairs(items: list[str], separator: str, label: str) -> dict[str, str]:
    pairs: dict[str, str] = {}
    for item in items:
        key, found, value = item.partition(separator)
        if not found or not key.strip():
            raise typer.BadParameter(f"Expected KEY{separator}VALUE, got {item!r}", param_hint=label)
        pairs[key.strip()] = value.strip()
    return pairs


@app.command()
def send(
    url: str = typer.Argument(..., help="Full endpoint URL"),
    method: str = typer.Option(
        "GET",
        "--method",
        "-m",
        help="HTTP method (GET, POST, PUT, PATCH, DELETE)",
    ),
    header: list[str] = typer.Option(
        [],
        "--header",
        "-H",
        help="Request header as KEY:VALUE (repeatable)",
    ),
    data: list[str] = typer.Option(
        [],
        "--data",
        "-d",
        help="Payload field as KEY=VALUE (repeatable)",
    ),
    content_type: str = typer.Option(
        ContentType.JSON.value,
        "--content-type",
        "-c",
        help="Body encoding (json, form_params, multipart, body)",
    ),
    log: bool = typer.Option(
        False,
        "--log/--no-log",
        help="Write an access-log record",
    ),
    output_json: bool = typer.Option(
        False,
        "--json",
        "-j",
        help="Output the response as JSON",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging",
    ),
) -> None:
    """Send a single request and print the response."""
    from rester.rester import Rester

    setup_logging(verbose=verbose)

    try:
        body_type = ContentType(content_type.lower())
    except ValueError:
        console.print(f"[red]Invalid content type: {content_type}[/red]")
        raise typer.Exit(1)

    headers = _parse_pairs(header, ":", "--header")
    payload = _parse_pairs(data, "=", "--data")

    request = (
        Rester()
        .overwrite_endpoint(url)
        .with_method(method)
        .with_content_type(body_type)
        .add_headers(headers)
        .add_payload(payload)
        .with_logging(log)
    )

    try:
        request.send()
    except ResterApiException as e:
        console.print(f"[red]Error:[/red] {e.message} ({e.http_status_code})")
        raise typer.Exit(1)
    except Exception as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)

    if output_json:
        print(json.dumps(request.get(), indent=2))
    else:
        _output_rich(request.get())


def _output_rich(result: dict) -> None:
    """Output a response with rich formatting."""
    status = result["status_code"]
    color = "green" if status is not None and status < 400 else "red"

    console.print(Panel(
        f"[{color}]{status}[/{color}]",
        title="Status",
        border_style=color,
    ))

    headers = result["headers"] or {}
    if headers:
        table = Table(title="Response Headers")
        table.add_column("Header")
        table.add_column("Value")
        for name, values in headers.items():
            table.add_row(name, ", ".join(values))
        console.print(table)

    content = result["content"] or ""
    console.print(Panel(
        escape(content[:2000] + "..." if len(content) > 2000 else content),
        title="Content",
    ))


@app.command()
def version() -> None:
    """Show version information."""
    from rester import __version__
    console.print(f"rester version {__version__}")


if __name__ == "__main__":
    app()
