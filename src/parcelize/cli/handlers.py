"""Command handlers for the Parcelize CLI.

Each handler builds a client from the CLI context, runs one client
operation and renders the result as rich console output or as the JSON
envelope. Handlers return the process exit code.
"""

from __future__ import annotations

import logging
from dataclasses import fields, is_dataclass
from typing import Any, Callable

import typer
from rich.console import Console
from rich.table import Table

from parcelize.cli.context import CliContext
from parcelize.cli.json_formatter import format_json_output
from parcelize.config.loader import get_config
from parcelize.services.parcel_client import ParcelClient, create_client
from parcelize.shared.constants import CLIDefaults, CLIMessages, LogConfig
from parcelize.shared.errors import ParcelError, create_cli_output_error
from parcelize.shared.logging import setup_structured_logger
from parcelize.shared.models import Product
from parcelize.shared.utils.dataclass_serialization import to_serializable

logger = logging.getLogger(__name__)

Operation = Callable[[ParcelClient], Any]


def _configure_logging(context: CliContext) -> None:
    settings = get_config()
    if context.debug:
        level = LogConfig.DEBUG_LEVEL
    elif context.log_level is not None:
        level = context.log_level.value
    else:
        level = settings.logging.level

    setup_structured_logger(
        level=level,
        log_file=settings.logging.file,
        use_rich_console=settings.logging.rich_console and not context.json_output,
    )


def _emit_json(command: str, payload: bytes) -> None:
    try:
        typer.echo(payload.decode("utf-8"))
    except OSError as e:
        error = create_cli_output_error(
            f"Failed to write output: {e!s}",
            command=command,
            output_type="json",
            original_error=e,
        )
        raise error from e


def _product_table(products: list[Product], title: str) -> Table:
    table = Table(title=title)
    for column in ("Name", "Product ID", "Category", "Stock", "USD Price"):
        table.add_column(column)

    for product in products:
        usd_price = product.packables.usd_price if product.packables else None
        table.add_row(
            str(product.name or ""),
            str(product.product_id or ""),
            str(product.category or ""),
            "" if product.stock is None else str(product.stock),
            "" if usd_price is None else str(usd_price),
        )
    return table


def _record_table(record: Any, title: str) -> Table:
    table = Table(title=title, show_header=False)
    table.add_column("Field", style="bold cyan")
    table.add_column("Value")

    for field in fields(record):
        value = getattr(record, field.name)
        if isinstance(value, Product):
            value = value.name
        elif isinstance(value, list) and value and isinstance(value[0], Product):
            value = ", ".join(str(item.name) for item in value)
        else:
            value = to_serializable(value)
        table.add_row(field.name, "" if value is None else str(value))
    return table


def render_result(console: Console, command: str, data: Any) -> None:
    """Render an operation result on the console."""
    if isinstance(data, list):
        console.print(_product_table(data, title=command))
        return

    products = getattr(data, "products", None)
    if products:
        console.print(f"[bold]Hub[/bold] {data.hub_id}")
        console.print(_product_table(products, title=command))
        return

    if is_dataclass(data):
        console.print(_record_table(data, title=command))
        return

    console.print(data)


def _report_error(context: CliContext, command: str, console: Console, error: ParcelError) -> None:
    if context.is_json_output_enabled():
        _emit_json(command, format_json_output(success=False, command=command, errors=[str(error)]))
    else:
        console.print(f"[red]{CLIMessages.ERROR_PREFIX}:[/red] {error.message}")


def _build_client(context: CliContext, command: str, console: Console) -> ParcelClient | None:
    try:
        _configure_logging(context)
        return create_client(context.token, context.debug)
    except ParcelError as e:
        logger.debug("Client construction failed", extra={"context": e.to_dict()})
        _report_error(context, command, console, e)
        return None


def run_fetch_command(context: CliContext, command: str, operation: Operation) -> int:
    """Run a read operation and render its result.

    Returns:
        EXIT_SUCCESS, EXIT_ERROR when the client could not be built, or
        EXIT_NO_DATA when the operation returned nothing.
    """
    console = Console()

    client = _build_client(context, command, console)
    if client is None:
        return CLIDefaults.EXIT_ERROR

    with client:
        data = operation(client)

    if data is None:
        message = CLIMessages.NO_DATA.format(command=command)
        if context.is_json_output_enabled():
            _emit_json(command, format_json_output(success=False, command=command, errors=[message]))
        else:
            console.print(f"[yellow]{message}[/yellow]")
        return CLIDefaults.EXIT_NO_DATA

    if context.is_json_output_enabled():
        _emit_json(command, format_json_output(success=True, command=command, data=data))
    else:
        render_result(console, command, data)
    return CLIDefaults.EXIT_SUCCESS


def run_whitelist_command(context: CliContext, user_id: int, product_id: str) -> int:
    """Whitelist a player and report the API's answer."""
    command = "whitelist"
    console = Console()

    client = _build_client(context, command, console)
    if client is None:
        return CLIDefaults.EXIT_ERROR

    with client:
        success, body = client.whitelist(user_id, product_id)

    if context.is_json_output_enabled():
        _emit_json(command, format_json_output(success=success, command=command, data=body))
    elif success:
        console.print(
            f"[green]{CLIMessages.WHITELIST_SUCCESS.format(user_id=user_id, product_id=product_id)}[/green]",
        )
    else:
        reason = body.get("message", body) if isinstance(body, dict) else body
        console.print(
            "[red]"
            + CLIMessages.WHITELIST_FAILED.format(user_id=user_id, product_id=product_id, reason=reason)
            + "[/red]",
        )

    return CLIDefaults.EXIT_SUCCESS if success else CLIDefaults.EXIT_ERROR
