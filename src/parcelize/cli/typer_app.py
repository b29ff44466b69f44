"""
Parcelize Typer CLI Application

Command line access to every Parcel API operation. The hub secret key is
taken from ``--token`` or, like the library, from the host secret store
(``PARCEL_TOKEN``) and settings.
"""

from __future__ import annotations

from typing import Optional

import typer

from parcelize.cli.context import CliContext, LogLevel
from parcelize.cli.handlers import run_fetch_command, run_whitelist_command
from parcelize.shared.constants import CLIDefaults, CLIMessages, UserType

app = typer.Typer(
    name=CLIDefaults.APP_NAME,
    help="Query and manage a Parcel hub from the command line.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version information and exit."""
    if value:
        typer.echo(CLIMessages.VERSION_TEXT.format(version=CLIDefaults.VERSION))
        raise typer.Exit


@app.callback()
def main_callback(
    ctx: typer.Context,
    token: Optional[str] = typer.Option(
        None,
        "--token",
        help="Hub secret key (defaults to the PARCEL_TOKEN secret)",
    ),
    debug: Optional[bool] = typer.Option(
        None,
        "--debug/--no-debug",
        help="Force client debug tracing on or off",
    ),
    json_output: bool = typer.Option(
        False,
        "--json-output",
        help="Print machine-readable JSON",
    ),
    log_level: Optional[LogLevel] = typer.Option(
        None,
        "--log-level",
        case_sensitive=False,
        help="Log level for this invocation",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Process the global options shared by every command."""
    ctx.obj = CliContext(
        token=token,
        debug=debug,
        json_output=json_output,
        log_level=log_level,
    )


def _exit(code: int) -> None:
    if code != CLIDefaults.EXIT_SUCCESS:
        raise typer.Exit(code)


@app.command("hub-info")
def hub_info_command(ctx: typer.Context) -> None:
    """Show the hub's total sales and music id."""
    _exit(run_fetch_command(ctx.obj, "hub-info", lambda client: client.fetch_hub_info()))


@app.command("hub-description")
def hub_description_command(ctx: typer.Context) -> None:
    """Show the hub's long and short descriptions."""
    _exit(
        run_fetch_command(
            ctx.obj,
            "hub-description",
            lambda client: client.fetch_hub_description(),
        ),
    )


@app.command("hub-terms")
def hub_terms_command(ctx: typer.Context) -> None:
    """Show the hub's terms and conditions."""
    _exit(run_fetch_command(ctx.obj, "hub-terms", lambda client: client.fetch_hub_terms()))


@app.command("products")
def products_command(
    ctx: typer.Context,
    bestseller: bool = typer.Option(
        False,
        "--bestseller",
        help="Only show the current bestseller",
    ),
) -> None:
    """List every product on the hub."""
    _exit(
        run_fetch_command(
            ctx.obj,
            "products",
            lambda client: client.fetch_products(get_bestseller=bestseller),
        ),
    )


@app.command("bestseller")
def bestseller_command(ctx: typer.Context) -> None:
    """Show the hub's current bestseller."""
    _exit(run_fetch_command(ctx.obj, "bestseller", lambda client: client.fetch_bestseller()))


@app.command("owned")
def owned_command(
    ctx: typer.Context,
    user_id: int = typer.Argument(..., help="Roblox user id"),
) -> None:
    """List the products a player owns on the hub."""
    _exit(
        run_fetch_command(
            ctx.obj,
            "owned",
            lambda client: client.fetch_player_owned_products(user_id),
        ),
    )


@app.command("profile")
def profile_command(
    ctx: typer.Context,
    user_id: str = typer.Argument(..., help="Roblox user id or Discord id"),
    user_type: UserType = typer.Option(
        UserType.ROBLOX,
        "--type",
        case_sensitive=False,
        help="Kind of id given",
    ),
) -> None:
    """Show a player's verification profile."""
    if not user_id.isdigit():
        typer.echo(f"{CLIMessages.ERROR_PREFIX}: user id must be numeric", err=True)
        raise typer.Exit(CLIDefaults.EXIT_ERROR)

    resolved_id: int | str = int(user_id) if user_type is UserType.ROBLOX else user_id
    _exit(
        run_fetch_command(
            ctx.obj,
            "profile",
            lambda client: client.fetch_player_profile(resolved_id, user_type),
        ),
    )


@app.command("whitelist")
def whitelist_command(
    ctx: typer.Context,
    user_id: int = typer.Argument(..., help="Roblox user id"),
    product_id: str = typer.Argument(..., help="Parcel product id"),
) -> None:
    """Whitelist a player for a product."""
    _exit(run_whitelist_command(ctx.obj, user_id, product_id))


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
