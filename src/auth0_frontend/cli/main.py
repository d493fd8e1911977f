"""Click-based CLI entry point for the Auth0 frontend management core."""

import sys
from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar

import click
from rich.markup import escape

from ..client import ManagementClient
from ..core.auth import DOCTOR_TIMEOUT
from ..core.auth import doctor as run_doctor
from ..core.cancellation import CancellationToken
from ..core.exceptions import ApiError, ConfigError
from ..models.log import ListLogsParams
from ..models.user import ListUsersParams
from ..utils.logging_utils import init_default_logging
from ..utils.rich_utils import build_table, get_console, install_rich_tracebacks

F = TypeVar("F", bound=Callable[..., Any])


def handle_api_errors(func: F) -> F:
    """Print classified errors and exit with status 1."""

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        console = get_console()
        try:
            return func(*args, **kwargs)
        except ConfigError as e:
            console.print(f"[error]Configuration error:[/error] {escape(str(e))}")
            sys.exit(1)
        except ApiError as e:
            console.print(f"[error]{e.kind.value}:[/error] {escape(str(e))}")
            sys.exit(1)

    return wrapper  # type: ignore[return-value]


def _client(ctx: click.Context) -> ManagementClient:
    if ctx.obj is None:
        ctx.obj = ManagementClient.from_env()
    client: ManagementClient = ctx.obj
    return client


def _cancel(ctx: click.Context) -> CancellationToken:
    timeout = ctx.find_root().params.get("timeout")
    return CancellationToken(timeout=timeout)


@click.group(invoke_without_command=True)
@click.option(
    "--timeout",
    type=float,
    default=None,
    help="Abort each command after this many seconds",
)
@click.pass_context
def cli(ctx: click.Context, timeout: float | None) -> None:
    """Auth0 Frontend - inspect and manage tenant resources."""
    init_default_logging()
    install_rich_tracebacks()
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@click.option("--test-api", is_flag=True, help="Test API access")
@click.pass_context
def doctor(ctx: click.Context, test_api: bool) -> None:
    """Test Auth0 credentials and API access."""
    console = get_console()
    timeout = ctx.find_root().params.get("timeout")
    result = run_doctor(
        test_api=test_api,
        timeout=DOCTOR_TIMEOUT if timeout is None else timeout,
    )
    if result["success"]:
        console.print(f"[success]OK[/success] {escape(result['details'])}")
        if result.get("api_status") == "failed":
            sys.exit(1)
    else:
        console.print(
            f"[error]FAILED[/error] {escape(result['details'])}: "
            f"{escape(str(result.get('error')))}"
        )
        sys.exit(1)


@cli.group()
def users() -> None:
    """Manage users."""


@users.command("list")
@click.option("-q", "--query", help="Lucene search query (v3 search engine)")
@click.option("--connection", help="Only users of this connection")
@click.option("--limit", type=click.IntRange(min=1), default=20, show_default=True)
@click.pass_context
@handle_api_errors
def list_users(
    ctx: click.Context, query: str | None, connection: str | None, limit: int
) -> None:
    """List users, newest first."""
    client = _client(ctx)
    params = ListUsersParams(q=query, connection=connection, per_page=min(limit, 100))
    found = client.users.list(params, cancel=_cancel(ctx)).to_list(limit)
    get_console().print(
        build_table(
            "Users",
            ["User ID", "Email", "Name", "Connection", "Blocked", "Last login"],
            [
                (
                    user.user_id,
                    user.email,
                    user.name,
                    user.connection,
                    "yes" if user.blocked else "no",
                    user.last_login.isoformat() if user.last_login else None,
                )
                for user in found
            ],
        )
    )


@users.command("show")
@click.argument("user_id")
@click.option("--logs", "show_logs", is_flag=True, help="Include recent log events")
@click.pass_context
@handle_api_errors
def show_user(ctx: click.Context, user_id: str, show_logs: bool) -> None:
    """Show one user."""
    client = _client(ctx)
    cancel = _cancel(ctx)
    user = client.users.get(user_id, cancel=cancel)
    console = get_console()
    console.print(
        build_table(
            user.display_name,
            ["Field", "Value"],
            [
                ("user_id", user.user_id),
                ("email", user.email),
                ("email_verified", user.email_verified),
                ("username", user.username),
                ("connection", user.connection),
                ("blocked", user.blocked),
                ("logins_count", user.logins_count),
                ("last_login", user.last_login),
                ("created_at", user.created_at),
            ],
        )
    )
    if show_logs:
        events = client.users.logs(user_id, cancel=cancel).first_page().items
        console.print(
            build_table(
                "Recent activity",
                ["Date", "Type", "Description"],
                [(e.date.isoformat(), e.type_label, e.description) for e in events],
            )
        )


@users.command("block")
@click.argument("user_id")
@click.pass_context
@handle_api_errors
def block_user(ctx: click.Context, user_id: str) -> None:
    """Block a user."""
    user = _client(ctx).users.block(user_id, cancel=_cancel(ctx))
    get_console().print(f"[success]Blocked[/success] {user.display_name}")


@users.command("unblock")
@click.argument("user_id")
@click.pass_context
@handle_api_errors
def unblock_user(ctx: click.Context, user_id: str) -> None:
    """Unblock a user."""
    user = _client(ctx).users.unblock(user_id, cancel=_cancel(ctx))
    get_console().print(f"[success]Unblocked[/success] {user.display_name}")


@users.command("delete")
@click.argument("user_id")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
@handle_api_errors
def delete_user(ctx: click.Context, user_id: str, yes: bool) -> None:
    """Permanently delete a user."""
    if not yes:
        click.confirm(f"Permanently delete {user_id}?", abort=True)
    _client(ctx).users.delete(user_id, cancel=_cancel(ctx))
    get_console().print(f"[success]Deleted[/success] {user_id}")


@cli.group()
def connections() -> None:
    """Inspect connections."""


@connections.command("list")
@click.option("--strategy", help="Only connections using this strategy")
@click.pass_context
@handle_api_errors
def list_connections(ctx: click.Context, strategy: str | None) -> None:
    """List connections."""
    found = _client(ctx).connections.list(strategy=strategy, cancel=_cancel(ctx))
    get_console().print(
        build_table(
            "Connections",
            ["ID", "Name", "Strategy", "Enabled clients"],
            [(c.id, c.name, c.strategy, len(c.enabled_clients)) for c in found],
        )
    )


@cli.group()
def applications() -> None:
    """Inspect applications."""


@applications.command("list")
@click.pass_context
@handle_api_errors
def list_applications(ctx: click.Context) -> None:
    """List applications."""
    found = _client(ctx).applications.list(cancel=_cancel(ctx))
    get_console().print(
        build_table(
            "Applications",
            ["Client ID", "Name", "Type", "First party"],
            [(a.client_id, a.name, a.app_type, a.is_first_party) for a in found],
        )
    )


@cli.group()
def logs() -> None:
    """Search tenant logs."""


@logs.command("list")
@click.option("-q", "--query", help="Log search query")
@click.option("--limit", type=click.IntRange(min=1), default=50, show_default=True)
@click.pass_context
@handle_api_errors
def list_logs(ctx: click.Context, query: str | None, limit: int) -> None:
    """List log events, newest first."""
    params = ListLogsParams(q=query, per_page=min(limit, 100))
    found = _client(ctx).logs.list(params, cancel=_cancel(ctx)).to_list(limit)
    get_console().print(
        build_table(
            "Logs",
            ["Date", "Type", "User", "Client", "Description"],
            [
                (e.date.isoformat(), e.type_label, e.user_name, e.client_name, e.description)
                for e in found
            ],
        )
    )


def main() -> None:
    """Console script entry point."""
    cli()


if __name__ == "__main__":
    main()
