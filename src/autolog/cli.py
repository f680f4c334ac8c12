"""CLI interface for AutoLog."""

import asyncio

import typer
from rich.console import Console
from rich.table import Table
from rich.panel import Panel

from autolog.database import close_db, init_db, session_scope
from autolog.models import AttachmentTarget
from autolog.services.account_service import AccountService
from autolog.services.attachment_service import AttachmentService

app = typer.Typer(
    name="autolog",
    help="AutoLog - attachments for profiles, garages, vehicles and maintenance logs.",
    no_args_is_help=True,
)
console = Console()


def run_async(coro):
    """Run async function in sync context."""
    return asyncio.run(coro)


async def _with_db(fn):
    """Run ``fn(session)`` against an initialized database, then release the engine."""
    await init_db()
    try:
        async with session_scope() as session:
            return await fn(session)
    finally:
        await close_db()


@app.command("init-db")
def init_database():
    """Create database tables."""

    async def _init():
        await init_db()
        await close_db()

    run_async(_init())
    console.print("[green]Database initialized.[/green]")


@app.command("create-account")
def create_account(
    username: str = typer.Argument(..., help="Account username"),
    first_name: str = typer.Option(None, "--first-name", "-f", help="Profile first name"),
    last_name: str = typer.Option(None, "--last-name", "-l", help="Profile last name"),
):
    """Create an account with a profile and print a bearer token."""

    async def _create(session):
        service = AccountService(session)
        if await service.get_by_username(username):
            console.print(f"[red]Account already exists: {username}[/red]")
            raise typer.Exit(1)
        account = await service.create(username, first_name=first_name, last_name=last_name)
        token = await service.issue_token(account)
        return account, token

    account, token = run_async(_with_db(_create))
    console.print(Panel(
        f"[green]Created:[/green] {account.username}\n"
        f"[dim]Profile ID: {account.profile.id}[/dim]\n"
        f"Token: {token}",
        title="Account Created",
    ))


@app.command("issue-token")
def issue_token(
    username: str = typer.Argument(..., help="Account username"),
):
    """Issue a new bearer token, invalidating the previous one."""

    async def _issue(session):
        service = AccountService(session)
        account = await service.get_by_username(username)
        if not account:
            console.print(f"[red]Account not found: {username}[/red]")
            raise typer.Exit(1)
        return await service.issue_token(account)

    token = run_async(_with_db(_issue))
    console.print(token)


@app.command("attachments")
def list_attachments(
    model: AttachmentTarget = typer.Argument(..., help="Target kind"),
    target_id: str = typer.Argument(..., help="Target entity ID"),
):
    """List attachments linked to a profile, garage, vehicle or maintenance log."""

    async def _list(session):
        service = AttachmentService(session)
        ids = await service.get_attachment_ids_for(model, target_id)
        return [await service.get_by_id(attachment_id) for attachment_id in ids]

    attachments = run_async(_with_db(_list))
    if not attachments:
        console.print("[dim]No attachments found.[/dim]")
        return

    table = Table(title=f"Attachments for {model.value} {target_id}")
    table.add_column("ID", style="dim", width=8)
    table.add_column("Name", style="bold")
    table.add_column("Type")
    table.add_column("Key")

    for attachment in attachments:
        table.add_row(
            attachment.id[:8],
            attachment.original_name,
            attachment.mime_type,
            attachment.aws_key,
        )

    console.print(table)


@app.command()
def server(
    host: str = typer.Option("0.0.0.0", "--host", "-h", help="Host to bind to"),
    port: int = typer.Option(8000, "--port", "-p", help="Port to bind to"),
):
    """Start the API server."""
    import uvicorn

    console.print(f"[green]Starting AutoLog server at http://{host}:{port}[/green]")
    console.print("[dim]Press Ctrl+C to stop[/dim]")

    uvicorn.run(
        "autolog.main:app",
        host=host,
        port=port,
        reload=False,
    )


if __name__ == "__main__":
    app()
