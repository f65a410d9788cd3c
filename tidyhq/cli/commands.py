"""CLI commands for the TidyHQ client."""

import asyncio
import binascii
import time
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from tidyhq import __version__
from tidyhq.client.tidyhq import TidyHQ
from tidyhq.core.exceptions import ConfigurationException, TidyHQException, WebhookVerificationError
from tidyhq.webhooks.endpoint import DEFAULT_TOLERANCE, WebhookEndpoint, decode_signing_key
from tidyhq.webhooks.signature import build_header, compute_signature, serialize_body

app = typer.Typer(name="tidyhq", help="TidyHQ API client CLI")
console = Console()


@app.command()
def version() -> None:
    """Show version."""
    console.print(f"[bold green]tidyhq v{__version__}[/bold green]")


@app.command()
def sign(
    body_file: Path = typer.Argument(..., exists=True, readable=True, help="File holding the raw body"),
    key: str = typer.Option(..., "--key", help="Base64 signing key"),
    timestamp: Optional[int] = typer.Option(None, help="Unix timestamp (default: now)"),
) -> None:
    """Print a signature header for a webhook body.

    Args:
        body_file: File holding the raw body
        key: Base64 signing key
        timestamp: Unix timestamp to sign with
    """
    ts = timestamp if timestamp is not None else int(time.time())
    try:
        key_bytes = decode_signing_key(key)
    except (binascii.Error, ValueError):
        console.print("[red]✗ Signing key is not valid base64[/red]")
        raise typer.Exit(code=1)

    body = serialize_body(body_file.read_bytes())
    typer.echo(build_header(ts, [compute_signature(key_bytes, ts, body)]))


@app.command()
def verify(
    body_file: Path = typer.Argument(..., exists=True, readable=True, help="File holding the raw body"),
    header: str = typer.Option(..., "--header", help="Signature header value"),
    webhook_id: str = typer.Option(..., "--webhook-id", help="Expected webhook ID"),
    key: str = typer.Option(..., "--key", help="Base64 signing key"),
    method: str = typer.Option("POST", help="HTTP method the delivery arrived with"),
    tolerance: int = typer.Option(DEFAULT_TOLERANCE, help="Replay tolerance in seconds (0 disables)"),
) -> None:
    """Verify a webhook delivery and print its kind.

    Args:
        body_file: File holding the raw body
        header: Signature header value
        webhook_id: Expected webhook ID
        key: Base64 signing key
        method: HTTP method the delivery arrived with
        tolerance: Replay tolerance in seconds
    """
    try:
        endpoint = WebhookEndpoint(webhook_id, key, tolerance=tolerance)
        message = endpoint.verify(header, body_file.read_bytes(), method)
    except (ConfigurationException, WebhookVerificationError) as e:
        console.print(f"[red]✗ {type(e).__name__}: {e.message}[/red]")
        raise typer.Exit(code=1)

    console.print(f"[green]✓ Verified[/green] kind={message.get('kind')}")


@app.command()
def webhooks(
    access_token: Optional[str] = typer.Option(None, help="Access token (default: TIDYHQ_ACCESS_TOKEN)"),
) -> None:
    """List webhook subscriptions of the organization."""

    async def _list() -> list:
        async with TidyHQ(access_token=access_token) as thq:
            return await thq.v2.webhooks.get_webhooks()

    try:
        items = asyncio.run(_list())
    except TidyHQException as e:
        console.print(f"[red]✗ {e.message}[/red]")
        raise typer.Exit(code=1)

    table = Table(title="Webhooks")
    table.add_column("ID")
    table.add_column("Kind")
    table.add_column("URL")
    table.add_column("State")
    for item in items or []:
        table.add_row(
            str(item.get("id", "")),
            str(item.get("matching_kind", "")),
            str(item.get("url", "")),
            str(item.get("state", "")),
        )
    console.print(table)


if __name__ == "__main__":
    app()
