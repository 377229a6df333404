"""B2 CLI - one command per API operation."""

import asyncio
import dataclasses
import json
import logging
import os
import sys
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any, Optional

import structlog
import typer
from rich.console import Console

from b2_client.client import B2Client
from b2_client.exceptions import B2Error

app = typer.Typer(
    name="b2-client",
    help="Backblaze B2 command line client",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)

ConfigOption = typer.Option(
    None,
    "--config",
    "-c",
    help="JSON file with AccountID and ApplicationKey",
    envvar="B2_CONFIG",
)


@app.callback()
def configure(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs"),
) -> None:
    """Send logs to stderr so command output stays valid JSON."""
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.DEBUG if verbose else logging.WARNING
        ),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def load_credentials(config_path: Optional[Path]) -> tuple[str, str]:
    """Read credentials from a JSON config file, falling back to env vars."""
    if config_path is not None:
        try:
            data = json.loads(config_path.read_text())
            return data["AccountID"], data["ApplicationKey"]
        except (OSError, ValueError, KeyError) as e:
            err_console.print(f"[red]Invalid config file {config_path}: {e}[/red]")
            raise typer.Exit(1)

    account_id = os.getenv("B2_ACCOUNT_ID")
    application_key = os.getenv("B2_APPLICATION_KEY")
    if not account_id or not application_key:
        err_console.print(
            "[red]Set B2_ACCOUNT_ID and B2_APPLICATION_KEY or pass --config[/red]"
        )
        raise typer.Exit(1)
    return account_id, application_key


def to_jsonable(value: Any) -> Any:
    if dataclasses.is_dataclass(value):
        data = dataclasses.asdict(value)
        data.pop("token", None)
        data.pop("upload_token", None)
        return data
    if isinstance(value, list):
        return [to_jsonable(v) for v in value]
    return value


def run_operation(
    config_path: Optional[Path], operation: Callable[[B2Client], Awaitable[Any]]
) -> None:
    """Authorize, run one operation and print its result as JSON."""
    account_id, application_key = load_credentials(config_path)

    async def _run() -> Any:
        async with B2Client(account_id, application_key) as client:
            await client.authorize_account()
            return await operation(client)

    try:
        result = asyncio.run(_run())
    except (B2Error, ValueError) as e:
        err_console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    console.print_json(json.dumps(to_jsonable(result), default=str))


@app.command()
def authorize(config: Optional[Path] = ConfigOption) -> None:
    """Authorize the account and show the API endpoints."""
    run_operation(config, lambda client: client.confirm_authorization_token())


@app.command("create-bucket")
def create_bucket(
    name: str = typer.Argument(..., help="Bucket name"),
    private: bool = typer.Option(False, "--private", help="Create an allPrivate bucket"),
    config: Optional[Path] = ConfigOption,
) -> None:
    """Create a bucket."""
    run_operation(config, lambda client: client.create_bucket(name, private))


@app.command("delete-bucket")
def delete_bucket(
    bucket_id: str = typer.Argument(..., help="Bucket ID"),
    config: Optional[Path] = ConfigOption,
) -> None:
    """Delete a bucket."""
    run_operation(config, lambda client: client.delete_bucket(bucket_id))


@app.command("get-upload-url")
def get_upload_url(
    bucket_id: str = typer.Argument(..., help="Bucket ID"),
    config: Optional[Path] = ConfigOption,
) -> None:
    """Request an upload URL for a bucket."""
    run_operation(config, lambda client: client.get_upload_url(bucket_id))


@app.command("list-buckets")
def list_buckets(config: Optional[Path] = ConfigOption) -> None:
    """List all buckets of the account."""
    run_operation(config, lambda client: client.list_buckets())


@app.command("update-bucket")
def update_bucket(
    bucket_id: str = typer.Argument(..., help="Bucket ID"),
    bucket_type: str = typer.Argument(..., help="public or private"),
    config: Optional[Path] = ConfigOption,
) -> None:
    """Switch a bucket between public and private."""
    if bucket_type not in ("public", "private"):
        err_console.print(
            f'[red]Unknown bucketType "{bucket_type}". Use either "public" or "private".[/red]'
        )
        raise typer.Exit(1)
    is_private = bucket_type == "private"
    run_operation(config, lambda client: client.update_bucket(bucket_id, is_private))


@app.command()
def upload(
    bucket_id: str = typer.Argument(..., help="Bucket ID"),
    file_path: Path = typer.Argument(..., help="Local file to upload"),
    config: Optional[Path] = ConfigOption,
) -> None:
    """Upload a local file to a bucket."""
    run_operation(config, lambda client: client.upload_file(bucket_id, file_path))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
