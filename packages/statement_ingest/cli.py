# ruff: noqa: I001
"""CLI for the ``statement_ingest`` package.

Runs the same path as the upload endpoint on a local file: the file is
base64-encoded, handed to :func:`statement_ingest.api.handle_upload`, and the
response body is printed. Environment variables (``DATABASE_URL``,
``STATEMENT_INGEST_*``) are loaded from a local ``.env`` using
``python-dotenv`` without overriding variables that are already set.
"""

from __future__ import annotations

import base64
import json
import sys
from pathlib import Path
from typing import Annotated, Any

import typer
from dotenv import load_dotenv
from typer.models import ArgumentInfo

from .logging_setup import configure_logging

app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help=(
        "Parse bank / mobile-money statements (CSV, Excel exports, PDF, text) into "
        "categorized candidate transactions with duplicate flags."
    ),
)

# Module-level argument object to satisfy ruff B008 (no calls in defaults).
FILE_ARGUMENT: ArgumentInfo = typer.Argument(
    help="Statement file to parse",
    dir_okay=False,
    file_okay=True,
    exists=False,
)


def _print_tsv(body: dict[str, Any]) -> None:
    print("date\tamount\tdirection\tcategory\tduplicate\tdescription")
    for tx in body["transactions"]:
        print(
            f"{tx['date']}\t{tx['amount']:.2f}\t{tx['direction']}\t{tx['category']}\t"
            f"{'yes' if tx['is_duplicate'] else 'no'}\t{tx['description']}"
        )
    if body.get("message"):
        print(body["message"], file=sys.stderr)


@app.command("parse")
def parse_cmd(
    file_path: Annotated[Path, FILE_ARGUMENT],
    *,
    account_id: str = typer.Option(
        ..., "--account-id", help="Ledger account the statement belongs to."
    ),
    user_id: str | None = typer.Option(
        None, "--user-id", help="Owner of the account; narrows the duplicate lookup."
    ),
    file_type: str | None = typer.Option(
        None, "--file-type", help="Declared MIME type (e.g., text/csv, application/pdf)."
    ),
    database_url: str | None = typer.Option(
        None, help="Override DATABASE_URL (falls back to env var)."
    ),
    output_format: str = typer.Option("json", "--format", help="Output format: json or tsv."),
) -> None:
    """Parse FILE_PATH and print candidate transactions."""

    # Deferred imports to keep CLI startup fast
    from db.client import resolve_database_url

    from .api import handle_upload
    from .ledger import InMemoryLedger, LedgerLookup, SqlLedgerLookup

    if output_format not in {"json", "tsv"}:
        typer.echo(f"Error: unsupported format {output_format!r}; use json or tsv.", err=True)
        raise typer.Exit(2)

    try:
        data = file_path.read_bytes()
    except FileNotFoundError:
        typer.echo(f"Error: File not found: {file_path}", err=True)
        raise typer.Exit(1) from None
    except PermissionError:
        typer.echo(f"Error: Permission denied: {file_path}", err=True)
        raise typer.Exit(1) from None

    url = resolve_database_url(database_url)
    lookup: LedgerLookup = SqlLedgerLookup(database_url=url) if url else InMemoryLedger()

    body = handle_upload(
        {
            "file_content": base64.b64encode(data).decode("ascii"),
            "file_name": file_path.name,
            "file_type": file_type,
            "account_id": account_id,
            "user_id": user_id,
        },
        lookup=lookup,
    )
    if "error" in body:
        detail = f" ({body['details']})" if body.get("details") else ""
        typer.echo(f"Error: {body['error']}{detail}", err=True)
        raise typer.Exit(1)

    if output_format == "tsv":
        _print_tsv(body)
    else:
        print(json.dumps(body, indent=2, ensure_ascii=False))


@app.callback(invoke_without_command=True)
def _root(
    ctx: typer.Context,
    *,
    log_level: str | None = typer.Option(
        None, help="Logging level (falls back to STATEMENT_INGEST_LOG_LEVEL, then INFO)."
    ),
) -> None:
    """Root command: load ``.env`` and configure logging once."""

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging(log_level)

    if ctx.invoked_subcommand is None:
        typer.echo("No subcommand provided. Use --help to see available commands.")
        raise typer.Exit(1)


if __name__ == "__main__":  # pragma: no cover
    app()
