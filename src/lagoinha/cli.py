from __future__ import annotations

import json
import logging
from typing import Optional

import typer

from lagoinha.config import LookupConfig
from lagoinha.service import get_address_sync

app = typer.Typer(help="Look up a Brazilian postal code (CEP) across several providers.")

# Printed in this order, with these labels
FIELD_LABELS: list[tuple[str, str]] = [
    ("cep", "CEP"),
    ("address", "Address"),
    ("details", "Details"),
    ("neighborhood", "Neighborhood"),
    ("city", "City"),
    ("state", "State"),
]


@app.command()
def lookup(
    cep: str = typer.Argument(..., help="CEP, bare (70150903) or hyphenated (70150-903)."),
    as_json: bool = typer.Option(  # noqa: B008
        False,
        "--json",
        help="Print the full result as JSON.",
    ),
    timeout: Optional[float] = typer.Option(  # noqa: B008
        None,
        "--timeout",
        help="Per-request timeout in seconds, 0 for none (default: LAGOINHA_TIMEOUT or 10).",
    ),
    verbose: bool = typer.Option(  # noqa: B008
        False,
        "--verbose",
        "-v",
        help="Log provider activity to stderr.",
    ),
) -> None:
    """Resolve CEP and print the first address a provider returns."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    config = LookupConfig()
    if timeout is not None:
        # 0 disables the timeout, as in LAGOINHA_TIMEOUT
        config.timeout = timeout or None

    result = get_address_sync(cep, config=config)

    if as_json:
        typer.echo(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
        raise typer.Exit(code=0 if result.is_ok else 1)

    if result.address is None:
        typer.echo(str(result.error), err=True)
        raise typer.Exit(code=1)

    values = result.address.to_dict()
    for name, label in FIELD_LABELS:
        typer.echo(f"{label}: {values[name]}")
    typer.echo(f"Source: {result.source.value if result.source else '-'}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
