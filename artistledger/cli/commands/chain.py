"""Environment commands: ``endow``, ``balance``, ``advance``, ``events``,
``fingerprint``."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.table import Table

from artistledger.cli.runtime import console, open_runtime
from artistledger.core.event_log import EventLedgerIntegrityError
from artistledger.core.hasher import fingerprint


def endow_cmd(
    ctx: typer.Context,
    account: str = typer.Argument(..., help="Account to fund."),
    amount: int = typer.Argument(..., min=0, help="New free balance."),
) -> None:
    """Set the free balance of ACCOUNT (development funding)."""
    with open_runtime(ctx) as rt:
        rt.balances.set_balance(account, amount)
        console.print(f"{account}: free balance set to {amount}")


def balance_cmd(
    ctx: typer.Context,
    account: str = typer.Argument(..., help="Account to inspect."),
) -> None:
    """Show the free and reserved balance of ACCOUNT."""
    with open_runtime(ctx) as rt:
        free = rt.balances.free_balance(account)
        reserved = rt.balances.reserved_balance(account)
    console.print(f"{account}: free={free} reserved={reserved}")


def advance_cmd(
    ctx: typer.Context,
    blocks: int = typer.Argument(1, min=1, help="Number of blocks to advance."),
) -> None:
    """Advance the block clock by BLOCKS."""
    with open_runtime(ctx) as rt:
        block = rt.clock.advance(blocks)
    console.print(f"Block number: {block}")


def events_cmd(
    ctx: typer.Context,
    owner: str = typer.Option(None, "--owner", "-o", help="Only events of this owner."),
    verify: bool = typer.Option(
        False, "--verify", "-V", help="Verify the hash chain before listing."
    ),
) -> None:
    """List registry events in emission order."""
    with open_runtime(ctx) as rt:
        if verify:
            try:
                rt.ledger.verify_chain()
            except EventLedgerIntegrityError as exc:
                console.print(f"[bold red]Chain INVALID:[/bold red] {exc}")
                raise typer.Exit(code=1) from None
            console.print("[green]Chain valid[/green]")
        records = rt.ledger.records(owner)

    table = Table(title="Registry events")
    table.add_column("#", justify="right")
    table.add_column("Block", justify="right")
    table.add_column("Kind", style="cyan", no_wrap=True)
    table.add_column("Owner", no_wrap=True)
    table.add_column("Details")
    for record in records:
        event = record.event()
        details = event.model_dump(
            mode="json", exclude={"owner", "block_number", "kind"}
        )
        table.add_row(
            str(record.sequence),
            str(record.block_number),
            record.kind.value,
            record.owner,
            str(details) if details else "",
        )
    console.print(table)


def fingerprint_cmd(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="File to hash."),
) -> None:
    """Print the content fingerprint of PATH, as stored in artist records."""
    console.print(fingerprint(path.read_bytes()))
