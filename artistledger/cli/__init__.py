"""artistledger CLI — Typer-based command-line interface.

Drives a registry persisted in a single SQLite state file: register,
update and unregister artists, fund accounts, advance the block clock and
inspect the event ledger. All output uses Rich for formatted display.
"""
