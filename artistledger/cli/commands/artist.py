"""Artist commands: ``register``, ``update``, ``unregister``, ``show``.

Raw description text and asset files are fingerprinted before they reach
the record; only the fingerprints are shown back.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.table import Table

from artistledger.cli.runtime import console, open_runtime
from artistledger.models.artist import Artist
from artistledger.models.genres import MusicGenre
from artistledger.models.updates import (
    AssetsAdd,
    AssetsClear,
    AssetsRemove,
    DescriptionSet,
    GenresAdd,
    GenresClear,
    GenresRemove,
    SetAlias,
    UpdatableData,
)


class UpdateChoice(str, Enum):
    SET_ALIAS = "set-alias"
    GENRES_ADD = "genres-add"
    GENRES_REMOVE = "genres-remove"
    GENRES_CLEAR = "genres-clear"
    DESCRIPTION_SET = "description-set"
    ASSETS_ADD = "assets-add"
    ASSETS_REMOVE = "assets-remove"
    ASSETS_CLEAR = "assets-clear"


def _parse_genre(text: str) -> MusicGenre:
    try:
        return MusicGenre.parse(text)
    except (ValueError, ValidationError) as exc:
        raise typer.BadParameter(f"Invalid genre {text!r}: {exc}") from None


def _read_asset(path: Path) -> bytes:
    if not path.is_file():
        raise typer.BadParameter(f"Asset file not found: {path}")
    return path.read_bytes()


def _require(value: str | None, choice: UpdateChoice) -> str:
    if value is None:
        raise typer.BadParameter(f"{choice.value} needs a VALUE")
    return value


def build_update(choice: UpdateChoice, value: str | None) -> UpdatableData:
    """Translate a CLI KIND/VALUE pair into an update variant."""
    if choice is UpdateChoice.SET_ALIAS:
        return SetAlias(alias=value)
    if choice is UpdateChoice.GENRES_ADD:
        return GenresAdd(genre=_parse_genre(_require(value, choice)))
    if choice is UpdateChoice.GENRES_REMOVE:
        return GenresRemove(genre=_parse_genre(_require(value, choice)))
    if choice is UpdateChoice.GENRES_CLEAR:
        return GenresClear()
    if choice is UpdateChoice.DESCRIPTION_SET:
        return DescriptionSet(description=None if value is None else value.encode("utf-8"))
    if choice is UpdateChoice.ASSETS_ADD:
        return AssetsAdd(asset=_read_asset(Path(_require(value, choice))))
    if choice is UpdateChoice.ASSETS_REMOVE:
        return AssetsRemove(asset=_read_asset(Path(_require(value, choice))))
    return AssetsClear()


def render_artist(artist: Artist) -> Table:
    table = Table(title=f"Artist {artist.main_name}", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    verified = (
        f"[green]block {artist.verified_at}[/green]"
        if artist.is_verified
        else "[dim]no[/dim]"
    )
    table.add_row("Owner", artist.owner)
    table.add_row("Registered at", f"block {artist.registered_at}")
    table.add_row("Verified", verified)
    table.add_row("Main name", artist.main_name)
    table.add_row("Alias", artist.alias or "[dim]-[/dim]")
    table.add_row("Genres", ", ".join(str(g) for g in artist.genres) or "[dim]-[/dim]")
    table.add_row("Description", artist.description or "[dim]-[/dim]")
    table.add_row("Assets", "\n".join(artist.assets) or "[dim]-[/dim]")
    if artist.contracts:
        table.add_row("Contracts", "\n".join(artist.contracts))
    return table


def register_cmd(
    ctx: typer.Context,
    owner: str = typer.Argument(..., help="Owner account of the new artist."),
    main_name: str = typer.Argument(..., help="Unique, permanent main name."),
    alias: str = typer.Option(None, "--alias", "-a", help="Display alias."),
    genre: list[str] = typer.Option(
        [], "--genre", "-g", help="Genre as family or family/subtype; repeatable."
    ),
    description: str = typer.Option(None, "--description", "-d", help="Description text."),
    asset: list[Path] = typer.Option(
        [], "--asset", help="Asset file to fingerprint; repeatable."
    ),
) -> None:
    """Register OWNER as an artist named MAIN_NAME, reserving the deposit."""
    genres = [_parse_genre(g) for g in genre]
    assets = [_read_asset(p) for p in asset]
    with open_runtime(ctx) as rt:
        artist = rt.registry.register(
            owner,
            main_name,
            alias=alias,
            genres=genres,
            description=None if description is None else description.encode("utf-8"),
            assets=assets,
        )
        console.print(render_artist(artist))
        console.print(
            f"[bold green]Registered[/bold green] {main_name!r}; "
            f"deposit reserved: {rt.registry.params.base_deposit}"
        )


def update_cmd(
    ctx: typer.Context,
    owner: str = typer.Argument(..., help="Owner account of the artist."),
    kind: UpdateChoice = typer.Argument(..., help="Which field update to apply."),
    value: str = typer.Argument(
        None, help="Alias, genre, description text or asset file path."
    ),
) -> None:
    """Apply one field update to OWNER's artist record."""
    update = build_update(kind, value)
    with open_runtime(ctx) as rt:
        artist = rt.registry.update(owner, update)
        console.print(render_artist(artist))


def unregister_cmd(
    ctx: typer.Context,
    owner: str = typer.Argument(..., help="Owner account of the artist."),
) -> None:
    """Unregister OWNER once the cooldown has passed, releasing the deposit."""
    with open_runtime(ctx) as rt:
        rt.registry.unregister(owner)
        console.print(
            f"[bold green]Unregistered[/bold green] {owner}; "
            f"free balance: {rt.balances.free_balance(owner)}"
        )


def show_cmd(
    ctx: typer.Context,
    owner: str = typer.Argument(None, help="Owner account to look up."),
    name: str = typer.Option(None, "--name", "-n", help="Look up by main name instead."),
) -> None:
    """Show an artist record by owner or by main name."""
    if (owner is None) == (name is None):
        raise typer.BadParameter("Give exactly one of OWNER or --name")
    with open_runtime(ctx) as rt:
        if name is not None:
            artist = rt.registry.get_artist_by_name(name)
        else:
            artist = rt.registry.get_artist_by_id(owner)
        if artist is None:
            console.print(f"[bold red]No artist found:[/bold red] {owner or name}")
            raise typer.Exit(code=1)
        console.print(render_artist(artist))
