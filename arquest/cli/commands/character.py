"""Character-related commands."""

from typing import Optional

import typer

from arquest.cli.display import (
    display_error,
    display_info,
    display_monster_list,
    display_player_sheet,
    display_xp_table,
)
from arquest.config import get_settings
from arquest.managers.progression_manager import xp_table
from arquest.models.combatant import AbilityScores
from arquest.schemas.monsters import MONSTERS, monsters_for_challenge
from arquest.services.equipment import equip
from arquest.services.stat_deriver import build_player

app = typer.Typer(help="Character commands")


@app.command()
def show(
    character_class: str = typer.Argument(..., help="warrior, mage, archer or cleric"),
    name: str = typer.Option("Hero", "--name", "-n", help="Character name"),
    level: int = typer.Option(1, "--level", "-l", min=1, max=20, help="Character level"),
    strength: int = typer.Option(10, "--str", help="Strength score"),
    dexterity: int = typer.Option(10, "--dex", help="Dexterity score"),
    constitution: int = typer.Option(10, "--con", help="Constitution score"),
    intelligence: int = typer.Option(10, "--int", help="Intelligence score"),
    wisdom: int = typer.Option(10, "--wis", help="Wisdom score"),
    charisma: int = typer.Option(10, "--cha", help="Charisma score"),
    items: Optional[list[str]] = typer.Option(None, "--equip", "-e", help="Item keys to equip"),
) -> None:
    """Build a character and show their derived stats."""
    abilities = AbilityScores(
        strength=strength,
        dexterity=dexterity,
        constitution=constitution,
        intelligence=intelligence,
        wisdom=wisdom,
        charisma=charisma,
    )
    settings = get_settings()
    try:
        player = build_player(
            "cli", name, character_class, abilities=abilities, level=level,
            xp_per_level=settings.xp_per_level, max_level=settings.max_level,
        )
        for item_id in items or []:
            equip(player, item_id, now=0)
    except ValueError as e:
        display_error(str(e))
        raise typer.Exit(1)

    display_player_sheet(player)


@app.command("xp-table")
def xp_table_command() -> None:
    """Show the experience curve."""
    settings = get_settings()
    display_xp_table(xp_table(settings.max_level, settings.xp_per_level))


@app.command()
def monsters(
    max_cr: Optional[float] = typer.Option(None, "--max-cr", help="Highest challenge rating"),
) -> None:
    """List monster templates."""
    templates = list(MONSTERS.values()) if max_cr is None else monsters_for_challenge(max_cr)
    if not templates:
        display_info("No monsters at that challenge rating.")
        return
    display_monster_list(templates)
