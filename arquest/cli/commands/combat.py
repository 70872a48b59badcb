"""Combat commands."""

import random
from typing import Optional

import typer

from arquest.cli.display import (
    console,
    display_action,
    display_combatants,
    display_error,
    display_failure,
    display_info,
)
from arquest.config import get_settings
from arquest.managers.effect_manager import EffectManager
from arquest.managers.encounter_manager import EncounterManager
from arquest.managers.spell_manager import check_spell_class
from arquest.models.outcomes import Failure
from arquest.models.session import EngineContext
from arquest.observability.console_observer import RichConsoleObserver
from arquest.schemas.monsters import spawn_monster
from arquest.schemas.spells import get_spell
from arquest.services.equipment import equip
from arquest.services.stat_deriver import build_player

app = typer.Typer(help="Combat commands")

# Simulated time that passes per encounter step
STEP_MS = 2000


class _SteppedClock:
    """Simulated millisecond clock moved forward by ``tick``."""

    def __init__(self, start: int = 0) -> None:
        self.current = start

    def __call__(self) -> int:
        return self.current

    def tick(self, ms: int = STEP_MS) -> None:
        self.current += ms


@app.command()
def duel(
    character_class: str = typer.Argument(..., help="warrior, mage, archer or cleric"),
    monster_id: str = typer.Argument("goblin", help="Monster template key"),
    level: int = typer.Option(1, "--level", "-l", min=1, max=20, help="Character level"),
    weapon: Optional[str] = typer.Option(None, "--weapon", "-w", help="Weapon item key"),
    spell: Optional[str] = typer.Option(None, "--spell", help="Cast this spell while mana lasts"),
    use_ability: bool = typer.Option(False, "--ability", help="Use the class ability when ready"),
    buffs: Optional[list[str]] = typer.Option(None, "--buff", "-b", help="Campaign buffs to apply"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed for a repeatable fight"),
    max_rounds: int = typer.Option(50, "--max-rounds", help="Stop after this many rounds"),
    show_phases: bool = typer.Option(False, "--phases", help="Print every phase change"),
) -> None:
    """Run an automatic duel between a fresh character and a monster."""
    clock = _SteppedClock()
    context = EngineContext(
        clock=clock,
        rng=random.Random(seed) if seed is not None else None,
        settings=get_settings(),
        hook=RichConsoleObserver(console=console, show_phases=show_phases),
    )

    try:
        settings = context.settings
        player = build_player(
            "cli", "Hero", character_class, level=level,
            xp_per_level=settings.xp_per_level, max_level=settings.max_level,
        )
        if weapon:
            equip(player, weapon, clock())
        monster = spawn_monster(monster_id)
        if spell:
            check_spell_class(player, get_spell(spell))
        for buff_id in buffs or []:
            EffectManager(context).apply_campaign_buff(player, buff_id)
    except ValueError as e:
        display_error(str(e))
        raise typer.Exit(1)

    manager = EncounterManager(context)
    encounter = manager.start(player, monster)
    display_combatants(player, monster)

    while not encounter.phase.is_terminal and encounter.round <= max_rounds:
        clock.tick()
        outcome = _player_turn(manager, encounter, spell, use_ability)
        if isinstance(outcome, Failure):
            display_failure(outcome)
            raise typer.Exit(1)
        display_action(outcome)
        if encounter.phase.is_terminal:
            break

        manager.advance(encounter)
        clock.tick()
        monster_outcome = manager.monster_turn(encounter)
        if isinstance(monster_outcome, Failure):
            display_failure(monster_outcome)
            raise typer.Exit(1)
        display_combatants(player, monster)
        if encounter.phase.is_terminal:
            break
        manager.advance(encounter)

    if not encounter.phase.is_terminal:
        display_info(f"No winner after {max_rounds} rounds.")


def _player_turn(manager: EncounterManager, encounter, spell: str | None, use_ability: bool):
    """Pick the player's action: class ability, then spell, then weapon attack."""
    player = encounter.player
    if use_ability:
        outcome = manager.use_class_ability(encounter)
        if not isinstance(outcome, Failure):
            return outcome
    if spell and player.current_mana >= get_spell(spell).mana_cost:
        return manager.player_cast(encounter, spell)
    return manager.player_attack(encounter)
