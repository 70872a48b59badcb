"""Rich display helpers for CLI output."""

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from arquest.dice.types import RollResult
from arquest.models.combatant import MonsterCombatant, PlayerCombatant
from arquest.models.enums import Ability
from arquest.models.outcomes import ActionOutcome, Failure
from arquest.services.stat_deriver import effective_score


# Shared console instance
console = Console()


def display_error(message: str) -> None:
    """Display error message.

    Args:
        message: Error message.
    """
    console.print(f"[bold red]Error:[/bold red] {message}")


def display_success(message: str) -> None:
    """Display success message."""
    console.print(f"[bold green]{message}[/bold green]")


def display_info(message: str) -> None:
    console.print(f"[dim]{message}[/dim]")


def display_failure(failure: Failure) -> None:
    """Display a refused engine call."""
    suffix = ""
    if failure.remaining_ms:
        suffix = f" ({failure.remaining_ms / 1000:.1f}s remaining)"
    console.print(f"[yellow]{failure.reason.value}:[/yellow] {failure.message}{suffix}")


def _format_modifier(value: int) -> str:
    return f"+{value}" if value >= 0 else str(value)


def _create_progress_bar(current: int, maximum: int, width: int = 20) -> Text:
    """Create a colored [====    ] bar for HP or mana.

    Args:
        current: Current value.
        maximum: Maximum value.
        width: Bar width in characters.

    Returns:
        Rich Text object with the styled bar.
    """
    ratio = current / maximum if maximum > 0 else 0.0
    filled = int(round(ratio * width))
    if ratio > 0.6:
        color = "green"
    elif ratio > 0.3:
        color = "yellow"
    else:
        color = "red"

    bar = Text("[")
    bar.append("=" * filled, style=color)
    bar.append(" " * (width - filled))
    bar.append("]")
    return bar


def display_dice_roll(notation: str, result: RollResult) -> None:
    """Display a dice roll with individual dice."""
    rolls = ", ".join(str(r) for r in result.individual_rolls)
    line = f"[cyan]{notation}[/cyan]: [{rolls}]"
    if result.modifier:
        line += f" {_format_modifier(result.modifier)}"
    line += f" = [bold]{result.total}[/bold]"
    if result.discarded_rolls:
        discarded = ", ".join(str(r) for r in result.discarded_rolls)
        line += f" [dim](discarded {discarded})[/dim]"
    console.print(line)


def display_player_sheet(player: PlayerCombatant, now: int = 0) -> None:
    """Display a player's abilities, derived stats and skills."""
    console.print()
    console.print(
        Panel(
            f"[bold cyan]{player.name}[/bold cyan] - level {player.level} "
            f"{player.character_class.value}",
            style="cyan",
        )
    )

    attr_table = Table(title="Abilities", box=box.ROUNDED)
    attr_table.add_column("Ability", style="white")
    attr_table.add_column("Score", justify="center", style="cyan")
    attr_table.add_column("Modifier", justify="center", style="yellow")
    for ability in Ability:
        score = effective_score(player, ability, now)
        attr_table.add_row(
            ability.value.upper(), str(score), _format_modifier((score - 10) // 2)
        )
    console.print(attr_table)

    stats_table = Table(box=box.SIMPLE, show_header=False)
    stats_table.add_column("Stat", style="white")
    stats_table.add_column("Value")
    stats_table.add_row("HP", _create_progress_bar(player.current_hp, player.max_hp))
    stats_table.add_row("", f"{player.current_hp}/{player.max_hp}")
    if player.max_mana:
        stats_table.add_row("Mana", _create_progress_bar(player.current_mana, player.max_mana))
        stats_table.add_row("", f"{player.current_mana}/{player.max_mana}")
    stats_table.add_row("AC", str(player.armor_class))
    stats_table.add_row("Proficiency", _format_modifier(player.proficiency_bonus))
    stats_table.add_row("Hit dice", f"{player.hit_dice_current}/{player.hit_dice_max}")
    stats_table.add_row("XP", str(player.xp))
    console.print(stats_table)

    skill_table = Table(title="Skills", box=box.ROUNDED)
    skill_table.add_column("Skill", style="white")
    skill_table.add_column("Modifier", justify="center", style="yellow")
    for skill in sorted(player.skill_modifiers):
        skill_table.add_row(
            skill.replace("_", " ").title(),
            _format_modifier(player.skill_modifiers[skill]),
        )
    console.print(skill_table)


def display_xp_table(rows: list[tuple[int, int, int]]) -> None:
    """Display the XP curve."""
    table = Table(title="Experience", box=box.ROUNDED)
    table.add_column("Level", justify="right", style="cyan")
    table.add_column("XP for level", justify="right")
    table.add_column("Total XP", justify="right", style="green")
    for level, needed, total in rows:
        table.add_row(str(level), str(needed), str(total))
    console.print(table)


def display_monster_list(monsters: list) -> None:
    table = Table(title="Bestiary")
    table.add_column("Key", style="cyan")
    table.add_column("Name", style="white")
    table.add_column("CR", justify="right")
    table.add_column("HP", justify="right")
    table.add_column("AC", justify="right")
    table.add_column("Damage")
    table.add_column("XP", justify="right", style="green")
    for m in monsters:
        table.add_row(
            m.key,
            m.display_name,
            str(m.challenge_rating),
            str(m.hit_points),
            str(m.armor_class),
            f"{m.damage_dice} {m.damage_type}",
            str(m.xp_reward),
        )
    console.print(table)


def display_action(outcome: ActionOutcome) -> None:
    """Display one resolved encounter action."""
    if outcome.regenerated:
        console.print(f"[green]Holy aura restores {outcome.regenerated} HP[/green]")
    if outcome.message:
        console.print(outcome.message)
    if outcome.counter_attack is not None:
        counter = outcome.counter_attack
        verdict = f"hits for {counter.damage}" if counter.hit else "misses"
        console.print(f"[red]Free attack[/red] {verdict}")
    if outcome.xp is not None:
        console.print(f"[green]+{outcome.xp.amount} XP[/green] (total {outcome.xp.total_xp})")
        if outcome.xp.leveled_up:
            display_success(f"Level up! Now level {outcome.xp.new_level}")


def display_combatants(player: PlayerCombatant, monster: MonsterCombatant) -> None:
    line = Text()
    line.append(f"{player.name} ")
    line.append_text(_create_progress_bar(player.current_hp, player.max_hp, width=10))
    line.append(f" {player.current_hp}/{player.max_hp}   ")
    line.append(f"{monster.name} ")
    line.append_text(_create_progress_bar(monster.current_hp, monster.max_hp, width=10))
    line.append(f" {monster.current_hp}/{monster.max_hp}")
    console.print(line)
