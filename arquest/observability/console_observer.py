"""Rich console observer for real-time engine visibility.

Uses the Rich library to print attacks, spells, effect changes, level-ups,
rests and phase changes as they happen.
"""

from rich.console import Console

from arquest.observability.events import (
    AttackResolvedEvent,
    SpellCastEvent,
    EffectChangedEvent,
    LevelUpEvent,
    RestEvent,
    PhaseChangeEvent,
)


class RichConsoleObserver:
    """Pretty console output using Rich."""

    INTERACTION_STYLES = {
        "vulnerable": "[bold red]vulnerable[/]",
        "resistant": "[yellow]resistant[/]",
        "immune": "[dim]immune[/]",
    }

    def __init__(
        self,
        console: Console | None = None,
        show_phases: bool = False,
        indent: str = "  ",
    ) -> None:
        """Initialize the console observer.

        Args:
            console: Rich Console instance. Creates new one if not provided.
            show_phases: Also print every phase transition.
            indent: Indentation string for nested output.
        """
        self.console = console or Console()
        self.show_phases = show_phases
        self.indent = indent

    def on_attack_resolved(self, event: AttackResolvedEvent) -> None:
        """Render attack roll and damage."""
        if event.is_critical:
            verdict = "[bold green]CRITICAL[/]"
        elif event.is_fumble:
            verdict = "[bold red]FUMBLE[/]"
        elif event.hit:
            verdict = "[green]hit[/]"
        else:
            verdict = "[red]miss[/]"

        line = (
            f"{self.indent}[cyan]{event.attacker}[/] -> {event.defender} "
            f"({event.profile}): d20={event.natural} total={event.total} "
            f"vs AC {event.target_ac} {verdict}"
        )
        if event.hit:
            line += f", {event.damage} {event.damage_type}"
            interaction = self.INTERACTION_STYLES.get(event.interaction)
            if interaction:
                line += f" ({interaction})"
            line += f" [dim]hp {event.defender_hp}[/]"
        self.console.print(line)

    def on_spell_cast(self, event: SpellCastEvent) -> None:
        """Render spell resolution."""
        parts = [f"{self.indent}[magenta]{event.caster}[/] casts {event.spell_id}"]
        if event.mana_spent:
            parts.append(f"(-{event.mana_spent} mana)")
        if event.save_succeeded is not None:
            parts.append("[yellow]saved[/]" if event.save_succeeded else "[green]failed save[/]")
        if event.damage:
            parts.append(f"{event.damage} damage")
        if event.healed:
            parts.append(f"[green]+{event.healed} HP[/]")
        self.console.print(" ".join(parts))

    def on_effect_changed(self, event: EffectChangedEvent) -> None:
        """Render effect changes."""
        stacks = f" x{event.stacks}" if event.stacks > 1 else ""
        self.console.print(
            f"{self.indent}[blue]*[/] {event.combatant}: {event.effect_id}{stacks} {event.change}"
        )

    def on_level_up(self, event: LevelUpEvent) -> None:
        """Render level-up."""
        self.console.print(
            f"[bold green]{event.player} reached level {event.new_level}![/] "
            f"(+{event.attribute_points_awarded} attribute points)"
        )

    def on_rest(self, event: RestEvent) -> None:
        """Render rest recovery."""
        self.console.print(
            f"{self.indent}{event.player} takes a {event.kind} rest: "
            f"+{event.hp_recovered} HP, +{event.mana_recovered} mana, "
            f"{event.hit_dice_remaining} hit dice left"
        )

    def on_phase_change(self, event: PhaseChangeEvent) -> None:
        """Render phase transitions (only terminal ones unless show_phases)."""
        terminal = event.new_phase in ("victory", "defeat", "fled")
        if terminal:
            self.console.print(f"[bold]Encounter ended: {event.new_phase.upper()}[/]")
        elif self.show_phases:
            self.console.print(f"{self.indent}[dim]phase -> {event.new_phase}[/]")
