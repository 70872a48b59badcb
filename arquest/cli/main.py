"""Main CLI application for the rules engine."""

import logging

import typer

from arquest.cli.commands import character, combat, dice

# Create main app
app = typer.Typer(
    name="arquest",
    help="Tabletop rules engine: dice, characters, spells and encounters",
    add_completion=True,
)

# Add sub-commands
app.add_typer(dice.app, name="dice")
app.add_typer(character.app, name="character")
app.add_typer(combat.app, name="combat")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show engine debug logging"),
) -> None:
    """ARQuest rules engine.

    Use 'arquest combat duel warrior goblin' to watch a fight.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )


if __name__ == "__main__":
    app()
