"""Dice commands."""

import typer

from arquest.cli.display import display_dice_roll, display_error
from arquest.dice.parser import InvalidNotation, parse_dice
from arquest.dice.roller import roll_with_advantage
from arquest.dice.types import AdvantageType

app = typer.Typer(help="Dice commands")


@app.command()
def roll(
    notation: str = typer.Argument(..., help="Dice notation, e.g. 2d6+3"),
    advantage: bool = typer.Option(False, "--advantage", "-a", help="Roll twice, keep higher"),
    disadvantage: bool = typer.Option(False, "--disadvantage", "-d", help="Roll twice, keep lower"),
) -> None:
    """Roll dice from standard notation."""
    try:
        expression = parse_dice(notation)
    except InvalidNotation as e:
        display_error(str(e))
        raise typer.Exit(1)

    if advantage and not disadvantage:
        mode = AdvantageType.ADVANTAGE
    elif disadvantage and not advantage:
        mode = AdvantageType.DISADVANTAGE
    else:
        mode = AdvantageType.NORMAL

    display_dice_roll(notation, roll_with_advantage(expression, mode))
