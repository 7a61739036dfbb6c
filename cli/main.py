"""Poker Analyzer CLI, Typer-based command line interface."""

import logging
import random
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

app = typer.Typer(
    name="poker-analyzer",
    help="Heads-up poker equity and action advisor",
    no_args_is_help=True,
)
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """Heads-up poker equity and action advisor."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


def _make_rng(seed: Optional[int]) -> random.Random:
    from poker_analyzer import config
    if seed is None:
        seed = config.SEED
    return random.Random(seed)


def _parse_cards(text: str, what: str):
    from poker_analyzer.errors import InvalidInputError
    from poker_analyzer.models.card import parse_cards
    try:
        return parse_cards(text)
    except InvalidInputError as e:
        console.print(f"[red]Invalid {what}:[/red] {e}")
        raise typer.Exit(1)


def _parse_sizes(text: str) -> List[float]:
    try:
        return [float(s) for s in text.split(",") if s.strip()]
    except ValueError:
        console.print(f"[red]Invalid sizes:[/red] {text}")
        raise typer.Exit(1)


@app.command()
def evaluate(
    cards: str = typer.Argument(..., help="5 to 7 cards, e.g. 'Ah Kh Qh Jh Th 2c'"),
):
    """Show the best five-card hand."""
    from poker_analyzer.errors import InvalidInputError
    from poker_analyzer.formatters.table import TableFormatter
    from poker_analyzer.simulation.evaluator import HandEvaluator

    parsed = _parse_cards(cards, "cards")
    try:
        value = HandEvaluator.evaluate(parsed)
    except InvalidInputError as e:
        console.print(f"[red]Cannot evaluate:[/red] {e}")
        raise typer.Exit(1)

    TableFormatter(console).print_hand_value(parsed, value)


@app.command()
def equity(
    hero: str = typer.Argument(..., help="Hero hole cards, e.g. 'AhAd'"),
    board: str = typer.Option("", "--board", "-b", help="Known board cards"),
    vs: Optional[str] = typer.Option(None, "--vs", help="Fixed opponent hand, e.g. 'KsKc'"),
    villain_range: Optional[str] = typer.Option(None, "--range", "-r",
                                                help="Opponent range, e.g. 'QQ+,AKs'"),
    iterations: Optional[int] = typer.Option(None, "--iterations", "-n",
                                             help="Number of simulated runouts"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed"),
):
    """Estimate hero equity against one opponent."""
    from poker_analyzer import config
    from poker_analyzer.errors import InvalidInputError
    from poker_analyzer.formatters.table import TableFormatter
    from poker_analyzer.simulation.equity import evaluate_equity
    from poker_analyzer.simulation.ranges import expand_range

    hero_cards = _parse_cards(hero, "hero cards")
    board_cards = _parse_cards(board, "board")

    try:
        candidates = None
        if vs:
            opponent = _parse_cards(vs, "opponent hand")
            candidates = [tuple(opponent)]
        elif villain_range:
            candidates = expand_range(villain_range, dead=hero_cards + board_cards)

        with console.status("Simulating..."):
            result = evaluate_equity(
                hero_cards, board_cards, candidates,
                iterations=iterations or config.DEFAULT_ITERATIONS,
                rng=_make_rng(seed),
            )
    except InvalidInputError as e:
        console.print(f"[red]Invalid input:[/red] {e}")
        raise typer.Exit(1)

    TableFormatter(console).print_equity(hero_cards, board_cards, result)


@app.command()
def analyze(
    hero: str = typer.Argument(..., help="Hero hole cards, e.g. 'AhKd'"),
    board: str = typer.Option("", "--board", "-b", help="Known board cards"),
    pot: float = typer.Option(..., "--pot", "-p", help="Current pot size (BB)"),
    to_call: Optional[float] = typer.Option(None, "--to-call",
                                            help="Amount to call; omit when not facing a bet"),
    hero_stack: float = typer.Option(100.0, "--hero-stack", help="Hero stack (BB)"),
    villain_stack: float = typer.Option(100.0, "--villain-stack", help="Villain stack (BB)"),
    street: Optional[str] = typer.Option(None, "--street",
                                         help="preflop|flop|turn|river (default: from board)"),
    hero_pos: str = typer.Option("BB", "--hero-pos", help="Hero position"),
    villain_pos: str = typer.Option("BTN", "--villain-pos", help="Villain position"),
    profile: str = typer.Option("REG", "--profile", help="Opponent profile (NIT|REG|LOOSE|WHALE)"),
    fold_equity: Optional[float] = typer.Option(None, "--fold-equity",
                                                help="Estimated fold probability to a bet"),
    sizes: Optional[str] = typer.Option(None, "--sizes",
                                        help="Bet sizes as pot fractions, e.g. '0.5,0.75'"),
    villain_range: Optional[str] = typer.Option(None, "--range", "-r",
                                                help="Opponent range, e.g. 'TT+,AQs+'"),
    iterations: Optional[int] = typer.Option(None, "--iterations", "-n",
                                             help="Number of simulated runouts"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed"),
):
    """Score fold, check/call and bet/raise options for a spot."""
    from poker_analyzer import config
    from poker_analyzer.analysis.analyzer import analyze as run_analysis
    from poker_analyzer.errors import InvalidInputError
    from poker_analyzer.formatters.table import TableFormatter
    from poker_analyzer.models.action import Street
    from poker_analyzer.models.analysis import AnalysisInput, Assumptions, OpponentProfile
    from poker_analyzer.models.position import Position

    try:
        spot = AnalysisInput(
            hero_cards=_parse_cards(hero, "hero cards"),
            board=_parse_cards(board, "board"),
            pot=pot,
            to_call=to_call,
            hero_stack=hero_stack,
            villain_stack=villain_stack,
            street=Street(street.lower()) if street else None,
            hero_position=Position.parse(hero_pos),
            villain_position=Position.parse(villain_pos),
            opponent_profile=OpponentProfile(profile.upper()),
            assumptions=Assumptions(
                fold_equity=config.DEFAULT_FOLD_EQUITY if fold_equity is None else fold_equity,
                sizings=_parse_sizes(sizes) if sizes else list(config.DEFAULT_SIZINGS),
            ),
            villain_range=villain_range,
        )
        with console.status("Analyzing..."):
            result = run_analysis(
                spot, rng=_make_rng(seed),
                iterations=iterations or config.ANALYSIS_ITERATIONS,
            )
    except ValueError as e:
        # InvalidInputError and bad enum values
        console.print(f"[red]Invalid input:[/red] {e}")
        raise typer.Exit(1)

    TableFormatter(console).print_analysis(result)


if __name__ == "__main__":
    app()
