"""Rich table formatting for terminal output."""

from typing import List, Sequence

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.text import Text

from poker_analyzer.analysis.pot import format_percentage
from poker_analyzer.models.analysis import (
    ActionRecommendation, AnalysisResult, BoardTexture, Confidence, HandMetrics,
    LeakFinding, Severity,
)
from poker_analyzer.models.card import Card
from poker_analyzer.models.simulation import SimulationResult
from poker_analyzer.simulation.evaluator import HandValue

SEVERITY_STYLES = {
    Severity.HIGH: "red",
    Severity.MEDIUM: "yellow",
    Severity.LOW: "blue",
}

CONFIDENCE_STYLES = {
    Confidence.HIGH: "green",
    Confidence.MEDIUM: "yellow",
    Confidence.LOW: "red",
}


def _cards(cards: Sequence[Card]) -> str:
    return " ".join(str(c) for c in cards) or "-"


class TableFormatter:
    """Format equity and analysis results as Rich tables for terminal display."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def print_equity(self, hero: Sequence[Card], board: Sequence[Card],
                     result: SimulationResult) -> None:
        """Print a simulation result as a Rich table."""
        table = Table(title=f"Equity: {_cards(hero)}  |  Board: {_cards(board)}")
        table.add_column("Metric", style="cyan")
        table.add_column("Value", justify="right", style="green")

        table.add_row("Equity", format_percentage(result.equity, 2))
        table.add_row("Wins", f"{result.wins} ({format_percentage(result.win_rate)})")
        table.add_row("Ties", f"{result.ties} ({format_percentage(result.tie_rate)})")
        table.add_row("Losses", str(result.losses))
        table.add_row("Iterations", str(result.iterations))
        table.add_row("Time", f"{result.time_ms:.0f} ms")

        self.console.print(table)

    def print_hand_value(self, cards: Sequence[Card], value: HandValue) -> None:
        tiebreakers = ", ".join(str(t) for t in value.tiebreakers)
        self.console.print(f"{_cards(cards)}: [bold]{value.rank.label}[/bold] "
                           f"[dim]({tiebreakers})[/dim]")

    def print_metrics(self, metrics: HandMetrics) -> None:
        table = Table(title="Hand Metrics")
        table.add_column("Metric", style="cyan")
        table.add_column("Value", justify="right", style="green")

        table.add_row("Equity", format_percentage(metrics.equity))
        table.add_row("Pot Odds", format_percentage(metrics.pot_odds))
        table.add_row("Required Equity", format_percentage(metrics.required_equity))
        table.add_row("SPR", f"{metrics.spr:.2f}")
        for label, value in metrics.ev.items():
            table.add_row(f"EV {label}", f"{value:+.2f}")

        self.console.print(table)

    def print_recommendations(self, recommendations: List[ActionRecommendation]) -> None:
        table = Table(title="Recommendations")
        table.add_column("#", justify="right", style="dim")
        table.add_column("Action", style="cyan")
        table.add_column("Score", justify="right")
        table.add_column("Rationale")

        for i, rec in enumerate(recommendations, 1):
            score_style = "green" if rec.score >= 0.7 else "yellow" if rec.score >= 0.4 else "red"
            table.add_row(
                str(i),
                rec.label,
                f"[{score_style}]{rec.score:.2f}[/{score_style}]",
                "; ".join(rec.rationale),
            )

        self.console.print(table)

    def print_texture(self, texture: BoardTexture) -> None:
        flags = [name for name, on in (
            ("paired", texture.paired),
            ("monotone", texture.monotone),
            ("rainbow", texture.rainbow),
            ("connected", texture.connected),
            ("draw-heavy", texture.draw_heavy),
        ) if on]
        self.console.print(f"Board texture: [bold]{texture.dryness.value}[/bold]  "
                           f"high cards: {texture.high_cards}  "
                           f"[dim]{', '.join(flags) or 'no flags'}[/dim]")

    def print_leaks(self, leaks: List[LeakFinding]) -> None:
        """Print detected leaks as Rich panels."""
        if not leaks:
            self.console.print(Panel(
                "No leaks detected.",
                title="Leak Analysis",
                style="green",
            ))
            return

        self.console.print(f"\n[bold]Leak Analysis[/bold] - {len(leaks)} issue(s) found\n")
        for leak in leaks:
            style = SEVERITY_STYLES[leak.severity]
            content = Text(leak.fix)
            self.console.print(Panel(
                content,
                title=f"[{style}][{leak.severity.value}][/{style}] {leak.issue}",
                border_style=style,
            ))

    def print_analysis(self, result: AnalysisResult) -> None:
        """Print every section of an analysis."""
        self.print_metrics(result.metrics)
        self.print_recommendations(result.recommendations)
        self.print_texture(result.texture)
        self.console.print(f"Hero range: [cyan]{result.ranges.hero}[/cyan]")
        self.console.print(f"Villain range: [cyan]{result.ranges.villain}[/cyan]")
        style = CONFIDENCE_STYLES[result.confidence]
        self.console.print(f"Confidence: [{style}]{result.confidence.value}[/{style}]")
        self.print_leaks(result.leaks)
