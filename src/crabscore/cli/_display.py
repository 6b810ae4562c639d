"""Rich rendering of a scoring run."""

from rich.console import Console
from rich.text import Text

from ..pipeline import ScoreRun

BAR_WIDTH = 20


def _bar_style(score: float) -> str:
    if score >= 80.0:
        return "bright_green"
    if score >= 60.0:
        return "yellow"
    return "red"


def score_bar(name: str, score: float) -> Text:
    """One ``Name: nn/100 ███░░`` line; the bar saturates at 100."""
    filled = max(0, min(int(score / 100.0 * BAR_WIDTH), BAR_WIDTH))
    line = Text(f"  {name + ':':12} {score:3.0f}/100 ")
    line.append("█" * filled + "░" * (BAR_WIDTH - filled), style=_bar_style(score))
    return line


def display_run(run: ScoreRun, console: Console) -> None:
    score = run.score
    complexity = run.complexity

    console.print()
    console.print("[bold bright_white]CrabScore Report[/bold bright_white]")
    console.print("[bright_white]" + "━" * 50 + "[/bright_white]")

    if run.static_only:
        console.print("[yellow]Mode: Static Analysis Only[/yellow]")
        console.print(
            "[dim]Note: Performance metrics are estimated based on project complexity[/dim]"
        )
        console.print()
    elif run.binary is not None:
        console.print(f"[dim]Benchmarked: {run.binary}[/dim]")
        console.print()

    console.print(
        f"[bold]Overall Score[/bold]: {score.overall:.0f}/100 "
        f"[bright_yellow]\\[{score.certification.value}][/bright_yellow]"
    )

    console.print("\n[bold]Breakdown:[/bold]")
    console.print(score_bar("Performance", score.performance))
    console.print(score_bar("Energy", score.energy))
    console.print(score_bar("Cost", score.cost))

    if score.bonuses > 0.0:
        console.print(f"\n[bold]Bonuses[/bold]: +{score.bonuses:.1f}")
        for item in run.bonus_breakdown:
            console.print(f"  [green]✓[/green] {item.name} (+{item.points:.1f})")

    console.print("\n[bold]Project Complexity:[/bold]")
    console.print(f"  Files: {complexity.file_count}")
    console.print(f"  Lines: {complexity.total_lines}")
    console.print(f"  Functions: {complexity.function_count}")
    console.print(f"  Dependencies: {complexity.dependency_count}")
