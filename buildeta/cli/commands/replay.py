"""``buildeta replay FILE`` — run recorded snapshots through the estimator.

Each line of FILE is one JSON ``Progress`` record, taken one sampling
interval apart.  The status line for every tick is printed without any
waiting, which makes the command handy for tuning the decay factors.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from buildeta.config import settings
from buildeta.core.replay import ReplayFormatError, read_snapshots, replay

console = Console()


def replay_cmd(
    file: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        readable=True,
        help="JSON-lines file of Progress snapshots.",
    ),
    sample: float = typer.Option(
        None,
        "--sample",
        "-s",
        help="Seconds between snapshots (defaults to BUILDETA_SAMPLE_INTERVAL).",
    ),
    guess_decay: float = typer.Option(
        None, "--guess-decay", help="Decay factor for never-timed rules."
    ),
    work_decay: float = typer.Option(
        None, "--work-decay", help="Decay factor for the work rate."
    ),
    table: bool = typer.Option(
        False, "--table", "-t", help="Show the messages as a table."
    ),
) -> None:
    """Replay recorded progress snapshots and print every status line."""
    interval = sample if sample is not None else settings.sample_interval
    if interval <= 0:
        console.print(f"[bold red]Sample interval must be > 0:[/bold red] {interval}")
        raise typer.Exit(code=2)

    try:
        snapshots = read_snapshots(file)
    except ReplayFormatError as exc:
        console.print(f"[bold red]Invalid replay file:[/bold red] {escape(str(exc))}")
        console.print(f"[dim]{escape(str(file))}[/dim]")
        raise typer.Exit(code=1)

    lines = replay(
        interval,
        snapshots,
        guess_decay=guess_decay if guess_decay is not None else settings.guess_decay,
        work_decay=work_decay if work_decay is not None else settings.work_decay,
    )

    if table:
        out = Table(title=f"Replay of {file.name}")
        out.add_column("Tick", style="dim", justify="right")
        out.add_column("Elapsed", justify="right")
        out.add_column("Status")
        for tick, line in enumerate(lines[1:-1], start=1):
            out.add_row(str(tick), f"{tick * interval:g}s", line)
        console.print(out)
    else:
        for line in lines:
            console.print(line, highlight=False, markup=False)
