"""``buildeta simulate`` — watch the estimator follow a synthetic build.

Runs a ``SimulatedBuild`` on a background thread and shows live status
lines on the console, the titlebar and any ``shake-progress`` helper.
"""

from __future__ import annotations

import threading

import typer
from rich.console import Console
from rich.panel import Panel

from buildeta.config import settings
from buildeta.core.driver import ProgressDisplay
from buildeta.display.console import ConsoleSink
from buildeta.display.simple import simple_dispatcher
from buildeta.simulation import SimulatedBuild, make_rules

console = Console()


def simulate_cmd(
    rules: int = typer.Option(40, "--rules", "-n", help="Number of rules to build."),
    jobs: int = typer.Option(4, "--jobs", "-j", help="Rules built in parallel."),
    sample: float = typer.Option(
        1.0, "--sample", "-s", help="Seconds between status lines."
    ),
    speed: float = typer.Option(
        4.0, "--speed", help="Simulated seconds per real second."
    ),
    link_every: int = typer.Option(
        10, "--link-every", help="Insert a long link rule every N rules (0 disables)."
    ),
    seed: int = typer.Option(0, "--seed", help="Random seed for rule durations."),
) -> None:
    """Run a synthetic build and display its progress estimate."""
    if jobs < 1 or rules < 1 or sample <= 0 or speed <= 0:
        console.print("[bold red]rules, jobs, sample and speed must all be positive.[/bold red]")
        raise typer.Exit(code=2)

    build = SimulatedBuild(
        make_rules(rules, seed=seed, link_every=link_every), jobs=jobs
    )

    console.print()
    console.print(
        Panel(
            f"[bold]Simulated build[/bold]\n\n"
            f"{rules} rules on {jobs} jobs at {speed:g}x speed.\n"
            f"Status every {sample:g}s.  Press Ctrl+C to stop.",
            border_style="cyan",
            padding=(1, 2),
        )
    )

    dispatcher = simple_dispatcher(settings, extra_sinks=[ConsoleSink(console)])
    stop = threading.Event()
    display = ProgressDisplay(
        sample,
        dispatcher,
        build.snapshot,
        guess_decay=settings.guess_decay,
        work_decay=settings.work_decay,
    )

    display.start()
    try:
        build.run(speed=speed, stop=stop)
    except KeyboardInterrupt:
        stop.set()
    finally:
        display.stop()

    final = build.snapshot()
    status = "[bold red]failed[/bold red]" if final.failure else "[bold green]complete[/bold green]"
    console.print(
        f"\nBuild {status}: {final.count_built} rules, "
        f"{final.time_built:.1f}s of work."
    )
