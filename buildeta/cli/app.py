"""Main Typer application — imports and registers all CLI commands.

Entry point: ``buildeta`` (configured via pyproject.toml scripts).

Commands: replay, simulate, title.
"""

from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from buildeta.cli.commands.replay import replay_cmd
from buildeta.cli.commands.simulate import simulate_cmd
from buildeta.config import settings

app = typer.Typer(
    name="buildeta",
    help="buildeta: live time-remaining estimates for incremental builds.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        None, "--log-level", help="Logging level (defaults to BUILDETA_LOG_LEVEL)."
    ),
) -> None:
    """Configure logging for every command."""
    logging.basicConfig(
        level=(log_level or settings.log_level).upper(),
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


# Register subcommands
app.command(name="replay", help="Replay recorded snapshots through the estimator.")(replay_cmd)
app.command(name="simulate", help="Show live estimates for a synthetic build.")(simulate_cmd)


@app.command(name="title", help="Set the console title.")
def title_cmd(
    text: str = typer.Argument(..., help="Title text."),
) -> None:
    """Set the title of the current console window."""
    from buildeta.display.titlebar import progress_titlebar

    progress_titlebar(text)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
