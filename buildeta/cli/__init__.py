"""buildeta CLI — Typer-based command-line interface.

Provides the ``buildeta`` command with subcommands for replaying recorded
snapshots, simulating a build with live estimates, and setting the
console title.

All output uses Rich for formatted terminal display.
"""
