"""rccforge CLI — Typer-based command-line interface.

Provides the ``rccforge`` command with subcommands for running a
regeneration cycle, printing a manifest's settings digest and listing its
resource files.

All output uses Rich for formatted terminal display.
"""
