# =============================================================================
# src/cli/__init__.py - CLI Package
# =============================================================================
#
# Command-line front end for the x-novel client. Everything lives in
# main.py: one argparse parser with a subcommand per resource group
# (health, projects, chapters, chat, assist, backup).
#
# Architecture Notes:
#   - argparse, not Click/Typer, to keep the dependency set small.
#   - The client (src.main.build_client) is imported inside _run() so
#     logging is configured before any module caches a structlog logger.
# =============================================================================

"""CLI tools for the x-novel client.

- ``python -m src.cli`` / ``python -m src.cli.main`` - talk to an x-novel
  server from the terminal.
"""
