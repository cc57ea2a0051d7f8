"""Command hierarchy groups for the ArchBoard CLI.

  archboard config   Credentials and palette
"""

from __future__ import annotations

import typer

# ── Configuration group ──────────────────────────────────────
config_grp = typer.Typer(
    help="⚙️  Configuration: Miro token and diagram colors.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
