"""CLI command modules for peakfit1d.

Each module exports a command function carrying its Typer annotations;
app.py registers them.
"""

from peakfit1d.cli.commands.baseline import baseline_command
from peakfit1d.cli.commands.fit import fit_command
from peakfit1d.cli.commands.init import init_command

__all__ = [
    "baseline_command",
    "fit_command",
    "init_command",
]
