"""Command-line interface for peakfit1d."""

from peakfit1d.cli.app import app

__all__ = ["app"]
