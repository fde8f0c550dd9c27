"""Terminal output: console, logging setup and tables."""

from peakfit1d.ui.console import console, print_error, print_success, print_warning
from peakfit1d.ui.logging import close_logging, log, log_dict, log_section, setup_logging
from peakfit1d.ui.tables import create_table, print_fit_result, print_summary

__all__ = [
    "close_logging",
    "console",
    "create_table",
    "log",
    "log_dict",
    "log_section",
    "print_error",
    "print_fit_result",
    "print_success",
    "print_summary",
    "print_warning",
    "setup_logging",
]
