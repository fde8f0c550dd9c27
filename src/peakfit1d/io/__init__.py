"""File input/output: configuration, data files and results."""

from peakfit1d.io.config import generate_default_config, load_config, save_config
from peakfit1d.io.reader import parse_xy, read_xy
from peakfit1d.io.writer import write_csv, write_curve, write_json, write_result

__all__ = [
    "generate_default_config",
    "load_config",
    "parse_xy",
    "read_xy",
    "save_config",
    "write_csv",
    "write_curve",
    "write_json",
    "write_result",
]
