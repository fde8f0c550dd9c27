"""Writers for fit results (JSON and CSV)."""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

import numpy as np

from peakfit1d.core.domain.spectrum import match_by_x
from peakfit1d.core.shared.exceptions import DataIOError

if TYPE_CHECKING:
    from peakfit1d.core.domain.spectrum import Spectrum
    from peakfit1d.core.results.fit_results import FitResult

SUPPORTED_SUFFIXES = (".json", ".csv")


class NumpyEncoder(json.JSONEncoder):
    """JSON encoder that handles numpy scalars and arrays."""

    def default(self, o: Any) -> Any:
        if isinstance(o, np.integer):
            return int(o)
        if isinstance(o, np.floating):
            return float(o)
        if isinstance(o, np.ndarray):
            return o.tolist()
        if isinstance(o, Path):
            return str(o)
        return super().default(o)


def write_json(result: FitResult, path: Path) -> None:
    """Write the full result, curves included, as JSON."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(result.to_dict(), f, indent=2, cls=NumpyEncoder)


def write_csv(result: FitResult, path: Path, raw: Spectrum | None = None) -> None:
    """Write one row per sample of the fitted grid.

    Args:
        result: Fit result
        path: Output file path
        raw: Unprocessed input; its y values are matched to the fitted grid
            by x (within tolerance) and written as ``y_raw``
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    grid = result.fitted
    columns: dict[str, np.ndarray] = {"x": grid.x}
    if raw is not None:
        columns["y_raw"] = match_by_x(grid, raw, fill_value=np.nan)
    columns["y"] = result.corrected.y + result.baseline.y
    columns["baseline"] = result.baseline.y
    columns["corrected"] = result.corrected.y
    columns["fitted"] = grid.y
    columns["residual"] = result.residuals.y
    for component, curve in zip(result.parameters, result.components, strict=True):
        columns[f"peak_{component.id}"] = curve.y

    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(columns)
        for row in zip(*columns.values(), strict=True):
            writer.writerow(f"{value:.10g}" for value in row)


def write_result(result: FitResult, path: Path, raw: Spectrum | None = None) -> None:
    """Write ``result`` in the format implied by the file suffix.

    Raises
    ------
        DataIOError: For an unsupported suffix or an unwritable path
    """
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        msg = f"Unsupported output format '{path.suffix}' (use {', '.join(SUPPORTED_SUFFIXES)})"
        raise DataIOError(msg)
    try:
        if suffix == ".json":
            write_json(result, path)
        else:
            write_csv(result, path, raw)
    except OSError as exc:
        msg = f"Cannot write {path}: {exc}"
        raise DataIOError(msg) from exc


def write_curve(curve: Spectrum, path: Path, column: str = "y") -> None:
    """Write a single X/Y curve as two CSV columns."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(["x", column])
            for sample in curve:
                writer.writerow([f"{sample.x:.10g}", f"{sample.y:.10g}"])
    except OSError as exc:
        msg = f"Cannot write {path}: {exc}"
        raise DataIOError(msg) from exc
