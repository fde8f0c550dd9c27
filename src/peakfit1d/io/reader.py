"""Reader for two-column X/Y text files."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from peakfit1d.core.domain.spectrum import Spectrum
from peakfit1d.core.shared.exceptions import DataIOError

if TYPE_CHECKING:
    from pathlib import Path

COMMENT_PREFIXES = ("#", "//")
_SEPARATORS = re.compile(r"[\s,;]+")


def _to_float(token: str) -> float | None:
    try:
        return float(token)
    except ValueError:
        return None


def parse_xy(text: str) -> Spectrum:
    """Parse X/Y pairs from text.

    Blank lines and lines starting with ``#`` or ``//`` are skipped. Fields
    may be separated by whitespace, commas or semicolons; only the first two
    are used. Rows whose first two fields are not numbers (headers, NaN) are
    ignored. The result is sorted by x.
    """
    pairs: list[tuple[float, float]] = []
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith(COMMENT_PREFIXES):
            continue
        fields = _SEPARATORS.split(stripped)
        if len(fields) < 2:
            continue
        x, y = _to_float(fields[0]), _to_float(fields[1])
        if x is None or y is None or x != x or y != y:
            continue
        pairs.append((x, y))
    return Spectrum.from_samples(pairs)


def read_xy(path: Path) -> Spectrum:
    """Read a two-column data file.

    Raises
    ------
        DataIOError: If the file cannot be read or holds no numeric rows
    """
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        msg = f"Cannot read data file {path}: {exc}"
        raise DataIOError(msg) from exc

    spectrum = parse_xy(text)
    if spectrum.is_empty:
        msg = f"No numeric X/Y rows found in {path}"
        raise DataIOError(msg)
    return spectrum
