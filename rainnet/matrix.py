"""Reading numeric tables from comma separated files."""

from __future__ import annotations

import os
import re
from collections.abc import Iterable

import numpy as np

_DELIMITERS = re.compile(r"[,\n]+")
_NUMBER_PREFIX = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)


class CsvFormatError(ValueError):
    """Raised when a table is empty or one of its rows has too few fields."""


def _tokens(line: str) -> list[str]:
    """Split a line on commas and newlines, dropping empty fields."""
    return [token for token in _DELIMITERS.split(line) if token]


def _to_float(token: str) -> float:
    """Read the leading number of a field; a field with none reads as zero."""
    match = _NUMBER_PREFIX.match(token)
    return float(match.group(1)) if match else 0.0


def parse_rows(lines: Iterable[str]) -> np.ndarray:
    """Parse text lines into a float32 matrix.

    The first line fixes the number of columns. Fields past that number are
    ignored; a line with fewer fields raises CsvFormatError.
    """
    lines = list(lines)
    if not lines:
        raise CsvFormatError("table is empty")

    columns = len(_tokens(lines[0]))
    rows = []
    for number, line in enumerate(lines, start=1):
        fields = _tokens(line)[:columns]
        if len(fields) != columns:
            raise CsvFormatError(
                f"line {number} has {len(fields)} columns (expected {columns})"
            )
        rows.append([_to_float(field) for field in fields])

    return np.array(rows, dtype=np.float32).reshape(len(lines), columns)


def read_csv(path: str | os.PathLike[str]) -> np.ndarray:
    """Read a comma separated file of numbers into a float32 matrix."""
    with open(path, encoding="utf-8", newline="") as handle:
        return parse_rows(handle)