# ==============================================================================
# salesdash/ingest/cells.py
# ------------------------------------------------------------------------------
# Cell access and number cleaning helpers shared by the sheet extractors.
# Conversion failures never raise: they degrade to 0 and, when a Diagnostics
# collector is supplied, are recorded as CellWarning entries.
# ==============================================================================

import logging
import numbers
import re

import pandas as pd

from .schema import CellWarning

# Leading numeric prefix, the same way a lenient float parser reads "12,5abc" -> 12.5
_FLOAT_PREFIX = re.compile(r'^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?')
# Characters removed from currency strings in the general sheet ("R$ 1.234,56")
_CURRENCY_NOISE = re.compile(r'[R$\s.]')
# Everything that is not a digit or a separator, removed from roster cells
_NON_NUMERIC = re.compile(r'[^0-9.,]')
_DIGITS_ONLY = re.compile(r'^\d+$')


class Diagnostics:
    """Collects cell-level warnings for a single ingestion run."""

    def __init__(self):
        self.warnings = []

    def warn(self, sheet, row, column, raw, reason):
        warning = CellWarning(sheet=sheet, row=row, column=column, raw=raw, reason=reason)
        self.warnings.append(warning)
        logging.debug(f"Cell warning in '{sheet}' row {row + 1}, column {column + 1}: {reason} (raw={raw!r})")


def cell(frame, row, col):
    """Returns the value at (row, col), or None when out of range or empty."""
    if row < 0 or col < 0 or row >= frame.shape[0] or col >= frame.shape[1]:
        return None
    value = frame.iat[row, col]
    if value is None:
        return None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        pass
    return value


def is_number(value):
    return isinstance(value, numbers.Number) and not isinstance(value, bool)


def is_sequence_number(value):
    """True for the roster's sequence column: a number or a digit-only string."""
    if is_number(value):
        return True
    return isinstance(value, str) and bool(_DIGITS_ONLY.match(value.strip()))


def parse_float_prefix(text):
    """Parses the leading number of a string, or returns None if there is none."""
    match = _FLOAT_PREFIX.match(text)
    if not match:
        return None
    return float(match.group(0))


def clean_currency(value):
    """
    Converts a general-sheet revenue cell into a float.
    Example: "R$ 1.234,56" -> 1234.56, "abc" -> None, 1500 -> 1500
    Returns None when the value cannot be read as a number.
    """
    if is_number(value):
        return float(value)
    if isinstance(value, str):
        cleaned = _CURRENCY_NOISE.sub('', value).replace(',', '.', 1)
        return parse_float_prefix(cleaned)
    return None


def clean_roster_number(value):
    """
    Converts a roster cell into a float by keeping digits and separators only.
    Returns None when the value cannot be read as a number.
    """
    if is_number(value):
        return float(value)
    if isinstance(value, str):
        cleaned = _NON_NUMERIC.sub('', value).replace(',', '.', 1)
        return parse_float_prefix(cleaned)
    return None


def read_number(frame, row, col, cleaner, sheet='', diagnostics=None):
    """
    Reads a numeric cell with the given cleaner. Empty cells count as 0 without
    a warning; any other unreadable content counts as 0 and is reported.
    """
    value = cell(frame, row, col)
    if value is None:
        return 0
    number = cleaner(value)
    if number is None:
        if diagnostics is not None:
            diagnostics.warn(sheet, row, col, value, 'not a number')
        return 0
    return number
