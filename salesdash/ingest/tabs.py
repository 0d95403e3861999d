# ==============================================================================
# salesdash/ingest/tabs.py
# ------------------------------------------------------------------------------
# Resolves monthly tab names ("Out-25") into (month, year) pairs and lists the
# month tabs available in a workbook.
# ==============================================================================

import re

from .schema import MONTH_ABBREVIATIONS, AvailableMonth

_TAB_NAME = re.compile(r'([A-Za-z]{3})-([0-9]{2})')


def parse_tab_name(tab_name):
    """
    Converts a tab name into a (month, year) tuple.
    Example: "Out-25" -> (10, 2025). Returns None for non-monthly tabs.
    """
    match = _TAB_NAME.fullmatch(tab_name)
    if not match:
        return None
    abbreviation = match.group(1).lower()
    for index, month in enumerate(MONTH_ABBREVIATIONS):
        if month.lower() == abbreviation:
            return index + 1, 2000 + int(match.group(2))
    return None


def format_tab_name(month, year):
    """Builds the tab name for a month/year, e.g. (10, 2025) -> "Out-25"."""
    return f"{MONTH_ABBREVIATIONS[month - 1]}-{str(year)[-2:]}"


def is_before_or_equal(month1, year1, month2, year2):
    """True when month1/year1 is not later than month2/year2."""
    return (year1, month1) <= (year2, month2)


def find_nearest_tab(sheet_names, month, year):
    """
    Returns the first monthly tab, in workbook order, that is not later than
    the given month/year. This is the first eligible tab, not the closest one.
    """
    for name in sheet_names:
        parsed = parse_tab_name(name)
        if parsed and is_before_or_equal(parsed[0], parsed[1], month, year):
            return name
    return None


def list_month_tabs(sheet_names):
    """Lists every monthly tab in the workbook, most recent first."""
    available = []
    for name in sheet_names:
        parsed = parse_tab_name(name)
        if parsed:
            available.append(AvailableMonth(month=parsed[0], year=parsed[1], tab_name=name))
    available.sort(key=lambda m: (m.year, m.month), reverse=True)
    return available
