# ==============================================================================
# salesdash/ingest/monthly_tab.py
# ------------------------------------------------------------------------------
# Extracts the sales team roster from a monthly tab (e.g. "Out-25").
#
# Expected layout (see RosterLayout for the column offsets):
#   header row   : "CONSULTOR COMERCIAL" in the name column
#   header + 1   : week start dates
#   header + 2.. : one salesperson per row, closed by a "Total" row
# ==============================================================================

import logging

from .cells import Diagnostics, cell, clean_roster_number, is_number, is_sequence_number, read_number
from .schema import (DEFAULT_LAYOUT, ROSTER_FOOTER_LABEL, ROSTER_HEADER_FALLBACK_ROW,
                     ROSTER_HEADER_KEYWORDS, ROSTER_HEADER_MAX_ROWS, SalespersonRecord, WeeklyEntry)


def _mentions_header(text):
    text = text.lower()
    return any(keyword in text for keyword in ROSTER_HEADER_KEYWORDS)


def find_roster_header(frame, layout=DEFAULT_LAYOUT):
    """Returns the index of the roster header row, or None when the first rows have no header."""
    for row in range(min(frame.shape[0], ROSTER_HEADER_MAX_ROWS)):
        value = cell(frame, row, layout.name)
        if value and _mentions_header(str(value)):
            return row
    return None


def _read_result(frame, row, col, fallback, sheet_name, diagnostics):
    """Reads the period result, falling back to the sum of the weeks when blank or unreadable."""
    value = cell(frame, row, col)
    if value is None:
        return fallback
    if is_number(value):
        return float(value)
    number = clean_roster_number(value)
    if number is None:
        diagnostics.warn(sheet_name, row, col, value, 'not a number, using the weekly total')
        return fallback
    # text that cleans down to zero counts as missing
    return number or fallback


def extract_monthly_tab(frame, layout=DEFAULT_LAYOUT, sheet_name='', diagnostics=None):
    """
    Reads every salesperson row of a monthly tab.

    Args:
        frame (DataFrame): The sheet, read without a header row.
        layout (RosterLayout): Column offsets of the template.
        sheet_name (str): Name used in logs and warnings.
        diagnostics (Diagnostics): Optional collector for unreadable cells.

    Returns:
        list: SalespersonRecord entries in row order, ids starting at "1".
    """
    diagnostics = diagnostics if diagnostics is not None else Diagnostics()
    team = []

    header_row = find_roster_header(frame, layout)
    if header_row is None:
        header_row = ROSTER_HEADER_FALLBACK_ROW
        logging.warning(f"Roster header not found in '{sheet_name}', assuming row {header_row + 1}.")
    else:
        logging.info(f"Roster header found at row {header_row + 1} of '{sheet_name}'.")

    # The row right after the header holds the week start dates
    for row in range(header_row + 2, frame.shape[0]):
        name_cell = cell(frame, row, layout.name)
        if not isinstance(name_cell, str):
            continue
        name = name_cell.strip()
        if not name:
            continue
        if name.lower() == ROSTER_FOOTER_LABEL:
            logging.info(f"Footer row reached at row {row + 1} of '{sheet_name}'.")
            break
        if _mentions_header(name):
            continue

        if not is_sequence_number(cell(frame, row, layout.number)):
            logging.debug(f"Skipping row {row + 1} of '{sheet_name}' without a sequence number: '{name}'")
            continue

        weeks = []
        weekly_total = 0.0
        for week_number, col in enumerate(layout.weeks, start=1):
            revenue = read_number(frame, row, col, clean_roster_number, sheet_name, diagnostics)
            weekly_total += revenue
            weeks.append(WeeklyEntry(week=week_number, revenue=revenue, goal=0.0))

        total_revenue = _read_result(frame, row, layout.result, weekly_total, sheet_name, diagnostics)
        monthly_goal = read_number(frame, row, layout.goal, clean_roster_number, sheet_name, diagnostics)

        logging.debug(f"Salesperson '{name}': result={total_revenue:,.2f}, goal={monthly_goal:,.2f}")
        team.append(SalespersonRecord(
            id=str(len(team) + 1),
            name=name,
            total_revenue=total_revenue,
            monthly_goal=monthly_goal,
            weeks=weeks,
        ))

    logging.info(f"'{sheet_name}': {len(team)} salespeople found.")
    return team
