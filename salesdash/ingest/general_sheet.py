# ==============================================================================
# salesdash/ingest/general_sheet.py
# ------------------------------------------------------------------------------
# Extracts the revenue-by-month-by-year table and the mentorship start date
# from the aggregate ("Geral") sheet.
#
# Expected layout (positions may shift by a few rows):
#   row 0        : title
#   row 1        : years (2022, 2023, ...) in columns B onwards
#   rows 2-13    : one month per row, name in column A, revenue per year
#   anywhere     : an "Início Mentoria" label with the date beside or below it
# ==============================================================================

import logging
from collections import namedtuple
from datetime import date, datetime

import pandas as pd

from .cells import Diagnostics, cell, clean_currency, is_number, read_number
from .schema import (MENTORSHIP_LABEL, MENTORSHIP_SCAN_COLUMNS, MENTORSHIP_SCAN_ROWS,
                     MONTH_ABBREVIATIONS, MONTH_NAMES, YEAR_HEADER_MAX_COLUMN,
                     YEAR_HEADER_MAX_ROWS, YEAR_RANGE, MonthlyDataPoint)
from .tabs import is_before_or_equal

GeneralSheetData = namedtuple(
    'GeneralSheetData',
    ['historical_data', 'current_year_data', 'years_available', 'mentorship_start_date']
)

# Serial day 0 of the Excel 1900 date system (accounts for the 1900 leap-year bug)
EXCEL_EPOCH = '1899-12-30'


def find_year_header(frame):
    """
    Finds the first row (within the first rows of the sheet) holding plausible
    calendar years. Returns (row_index, [(column, year), ...]) or (None, []).
    """
    low, high = YEAR_RANGE
    for row in range(min(frame.shape[0], YEAR_HEADER_MAX_ROWS)):
        year_columns = []
        for col in range(1, min(frame.shape[1], YEAR_HEADER_MAX_COLUMN)):
            value = cell(frame, row, col)
            if is_number(value) and low <= value <= high:
                year_columns.append((col, int(value)))
        if year_columns:
            return row, year_columns
    return None, []


def _format_date_cell(value):
    """Converts a date cell (datetime, Excel serial or text) into a string."""
    if isinstance(value, (datetime, date)):
        return value.strftime('%Y-%m-%d')
    if is_number(value):
        try:
            parsed = pd.to_datetime(float(value), unit='D', origin=EXCEL_EPOCH)
        except (ValueError, OverflowError, pd.errors.OutOfBoundsDatetime):
            logging.warning(f"Ignoring mentorship date serial out of range: {value}")
            return None
        return parsed.strftime('%Y-%m-%d')
    if isinstance(value, str):
        return value.strip() or None
    return None


def find_mentorship_start(frame):
    """
    Looks for the "Início Mentoria" label and reads the date next to it, or
    below it when the next cell is empty. The whole window is scanned and a
    later label overwrites the date found for an earlier one.
    """
    found = None
    for row in range(min(frame.shape[0], MENTORSHIP_SCAN_ROWS)):
        for col in range(min(frame.shape[1], MENTORSHIP_SCAN_COLUMNS)):
            label = cell(frame, row, col)
            if not isinstance(label, str) or MENTORSHIP_LABEL not in label.lower():
                continue
            date_cell = cell(frame, row, col + 1) or cell(frame, row + 1, col)
            if not date_cell:
                continue
            formatted = _format_date_cell(date_cell)
            if formatted:
                logging.info(f"Mentorship start date found at row {row + 1}, column {col + 1}: {formatted}")
                found = formatted
    return found


def resolve_month_name(label):
    """
    Maps a month label such as "Março" or "mar." to its month index (0-11).
    Tries an exact match on the full name first, then the 3-letter prefix.
    """
    text = str(label).strip().lower()
    for index, name in enumerate(MONTH_NAMES):
        if text == name.lower():
            return index
    for index, name in enumerate(MONTH_NAMES):
        if text.startswith(name.lower()[:3]):
            return index
    return None


def extract_general_sheet(frame, cutoff_month, cutoff_year, today=None, sheet_name='Geral', diagnostics=None):
    """
    Reads the monthly revenue of every detected year, keeping only the months
    up to the cutoff. Points of the current calendar year (wall-clock, not the
    cutoff year) go to current_year_data; everything else is historical.

    Args:
        frame (DataFrame): The sheet, read without a header row.
        cutoff_month (int): Last month (1-12) to include.
        cutoff_year (int): Year of the last month to include.
        today (date): Reference date for the current year; defaults to today.
        sheet_name (str): Name used in warnings.
        diagnostics (Diagnostics): Optional collector for unreadable cells.

    Returns:
        GeneralSheetData: The two series, the sorted years and the mentorship date.
    """
    today = today or date.today()
    diagnostics = diagnostics if diagnostics is not None else Diagnostics()

    historical_data, current_year_data = [], []
    header_row, year_columns = find_year_header(frame)
    years_available = sorted({year for _, year in year_columns})
    mentorship_start_date = find_mentorship_start(frame)

    if header_row is None:
        logging.warning(f"No year header found in the first {YEAR_HEADER_MAX_ROWS} rows of '{sheet_name}'.")
        return GeneralSheetData(historical_data, current_year_data, years_available, mentorship_start_date)

    logging.info(f"Year header found at row {header_row + 1} of '{sheet_name}': years {years_available}")

    seen = set()
    for row in range(header_row + 1, frame.shape[0]):
        label = cell(frame, row, 0)
        if not label:
            continue
        month_index = resolve_month_name(label)
        if month_index is None:
            continue

        for col, year in year_columns:
            if not is_before_or_equal(month_index + 1, year, cutoff_month, cutoff_year):
                continue
            if (month_index, year) in seen:
                logging.warning(f"Skipping duplicate {MONTH_NAMES[month_index]}/{year} at row {row + 1} of '{sheet_name}'.")
                continue
            seen.add((month_index, year))

            revenue = read_number(frame, row, col, clean_currency, sheet_name, diagnostics)
            point = MonthlyDataPoint(month=MONTH_ABBREVIATIONS[month_index], year=year, revenue=revenue, goal=0.0)
            if year == today.year:
                current_year_data.append(point)
            else:
                historical_data.append(point)

    logging.info(f"'{sheet_name}': {len(historical_data)} historical points, {len(current_year_data)} current-year points.")
    return GeneralSheetData(historical_data, current_year_data, years_available, mentorship_start_date)
