# ==============================================================================
# salesdash/ingest/loader.py
# ------------------------------------------------------------------------------
# Opens an uploaded workbook into one header-less DataFrame per sheet.
# ==============================================================================

import logging
import os
from io import BytesIO

import pandas as pd


class WorkbookError(Exception):
    """Raised when the uploaded file cannot be opened as a spreadsheet."""


def _as_excel_source(source):
    if isinstance(source, (bytes, bytearray)):
        return BytesIO(source)
    if isinstance(source, (str, os.PathLike)):
        return source
    # File-like objects (werkzeug FileStorage, open files) are read fully into memory
    return BytesIO(source.read())


def load_workbook(source):
    """
    Reads every sheet of the workbook as a grid of cells.

    Args:
        source: Raw bytes, a path, or a binary file-like object.

    Returns:
        dict: sheet name -> DataFrame (no header row, positional columns),
        in workbook order. Text cells stay strings, even "1.234" or "NA".

    Raises:
        WorkbookError: If the file is not a readable workbook.
    """
    try:
        xls = pd.ExcelFile(_as_excel_source(source))
        # Cells keep the types stored in the file; only empty cells become NaN
        sheets = pd.read_excel(xls, sheet_name=None, header=None, dtype=object,
                               keep_default_na=False, na_values=[''])
    except Exception as e:
        raise WorkbookError(f"Invalid or unreadable workbook: {e}") from e

    # read_excel returns the sheets in workbook order; keep that explicitly
    dataframes = {name: sheets[name] for name in xls.sheet_names}
    logging.info(f"Workbook loaded with {len(dataframes)} sheets: {list(dataframes)}")
    return dataframes


def read_sheet_names(source):
    """Returns the sheet names of the workbook without reading any cells."""
    try:
        return pd.ExcelFile(_as_excel_source(source)).sheet_names
    except Exception as e:
        raise WorkbookError(f"Invalid or unreadable workbook: {e}") from e
