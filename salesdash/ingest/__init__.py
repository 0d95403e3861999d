# ==============================================================================
# salesdash/ingest/__init__.py
# ------------------------------------------------------------------------------
# Spreadsheet ingestion: turns an uploaded workbook into dashboard data.
# ==============================================================================

from .engine import detect_available_months, process_file
from .loader import WorkbookError, load_workbook
from .schema import DEFAULT_LAYOUT, RosterLayout, UploadConfig, UploadResult
