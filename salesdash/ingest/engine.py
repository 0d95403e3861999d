# ==============================================================================
# salesdash/ingest/engine.py
# ------------------------------------------------------------------------------
# Orchestrates one upload: load the workbook, read the general sheet and the
# selected monthly tab, derive the KPIs and wrap everything in an UploadResult.
# ==============================================================================

import logging

from .cells import Diagnostics
from .general_sheet import extract_general_sheet
from .kpis import calculate_kpis
from .loader import WorkbookError, load_workbook, read_sheet_names
from .monthly_tab import extract_monthly_tab
from .schema import DEFAULT_LAYOUT, GENERAL_SHEET_NAMES, ProcessedData, UploadResult
from .tabs import find_nearest_tab, format_tab_name, list_month_tabs


def _find_general_sheet(dataframes):
    for name in GENERAL_SHEET_NAMES:
        if name in dataframes:
            return name
    return None


def process_file(source, config, layout=None, today=None):
    """
    Parses an uploaded workbook up to the selected cutoff month.

    Args:
        source: Raw bytes, a path, or a binary file-like object.
        config (UploadConfig): The cutoff month and year.
        layout (RosterLayout): Column offsets of the monthly tabs.
        today (date): Reference date for the current-year split.

    Returns:
        UploadResult: success with the ProcessedData, or failure with a
        human-readable message. Never raises.
    """
    layout = layout or DEFAULT_LAYOUT
    logging.info("=" * 80)
    logging.info(f"STARTING WORKBOOK INGESTION (cutoff {config.selected_month:02d}/{config.selected_year})")
    logging.info("=" * 80)

    try:
        dataframes = load_workbook(source)
        sheets_found = list(dataframes)
        diagnostics = Diagnostics()
        row_count = 0

        historical_data, current_year_data, team = [], [], []
        years_available = []
        mentorship_start_date = None

        selected_tab = format_tab_name(config.selected_month, config.selected_year)

        general_name = _find_general_sheet(dataframes)
        if general_name:
            general_frame = dataframes[general_name]
            general = extract_general_sheet(general_frame, config.selected_month, config.selected_year,
                                            today=today, sheet_name=general_name, diagnostics=diagnostics)
            historical_data = general.historical_data
            current_year_data = general.current_year_data
            years_available = general.years_available
            mentorship_start_date = general.mentorship_start_date
            row_count += max(len(general_frame) - 1, 0)
        else:
            logging.warning(f"No general sheet ({', '.join(GENERAL_SHEET_NAMES)}) in the workbook.")

        if selected_tab in dataframes:
            monthly_frame = dataframes[selected_tab]
            team = extract_monthly_tab(monthly_frame, layout, selected_tab, diagnostics)
            row_count += max(len(monthly_frame) - 1, 0)
        else:
            fallback_tab = find_nearest_tab(sheets_found, config.selected_month, config.selected_year)
            if fallback_tab:
                logging.warning(f"Tab '{selected_tab}' not found, reading the team from '{fallback_tab}'.")
                # The fallback tab is not added to row_count
                team = extract_monthly_tab(dataframes[fallback_tab], layout, fallback_tab, diagnostics)
            else:
                logging.warning(f"Tab '{selected_tab}' not found and no earlier monthly tab is available.")

        kpis = calculate_kpis(historical_data, current_year_data, team,
                              config.selected_month, config.selected_year, mentorship_start_date)

        data = ProcessedData(
            sheets_found=sheets_found,
            row_count=row_count,
            kpis=kpis,
            historical_data=historical_data,
            current_year_data=current_year_data,
            team=team,
            years_available=years_available,
            selected_month=selected_tab,
            mentorship_start_date=mentorship_start_date,
            warnings=diagnostics.warnings,
        )
    except Exception as e:
        logging.error(f"Workbook ingestion failed: {e}", exc_info=True)
        return UploadResult.failure()

    if diagnostics.warnings:
        logging.warning(f"{len(diagnostics.warnings)} cells could not be read as numbers and were counted as 0.")
    logging.info(f"--- Ingestion finished: {len(team)} salespeople, {row_count} rows. ---")
    return UploadResult.ok(data)


def detect_available_months(source):
    """
    Lists the monthly tabs of a workbook, most recent first.
    Returns an empty list when the file cannot be read.
    """
    try:
        sheet_names = read_sheet_names(source)
    except WorkbookError as e:
        logging.error(f"Could not detect the available months: {e}")
        return []
    return list_month_tabs(sheet_names)
