# ==============================================================================
# salesdash/ingest/kpis.py
# ------------------------------------------------------------------------------
# Derives the dashboard KPIs from the extracted series and roster.
# ==============================================================================

import logging
import math
from datetime import date

import pandas as pd

from .schema import CUSTOMERS_PER_SALESPERSON, MONTH_NAMES, KPISet
from .tabs import is_before_or_equal


def _round_half_up(value, digits=0):
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def parse_mentorship_date(value):
    """
    Parses the mentorship start date read from the sheet. ISO dates are tried
    first, then day-first formats such as "01/03/2024".
    Returns a date, or None when the text is not a date.
    """
    if not value:
        return None
    text = str(value).strip()
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        pass
    parsed = pd.to_datetime(text, dayfirst=True, errors='coerce')
    if pd.isna(parsed):
        logging.warning(f"Could not read the mentorship start date '{text}'; mentorship growth set to 0.")
        return None
    return parsed.date()


def _growth(current, previous):
    if previous <= 0:
        return 0.0
    return (current - previous) / previous * 100


def calculate_kpis(historical_data, current_year_data, team, cutoff_month, cutoff_year, mentorship_start_date=None):
    """
    Computes the KPI set for the dashboard header.

    Conversion rate, CAC and LTV cannot be derived from the spreadsheet and are
    left at 0. Active customers is a rough estimate based on team size.
    """
    annual_goal = sum(p.goal for p in current_year_data)
    annual_realized = sum(p.revenue for p in current_year_data)

    last_year_total = sum(p.revenue for p in historical_data if p.year == cutoff_year - 1)
    last_year_growth = _growth(annual_realized, last_year_total)

    mentorship_growth = 0.0
    start = parse_mentorship_date(mentorship_start_date)
    if start is not None:
        pre_revenue, post_revenue = 0.0, 0.0
        for point in [*historical_data, *current_year_data]:
            if is_before_or_equal(point.month_number, point.year, start.month, start.year):
                pre_revenue += point.revenue
            elif is_before_or_equal(point.month_number, point.year, cutoff_month, cutoff_year):
                post_revenue += point.revenue
        mentorship_growth = _growth(post_revenue, pre_revenue)
        logging.info(f"Mentorship split at {start:%Y-%m}: pre={pre_revenue:,.2f}, post={post_revenue:,.2f}")

    total_sales_count = sum(s.total_sales_count for s in team)
    active_customers = sum(1 for s in team if s.active) * CUSTOMERS_PER_SALESPERSON
    average_ticket = int(_round_half_up(annual_realized / total_sales_count)) if total_sales_count > 0 else 0

    return KPISet(
        annual_goal=annual_goal,
        annual_realized=annual_realized,
        last_year_growth=_round_half_up(last_year_growth, 1),
        mentorship_growth=_round_half_up(mentorship_growth, 1),
        current_month_name=MONTH_NAMES[cutoff_month - 1],
        average_ticket=average_ticket,
        active_customers=active_customers,
        total_sales_count=total_sales_count,
    )
