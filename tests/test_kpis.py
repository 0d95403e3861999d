from datetime import date

import pytest

from salesdash.ingest.kpis import calculate_kpis, parse_mentorship_date
from salesdash.ingest.schema import MONTH_ABBREVIATIONS, MonthlyDataPoint, SalespersonRecord, WeeklyEntry


def _series(year, revenues):
    return [MonthlyDataPoint(month=MONTH_ABBREVIATIONS[i], year=year, revenue=r) for i, r in enumerate(revenues)]


def _salesperson(index, sales_count=0, active=True):
    weeks = [WeeklyEntry(week=w, revenue=0) for w in range(1, 6)]
    return SalespersonRecord(id=str(index), name=f'Vendedor {index}', total_revenue=0, monthly_goal=0,
                             weeks=weeks, active=active, total_sales_count=sales_count)


@pytest.fixture
def series():
    historical = _series(2024, [1000] * 12)
    current = _series(2025, [1500, 1500])
    return historical, current


def test_annual_totals_and_last_year_growth(series):
    historical, current = series
    kpis = calculate_kpis(historical, current, [], 2, 2025)

    assert kpis.annual_realized == 3000
    assert kpis.annual_goal == 0
    assert kpis.last_year_growth == -75.0
    assert kpis.current_month_name == 'Fevereiro'
    assert (kpis.conversion_rate, kpis.cac, kpis.ltv) == (0, 0, 0)


def test_last_year_growth_is_zero_without_previous_year():
    kpis = calculate_kpis([], _series(2025, [100]), [], 1, 2025)
    assert kpis.last_year_growth == 0


def test_mentorship_growth_splits_before_and_after_start(series):
    historical, current = series
    kpis = calculate_kpis(historical, current, [], 2, 2025, mentorship_start_date='2024-07-01')
    # pre: Jan-Jul 2024 = 7000, post: Aug 2024 - Feb 2025 = 8000
    assert kpis.mentorship_growth == 14.3


def test_mentorship_growth_accepts_day_first_dates(series):
    historical, current = series
    kpis = calculate_kpis(historical, current, [], 2, 2025, mentorship_start_date='01/07/2024')
    assert kpis.mentorship_growth == 14.3


def test_mentorship_growth_zero_without_date_or_pre_revenue(series):
    historical, current = series
    assert calculate_kpis(historical, current, [], 2, 2025).mentorship_growth == 0
    assert calculate_kpis(historical, current, [], 2, 2025, mentorship_start_date='2020-01-01').mentorship_growth == 0
    assert calculate_kpis(historical, current, [], 2, 2025, mentorship_start_date='sem data').mentorship_growth == 0


def test_average_ticket_zero_without_sales(series):
    historical, current = series
    kpis = calculate_kpis(historical, current, [_salesperson(1), _salesperson(2)], 2, 2025)
    assert kpis.total_sales_count == 0
    assert kpis.average_ticket == 0


def test_average_ticket_rounds_to_integer(series):
    historical, current = series
    team = [_salesperson(1, sales_count=4), _salesperson(2, sales_count=4)]
    kpis = calculate_kpis(historical, current, team, 2, 2025)
    assert kpis.total_sales_count == 8
    assert kpis.average_ticket == 375


def test_active_customers_estimate():
    team = [_salesperson(1), _salesperson(2), _salesperson(3, active=False)]
    assert calculate_kpis([], [], team, 1, 2025).active_customers == 100


def test_parse_mentorship_date():
    assert parse_mentorship_date('2024-07-01') == date(2024, 7, 1)
    assert parse_mentorship_date('15/03/2024') == date(2024, 3, 15)
    assert parse_mentorship_date(None) is None
    assert parse_mentorship_date('não informado') is None


def test_kpis_to_dict_uses_dashboard_keys(series):
    historical, current = series
    data = calculate_kpis(historical, current, [], 2, 2025).to_dict()
    assert set(data) == {'annualGoal', 'annualRealized', 'lastYearGrowth', 'mentorshipGrowth', 'currentMonthName',
                         'averageTicket', 'conversionRate', 'cac', 'ltv', 'activeCustomers', 'totalSalesCount'}
