# ==============================================================================
# salesdash/ingest/schema.py
# ------------------------------------------------------------------------------
# Defines the expected layout of the uploaded workbook and the records the
# ingestion pipeline produces from it.
# This module is the single source of truth for month names, sheet names and
# the column positions of the monthly roster tabs.
# ==============================================================================

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

# Month abbreviations used in tab names (e.g. "Out-25") and in the output series
MONTH_ABBREVIATIONS = ['Jan', 'Fev', 'Mar', 'Abr', 'Mai', 'Jun',
                       'Jul', 'Ago', 'Set', 'Out', 'Nov', 'Dez']

# Full month names as they appear in the first column of the general sheet
MONTH_NAMES = ['Janeiro', 'Fevereiro', 'Março', 'Abril', 'Maio', 'Junho',
               'Julho', 'Agosto', 'Setembro', 'Outubro', 'Novembro', 'Dezembro']

# Accepted names of the aggregate sheet, checked in this order
GENERAL_SHEET_NAMES = ('Geral', 'geral', 'GERAL')

# --- General sheet scan windows ---
YEAR_HEADER_MAX_ROWS = 5
YEAR_HEADER_MAX_COLUMN = 10  # exclusive; column 0 holds the month labels
YEAR_RANGE = (2020, 2030)
MENTORSHIP_LABEL = 'início mentoria'
MENTORSHIP_SCAN_ROWS = 20
MENTORSHIP_SCAN_COLUMNS = 15

# --- Monthly tab scan window ---
ROSTER_HEADER_MAX_ROWS = 10
ROSTER_HEADER_FALLBACK_ROW = 1
ROSTER_HEADER_KEYWORDS = ('consultor', 'comercial')
ROSTER_FOOTER_LABEL = 'total'
WEEKS_PER_MONTH = 5

# Placeholder multiplier for the active-customers estimate
CUSTOMERS_PER_SALESPERSON = 50

PROCESSING_ERROR_MESSAGE = 'Erro ao processar o arquivo. Verifique se o formato está correto.'


@dataclass(frozen=True)
class RosterLayout:
    """
    Column offsets (0-based) of a monthly roster tab.

    The defaults describe the standard mentorship template:
    A=sequence number, B=salesperson name, C=daily target, D=weekly target,
    E/G/I/K/M=week 1-5 actuals, P=period result, R=period goal.
    """
    number: int = 0
    name: int = 1
    daily_target: int = 2
    weekly_target: int = 3
    weeks: Tuple[int, ...] = (4, 6, 8, 10, 12)
    result: int = 15
    goal: int = 17

    def __post_init__(self):
        if len(self.weeks) != WEEKS_PER_MONTH:
            raise ValueError(f"A roster layout needs exactly {WEEKS_PER_MONTH} week columns, got {len(self.weeks)}.")
        offsets = [self.number, self.name, self.daily_target, self.weekly_target,
                   self.result, self.goal, *self.weeks]
        if any(not isinstance(o, int) or isinstance(o, bool) or o < 0 for o in offsets):
            raise ValueError(f"Roster layout offsets must be non-negative integers: {offsets}")

    @classmethod
    def from_mapping(cls, mapping):
        """
        Builds a layout from a plain mapping such as the JSON stored in the
        ROSTER_LAYOUT setting. Missing keys keep their default offsets.
        """
        known = set(cls.__dataclass_fields__)
        unknown = set(mapping) - known
        if unknown:
            raise ValueError(f"Unknown roster layout keys: {', '.join(sorted(unknown))}")
        values = dict(mapping)
        if 'weeks' in values:
            values['weeks'] = tuple(values['weeks'])
        return cls(**values)


DEFAULT_LAYOUT = RosterLayout()


@dataclass(frozen=True)
class UploadConfig:
    """The user-selected cutoff: data after this month/year is ignored."""
    selected_month: int
    selected_year: int

    @classmethod
    def create(cls, selected_month, selected_year):
        month, year = int(selected_month), int(selected_year)
        if not 1 <= month <= 12:
            raise ValueError(f"selected_month must be between 1 and 12, got {month}")
        if not 1000 <= year <= 9999:
            raise ValueError(f"selected_year must have four digits, got {year}")
        return cls(month, year)


@dataclass(frozen=True)
class CellWarning:
    """A cell whose content could not be read as a number and was counted as 0."""
    sheet: str
    row: int
    column: int
    raw: object
    reason: str

    def to_dict(self):
        return {'sheet': self.sheet, 'row': self.row, 'column': self.column,
                'raw': str(self.raw), 'reason': self.reason}


@dataclass(frozen=True)
class MonthlyDataPoint:
    month: str
    year: int
    revenue: float
    goal: float = 0.0

    @property
    def month_number(self):
        return MONTH_ABBREVIATIONS.index(self.month) + 1

    def to_dict(self):
        return {'month': self.month, 'year': self.year, 'revenue': self.revenue, 'goal': self.goal}


@dataclass(frozen=True)
class WeeklyEntry:
    week: int
    revenue: float
    goal: float = 0.0

    def to_dict(self):
        return {'week': self.week, 'revenue': self.revenue, 'goal': self.goal}


@dataclass
class SalespersonRecord:
    id: str
    name: str
    total_revenue: float
    monthly_goal: float
    weeks: List[WeeklyEntry]
    active: bool = True
    total_sales_count: int = 0

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'totalRevenue': self.total_revenue,
            'monthlyGoal': self.monthly_goal,
            'active': self.active,
            'weeks': [w.to_dict() for w in self.weeks],
            'totalSalesCount': self.total_sales_count,
        }


@dataclass(frozen=True)
class KPISet:
    annual_goal: float
    annual_realized: float
    last_year_growth: float
    mentorship_growth: float
    current_month_name: str
    average_ticket: int
    active_customers: int
    total_sales_count: int
    conversion_rate: float = 0
    cac: float = 0
    ltv: float = 0

    def to_dict(self):
        return {
            'annualGoal': self.annual_goal,
            'annualRealized': self.annual_realized,
            'lastYearGrowth': self.last_year_growth,
            'mentorshipGrowth': self.mentorship_growth,
            'currentMonthName': self.current_month_name,
            'averageTicket': self.average_ticket,
            'conversionRate': self.conversion_rate,
            'cac': self.cac,
            'ltv': self.ltv,
            'activeCustomers': self.active_customers,
            'totalSalesCount': self.total_sales_count,
        }


@dataclass(frozen=True)
class AvailableMonth:
    month: int
    year: int
    tab_name: str

    def to_dict(self):
        return {'month': self.month, 'year': self.year, 'tabName': self.tab_name}


@dataclass
class ProcessedData:
    sheets_found: List[str]
    row_count: int
    kpis: KPISet
    historical_data: List[MonthlyDataPoint]
    current_year_data: List[MonthlyDataPoint]
    team: List[SalespersonRecord]
    years_available: List[int]
    selected_month: str
    mentorship_start_date: Optional[str] = None
    warnings: List[CellWarning] = field(default_factory=list)

    def to_dict(self):
        data = {
            'sheetsFound': list(self.sheets_found),
            'rowCount': self.row_count,
            'kpis': self.kpis.to_dict(),
            'historicalData': [p.to_dict() for p in self.historical_data],
            'currentYearData': [p.to_dict() for p in self.current_year_data],
            'team': [s.to_dict() for s in self.team],
            'yearsAvailable': list(self.years_available),
            'selectedMonth': self.selected_month,
            'warnings': [w.to_dict() for w in self.warnings],
        }
        if self.mentorship_start_date is not None:
            data['mentorshipStartDate'] = self.mentorship_start_date
        return data


@dataclass
class UploadResult:
    success: bool
    data: Optional[ProcessedData] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, data):
        return cls(success=True, data=data)

    @classmethod
    def failure(cls, error=PROCESSING_ERROR_MESSAGE):
        return cls(success=False, error=error)

    def to_dict(self):
        if self.success:
            return {'success': True, 'data': self.data.to_dict()}
        return {'success': False, 'error': self.error}
