# tests/conftest.py

from io import BytesIO

import pandas as pd
import pytest

ROSTER_WIDTH = 18


@pytest.fixture
def app():
    """Creates a new app instance configured for testing."""
    from config import TestingConfig
    from salesdash import create_app

    app = create_app(TestingConfig)
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


def build_workbook(sheets):
    """
    Writes {sheet name: list of rows} into an in-memory .xlsx file and returns
    its bytes. Rows are written as-is, without header or index.
    """
    buffer = BytesIO()
    with pd.ExcelWriter(buffer, engine='openpyxl') as writer:
        for name, rows in sheets.items():
            pd.DataFrame(rows).to_excel(writer, sheet_name=name, header=False, index=False)
    return buffer.getvalue()


def roster_row(number, name, weeks=(), result=None, goal=None):
    """Builds one row of a monthly tab using the standard column positions."""
    row = [None] * ROSTER_WIDTH
    row[0] = number
    row[1] = name
    for value, col in zip(weeks, (4, 6, 8, 10, 12)):
        row[col] = value
    row[15] = result
    row[17] = goal
    return row


def roster_header():
    row = [None] * ROSTER_WIDTH
    row[0] = 'Nº'
    row[1] = 'CONSULTOR COMERCIAL'
    row[2] = 'Previsto Diário'
    row[3] = 'Previsto Semanal'
    for week, col in enumerate((4, 6, 8, 10, 12), start=1):
        row[col] = f'Semana {week}'
    row[15] = 'Resultado'
    row[17] = 'Meta Projetada'
    return row


def general_rows(years, revenue_by_year, mentorship=None):
    """
    Builds a general sheet: a title row, the year header in row 1 and one row
    per month. revenue_by_year maps a year to its 12 monthly values.
    """
    from salesdash.ingest.schema import MONTH_NAMES

    title = ['Faturamento Mensal'] + [None] * (len(years) + 5)
    if mentorship is not None:
        title[len(years) + 2] = 'Início Mentoria'
        title[len(years) + 3] = mentorship
    rows = [title, [None] + list(years)]
    for index, month in enumerate(MONTH_NAMES):
        rows.append([month] + [revenue_by_year[year][index] for year in years])
    return rows


@pytest.fixture
def sample_workbook():
    """A workbook with a general sheet (2024-2025) and two monthly tabs."""
    import datetime

    general = general_rows(
        [2024, 2025],
        {2024: [1000] * 12, 2025: [1500, 1500, 2000] + [None] * 9},
        mentorship=datetime.datetime(2024, 7, 1),
    )
    february = [
        ['Resultados Fevereiro'],
        roster_header(),
        [None] * ROSTER_WIDTH,
        roster_row(1, 'Ana Souza', weeks=(1000, 2000, 1500, 0), result=4500, goal=10000),
        roster_row(2, 'Bruno Lima', weeks=(500, 500), result=None, goal=8000),
        roster_row(3, 'Carla Dias', weeks=(2500,), result=2500, goal=None),
        roster_row(None, 'Total', result=7000),
        roster_row(4, 'Depois do Total', weeks=(999,), result=999),
    ]
    january = [
        ['Resultados Janeiro'],
        roster_header(),
        [None] * ROSTER_WIDTH,
        roster_row(1, 'Ana Souza', weeks=(100,), result=100, goal=1000),
        roster_row(None, 'TOTAL', result=100),
    ]
    return build_workbook({'Geral': general, 'Jan-25': january, 'Fev-25': february})
