# tests/test_routes.py

from io import BytesIO

import pytest

from salesdash.ingest.schema import PROCESSING_ERROR_MESSAGE


def _upload(client, payload, filename='planilha.xlsx', **fields):
    data = {'file': (BytesIO(payload), filename)}
    data.update(fields)
    return client.post('/api/upload', data=data, content_type='multipart/form-data')


def test_health(client):
    response = client.get('/api/health')
    assert response.status_code == 200
    assert response.get_json() == {'status': 'ok'}


def test_upload_returns_processed_data(client, sample_workbook):
    response = _upload(client, sample_workbook, selected_month='2', selected_year='2025')

    assert response.status_code == 200
    body = response.get_json()
    assert body['success'] is True
    data = body['data']
    assert data['selectedMonth'] == 'Fev-25'
    assert data['yearsAvailable'] == [2024, 2025]
    assert [member['id'] for member in data['team']] == ['1', '2', '3']
    assert len(data['team'][0]['weeks']) == 5
    assert data['mentorshipStartDate'] == '2024-07-01'
    assert data['kpis']['currentMonthName'] == 'Fevereiro'


def test_upload_corrupt_file(client):
    response = _upload(client, b'not a workbook', selected_month='1', selected_year='2025')
    assert response.status_code == 422
    assert response.get_json() == {'success': False, 'error': PROCESSING_ERROR_MESSAGE}


def test_upload_rejects_invalid_month(client, sample_workbook):
    response = _upload(client, sample_workbook, selected_month='13', selected_year='2025')
    assert response.status_code == 400
    body = response.get_json()
    assert body['success'] is False
    assert 'selected_month' in body['fields']


def test_upload_rejects_wrong_extension(client, sample_workbook):
    response = _upload(client, sample_workbook, filename='planilha.csv', selected_month='2', selected_year='2025')
    assert response.status_code == 400
    assert 'file' in response.get_json()['fields']


def test_upload_requires_a_file(client):
    response = client.post('/api/upload', data={'selected_month': '2', 'selected_year': '2025'},
                           content_type='multipart/form-data')
    assert response.status_code == 400
    assert 'file' in response.get_json()['fields']


def test_detect_months(client, sample_workbook):
    response = client.post('/api/months', data={'file': (BytesIO(sample_workbook), 'planilha.xlsx')},
                           content_type='multipart/form-data')
    assert response.status_code == 200
    assert response.get_json() == {'months': [
        {'month': 2, 'year': 2025, 'tabName': 'Fev-25'},
        {'month': 1, 'year': 2025, 'tabName': 'Jan-25'},
    ]}


def test_custom_layout_from_config(app, client):
    app.config['ROSTER_LAYOUT'] = {'number': 1, 'name': 0, 'weeks': [2, 3, 4, 5, 6], 'result': 7, 'goal': 8}
    from conftest import build_workbook
    workbook = build_workbook({'Out-25': [['CONSULTOR', 'Nº'], [None, None], ['Ana', 1, 1, 2, 3, 4, 5, 15, 50]]})

    response = _upload(client, workbook, selected_month='10', selected_year='2025')
    team = response.get_json()['data']['team']
    assert team[0]['name'] == 'Ana'
    assert team[0]['totalRevenue'] == 15
    assert team[0]['monthlyGoal'] == 50


def test_cli_months(app, tmp_path, sample_workbook):
    path = tmp_path / 'planilha.xlsx'
    path.write_bytes(sample_workbook)

    result = app.test_cli_runner().invoke(args=['months', str(path)])
    assert result.exit_code == 0
    assert '"tabName": "Fev-25"' in result.output


def test_cli_ingest(app, tmp_path, sample_workbook):
    path = tmp_path / 'planilha.xlsx'
    path.write_bytes(sample_workbook)

    result = app.test_cli_runner().invoke(args=['ingest', str(path), '--month', '2', '--year', '2025'])
    assert result.exit_code == 0
    assert '"selectedMonth": "Fev-25"' in result.output


def test_cli_ingest_corrupt_file(app, tmp_path):
    path = tmp_path / 'planilha.xlsx'
    path.write_bytes(b'garbage')

    result = app.test_cli_runner().invoke(args=['ingest', str(path), '--month', '2', '--year', '2025'])
    assert result.exit_code == 1


def test_roster_layout_json_text_from_environment():
    from config import TestingConfig
    from salesdash import create_app
    from salesdash.main.utils import roster_layout_from_config

    class LayoutConfig(TestingConfig):
        ROSTER_LAYOUT = '{"name": 2, "result": 16}'

    app = create_app(LayoutConfig)
    layout = roster_layout_from_config(app.config)
    assert layout.name == 2
    assert layout.result == 16
    assert layout.goal == 17


def test_malformed_roster_layout_stops_startup():
    from config import TestingConfig
    from salesdash import create_app

    class BrokenConfig(TestingConfig):
        ROSTER_LAYOUT = '{"name": 2,'

    with pytest.raises(ValueError, match='ROSTER_LAYOUT is not valid JSON'):
        create_app(BrokenConfig)


def test_roster_layout_must_be_an_object():
    from salesdash.main.utils import roster_layout_from_config

    with pytest.raises(ValueError, match='JSON object'):
        roster_layout_from_config({'ROSTER_LAYOUT': '[1, 2, 3]'})
