# ==============================================================================
# salesdash/main/routes.py
# ------------------------------------------------------------------------------
# JSON endpoints used by the dashboard frontend to upload a workbook and to
# list the monthly tabs it contains.
# ==============================================================================

from flask import current_app, jsonify

from salesdash.ingest import UploadConfig, detect_available_months, process_file
from salesdash.main import bp
from salesdash.main.forms import DetectMonthsForm, UploadSheetForm
from salesdash.main.utils import form_errors, roster_layout_from_config


@bp.route('/api/health')
def health():
    return jsonify({'status': 'ok'})


@bp.route('/api/upload', methods=['POST'])
def upload_sheet():
    """Parses the uploaded workbook up to the selected month."""
    form = UploadSheetForm()
    if not form.validate_on_submit():
        current_app.logger.warning(f"Upload rejected: {form.errors}")
        return jsonify({'success': False, 'error': 'Dados de envio inválidos.', 'fields': form_errors(form)}), 400

    file = form.file.data
    config = UploadConfig.create(form.selected_month.data, form.selected_year.data)
    current_app.logger.info(f"Processing upload '{file.filename}' with cutoff {config.selected_month:02d}/{config.selected_year}")

    result = process_file(file.stream, config, layout=roster_layout_from_config(current_app.config))
    if not result.success:
        return jsonify(result.to_dict()), 422
    return jsonify(result.to_dict())


@bp.route('/api/months', methods=['POST'])
def detect_months():
    """Lists the monthly tabs of the uploaded workbook, most recent first."""
    form = DetectMonthsForm()
    if not form.validate_on_submit():
        current_app.logger.warning(f"Month detection rejected: {form.errors}")
        return jsonify({'success': False, 'error': 'Dados de envio inválidos.', 'fields': form_errors(form)}), 400

    months = detect_available_months(form.file.data.stream)
    current_app.logger.info(f"Detected {len(months)} monthly tabs in '{form.file.data.filename}'")
    return jsonify({'months': [m.to_dict() for m in months]})
