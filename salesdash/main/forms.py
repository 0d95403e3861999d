# ==============================================================================
# salesdash/main/forms.py
# ------------------------------------------------------------------------------
# Defines the upload forms using Flask-WTF for input validation.
# The endpoints are called by the dashboard frontend, so CSRF tokens are not used.
# ==============================================================================

from flask_wtf import FlaskForm
from flask_wtf.file import FileField, FileRequired, FileAllowed
from wtforms import IntegerField
from wtforms.validators import InputRequired, NumberRange

ALLOWED_UPLOADS = ['xlsx', 'xls']


class UploadSheetForm(FlaskForm):
    """Workbook upload with the cutoff month/year selected by the user."""
    class Meta:
        csrf = False

    file = FileField('Planilha', validators=[
        FileRequired(message="Nenhum arquivo foi enviado."),
        FileAllowed(ALLOWED_UPLOADS, message="Tipo de arquivo não permitido. Envie uma planilha .xlsx ou .xls.")
    ])
    selected_month = IntegerField('Mês', validators=[
        InputRequired(message="Este campo é obrigatório."),
        NumberRange(min=1, max=12, message="O mês deve estar entre 1 e 12.")
    ])
    selected_year = IntegerField('Ano', validators=[
        InputRequired(message="Este campo é obrigatório."),
        NumberRange(min=2000, max=2099, message="O ano deve ter quatro dígitos (2000-2099).")
    ])


class DetectMonthsForm(FlaskForm):
    """Workbook upload used only to list its monthly tabs."""
    class Meta:
        csrf = False

    file = FileField('Planilha', validators=[
        FileRequired(message="Nenhum arquivo foi enviado."),
        FileAllowed(ALLOWED_UPLOADS, message="Tipo de arquivo não permitido. Envie uma planilha .xlsx ou .xls.")
    ])
