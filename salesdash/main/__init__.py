from flask import Blueprint

bp = Blueprint('main', __name__)

# Import routes and forms at the bottom
from salesdash.main import routes, forms
