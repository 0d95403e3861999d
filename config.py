# ==============================================================================
# config.py
# ------------------------------------------------------------------------------
# Configuration settings for the Flask application.
# Uses environment variables for sensitive data to keep them out of version control.
# ==============================================================================

import os
from dotenv import load_dotenv

# Determine the absolute path of the project directory
basedir = os.path.abspath(os.path.dirname(__file__))

# Load environment variables from a .env file located in the project root
load_dotenv(os.path.join(basedir, '.env'))

class Config:
    """
    Base configuration class. Contains default settings that can be overridden
    by environment-specific configurations.
    """
    # --- Security ---
    # Used by Flask sessions and Flask-WTF.
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-should-really-set-a-secret-key-in-your-env-file'

    # --- Logging ---
    LOG_LEVEL = os.environ.get('LOG_LEVEL') or 'INFO'

    # --- File Upload Configuration ---
    # Uploads are parsed in memory. Maximum upload size (16 MB)
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024

    # --- Spreadsheet Template ---
    # Optional JSON object overriding the monthly tab column offsets, e.g.
    # {"name": 2, "weeks": [5, 7, 9, 11, 13], "result": 16, "goal": 18}
    # Parsed and checked by create_app at startup.
    ROSTER_LAYOUT = os.environ.get('ROSTER_LAYOUT') or None


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = 'testing'
    ROSTER_LAYOUT = None
