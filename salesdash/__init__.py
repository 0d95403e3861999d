# ==============================================================================
# salesdash/__init__.py
# ------------------------------------------------------------------------------
# Application factory for creating and configuring the Flask app instance.
# ==============================================================================

import json
import logging
from flask import Flask
from config import Config


def create_app(config_class=Config):
    """
    Application factory function. Creates and configures the Flask application.

    Args:
        config_class (class): The configuration class to use.

    Returns:
        Flask: The configured Flask application instance.
    """
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(config_class)

    # Configure logging
    logging.basicConfig(level=app.config.get('LOG_LEVEL', 'INFO'),
                        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s')

    # Register blueprints with the application
    from salesdash.main import bp as main_bp
    app.register_blueprint(main_bp)

    register_cli(app)

    # A malformed ROSTER_LAYOUT raises ValueError here
    from salesdash.main.utils import roster_layout_from_config
    roster_layout_from_config(app.config)

    app.logger.info('Sales dashboard ingestion service startup complete')

    return app


def register_cli(app):
    """Adds the `flask ingest` and `flask months` commands."""
    import click
    from salesdash.ingest import UploadConfig, detect_available_months, process_file
    from salesdash.main.utils import roster_layout_from_config

    @app.cli.command("ingest")
    @click.argument("path", type=click.Path(exists=True, dir_okay=False))
    @click.option("--month", "month", type=click.IntRange(1, 12), required=True, help="Cutoff month (1-12).")
    @click.option("--year", "year", type=int, required=True, help="Cutoff year (4 digits).")
    def ingest(path, month, year):
        """Parses a workbook and prints the result as JSON."""
        try:
            config = UploadConfig.create(month, year)
        except ValueError as e:
            raise click.BadParameter(str(e))
        result = process_file(path, config, layout=roster_layout_from_config(app.config))
        click.echo(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
        if not result.success:
            raise SystemExit(1)

    @app.cli.command("months")
    @click.argument("path", type=click.Path(exists=True, dir_okay=False))
    def months(path):
        """Lists the monthly tabs of a workbook, most recent first."""
        available = detect_available_months(path)
        click.echo(json.dumps([m.to_dict() for m in available], ensure_ascii=False, indent=2))
