# ==============================================================================
# salesdash/main/utils.py
# ------------------------------------------------------------------------------
# Helpers shared by the HTTP routes and the CLI commands.
# ==============================================================================
import json
import logging

from salesdash.ingest import DEFAULT_LAYOUT, RosterLayout


def roster_layout_from_config(config):
    """
    Builds the monthly tab layout from the ROSTER_LAYOUT setting, falling back
    to the standard template when the setting is empty.

    The setting may be a mapping or its JSON text (as read from the environment).

    Raises:
        ValueError: If the setting is not a valid layout.
    """
    mapping = config.get('ROSTER_LAYOUT')
    if not mapping:
        return DEFAULT_LAYOUT
    if isinstance(mapping, str):
        try:
            mapping = json.loads(mapping)
        except json.JSONDecodeError as e:
            logging.error(f"ROSTER_LAYOUT is not valid JSON: {e}")
            raise ValueError(f"ROSTER_LAYOUT is not valid JSON: {e}") from e
    if not isinstance(mapping, dict):
        logging.error(f"ROSTER_LAYOUT must be a JSON object, got {type(mapping).__name__}")
        raise ValueError("ROSTER_LAYOUT must be a JSON object mapping column names to offsets.")
    return RosterLayout.from_mapping(mapping)


def form_errors(form):
    """Flattens WTForms errors into {field: "message; message"}."""
    return {field: '; '.join(messages) for field, messages in form.errors.items()}
