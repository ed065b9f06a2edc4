"""
FuelTrack - Flask Application

Provides the JSON API for logging refuels and reading fuel statistics.
"""

import logging

from flask import Flask, jsonify

from . import database
from .config import Config
from .exceptions import (
    ConfigurationError,
    DatabaseError,
    FuelTrackError,
    ImportPayloadError,
    RecordNotFoundError,
    RecordValidationError,
)
from .routes import register_blueprints
from .services.aggregation_service import WindowKind
from .utils.error_codes import ErrorCode, StructuredError
from .utils.formatting import SUPPORTED_LANGUAGES

logger = logging.getLogger(__name__)

# Exception type -> (HTTP status, error code)
ERROR_RESPONSES = {
    RecordValidationError: (400, ErrorCode.E004_OUT_OF_RANGE),
    ImportPayloadError: (400, ErrorCode.E304_INVALID_IMPORT_PAYLOAD),
    RecordNotFoundError: (404, ErrorCode.E404_RECORD_NOT_FOUND),
    DatabaseError: (500, ErrorCode.E200_DB_OPERATION_FAILED),
}


def configure_logging(level_name):
    """Configure root logging from a level name such as INFO."""
    logging.basicConfig(
        level=getattr(logging, level_name.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def validate_config(config):
    """
    Check presentation defaults before the app starts serving.

    Raises:
        ConfigurationError: if a default is not a supported value
    """
    if config['DEFAULT_LANGUAGE'] not in SUPPORTED_LANGUAGES:
        raise ConfigurationError(
            f"Unsupported language: {config['DEFAULT_LANGUAGE']}", config_key='DEFAULT_LANGUAGE'
        )
    try:
        window = WindowKind(config['DEFAULT_WINDOW'])
    except ValueError:
        raise ConfigurationError(
            f"Unknown window: {config['DEFAULT_WINDOW']}", config_key='DEFAULT_WINDOW'
        ) from None
    if window == WindowKind.EXPLICIT_RANGE:
        raise ConfigurationError(
            "Default window must be a preset, not an explicit range", config_key='DEFAULT_WINDOW'
        )


def register_error_handlers(app):
    """Map FuelTrack exceptions to JSON error responses."""

    @app.errorhandler(FuelTrackError)
    def handle_fueltrack_error(error):
        status, code = ERROR_RESPONSES.get(type(error), (500, ErrorCode.E500_INTERNAL_SERVER_ERROR))
        details = error.details
        if isinstance(error, RecordValidationError) and error.errors:
            code = ErrorCode(error.errors[0]['code'])
            details = error.errors

        structured = StructuredError(code, error.message, exception=error)
        if status >= 500:
            logger.error(f"{structured}", extra={"error": structured.to_dict()})
        else:
            logger.warning(f"{structured}")
        return jsonify({'error': error.message, 'code': code.value, 'details': details}), status


def create_app(config_overrides=None):
    """
    Create and configure the Flask application.

    Args:
        config_overrides: Optional dict applied on top of Config
            (tests use it to point DATABASE_URL at an in-memory database)
    """
    app = Flask(__name__)
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)

    configure_logging(app.config['LOG_LEVEL'])
    validate_config(app.config)

    database.init_app(app)
    register_blueprints(app)
    register_error_handlers(app)

    logger.info("FuelTrack API ready")
    return app


if __name__ == '__main__':
    application = create_app()
    application.run(host=Config.FLASK_HOST, port=Config.FLASK_PORT, debug=Config.DEBUG)
