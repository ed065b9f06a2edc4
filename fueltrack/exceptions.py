"""
Custom exceptions for FuelTrack.

The calculation core never raises for irregular data; these exceptions are
used only at the edges (record entry, import payloads, the record store).
"""


class FuelTrackError(Exception):
    """Base exception for all FuelTrack errors."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self):
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


class DatabaseError(FuelTrackError):
    """Database operation failed."""

    pass


class RecordValidationError(FuelTrackError):
    """A new or edited fuel record failed entry validation."""

    def __init__(self, message: str, field: str = None, value=None, errors: list = None):
        details = {}
        if field:
            details['field'] = field
        if value is not None:
            details['value'] = value
        if errors:
            details['errors'] = errors
        super().__init__(message, details)
        self.field = field
        self.value = value
        self.errors = errors or []


class RecordNotFoundError(FuelTrackError):
    """No fuel record exists with the requested id."""

    def __init__(self, message: str, record_id: str = None):
        details = {}
        if record_id:
            details['record_id'] = record_id
        super().__init__(message, details)
        self.record_id = record_id


class ImportPayloadError(FuelTrackError):
    """Import payload is not a JSON array of fuel records."""

    def __init__(self, message: str, item_index: int = None, field: str = None):
        details = {}
        if item_index is not None:
            details['item_index'] = item_index
        if field:
            details['field'] = field
        super().__init__(message, details)
        self.item_index = item_index
        self.field = field


class ConfigurationError(FuelTrackError):
    """Invalid or missing configuration."""

    def __init__(self, message: str, config_key: str = None):
        details = {}
        if config_key:
            details['config_key'] = config_key
        super().__init__(message, details)
        self.config_key = config_key
