"""
Error Code Taxonomy for FuelTrack

Structured error codes returned by the API and attached to log events.

Error Code Format:
- E001-E099: Validation errors (bad input data)
- E200-E299: Database errors (connection, query failures)
- E300-E399: Parsing errors (JSON, import payloads)
- E400-E499: Business logic errors (record lookup)
- E500-E599: System errors
"""

from enum import Enum
from typing import Optional


class ErrorCategory(str, Enum):
    """High-level error categories for grouping and alerting."""

    VALIDATION = "validation"
    DATABASE = "database"
    PARSING = "parsing"
    BUSINESS_LOGIC = "business_logic"
    SYSTEM = "system"


class ErrorCode(str, Enum):
    """Structured error codes with consistent format."""

    # Validation Errors (E001-E099)
    E002_MISSING_REQUIRED_FIELD = "E002"  # Required field missing in request
    E003_INVALID_DATA_TYPE = "E003"  # Field has wrong data type
    E004_OUT_OF_RANGE = "E004"  # Value must be positive

    # Database Errors (E200-E299)
    E200_DB_OPERATION_FAILED = "E200"  # Record store read or write failed

    # Parsing Errors (E300-E399)
    E303_JSON_DECODE_ERROR = "E303"  # Request body is not valid JSON
    E304_INVALID_IMPORT_PAYLOAD = "E304"  # Import payload is not an array of records

    # Business Logic Errors (E400-E499)
    E404_RECORD_NOT_FOUND = "E404"  # No record with the requested id

    # System Errors (E500-E599)
    E500_INTERNAL_SERVER_ERROR = "E500"  # Unhandled internal error


# Error metadata: maps error codes to categories and descriptions
ERROR_METADATA = {
    ErrorCode.E002_MISSING_REQUIRED_FIELD: {
        "category": ErrorCategory.VALIDATION,
        "description": "Required field missing in request",
        "severity": "warning",
        "alert": False,
    },
    ErrorCode.E003_INVALID_DATA_TYPE: {
        "category": ErrorCategory.VALIDATION,
        "description": "Field has wrong data type",
        "severity": "warning",
        "alert": False,
    },
    ErrorCode.E004_OUT_OF_RANGE: {
        "category": ErrorCategory.VALIDATION,
        "description": "Value outside acceptable range",
        "severity": "warning",
        "alert": False,
    },
    ErrorCode.E200_DB_OPERATION_FAILED: {
        "category": ErrorCategory.DATABASE,
        "description": "Record store operation failed",
        "severity": "critical",
        "alert": True,
    },
    ErrorCode.E303_JSON_DECODE_ERROR: {
        "category": ErrorCategory.PARSING,
        "description": "JSON decoding failed",
        "severity": "warning",
        "alert": False,
    },
    ErrorCode.E304_INVALID_IMPORT_PAYLOAD: {
        "category": ErrorCategory.PARSING,
        "description": "Import payload is not an array of fuel records",
        "severity": "warning",
        "alert": False,
    },
    ErrorCode.E404_RECORD_NOT_FOUND: {
        "category": ErrorCategory.BUSINESS_LOGIC,
        "description": "Fuel record not found",
        "severity": "info",
        "alert": False,
    },
    ErrorCode.E500_INTERNAL_SERVER_ERROR: {
        "category": ErrorCategory.SYSTEM,
        "description": "Unhandled internal error",
        "severity": "critical",
        "alert": True,
    },
}


def get_error_metadata(error_code: ErrorCode) -> dict:
    """Get metadata for an error code."""
    return ERROR_METADATA.get(
        error_code,
        {
            "category": ErrorCategory.SYSTEM,
            "description": "Unknown error",
            "severity": "error",
            "alert": True,
        },
    )


class StructuredError:
    """Structured error with code, category, and metadata."""

    def __init__(self, code: ErrorCode, message: str, exception: Optional[Exception] = None, **context):
        """
        Create a structured error.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            exception: Original exception (if applicable)
            **context: Additional context fields (record_id, item_index, etc.)
        """
        self.code = code
        self.message = message
        self.exception = exception
        self.context = context
        self.metadata = get_error_metadata(code)

    def to_dict(self) -> dict:
        """Convert to dictionary for logging and API responses."""
        error_dict = {
            "code": self.code.value,
            "category": self.metadata["category"].value,
            "message": self.message,
            "severity": self.metadata["severity"],
        }

        if self.exception:
            error_dict["exception_type"] = type(self.exception).__name__

        if self.context:
            error_dict["context"] = self.context

        return error_dict

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"
