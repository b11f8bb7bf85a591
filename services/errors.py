"""Error taxonomy for the resume ingestion pipeline.

Each error carries the HTTP status it maps to; the FastAPI exception handler
in main.py renders them as ``{"success": false, "message": ...}``.
"""


class IngestionError(Exception):
    """Base class. Also used directly for unclassified failures (HTTP 500)."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(IngestionError):
    """Bad input shape, size or type."""

    status_code = 400


class AuthError(IngestionError):
    """Missing or invalid session token."""

    status_code = 401


class ExtractionError(IngestionError):
    """The PDF could not be decoded at all."""

    status_code = 400


class ParseError(IngestionError):
    """The AI response was not valid JSON of the expected shape."""

    status_code = 400


class TransportError(IngestionError):
    """An AI call failed after exhausting retries."""

    status_code = 500


class StorageError(IngestionError):
    """An object storage list/remove/upload call failed."""

    status_code = 500
