from typing import Optional


class ConfluentError(Exception):
    """Base class for everything that can go wrong talking to Confluent Cloud."""
    pass


class TransportError(ConfluentError):
    """Request could not be sent, or the API answered with a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class LogicalApiError(ConfluentError):
    """The API answered 2xx but the envelope carries an error."""

    def __init__(self, error: str, body: str = "", validation_errors: str = ""):
        super().__init__(f"Unexpected API response. Error: {error}. Body: {body}")
        self.error = error
        self.validation_errors = validation_errors
        self.body = body


class DecodeError(ConfluentError):
    pass


class ImportFormatError(ConfluentError):
    pass


class NotFoundError(ConfluentError):
    pass
