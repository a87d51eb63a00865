"""Request transformation exceptions."""

from typing import Optional


class TransformerException(Exception):
    """Base exception for request transformation."""

    def __init__(self, message: str, correlation_id: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.correlation_id = correlation_id


class ValidationError(TransformerException):
    """Inbound request is missing a required field or cannot be parsed."""

    def __init__(self, message: str, field: Optional[str] = None, correlation_id: Optional[str] = None):
        super().__init__(message, correlation_id)
        self.field = field
