"""
Custom Exceptions for the Subscription API

Hierarchical exception classes for proper error handling across layers.
The application boundary maps each kind to an HTTP status code.
"""

from typing import Optional, Dict, Any


class SubscriptionAPIError(Exception):
    """Base exception for all Subscription API errors."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.original_error = original_error

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details
        }


class ValidationError(SubscriptionAPIError):
    """Raised when input validation fails (malformed ids, dates, fields)."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        original_error: Optional[Exception] = None
    ):
        details = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = value
        super().__init__(message, details, original_error)


class StoreError(SubscriptionAPIError):
    """Raised when a data store operation fails."""

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        table: Optional[str] = None,
        original_error: Optional[Exception] = None
    ):
        details = {}
        if operation:
            details["operation"] = operation
        if table:
            details["table"] = table
        super().__init__(message, details, original_error)


class NotFoundError(StoreError):
    """Raised when a requested resource is not found."""
    pass
