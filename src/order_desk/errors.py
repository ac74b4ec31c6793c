"""Typed exceptions for the Order Desk dashboard."""


class OrderDeskError(Exception):
    """Base class for all application errors."""


class ValidationError(OrderDeskError):
    """Input rejected before any request was dispatched (missing client, no rows, bad filter)."""


class FetchError(OrderDeskError):
    """Network or server failure while talking to the backend."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ExportError(OrderDeskError):
    """Document rendering failed."""
