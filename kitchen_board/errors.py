"""Errors raised while talking to the order store."""

from __future__ import annotations


class DashboardError(Exception):
    """Base error; ``operation`` names the request that failed."""

    def __init__(self, message: str, operation: str) -> None:
        super().__init__(message)
        self.operation = operation


class NetworkError(DashboardError):
    """Non-success HTTP status or transport failure."""

    def __init__(self, message: str, operation: str, status_code: int | None = None) -> None:
        super().__init__(message, operation)
        self.status_code = status_code


class ParseError(DashboardError):
    """Response body does not look like an order collection."""
