"""Errors raised while serving a generation request.

Each error knows the status code and error string it maps to; the service
turns them into an ErrorResult body.
"""
from __future__ import annotations


class ContractGenError(Exception):
    status_code = 500
    error = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.error)
        self.message = message


class ClientInputError(ContractGenError):
    """The request is malformed or incomplete."""
    status_code = 400
    error = "Missing required parameters"

    def __init__(self, message: str | None = None, error: str | None = None, status_code: int | None = None) -> None:
        super().__init__(message)
        if error is not None:
            self.error = error
        if status_code is not None:
            self.status_code = status_code


class ConfigurationError(ContractGenError):
    """Server-side configuration is missing."""
    status_code = 500
    error = "API key not configured"


class UpstreamError(ContractGenError):
    """The completion API answered with a non-success status."""
    error = "Failed to generate contract"

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"completion API returned {status_code}")
        self.status_code = status_code
        self.body = body
