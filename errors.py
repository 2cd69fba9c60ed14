"""
Failure classes raised by the record gateway.

Each class carries the HTTP status it maps to; `main.py` registers one
exception handler per class. Bad input (400), missing records (404) and
store failures (500) stay separate.
"""

from typing import Optional


class GatewayError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(GatewayError):
    status_code = 400


class NotFoundError(GatewayError):
    status_code = 404


class StoreError(GatewayError):
    status_code = 500

    def __init__(self, message: str, error: Optional[str] = None):
        super().__init__(message)
        self.error = error
