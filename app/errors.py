# app/errors.py
from typing import Optional


class ProtectionError(Exception):
    """Base class for errors raised by the protection price service."""


class InvalidInput(ProtectionError, ValueError):
    """Subtotal is missing, not a number, not finite or negative."""

    def __init__(self, message: str = "Invalid subtotal"):
        self.message = message
        super().__init__(message)


class RemoteError(ProtectionError):
    """The Shopify update call failed or did not return a usable variant."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)
