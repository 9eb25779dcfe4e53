"""Exceptions raised by the approval detector."""

from typing import Optional


class ApprovalDetectorError(Exception):
    """Base class for all detector failures."""


class MalformedCallDataError(ApprovalDetectorError):
    """Call-data is too short or not 0x-prefixed for the matched selector."""


class AmountParseError(ApprovalDetectorError):
    """The approval amount word is not a valid hex integer."""


class ReputationLookupError(ApprovalDetectorError):
    """The address-reputation provider could not answer."""

    def __init__(self, message: str, address: Optional[str] = None):
        super().__init__(message)
        self.address = address


class ConfigurationError(ApprovalDetectorError):
    """Missing or invalid detector settings."""
