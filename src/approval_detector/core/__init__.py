"""Detection flow package."""

from .engine import ApprovalDetector

__all__ = [
    "ApprovalDetector",
]
