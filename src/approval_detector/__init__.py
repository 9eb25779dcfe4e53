"""Suspicious token-approval detection for transaction traces."""

from .core import ApprovalDetector
from .models import DetectionRequest, DetectionResponse, FlatCall, TraceCall, Verdict

__all__ = [
    "ApprovalDetector",
    "DetectionRequest",
    "DetectionResponse",
    "FlatCall",
    "TraceCall",
    "Verdict",
]
