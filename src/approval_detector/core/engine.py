"""Public detector engine composed from focused mixins."""

import logging

from ..models import DetectionRequest, DetectionResponse, Verdict
from .approvals import ApprovalCheckMixin
from .base import DetectorBase
from .nested import NestedCallMixin

logger = logging.getLogger(__name__)


class ApprovalDetector(
    DetectorBase,
    ApprovalCheckMixin,
    NestedCallMixin,
):
    """Detects suspicious token approvals in a transaction trace."""

    def detect(self, request: DetectionRequest) -> DetectionResponse:
        """
        Run the approval checks on a request's trace.

        The top-level call is checked first; nested calls are only checked
        when it is not suspicious. Lookup and decoding failures propagate.

        Args:
            request: Detection request carrying the trace

        Returns:
            DetectionResponse with the first positive verdict, or a clean one
        """
        trace = request.trace

        simple_approval_check = self.check_approval(trace.input)
        if simple_approval_check.detected:
            logger.info(f"⚠️  Top-level call flagged: {simple_approval_check.message}")
            return DetectionResponse(request=request, verdict=simple_approval_check)

        nested_approval_check = self.check_nested_approvals(trace)
        if nested_approval_check.detected:
            logger.info(f"⚠️  Nested call flagged: {nested_approval_check.message}")
            return DetectionResponse(request=request, verdict=nested_approval_check)

        logger.info("✅ No suspicious approvals found")
        return DetectionResponse(request=request, verdict=Verdict.clean())
