"""Scan of nested calls in traversal order."""

import logging

from ..models import TraceCall, Verdict
from ..trace import flatten_trace_calls

logger = logging.getLogger(__name__)


class NestedCallMixin:
    def check_nested_approvals(self, trace: TraceCall) -> Verdict:
        """
        Check every nested call of the trace, stopping at the first suspicious one.

        Args:
            trace: Top-level trace call

        Returns:
            Verdict of the first suspicious nested call, or a clean verdict
        """
        if not trace.calls:
            return Verdict.clean()

        flattened_calls = flatten_trace_calls(trace.calls)
        logger.debug(f"Checking {len(flattened_calls)} nested calls")

        for index, call in enumerate(flattened_calls):
            approval_check = self.check_approval(call.input)
            if approval_check.detected:
                logger.debug(f"Nested call #{index} ({call.from_} -> {call.to}) flagged")
                return approval_check

        return Verdict.clean()
