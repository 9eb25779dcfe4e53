"""Flattening of nested trace calls."""

from typing import Any, List, Mapping, Sequence, Union

from .models import FlatCall, TraceCall, split_call


def flatten_trace_calls(calls: Sequence[Union[TraceCall, Mapping[str, Any]]]) -> List[FlatCall]:
    """
    Flatten a call tree into a pre-order list.

    A call is emitted before any of its nested calls, and each nested call's
    subtree is emitted completely before its next sibling. The walk uses an
    explicit stack, so depth is only bounded by memory. The input tree is
    left untouched.

    Args:
        calls: Top-level calls in execution order, as TraceCall or raw mappings

    Returns:
        List of FlatCall in traversal order
    """
    flattened: List[FlatCall] = []
    stack = list(reversed(calls))

    while stack:
        call = stack.pop()
        fields, nested_calls = split_call(call)
        flattened.append(FlatCall.model_validate(fields))
        # reversed so the first nested call is popped next
        stack.extend(reversed(nested_calls))

    return flattened
