"""Response payloads and result files."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from .models import DetectionResponse

logger = logging.getLogger(__name__)


def build_response_payload(response: DetectionResponse) -> Dict[str, Any]:
    """
    Build the response envelope: the request's fields plus the verdict.

    Args:
        response: Detection response

    Returns:
        JSON-serializable dict with 'detected' and, when set, 'message'
    """
    request = response.request
    payload = request.model_dump(by_alias=True, exclude_unset=True, exclude={'trace': {'calls'}})
    # nested calls are echoed as received
    if 'calls' in request.trace.model_fields_set:
        payload['trace']['calls'] = request.trace.calls
    payload['detected'] = response.verdict.detected
    if response.verdict.message is not None:
        payload['message'] = response.verdict.message
    return payload


def build_error_payload(error: str, request: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    payload = dict(request or {})
    payload['detected'] = False
    payload['error'] = error
    return payload


def format_verdict_line(payload: Dict[str, Any]) -> str:
    if payload.get('error'):
        return f"❌ Detection failed: {payload['error']}"
    if payload.get('detected'):
        return f"🔴 {payload['message']}"
    return "✅ No suspicious approvals"


def save_json_result(payload: Dict[str, Any], output_file: Path):
    """
    Save a response payload as JSON.

    Args:
        payload: Response or error payload
        output_file: Destination path
    """
    output_file.parent.mkdir(parents=True, exist_ok=True)
    with open(output_file, 'w') as f:
        json.dump(payload, f, indent=2)
    logger.info(f"Saved detection result to {output_file}")
