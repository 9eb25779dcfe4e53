"""Trace, request and verdict models used by the detection pipeline."""

import re
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from eth_utils import is_hex_address
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .errors import AmountParseError

HEX_AMOUNT = re.compile(r'0x[0-9a-fA-F]{64}')


def _check_address(value: Optional[str]) -> Optional[str]:
    if value is not None and not is_hex_address(value):
        raise ValueError(f"Invalid address: {value}")
    return value


class FlatCall(BaseModel):
    """A trace call without its nested calls."""
    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    from_: str = Field(..., alias="from")
    # None for contract creation
    to: Optional[str] = None
    input: str = "0x"

    @field_validator("from_", "to")
    @classmethod
    def check_addresses(cls, value):
        return _check_address(value)


def split_call(call: Union["TraceCall", Mapping[str, Any]]) -> Tuple[Dict[str, Any], List[Dict[str, Any]]]:
    """
    Separate a call's own fields from its nested calls.

    Args:
        call: TraceCall or a raw call mapping as found in TraceCall.calls

    Returns:
        (fields without 'calls', nested raw calls in execution order)
    """
    if isinstance(call, TraceCall):
        return call.model_dump(by_alias=True, exclude={'calls'}), call.calls or []
    fields = {key: value for key, value in call.items() if key != 'calls'}
    return fields, call.get('calls') or []


class TraceCall(FlatCall):
    """
    One node of a transaction's call tree; children are in execution order.

    Nested calls stay raw mappings so that call depth is not bounded by model
    recursion. Every nested node is still validated as a FlatCall here.
    """

    calls: Optional[List[Dict[str, Any]]] = None

    @field_validator("calls")
    @classmethod
    def check_nested_calls(cls, calls):
        stack = [(f"calls.{index}", call) for index, call in reversed(list(enumerate(calls or [])))]
        while stack:
            path, call = stack.pop()
            fields, nested = split_call(call)
            if not isinstance(nested, list):
                raise ValueError(f"{path}.calls must be a list")
            try:
                FlatCall.model_validate(fields)
            except ValidationError as e:
                raise ValueError(f"{path}: {e.errors()[0]['msg']}") from e
            for index in range(len(nested) - 1, -1, -1):
                if not isinstance(nested[index], dict):
                    raise ValueError(f"{path}.calls.{index} must be an object")
                stack.append((f"{path}.calls.{index}", nested[index]))
        return calls


class TraceLog(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True)

    address: str
    data: str = "0x"
    topics: List[str] = Field(default_factory=list)

    @field_validator("address")
    @classmethod
    def check_address(cls, value):
        return _check_address(value)


class DetectionTrace(TraceCall):
    """Top-level call of the transaction plus the transaction's trace metadata."""

    blockNumber: Optional[int] = None
    transactionHash: Optional[str] = None
    output: Optional[str] = None
    gas: Optional[str] = None
    gasUsed: Optional[str] = None
    value: Optional[str] = None
    pre: Optional[Dict[str, Any]] = None
    post: Optional[Dict[str, Any]] = None
    logs: Optional[List[TraceLog]] = None


class DetectionRequest(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True)

    id: Optional[str] = None
    detectorName: Optional[str] = None
    chainId: Optional[int] = None
    hash: Optional[str] = None
    protocolName: Optional[str] = None
    protocolAddress: Optional[str] = None
    trace: DetectionTrace

    @field_validator("protocolAddress")
    @classmethod
    def check_protocol_address(cls, value):
        return _check_address(value)


class ApprovalParams(BaseModel):
    """Decoded approve(address,uint256) arguments."""
    model_config = ConfigDict(frozen=True)

    spender: str
    amount: str

    @property
    def amount_value(self) -> int:
        if not HEX_AMOUNT.fullmatch(self.amount):
            raise AmountParseError(f"Approval amount is not a 32-byte hex word: {self.amount}")
        return int(self.amount, 16)


class Verdict(BaseModel):
    """Outcome of one approval check. A message is set only when something was detected."""
    model_config = ConfigDict(frozen=True)

    detected: bool
    message: Optional[str] = None

    @model_validator(mode="after")
    def check_message(self):
        if self.detected and not self.message:
            raise ValueError("A detected verdict needs a message")
        if not self.detected and self.message is not None:
            raise ValueError("Only detected verdicts carry a message")
        return self

    @classmethod
    def suspicious(cls, message: str) -> "Verdict":
        return cls(detected=True, message=message)

    @classmethod
    def clean(cls) -> "Verdict":
        return cls(detected=False)


class DetectionResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    request: DetectionRequest
    verdict: Verdict

    @property
    def detected(self) -> bool:
        return self.verdict.detected

    @property
    def message(self) -> Optional[str]:
        return self.verdict.message
