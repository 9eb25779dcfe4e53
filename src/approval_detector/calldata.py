"""Call-data helpers for approval functions."""

import re

from .constants import ADDRESS_LENGTH, SELECTOR_LENGTH, WORD_LENGTH
from .errors import AmountParseError, MalformedCallDataError
from .models import ApprovalParams

# 0x + 8 chars of signature + 64 chars of spender + 64 chars of amount
APPROVE_INPUT_LENGTH = 2 + SELECTOR_LENGTH + 2 * WORD_LENGTH
HEX_WORD = re.compile(r'[0-9a-fA-F]{64}')


def get_selector(input_data: str) -> str:
    """
    Extract the function selector from call-data.

    Args:
        input_data: 0x-prefixed hex call-data

    Returns:
        Lower-cased selector, e.g. '0x095ea7b3'
    """
    if not input_data.startswith('0x') or len(input_data) < 2 + SELECTOR_LENGTH:
        raise MalformedCallDataError(f"Call-data has no function selector: {input_data[:20]!r}")
    return input_data[:2 + SELECTOR_LENGTH].lower()


def has_selector(input_data: str) -> bool:
    return input_data.startswith('0x') and len(input_data) >= 2 + SELECTOR_LENGTH


def decode_approve(input_data: str) -> ApprovalParams:
    """
    Decode the spender and amount of an approve(address,uint256) call.

    The spender is the low 20 bytes of the first word, the amount is the
    second word kept as raw hex.

    Args:
        input_data: 0x-prefixed approve() call-data

    Returns:
        ApprovalParams with a lower-cased spender and the 0x-prefixed amount word

    Raises:
        MalformedCallDataError: if the call-data is shorter than two full words
            or the spender word is not hex
        AmountParseError: if the amount word is not hex
    """
    if not input_data.startswith('0x'):
        raise MalformedCallDataError("Call-data must be 0x-prefixed")
    if len(input_data) < APPROVE_INPUT_LENGTH:
        raise MalformedCallDataError(
            f"approve() call-data needs {APPROVE_INPUT_LENGTH} chars, got {len(input_data)}"
        )

    spender_word_end = 2 + SELECTOR_LENGTH + WORD_LENGTH
    spender_word = input_data[2 + SELECTOR_LENGTH:spender_word_end]
    amount_word = input_data[spender_word_end:spender_word_end + WORD_LENGTH]

    if not HEX_WORD.fullmatch(spender_word):
        raise MalformedCallDataError(f"approve() spender word is not hex: {spender_word!r}")
    if not HEX_WORD.fullmatch(amount_word):
        raise AmountParseError(f"approve() amount word is not hex: {amount_word!r}")

    spender = '0x' + spender_word[-ADDRESS_LENGTH:].lower()
    amount = '0x' + amount_word

    return ApprovalParams(spender=spender, amount=amount)
