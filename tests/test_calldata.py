import pytest

from approval_detector.calldata import decode_approve, get_selector, has_selector
from approval_detector.errors import AmountParseError, MalformedCallDataError
from approval_detector.models import ApprovalParams

from .builders import CONTRACT_ADDRESS, ETHEREUM_ADDRESS, MAX_ALLOWED_APPROVAL, make_approval_input


def test_decode_approve_returns_spender_and_amount():
    params = decode_approve(make_approval_input(ETHEREUM_ADDRESS, MAX_ALLOWED_APPROVAL))

    assert params.spender == ETHEREUM_ADDRESS.lower()
    assert params.amount == '0x' + f"{MAX_ALLOWED_APPROVAL:064x}"
    assert params.amount_value == MAX_ALLOWED_APPROVAL


def test_decode_approve_ignores_word_padding():
    # high-order 12 bytes of the spender word are not part of the address
    input_data = make_approval_input(CONTRACT_ADDRESS, 5)
    dirty = input_data[:10] + 'ff' * 12 + input_data[10 + 24:]

    assert decode_approve(dirty).spender == CONTRACT_ADDRESS


def test_decode_approve_ignores_trailing_data():
    input_data = make_approval_input(CONTRACT_ADDRESS, 7) + 'ab' * 32

    params = decode_approve(input_data)

    assert params.spender == CONTRACT_ADDRESS
    assert params.amount_value == 7


def test_decode_approve_rejects_short_input():
    input_data = make_approval_input(CONTRACT_ADDRESS, 1)[:-2]

    with pytest.raises(MalformedCallDataError):
        decode_approve(input_data)


def test_decode_approve_rejects_missing_prefix():
    input_data = make_approval_input(CONTRACT_ADDRESS, 1)[2:]

    with pytest.raises(MalformedCallDataError):
        decode_approve(input_data)


@pytest.mark.parametrize('amount_word', [
    'z' * 64,
    '0_' + '0' * 61 + '1',
    '0' * 61 + '1  ',
    '-' + '0' * 63,
])
def test_decode_approve_rejects_non_hex_amount(amount_word):
    input_data = make_approval_input(CONTRACT_ADDRESS, 1)[:-64] + amount_word

    with pytest.raises(AmountParseError):
        decode_approve(input_data)


def test_decode_approve_rejects_non_hex_spender():
    input_data = make_approval_input(CONTRACT_ADDRESS, 1)
    input_data = input_data[:10] + '0' * 24 + 'zz' * 20 + input_data[74:]

    with pytest.raises(MalformedCallDataError):
        decode_approve(input_data)


@pytest.mark.parametrize('amount', ['0x1', '0x' + '0_' * 32, ' 0x' + '0' * 63])
def test_amount_value_requires_full_hex_word(amount):
    params = ApprovalParams(spender=CONTRACT_ADDRESS, amount=amount)

    with pytest.raises(AmountParseError):
        params.amount_value


def test_get_selector_lower_cases():
    assert get_selector('0x095EA7B3' + '0' * 128) == '0x095ea7b3'


@pytest.mark.parametrize('input_data', ['0x', '0x1234', '', '095ea7b3'])
def test_inputs_without_selector(input_data):
    assert not has_selector(input_data)
    with pytest.raises(MalformedCallDataError):
        get_selector(input_data)
