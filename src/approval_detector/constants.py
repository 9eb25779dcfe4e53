"""Selectors, approval thresholds and API endpoint constants."""

from eth_utils import keccak


def fourbyte(signature: str) -> str:
    """Return the 0x-prefixed 4-byte selector of a function signature."""
    return '0x' + keccak(text=signature)[:4].hex()


APPROVAL_SIGNATURE = fourbyte('approve(address,uint256)')                # 0x095ea7b3
SET_APPROVAL_FOR_ALL_SIGNATURE = fourbyte('setApprovalForAll(address,bool)')  # 0xa22cb465

INFINITE_APPROVAL = '0x' + 'f' * 64
# Max allowed, for 6-decimal tokens it's 100,000.0
MAX_ALLOWED_APPROVAL = '0x000000000000000000000000000000000000000000000000000000174876e800'

# Hex char widths of the approve() call-data fields
SELECTOR_LENGTH = 8
WORD_LENGTH = 64
ADDRESS_LENGTH = 40

ETHERSCAN_API_URL = "https://api.etherscan.io/v2/api"
DEFAULT_CHAIN_ID = 1
DEFAULT_REQUEST_TIMEOUT = 10

UNVERIFIED_SOURCE_RESULT = "Contract source code not verified"
NO_DATA_MESSAGE = "No data found"
