"""Detector settings read from the environment (.env supported)."""

import os
from typing import Optional, Union

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

from .constants import DEFAULT_REQUEST_TIMEOUT, MAX_ALLOWED_APPROVAL
from .errors import ConfigurationError


def parse_amount(value: Union[str, int]) -> int:
    """
    Parse an approval amount given as 0x-hex or decimal.

    Args:
        value: e.g. '0x174876e800' or '100000000000'

    Returns:
        The amount as an unsigned integer
    """
    if isinstance(value, int):
        amount = value
    else:
        text = value.strip()
        try:
            amount = int(text, 16) if text.lower().startswith('0x') else int(text)
        except ValueError as e:
            raise ConfigurationError(f"Invalid approval amount: {value!r}") from e

    if amount < 0 or amount >= 2 ** 256:
        raise ConfigurationError(f"Approval amount out of uint256 range: {value!r}")
    return amount


class DetectorSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    etherscan_api_key: Optional[str] = None
    chain_id: Optional[int] = None
    rpc_url: Optional[str] = None
    max_allowed_approval: int = int(MAX_ALLOWED_APPROVAL, 16)
    request_timeout: int = DEFAULT_REQUEST_TIMEOUT

    @field_validator("max_allowed_approval", mode="before")
    @classmethod
    def check_max_allowed_approval(cls, value):
        return parse_amount(value)

    @classmethod
    def from_env(cls) -> "DetectorSettings":
        """
        Build settings from environment variables.

        Environment Variables (can also be set in .env file):
          ETHERSCAN_API_KEY     Etherscan API key
          CHAIN_ID              Chain ID for lookups
          RPC_URL               JSON-RPC endpoint for eth_getCode (optional)
          MAX_ALLOWED_APPROVAL  Approval threshold, hex or decimal
          REQUEST_TIMEOUT       HTTP timeout in seconds
        """
        load_dotenv(override=True)

        values = {
            'etherscan_api_key': os.getenv('ETHERSCAN_API_KEY') or None,
            'chain_id': os.getenv('CHAIN_ID') or None,
            'rpc_url': os.getenv('RPC_URL') or None,
            'max_allowed_approval': os.getenv('MAX_ALLOWED_APPROVAL') or MAX_ALLOWED_APPROVAL,
            'request_timeout': os.getenv('REQUEST_TIMEOUT') or DEFAULT_REQUEST_TIMEOUT,
        }
        try:
            return cls(**values)
        except ValueError as e:
            raise ConfigurationError(f"Invalid settings: {e}") from e
