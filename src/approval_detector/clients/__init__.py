"""Address reputation providers."""

from .base import AddressReputationProvider
from .etherscan import EtherscanReputationClient

__all__ = ["AddressReputationProvider", "EtherscanReputationClient"]
