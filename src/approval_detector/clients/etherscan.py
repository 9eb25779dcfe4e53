"""Etherscan-backed address reputation lookups."""

import logging
from typing import Any, Dict, Optional

import requests
from web3 import Web3

from ..constants import (
    DEFAULT_CHAIN_ID,
    DEFAULT_REQUEST_TIMEOUT,
    ETHERSCAN_API_URL,
    NO_DATA_MESSAGE,
    UNVERIFIED_SOURCE_RESULT,
)
from ..errors import ConfigurationError, ReputationLookupError

logger = logging.getLogger(__name__)


class EtherscanReputationClient:
    """Answers is-contract / is-verified questions through the Etherscan v2 API."""

    def __init__(
        self,
        etherscan_api_key: str,
        chain_id: int = DEFAULT_CHAIN_ID,
        rpc_url: Optional[str] = None,
        timeout: int = DEFAULT_REQUEST_TIMEOUT,
    ):
        """
        Initialize the client.

        Args:
            etherscan_api_key: Etherscan API key
            chain_id: Chain ID passed to the v2 API
            rpc_url: Optional JSON-RPC endpoint; when set, contract existence is read with eth_getCode
            timeout: Per-request timeout in seconds
        """
        if not etherscan_api_key:
            raise ConfigurationError("An Etherscan API key is required for reputation lookups")
        self.etherscan_api_key = etherscan_api_key
        self.chain_id = int(chain_id)
        self.timeout = timeout
        self.w3 = Web3(Web3.HTTPProvider(rpc_url, request_kwargs={'timeout': timeout})) if rpc_url else None


    def _query(self, params: Dict[str, Any], address: str) -> Dict[str, Any]:
        """
        Run one Etherscan API query.

        Args:
            params: module/action parameters
            address: Address being looked up (for error reporting)

        Returns:
            Decoded JSON response

        Raises:
            ReputationLookupError: on transport errors, bad JSON or API errors
        """
        params = {**params, 'apikey': self.etherscan_api_key}
        try:
            response = requests.get(
                ETHERSCAN_API_URL,
                params={'chainid': self.chain_id, **params},
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            raise ReputationLookupError(f"Etherscan {params['action']} request failed: {e}", address) from e
        except ValueError as e:
            raise ReputationLookupError(f"Etherscan {params['action']} returned invalid JSON", address) from e

        if data.get('status') == '0':
            message = data.get('message')
            result = data.get('result')
            # getcontractcreation answers EOAs with "No data found", getabi
            # answers unverified sources with a NOTOK status
            if message != NO_DATA_MESSAGE and result != UNVERIFIED_SOURCE_RESULT:
                raise ReputationLookupError(
                    f"Etherscan {params['action']} error: {message}: {result}", address
                )

        return data


    def is_contract(self, address: str) -> bool:
        """
        Check whether an address is a contract.

        Uses eth_getCode when an RPC endpoint is configured, otherwise the
        contract creation record on Etherscan (EOAs have none).

        Args:
            address: Address to check

        Returns:
            True for contracts, False for EOAs
        """
        if self.w3 is not None:
            try:
                code = self.w3.eth.get_code(Web3.to_checksum_address(address))
            except Exception as e:
                raise ReputationLookupError(f"eth_getCode failed: {e}", address) from e
            logger.debug(f"eth_getCode {address}: {len(code)} bytes")
            return len(code) > 0

        data = self._query(
            {
                'module': 'contract',
                'action': 'getcontractcreation',
                'contractaddresses': address,
            },
            address,
        )
        result = data.get('result')
        logger.debug(f"getcontractcreation {address}: {result}")
        return data.get('status') == '1' and bool(result)


    def is_contract_verified(self, address: str) -> bool:
        """
        Check whether a contract's source code is verified on Etherscan.

        Args:
            address: Contract address

        Returns:
            False if Etherscan reports the source as not verified
        """
        data = self._query(
            {
                'module': 'contract',
                'action': 'getabi',
                'address': address,
            },
            address,
        )
        verified = data.get('status') == '1' and data.get('result') != UNVERIFIED_SOURCE_RESULT
        logger.debug(f"getabi {address}: verified={verified}")
        return verified
