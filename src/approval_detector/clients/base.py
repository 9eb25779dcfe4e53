"""Interface of the address-reputation lookups used by the spender check."""

from typing import Protocol


class AddressReputationProvider(Protocol):
    def is_contract(self, address: str) -> bool:
        """Return True if the address has contract code, False for an EOA."""
        ...

    def is_contract_verified(self, address: str) -> bool:
        """Return True if the contract's source code is verified."""
        ...
