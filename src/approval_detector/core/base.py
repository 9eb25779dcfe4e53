"""Base detector state and shared configuration."""

from typing import Optional

from ..clients import AddressReputationProvider
from ..constants import MAX_ALLOWED_APPROVAL


class DetectorBase:
    """Holds the reputation provider and approval threshold; no per-request state."""

    def __init__(
        self,
        reputation_provider: AddressReputationProvider,
        max_allowed_approval: Optional[int] = None,
    ):
        self.reputation_provider = reputation_provider
        self.max_allowed_approval = (
            int(MAX_ALLOWED_APPROVAL, 16)
            if max_allowed_approval is None
            else max_allowed_approval
        )
