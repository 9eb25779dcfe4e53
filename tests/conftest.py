"""Shared fixtures."""

from unittest.mock import Mock

import pytest

from approval_detector import ApprovalDetector


@pytest.fixture
def reputation_provider():
    """Reputation provider double; spenders default to verified contracts."""
    provider = Mock(spec=['is_contract', 'is_contract_verified'])
    provider.is_contract.return_value = True
    provider.is_contract_verified.return_value = True
    return provider


@pytest.fixture
def detector(reputation_provider):
    return ApprovalDetector(reputation_provider=reputation_provider)
