"""Approval rules applied to a single call's input data."""

from ..calldata import decode_approve, get_selector, has_selector
from ..constants import APPROVAL_SIGNATURE, INFINITE_APPROVAL, SET_APPROVAL_FOR_ALL_SIGNATURE
from ..models import ApprovalParams, Verdict


class ApprovalCheckMixin:
    def check_approval(self, input_data: str) -> Verdict:
        """
        Classify one call by its function selector.

        approve() is checked for its amount first and, only when the amount
        is acceptable, for its spender. setApprovalForAll() is suspicious when
        it grants rather than revokes. Every other call is not suspicious.

        Args:
            input_data: 0x-prefixed call-data

        Returns:
            Verdict for this call
        """
        if not has_selector(input_data):
            return Verdict.clean()

        selector = get_selector(input_data)

        if selector == APPROVAL_SIGNATURE:
            params = decode_approve(input_data)

            amount_check = self.check_approval_amount(params)
            if amount_check.detected:
                return amount_check

            return self.check_suspicious_spender(params.spender)

        if selector == SET_APPROVAL_FOR_ALL_SIGNATURE:
            # last char 1 grants the operator, 0 revokes it
            if input_data.endswith('1'):
                return Verdict.suspicious('Detected approval for all NFTs')
            return Verdict.clean()

        return Verdict.clean()

    def check_approval_amount(self, params: ApprovalParams) -> Verdict:
        if params.amount.lower() == INFINITE_APPROVAL:
            return Verdict.suspicious('Infinite approval detected')

        if params.amount_value > self.max_allowed_approval:
            return Verdict.suspicious('Detected approval with amount greater than max allowed')

        return Verdict.clean()

    def check_suspicious_spender(self, spender: str) -> Verdict:
        """
        Flag approvals to EOAs and to contracts without verified source.

        The verification lookup is skipped for EOAs.
        """
        if not self.reputation_provider.is_contract(spender):
            return Verdict.suspicious('Token approval is given to EOA')

        if not self.reputation_provider.is_contract_verified(spender):
            return Verdict.suspicious('Token approval is given to unverified contract')

        return Verdict.clean()
