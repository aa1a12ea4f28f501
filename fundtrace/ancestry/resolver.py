"""Earliest-funder lookup."""

from typing import Optional

from fundtrace.ledger.service import LedgerQueryError, LedgerQueryService


class ResolutionError(LedgerQueryError):
    """
    Parent lookup aborted part way through the transaction history.

    partial_parent is the best candidate seen before the failure. It is kept
    for diagnostics only and must not be treated as the real funder.
    """

    def __init__(self, address: str, partial_parent: Optional[str], cause: LedgerQueryError):
        super().__init__(f"Parent lookup for {address} failed: {cause}")
        self.address = address
        self.partial_parent = partial_parent
        self.cause = cause


class ParentResolver:
    """Finds the sender of the earliest confirmed payment into an address."""

    def __init__(self, ledger: LedgerQueryService):
        self.ledger = ledger

    def resolve(self, address: str) -> Optional[str]:
        """
        Return the earliest funder of an address, or None if it was never funded.

        Every page is scanned since the ledger promises no ordering. When
        several payments share the lowest round the first one seen wins.
        Payments an address sends to itself are not funding.

        Raises:
            ResolutionError: when any page fails
        """
        parent = None
        earliest_round = None

        try:
            for txn in self.ledger.iter_payment_transactions(address):
                if txn.sender == address:
                    continue
                if earliest_round is None or txn.confirmed_round < earliest_round:
                    earliest_round = txn.confirmed_round
                    parent = txn.sender
        except LedgerQueryError as e:
            raise ResolutionError(address, parent, e) from e

        return parent
