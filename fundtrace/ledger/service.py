"""
Ledger Query Contract

Read-only view of the ledger used by the ancestry walk: a paginated stream of
an account's incoming payments and its current balance.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterator


class LedgerQueryError(Exception):
    """A ledger query failed (network, HTTP status or malformed payload)."""


class QueryCancelled(LedgerQueryError):
    """The caller cancelled the run before this query was sent."""


@dataclass(frozen=True)
class PaymentTransaction:
    """A confirmed native-asset payment"""
    sender: str
    receiver: str
    confirmed_round: int


class LedgerQueryService(ABC):
    """
    Contract consumed by the resolver and the classifier.

    Implementations make no promise about transaction order, within a page or
    across pages. Neither operation retries.
    """

    @abstractmethod
    def iter_payment_transactions(self, address: str) -> Iterator[PaymentTransaction]:
        """
        Stream every payment received by an address, across all pages.

        Raises:
            LedgerQueryError: when any page cannot be fetched
        """

    @abstractmethod
    def get_account_balance(self, address: str) -> int:
        """
        Current balance of an address in microAlgos.

        Raises:
            LedgerQueryError: when the account cannot be fetched
        """
