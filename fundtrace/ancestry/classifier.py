"""
Dead-End Classification

Decides whether a funder address is a traversal boundary. Large custodial
wallets aggregate funds from unrelated sources, so ancestry above them means
nothing and they end the walk instead of becoming nodes.
"""

from dataclasses import dataclass
from enum import Enum
from typing import AbstractSet, Optional

from fundtrace.ledger.service import LedgerQueryError, LedgerQueryService
from fundtrace.utils import Config


class Verdict(str, Enum):
    """Outcome of classifying an address"""
    CONTINUE = "continue"
    TERMINAL = "terminal"
    LOOKUP_FAILED = "lookup_failed"


@dataclass(frozen=True)
class Classification:
    """Verdict for one address plus the rule or error behind it"""
    address: str
    verdict: Verdict
    reason: Optional[str] = None  # 'known_wallet' or 'balance' for TERMINAL
    balance: Optional[int] = None
    cause: Optional[LedgerQueryError] = None


class DeadEndClassifier:
    """Classifies addresses as CONTINUE, TERMINAL or LOOKUP_FAILED."""

    def __init__(
        self,
        ledger: LedgerQueryService,
        known_wallets: AbstractSet[str] = frozenset(),
        threshold: int = Config.TERMINAL_BALANCE
    ):
        """
        Initialize classifier.

        Args:
            ledger: Ledger query service used for balance lookups
            known_wallets: Addresses of known exchanges and custodial wallets
            threshold: Balance in microAlgos at or above which an address is terminal
        """
        self.ledger = ledger
        self.known_wallets = known_wallets
        self.threshold = threshold

    def classify(self, address: str) -> Classification:
        """
        Classify an address.

        The balance is looked up first, even for known wallets, so an
        unreachable ledger is reported the same way for every address.
        """
        try:
            balance = self.ledger.get_account_balance(address)
        except LedgerQueryError as e:
            return Classification(address, Verdict.LOOKUP_FAILED, cause=e)

        if address in self.known_wallets:
            return Classification(address, Verdict.TERMINAL, reason="known_wallet", balance=balance)
        if balance >= self.threshold:
            return Classification(address, Verdict.TERMINAL, reason="balance", balance=balance)
        return Classification(address, Verdict.CONTINUE, balance=balance)
