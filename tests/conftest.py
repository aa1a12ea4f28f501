"""
Pytest configuration and fixtures for ancestry tests.
"""

import pytest
from pathlib import Path
import sys

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from fundtrace.ancestry.builder import ForestBuilder
from fundtrace.ledger.service import LedgerQueryError, LedgerQueryService, PaymentTransaction

THRESHOLD = 500_000 * 1_000_000


class FakeLedger(LedgerQueryService):
    """
    In-memory ledger with explicit pages.

    pages: address -> list of pages, each a list of (sender, round)
    balances: address -> microAlgos (missing means 0)
    failing_history / failing_balance: address -> page index / True
    """

    def __init__(self):
        self.pages = {}
        self.balances = {}
        self.failing_history = {}
        self.failing_balance = set()
        self.history_calls = []
        self.balance_calls = []

    def fund(self, address, sender, confirmed_round):
        """Add one payment on the address's last page"""
        pages = self.pages.setdefault(address, [[]])
        pages[-1].append((sender, confirmed_round))
        return self

    def set_pages(self, address, pages):
        self.pages[address] = pages
        return self

    def iter_payment_transactions(self, address):
        self.history_calls.append(address)
        for index, page in enumerate(self.pages.get(address, [[]])):
            if self.failing_history.get(address) == index:
                raise LedgerQueryError(f"page {index} unavailable for {address}")
            for sender, confirmed_round in page:
                yield PaymentTransaction(sender, address, confirmed_round)

    def get_account_balance(self, address):
        self.balance_calls.append(address)
        if address in self.failing_balance:
            raise LedgerQueryError(f"account {address} unavailable")
        return self.balances.get(address, 0)


@pytest.fixture
def ledger():
    """Empty fake ledger for each test"""
    return FakeLedger()


@pytest.fixture
def builder(ledger):
    """Forest builder over the fake ledger with no known wallets"""
    return ForestBuilder(ledger, threshold=THRESHOLD)


@pytest.fixture
def chain_ledger(ledger):
    """
    A <- B <- C <- D, where D holds more than the terminal threshold.
    """
    ledger.fund("A", "B", 300)
    ledger.fund("B", "C", 200)
    ledger.fund("C", "D", 100)
    ledger.balances["D"] = THRESHOLD + 1
    return ledger
