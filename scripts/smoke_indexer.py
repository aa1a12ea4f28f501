#!/usr/bin/env python3
"""
Manual smoke check of a live indexer.

Usage:
    python scripts/smoke_indexer.py ADDRESS [--network testnet]
"""

import sys
import argparse
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from fundtrace.ancestry.classifier import DeadEndClassifier
from fundtrace.ancestry.resolver import ParentResolver, ResolutionError
from fundtrace.ledger.indexer import IndexerClient
from fundtrace.ledger.service import LedgerQueryError


def check_balance(client: IndexerClient, address: str) -> bool:
    """Fetch and print the balance of an address."""
    try:
        balance = client.get_account_balance(address)
    except LedgerQueryError as e:
        print(f"❌ Balance lookup failed: {e}")
        return False
    print(f"💰 Balance: {balance} microAlgos ({balance / 1_000_000:,.6f} Algos)")
    return True


def check_history(client: IndexerClient, address: str) -> bool:
    """Count incoming payments and print the earliest funder."""
    count = 0
    earliest = None
    try:
        for txn in client.iter_payment_transactions(address):
            count += 1
            if earliest is None or txn.confirmed_round < earliest.confirmed_round:
                earliest = txn
    except LedgerQueryError as e:
        print(f"❌ History scan failed after {count} transactions: {e}")
        return False

    print(f"📦 Incoming payments: {count}")
    if earliest:
        print(f"   Earliest: round {earliest.confirmed_round} from {earliest.sender}")
    return True


def main():
    """Run smoke checks."""
    parser = argparse.ArgumentParser(description="Smoke check an indexer against one address.")
    parser.add_argument("address", help="Address to look up")
    parser.add_argument("--network", default=None, help="mainnet or testnet")
    parser.add_argument("--indexer-url", default=None, help="Explicit indexer base URL")
    args = parser.parse_args()

    print("\n" + "=" * 60)
    print("INDEXER SMOKE CHECK")
    print("=" * 60)

    with IndexerClient.from_config(network=args.network, url=args.indexer_url) as client:
        print(f"\n📍 Indexer: {client.base_url}")
        print(f"   Address: {args.address}\n")

        ok = check_balance(client, args.address)
        ok = check_history(client, args.address) and ok

        try:
            parent = ParentResolver(client).resolve(args.address)
            print(f"🔗 Resolved funder: {parent or 'none (root)'}")
            if parent:
                verdict = DeadEndClassifier(client).classify(parent)
                print(f"   Funder verdict: {verdict.verdict.value} {verdict.reason or ''}")
        except ResolutionError as e:
            print(f"❌ {e}")
            ok = False

    print("\n" + "=" * 60)
    print("✅ ALL CHECKS PASSED" if ok else "❌ SOME CHECKS FAILED")
    print("=" * 60 + "\n")
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
