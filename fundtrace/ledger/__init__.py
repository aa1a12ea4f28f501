"""
Ledger access package.

This package provides:
- The read-only ledger query contract used by the ancestry walk
- An Algorand indexer client implementing it over HTTP
"""

from .service import LedgerQueryError, LedgerQueryService, PaymentTransaction, QueryCancelled
from .indexer import IndexerClient, resolve_indexer_url

__all__ = [
    'LedgerQueryError',
    'LedgerQueryService',
    'PaymentTransaction',
    'QueryCancelled',
    'IndexerClient',
    'resolve_indexer_url',
]
