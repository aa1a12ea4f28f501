"""Algorand indexer (REST v2) implementation of the ledger query contract."""
import logging
import threading
from typing import Dict, Iterator, Optional

import requests

from fundtrace.utils import Config
from .service import LedgerQueryError, LedgerQueryService, PaymentTransaction, QueryCancelled

logger = logging.getLogger(__name__)

NETWORKS = {
    "mainnet": "https://mainnet-idx.algonode.cloud",
    "testnet": "https://testnet-idx.algonode.cloud",
}


def resolve_indexer_url(network: str = None, url: str = None) -> str:
    """
    Pick the indexer base URL.

    Args:
        network: 'mainnet' or 'testnet'
        url: Explicit base URL; wins over network

    Returns:
        Base URL without trailing slash
    """
    if url:
        return url.rstrip("/")
    network = (network or "mainnet").lower()
    if network not in NETWORKS:
        raise ValueError(f"Unknown network {network!r}, expected one of {sorted(NETWORKS)}")
    return NETWORKS[network]


class IndexerClient(LedgerQueryService):
    """Ledger queries backed by an Algorand indexer over HTTP."""

    def __init__(
        self,
        base_url: str,
        api_token: str = "",
        page_limit: int = Config.PAGE_LIMIT,
        timeout: float = Config.REQUEST_TIMEOUT,
        cancel_event: Optional[threading.Event] = None,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize indexer client.

        Args:
            base_url: Indexer base URL, e.g. https://mainnet-idx.algonode.cloud
            api_token: Optional token sent as X-Indexer-API-Token
            page_limit: Transactions requested per page
            timeout: Per-request timeout in seconds
            cancel_event: When set, the next query raises QueryCancelled
            session: Optional pre-built requests session
        """
        self.base_url = base_url.rstrip("/")
        self.page_limit = page_limit
        self.timeout = timeout
        self.cancel_event = cancel_event
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})
        if api_token:
            self.session.headers.update({"X-Indexer-API-Token": api_token})

    @classmethod
    def from_config(cls, network: str = None, url: str = None, **kwargs) -> "IndexerClient":
        """Build a client from Config, with optional overrides."""
        base_url = resolve_indexer_url(network or Config.INDEXER_NETWORK, url or Config.INDEXER_URL)
        kwargs.setdefault("api_token", Config.INDEXER_API_TOKEN)
        return cls(base_url, **kwargs)

    def close(self):
        """Close the HTTP session"""
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def iter_payment_transactions(self, address: str) -> Iterator[PaymentTransaction]:
        params = {
            "tx-type": "pay",
            "address-role": "receiver",
            "limit": self.page_limit,
        }
        next_token = None
        page = 0

        while True:
            page_params = dict(params)
            if next_token:
                page_params["next"] = next_token
            payload = self._get(f"/v2/accounts/{address}/transactions", page_params)
            page += 1

            transactions = payload.get("transactions") or []
            logger.debug("Fetched page %d for %s (%d transactions)", page, address, len(transactions))
            for txn in transactions:
                yield self._parse_payment(txn, address)

            next_token = payload.get("next-token")
            if not next_token:
                return

    def get_account_balance(self, address: str) -> int:
        payload = self._get(f"/v2/accounts/{address}", {"include-all": "true"})
        account = payload.get("account")
        if not isinstance(account, dict) or "amount" not in account:
            raise LedgerQueryError(f"Account payload for {address} has no amount")
        try:
            return int(account["amount"])
        except (TypeError, ValueError) as e:
            raise LedgerQueryError(f"Account amount for {address} is not an integer: {account['amount']!r}") from e

    def _parse_payment(self, txn: Dict, address: str) -> PaymentTransaction:
        """Convert one indexer transaction record"""
        try:
            payment = txn.get("payment-transaction") or {}
            return PaymentTransaction(
                sender=txn["sender"],
                receiver=payment.get("receiver", address),
                confirmed_round=int(txn["confirmed-round"])
            )
        except (KeyError, TypeError, ValueError) as e:
            raise LedgerQueryError(f"Malformed transaction for {address}: {txn.get('id', '?')}") from e

    def _get(self, path: str, params: Dict) -> Dict:
        """GET a JSON document, mapping every failure to LedgerQueryError"""
        if self.cancel_event is not None and self.cancel_event.is_set():
            raise QueryCancelled(f"Cancelled before GET {path}")

        url = f"{self.base_url}{path}"
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise LedgerQueryError(f"GET {url} failed: {e}") from e

        if response.status_code != 200:
            raise LedgerQueryError(f"GET {url} returned {response.status_code}: {response.text[:200]}")

        try:
            payload = response.json()
        except ValueError as e:
            raise LedgerQueryError(f"GET {url} returned invalid JSON") from e

        if not isinstance(payload, dict):
            raise LedgerQueryError(f"GET {url} returned {type(payload).__name__}, expected an object")
        return payload
