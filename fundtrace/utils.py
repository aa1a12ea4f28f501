"""Shared utility functions."""
import os
from pathlib import Path


def get_project_root() -> Path:
    """
    Get the project root directory.

    Returns:
        Path to project root
    """
    return Path(__file__).parent.parent


def get_addressbook_path(filename: str = None) -> Path:
    """
    Get path to the address book directory or one of its files.

    Args:
        filename: Optional address book filename

    Returns:
        Path to address book directory or specific address book file
    """
    addressbook_dir = get_project_root() / "addressbook"
    if filename:
        return addressbook_dir / filename
    return addressbook_dir


class Config:
    """Configuration constants."""

    # Indexer
    INDEXER_NETWORK = os.getenv("INDEXER_NETWORK", "mainnet")
    INDEXER_URL = os.getenv("INDEXER_URL", "")
    INDEXER_API_TOKEN = os.getenv("INDEXER_API_TOKEN", "")
    PAGE_LIMIT = int(os.getenv("PAGE_LIMIT", "1000"))
    REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "30"))

    # Dead-end classification, in microAlgos (500,000 Algos)
    TERMINAL_BALANCE = int(os.getenv("TERMINAL_BALANCE", str(500_000 * 1_000_000)))

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
