"""Address book loading utilities."""
import yaml
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Any


class AddressBookError(ValueError):
    pass


@dataclass
class AddressBook:
    """Seed addresses to trace and known large wallets that end a trace."""
    seeds: List[str] = field(default_factory=list)
    known_wallets: Dict[str, str] = field(default_factory=dict)

    def label(self, address: str) -> str:
        """Render an address with its known-wallet name, if it has one."""
        name = self.known_wallets.get(address)
        if name:
            return f"{name} ({address})"
        return address


class AddressBookLoader:
    """Loads and validates the seed and known-wallet address files."""

    def __init__(self, config_dir: str = "addressbook", seeds_file: str = None, exchanges_file: str = None):
        """
        Initialize the address book loader.

        Args:
            config_dir: Directory containing seeds.yaml and exchanges.yaml
            seeds_file: Optional explicit path to the seeds file (overrides config_dir)
            exchanges_file: Optional explicit path to the exchanges file (overrides config_dir)
        """
        self.config_dir = Path(config_dir)
        self.seeds_path = Path(seeds_file) if seeds_file else self.config_dir / "seeds.yaml"
        self.exchanges_path = Path(exchanges_file) if exchanges_file else self.config_dir / "exchanges.yaml"

    def _read(self, path: Path) -> Dict[str, Any]:
        with open(path, "r") as f:
            data = yaml.safe_load(f)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise AddressBookError(f"{path}: expected a mapping at the top level")
        return data

    def load_seeds(self) -> List[str]:
        """
        Load the seed addresses.

        Order is preserved and duplicates are dropped, so the traversal order
        is exactly the order of the file.

        Returns:
            List of seed addresses
        """
        seeds = self._read(self.seeds_path).get("seeds") or []
        if not isinstance(seeds, list):
            raise AddressBookError(f"{self.seeds_path}: 'seeds' must be a list")
        for address in seeds:
            if not isinstance(address, str) or not address:
                raise AddressBookError(f"{self.seeds_path}: invalid seed address {address!r}")
        return list(dict.fromkeys(seeds))

    def load_exchanges(self) -> Dict[str, str]:
        """
        Load the known large wallets.

        Returns:
            Mapping of address to display name
        """
        exchanges = self._read(self.exchanges_path).get("exchanges") or {}
        if isinstance(exchanges, list):
            # A bare list is accepted; addresses are their own labels
            exchanges = {address: "" for address in exchanges}
        if not isinstance(exchanges, dict):
            raise AddressBookError(f"{self.exchanges_path}: 'exchanges' must be a mapping or a list")
        for address in exchanges:
            if not isinstance(address, str) or not address:
                raise AddressBookError(f"{self.exchanges_path}: invalid exchange address {address!r}")
        return {address: (name or "") for address, name in exchanges.items()}

    def load_all(self) -> AddressBook:
        """
        Load both files.

        Returns:
            AddressBook with seeds and known wallets
        """
        return AddressBook(seeds=self.load_seeds(), known_wallets=self.load_exchanges())
