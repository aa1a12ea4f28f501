"""
Forest Builder

Walks funding ancestry backwards from seed addresses and records it in an
AncestryForest. Each step asks for the earliest funder of the current address
and climbs to it, until the history runs out, a terminal wallet is reached,
or the funder is already in the forest.
"""

import logging
from dataclasses import dataclass
from typing import AbstractSet, Dict, List, Optional, Sequence

from fundtrace.ledger.service import LedgerQueryError, LedgerQueryService
from fundtrace.utils import Config
from .classifier import DeadEndClassifier, Verdict
from .forest import AncestryForest, Node
from .resolver import ParentResolver

logger = logging.getLogger(__name__)


@dataclass
class BuildReport:
    """Result of a build operation"""
    seeds: List[str]
    new_nodes: List[str]
    roots: List[str]
    failures: Dict[str, str]
    metadata: Dict


class ForestBuilder:
    """
    Builds the ancestry forest one seed at a time.

    The walk is a loop rather than a recursion, so chains of any length are
    safe. Ledger failures end only the branch being walked; every other
    exception propagates to the caller.
    """

    def __init__(
        self,
        ledger: LedgerQueryService,
        known_wallets: AbstractSet[str] = frozenset(),
        threshold: int = Config.TERMINAL_BALANCE,
        forest: Optional[AncestryForest] = None
    ):
        """
        Initialize forest builder.

        Args:
            ledger: Ledger query service
            known_wallets: Addresses of known exchanges and custodial wallets
            threshold: Balance in microAlgos at or above which an address is terminal
            forest: Existing forest to extend; a new one is created if omitted
        """
        self.ledger = ledger
        self.resolver = ParentResolver(ledger)
        self.classifier = DeadEndClassifier(ledger, known_wallets, threshold)
        self.forest = forest if forest is not None else AncestryForest()

    def close(self):
        """Close the underlying ledger client, if it can be closed"""
        close = getattr(self.ledger, "close", None)
        if close is not None:
            close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def build(self, seeds: Sequence[str]) -> BuildReport:
        """
        Trace every seed, in the given order.

        Seeds already in the forest, whether from an earlier build or as the
        ancestor of an earlier seed, are not walked again.

        Args:
            seeds: Ordered seed addresses

        Returns:
            BuildReport listing the nodes this call added
        """
        known_before = len(self.forest)
        failures_before = set(self.forest.failures)

        for address in seeds:
            self.forest.add_seed(address)
            if address in self.forest:
                logger.debug("Seed %s already in forest, skipping", address)
                continue
            logger.info("Tracing seed %s", address)
            self._walk(self.forest, self.forest.register(address))

        new_nodes = list(self.forest.nodes)[known_before:]
        return BuildReport(
            seeds=list(seeds),
            new_nodes=new_nodes,
            roots=[node.address for node in self.forest.roots()],
            failures={
                address: message
                for address, message in self.forest.failures.items()
                if address not in failures_before
            },
            metadata={
                **self.forest.stats(),
                'total_new_nodes': len(new_nodes),
            }
        )

    def trace(self, address: str, include_terminus: bool = False) -> List[str]:
        """
        Ancestry chain of one address, from itself back to its root.

        The chain is always read back from parent links. An address the
        forest does not know is walked in a scratch forest, so the shared
        forest and its ignore-list are left untouched.

        Args:
            address: Address to trace
            include_terminus: Append the terminal wallet that funded the root, if any
        """
        if address in self.forest:
            return self.forest.chain(address, include_terminus=include_terminus)

        scratch = AncestryForest()
        scratch.ignored = set(self.forest.ignored)
        self._walk(scratch, scratch.register(address))
        return scratch.chain(address, include_terminus=include_terminus)

    def _walk(self, forest: AncestryForest, node: Node):
        """Climb from a freshly registered node until the branch ends"""
        current = node

        while True:
            address = current.address

            try:
                parent = self.resolver.resolve(address)
            except LedgerQueryError as e:
                logger.warning("Address: %s Error: %s", address, e)
                forest.failures[address] = str(e)
                return

            if parent is None:
                logger.debug("%s has no funder, root reached", address)
                return

            if forest.is_ignored(parent):
                current.terminus = parent
                return

            classification = self.classifier.classify(parent)
            if classification.verdict == Verdict.TERMINAL:
                logger.info("%s funded by terminal wallet %s (%s)", address, parent, classification.reason)
                forest.ignore(parent)
                current.terminus = parent
                return
            if classification.verdict == Verdict.LOOKUP_FAILED:
                logger.warning("Address: %s Error: %s", parent, classification.cause)
                forest.failures[address] = f"Classifying funder {parent} failed: {classification.cause}"
                return

            parent_node, created = forest.get_or_register(parent)
            if not forest.link(current, parent_node):
                logger.info("Funding cycle: %s already descends from %s, link dropped", parent, address)
                return
            if not created:
                # existing node: its ancestry was walked when it was registered
                return

            current = parent_node
