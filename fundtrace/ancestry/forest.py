"""
Ancestry Forest

Registry of every address discovered during a run. The address -> node map
doubles as the visited-set of the walk; the ignore-list holds addresses
already classified as terminal.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Set, Tuple


@dataclass(eq=False)
class Node:
    """One address in an ancestry tree. parent points toward the funding source."""
    address: str
    children: List["Node"] = field(default_factory=list)
    parent: Optional["Node"] = None
    terminus: Optional[str] = None  # terminal wallet that funded this root

    @property
    def is_root(self) -> bool:
        return self.parent is None

    def __repr__(self):
        parent = self.parent.address if self.parent else None
        return f"Node({self.address!r}, parent={parent!r}, children={len(self.children)})"


class AncestryForest:
    """Address -> Node registry plus the ignore-list of terminal addresses."""

    def __init__(self):
        self.nodes: Dict[str, Node] = {}
        self.ignored: Set[str] = set()
        self.seeds: List[str] = []
        self._seed_set: Set[str] = set()
        self.failures: Dict[str, str] = {}
        self.dropped_links: List[Tuple[str, str]] = []

    def __contains__(self, address: str) -> bool:
        return address in self.nodes

    def __len__(self) -> int:
        return len(self.nodes)

    def __getitem__(self, address: str) -> Node:
        return self.nodes[address]

    def register(self, address: str) -> Node:
        """Create and register the node for a new address"""
        if address in self.nodes:
            raise ValueError(f"Address {address} is already registered")
        node = Node(address)
        self.nodes[address] = node
        return node

    def get_or_register(self, address: str) -> Tuple[Node, bool]:
        """Return (node, created)"""
        node = self.nodes.get(address)
        if node is not None:
            return node, False
        return self.register(address), True

    def add_seed(self, address: str):
        if address not in self._seed_set:
            self._seed_set.add(address)
            self.seeds.append(address)

    def is_seed(self, address: str) -> bool:
        return address in self._seed_set

    def ignore(self, address: str):
        self.ignored.add(address)

    def is_ignored(self, address: str) -> bool:
        return address in self.ignored

    def link(self, child: Node, parent: Node) -> bool:
        """
        Attach child under parent.

        A link that would make child its own ancestor is recorded in
        dropped_links and not made. Returns whether the link was made.
        """
        if child.parent is not None:
            raise ValueError(f"{child.address} already has parent {child.parent.address}")

        ancestor = parent
        while ancestor is not None:
            if ancestor is child:
                self.dropped_links.append((child.address, parent.address))
                return False
            ancestor = ancestor.parent

        parent.children.append(child)
        child.parent = parent
        return True

    def roots(self) -> List[Node]:
        """Nodes with no parent, in registration order"""
        return [node for node in self.nodes.values() if node.parent is None]

    def walk(self, node: Node) -> Iterator[Tuple[Node, int]]:
        """Depth-first (node, depth) pairs of a subtree, children in link order"""
        stack = [(node, 0)]
        while stack:
            current, depth = stack.pop()
            yield current, depth
            for child in reversed(current.children):
                stack.append((child, depth + 1))

    def chain(self, address: str, include_terminus: bool = False) -> List[str]:
        """
        Addresses from this one back to its root, following parent links.

        Args:
            address: A registered address
            include_terminus: Append the terminal wallet that funded the root, if any

        Raises:
            KeyError: if the address is not in the forest
        """
        node = self.nodes[address]
        chain = [node.address]
        while node.parent is not None:
            node = node.parent
            chain.append(node.address)
        if include_terminus and node.terminus:
            chain.append(node.terminus)
        return chain

    def stats(self) -> Dict:
        return {
            'total_nodes': len(self.nodes),
            'total_roots': len(self.roots()),
            'total_ignored': len(self.ignored),
            'total_failures': len(self.failures),
            'total_dropped_links': len(self.dropped_links),
        }

    def to_dict(self) -> Dict:
        """Nested plain-data view of the forest, one entry per tree"""
        trees = []
        for root in self.roots():
            entries: Dict[str, Dict] = {}
            for node, _ in self.walk(root):
                entry = {
                    'address': node.address,
                    'seed': self.is_seed(node.address),
                    'children': [],
                }
                entries[node.address] = entry
                if node is not root:
                    entries[node.parent.address]['children'].append(entry)
            tree = entries[root.address]
            tree['terminus'] = root.terminus
            trees.append(tree)

        return {
            'trees': trees,
            'ignored': sorted(self.ignored),
            'failures': dict(self.failures),
            'dropped_links': [list(link) for link in self.dropped_links],
            'metadata': self.stats(),
        }
