"""Tree data structures for per-instance traversal."""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from xgb_scorer.exceptions import ModelIntegrityError


@dataclass(frozen=True)
class LeafNode:
    """Terminal node holding a tree's raw contribution.

    Attributes:
        node_id: Identifier, unique within its tree.
        value: Raw (pre-link) score returned when traversal ends here.
    """

    node_id: int
    value: float


@dataclass(frozen=True)
class SplitNode:
    """Internal node routing an instance to one of its children.

    Attributes:
        node_id: Identifier, unique within its tree.
        feature: Name of the feature compared at this node.
        threshold: Split value. ``value < threshold`` takes ``yes``.
        yes: Child id taken when the comparison holds.
        no: Child id taken otherwise, including ``value == threshold``.
        missing: Child id taken when the feature is absent.
        depth: Depth recorded in the model file (not used for routing).
        inline_children: Ids of the nodes listed under ``children`` in the
            model file, or None when the node was built by hand.
    """

    node_id: int
    feature: str
    threshold: float
    yes: int
    no: int
    missing: int
    depth: int | None = None
    inline_children: frozenset[int] | None = None

    def children(self) -> tuple[int, int, int]:
        """Return the referenced child ids as (yes, no, missing)."""
        return self.yes, self.no, self.missing

    def nested_ids(self) -> frozenset[int]:
        """Ids of the nodes nested directly under this one."""
        if self.inline_children is not None:
            return self.inline_children
        return frozenset(self.children())


Node = LeafNode | SplitNode


@dataclass(frozen=True)
class Tree:
    """One boosted tree stored as an arena of nodes indexed by id.

    Split nodes hold only the ids of their children. Every node is nested
    under at most one split and a child id resolves only through that
    split, so a walk from the root always moves downward and each lookup
    is O(1).

    Attributes:
        root_id: Id of the node where traversal starts.
        nodes: Read-only mapping from node id to node.
    """

    root_id: int
    nodes: Mapping[int, Node]

    def __post_init__(self) -> None:
        if not isinstance(self.nodes, MappingProxyType):
            object.__setattr__(self, "nodes", MappingProxyType(dict(self.nodes)))
        if self.root_id not in self.nodes:
            raise ModelIntegrityError(
                f"Invalid model, root node ID {self.root_id} is not in the tree"
            )

        parents: dict[int, int] = {}
        for node in self.nodes.values():
            if not isinstance(node, SplitNode):
                continue
            for child_id in node.nested_ids():
                if child_id == self.root_id:
                    raise ModelIntegrityError(
                        f"Invalid model, root node ID {child_id} is nested "
                        f"under node ID {node.node_id}"
                    )
                if child_id in parents:
                    raise ModelIntegrityError(
                        f"Invalid model, node ID {child_id} is nested under "
                        f"both node ID {parents[child_id]} and {node.node_id}"
                    )
                parents[child_id] = node.node_id
        object.__setattr__(self, "_parents", parents)

    def __len__(self) -> int:
        return len(self.nodes)

    @property
    def root(self) -> Node:
        return self.nodes[self.root_id]

    def node(self, node_id: int) -> Node:
        """Look up any node of this tree by id.

        Raises:
            ModelIntegrityError: If no node in this tree has that id.
        """
        try:
            return self.nodes[node_id]
        except KeyError:
            raise ModelIntegrityError(
                f"Invalid model, missing node ID: {node_id}"
            ) from None

    def child(self, parent: SplitNode, child_id: int) -> Node:
        """Resolve a child id referenced by a split node.

        Args:
            parent: Split node holding the reference.
            child_id: One of ``parent``'s yes, no or missing ids.

        Returns:
            The node with that id nested under ``parent``.

        Raises:
            ModelIntegrityError: If no node with that id is nested under
                ``parent``.
        """
        if self._parents.get(child_id) != parent.node_id or child_id not in self.nodes:
            raise ModelIntegrityError(
                f"Invalid model, missing node ID: {child_id} "
                f"(referenced by node ID {parent.node_id})"
            )
        return self.nodes[child_id]

    def leaves(self) -> Iterator[LeafNode]:
        """Iterate over leaf nodes in id order."""
        for node_id in sorted(self.nodes):
            node = self.nodes[node_id]
            if isinstance(node, LeafNode):
                yield node

    def max_depth(self) -> int:
        """Length of the longest root-to-leaf path, in edges.

        Raises:
            ModelIntegrityError: If a reachable child id cannot be resolved.
        """
        deepest = 0
        stack = [(self.root, 0)]
        while stack:
            node, depth = stack.pop()
            if isinstance(node, LeafNode):
                deepest = max(deepest, depth)
                continue
            stack.extend(
                (self.child(node, child_id), depth + 1)
                for child_id in set(node.children())
            )
        return deepest

    def validate(self) -> "Tree":
        """Check every reference reachable from the root.

        Returns:
            Self for method chaining.

        Raises:
            ModelIntegrityError: If a child id cannot be resolved.
        """
        self.max_depth()
        return self
