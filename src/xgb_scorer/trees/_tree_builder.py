"""Build trees from the nested JSON dump produced by XGBoost.

A dumped booster is a nested object: every split node carries its
children inline under ``children``. The builder flattens that into the
per-tree node arena used by :class:`~xgb_scorer.trees._tree_structure.Tree`.
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from xgb_scorer.exceptions import InputShapeError, ModelIntegrityError
from xgb_scorer.trees._tree_structure import LeafNode, Node, SplitNode, Tree

logger = logging.getLogger(__name__)

_SPLIT_KEYS = ("split", "split_condition", "yes", "no")


def _node_id(raw: Mapping[str, Any]) -> int:
    if not isinstance(raw, Mapping):
        raise ModelIntegrityError(f"Invalid model, node is not an object: {raw!r}")
    if "nodeid" not in raw:
        raise ModelIntegrityError(f"Invalid model, node without 'nodeid': {raw!r}")
    return int(raw["nodeid"])


def _make_node(raw: Mapping[str, Any]) -> Node:
    """Convert one JSON node (without its children) to a typed node."""
    node_id = _node_id(raw)

    if "leaf" in raw:
        return LeafNode(node_id=node_id, value=float(raw["leaf"]))

    for key in _SPLIT_KEYS:
        if key not in raw:
            raise ModelIntegrityError(
                f"Invalid model, node ID {node_id} has neither 'leaf' nor '{key}'"
            )

    depth = raw.get("depth")
    return SplitNode(
        node_id=node_id,
        feature=str(raw["split"]),
        threshold=float(raw["split_condition"]),
        yes=int(raw["yes"]),
        no=int(raw["no"]),
        # Dumps without 'missing' send absent features down the 'yes' branch.
        missing=int(raw.get("missing", raw["yes"])),
        depth=int(depth) if depth is not None else None,
        inline_children=frozenset(_node_id(c) for c in raw.get("children", ())),
    )


def build_tree(root: Mapping[str, Any]) -> Tree:
    """Flatten one nested booster into a tree.

    Each split keeps the ids listed under its own ``children``, and its
    yes, no and missing ids resolve only among those. An id that is not
    nested there is not rejected here; it surfaces when an instance
    reaches it, or from :meth:`Tree.validate`.

    Args:
        root: Root node of the booster as parsed from JSON.

    Returns:
        Tree whose arena holds every node reachable through ``children``.

    Raises:
        ModelIntegrityError: If a node id is repeated or a node is
            malformed.
    """
    if not isinstance(root, Mapping):
        raise InputShapeError(
            f"Expected a tree root object, got {type(root).__name__}"
        )

    nodes: dict[int, Node] = {}
    stack: list[Mapping[str, Any]] = [root]
    while stack:
        raw = stack.pop()
        node = _make_node(raw)
        if node.node_id in nodes:
            raise ModelIntegrityError(
                f"Invalid model, duplicate node ID: {node.node_id}"
            )
        nodes[node.node_id] = node
        if isinstance(node, SplitNode):
            stack.extend(raw.get("children", ()))

    return Tree(root_id=_node_id(root), nodes=nodes)


def build_ensemble(boosters: Sequence[Mapping[str, Any]]) -> tuple[Tree, ...]:
    """Build every booster of a dumped model, preserving order.

    Args:
        boosters: List of booster roots as parsed from the model JSON.

    Returns:
        Trees in the same order as ``boosters``.

    Raises:
        InputShapeError: If ``boosters`` is not a list of objects.
    """
    if isinstance(boosters, (str, bytes, Mapping)) or not isinstance(
        boosters, Sequence
    ):
        raise InputShapeError(
            f"Expected a list of tree roots, got {type(boosters).__name__}"
        )

    trees = tuple(build_tree(root) for root in boosters)
    logger.debug(f"Built {len(trees)} trees, {sum(map(len, trees))} nodes")
    return trees
