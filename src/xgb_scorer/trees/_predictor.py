"""Single-instance traversal of a tree.

Each call starts at the root and follows exactly one child per split
node until a leaf is reached, so the cost is O(depth) per instance.
"""

from collections.abc import Mapping

from xgb_scorer.trees._tree_structure import LeafNode, Tree

FeatureVector = Mapping[str, float]


def _find_leaf(tree: Tree, features: FeatureVector) -> LeafNode:
    node = tree.root
    while not isinstance(node, LeafNode):
        value = features.get(node.feature)
        if value is None:
            # Absent feature: the learned default route, not a comparison.
            next_id = node.missing
        elif value < node.threshold:
            next_id = node.yes
        else:
            # Ties and NaN go to 'no'.
            next_id = node.no
        node = tree.child(node, next_id)
    return node


def evaluate_tree(tree: Tree, features: FeatureVector) -> float:
    """Return the leaf value an instance reaches in one tree.

    Args:
        tree: Tree to traverse.
        features: Feature name to value. Features the tree splits on may be
            absent.

    Returns:
        Raw leaf value.

    Raises:
        ModelIntegrityError: If traversal reaches an id with no node.
    """
    return _find_leaf(tree, features).value


def predict_leaf(tree: Tree, features: FeatureVector) -> int:
    """Return the id of the leaf an instance reaches in one tree."""
    return _find_leaf(tree, features).node_id
