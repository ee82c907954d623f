"""Tree representation and traversal for XGB Scorer."""

from xgb_scorer.trees._predictor import evaluate_tree, predict_leaf
from xgb_scorer.trees._tree_builder import build_ensemble, build_tree
from xgb_scorer.trees._tree_structure import LeafNode, Node, SplitNode, Tree

__all__ = [
    "LeafNode",
    "Node",
    "SplitNode",
    "Tree",
    "build_ensemble",
    "build_tree",
    "evaluate_tree",
    "predict_leaf",
]
