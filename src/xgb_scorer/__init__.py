"""XGB Scorer - probability scoring for dumped XGBoost tree ensembles."""

from xgb_scorer.base import BaseScorer
from xgb_scorer.exceptions import (
    ConfigurationError,
    InputShapeError,
    ModelIntegrityError,
    SparseFormatError,
    XGBScorerError,
)
from xgb_scorer.links import LogisticLink, sigmoid
from xgb_scorer.scorer import XGBoostScorer
from xgb_scorer.trees import LeafNode, SplitNode, Tree

__version__ = "1.0.0"
__all__ = [
    "BaseScorer",
    "ConfigurationError",
    "InputShapeError",
    "LeafNode",
    "LogisticLink",
    "ModelIntegrityError",
    "SparseFormatError",
    "SplitNode",
    "Tree",
    "XGBScorerError",
    "XGBoostScorer",
    "sigmoid",
    "__version__",
]
