"""Input loading helpers for XGB Scorer."""

from xgb_scorer.utils.data import (
    load_feature_index,
    load_json,
    load_model,
    reverse_feature_index,
)
from xgb_scorer.utils.sparse import iter_sparse_lines, parse_sparse_line

__all__ = [
    "iter_sparse_lines",
    "load_feature_index",
    "load_json",
    "load_model",
    "parse_sparse_line",
    "reverse_feature_index",
]
