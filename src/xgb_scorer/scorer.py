"""Probability scoring with a dumped XGBoost ensemble.

This module implements the ensemble evaluator: it sums the leaf value
each tree assigns to an instance and maps the total through the
logistic link. Instances are given either as feature name to value
mappings or as lines of the sparse ``label slot:value ...`` format.
"""

import io
import logging
import os
from collections.abc import Iterable, Iterator, Mapping, Sequence
from types import MappingProxyType
from typing import Any, TextIO

import numpy as np

from xgb_scorer.base import BaseScorer
from xgb_scorer.exceptions import ConfigurationError, InputShapeError
from xgb_scorer.links import LogisticLink
from xgb_scorer.trees import Tree, build_ensemble, evaluate_tree, predict_leaf
from xgb_scorer.utils.data import (
    load_feature_index,
    load_model,
    reverse_feature_index,
)
from xgb_scorer.utils.sparse import iter_sparse_lines, parse_sparse_line

logger = logging.getLogger(__name__)

LOG_EVERY = 10_000

FeatureVector = Mapping[str, float]
Instances = (
    Sequence[FeatureVector] | Sequence[str] | str | os.PathLike | TextIO
)


def _is_text_stream(obj: Any) -> bool:
    if isinstance(obj, (io.RawIOBase, io.BufferedIOBase)):
        return False
    return isinstance(obj, io.TextIOBase) or hasattr(obj, "readline")


class XGBoostScorer(BaseScorer):
    """Scorer for binary:logistic XGBoost models dumped as JSON.

    The scorer is immutable and holds no per-call state, so one instance
    can be shared by any number of threads.

    Args:
        model: Dumped model as a list of booster roots, a path to the
            model JSON, or a sequence of already built trees.
        feature_index: Feature name to slot mapping, or a path to its
            JSON. Required only for sparse-line input.
        base_margin: Raw score added before the link function.
            Default is 0.0.
        validate_model: Check every child reference of every tree at
            construction instead of when an instance reaches it.
            Default is False.
        verbose: Verbosity level. Default is 0.

    Attributes:
        trees_: Trees in model order.
        feature_index_: Read-only feature name to slot mapping, or None.
        reverse_feature_index_: Read-only slot to feature name mapping,
            or None.

    ``get_params()`` reports the scalar settings only. ``model`` and
    ``feature_index`` are kept in their built forms above, not as given.

    Example:
        >>> from xgb_scorer import XGBoostScorer
        >>> scorer = XGBoostScorer("model.json", "featmap.json")
        >>> scorer.score_one({"age": 31.0})
        >>> scores = scorer.score_many("instances.txt")
    """

    def __init__(
        self,
        model: list | str | os.PathLike | Sequence[Tree],
        feature_index: Mapping[str, int] | str | os.PathLike | None = None,
        base_margin: float = 0.0,
        validate_model: bool = False,
        verbose: int = 0,
    ) -> None:
        self.base_margin = base_margin
        self.validate_model = validate_model
        self.verbose = verbose

        if isinstance(model, Sequence) and model and all(
            isinstance(tree, Tree) for tree in model
        ):
            self.trees_: tuple[Tree, ...] = tuple(model)
        else:
            self.trees_ = build_ensemble(load_model(model))

        if validate_model:
            for tree in self.trees_:
                tree.validate()

        if feature_index is None:
            self.feature_index_: Mapping[str, int] | None = None
            self.reverse_feature_index_: Mapping[int, str] | None = None
        else:
            index = load_feature_index(feature_index)
            self.feature_index_ = MappingProxyType(index)
            self.reverse_feature_index_ = MappingProxyType(
                reverse_feature_index(index)
            )

        logger.info(
            f"Loaded model with {self.n_trees_} trees"
            + (
                f" and {len(self.feature_index_)} indexed features"
                if self.feature_index_ is not None
                else ""
            )
        )

    @property
    def n_trees_(self) -> int:
        return len(self.trees_)

    @property
    def has_feature_index(self) -> bool:
        """Whether sparse-line input can be translated."""
        return self.reverse_feature_index_ is not None

    def raw_score(self, features: FeatureVector) -> float:
        """Sum of leaf values over all trees, before the link function.

        Args:
            features: Feature name to value.

        Returns:
            Raw score (log-odds).

        Raises:
            ModelIntegrityError: If a tree references a missing node.
        """
        self._check_instance(features)
        total = self.base_margin
        for tree in self.trees_:
            total += evaluate_tree(tree, features)
        return total

    def score_one(self, features: FeatureVector) -> float:
        """Score a single instance.

        Args:
            features: Feature name to value. Absent features follow each
                split's missing branch.

        Returns:
            Probability in (0, 1). An empty ensemble scores 0.5.
        """
        return LogisticLink.transform(self.raw_score(features))

    def predict_leaf(self, features: FeatureVector) -> list[int]:
        """Id of the leaf reached in each tree, in model order."""
        self._check_instance(features)
        return [predict_leaf(tree, features) for tree in self.trees_]

    def iter_scores(self, instances: Instances) -> Iterator[float]:
        """Lazily score a batch of instances in input order.

        Input checks run immediately; instances are read and scored one at
        a time as the iterator is consumed.

        Args:
            instances: A list or tuple of feature mappings, a list or tuple
                of sparse lines, a path to a sparse file, or an open text
                stream of sparse lines.

        Returns:
            Iterator over probabilities.

        Raises:
            InputShapeError: If ``instances`` is not a supported input.
            ConfigurationError: If sparse input is given but the scorer has
                no feature index.
        """
        if isinstance(instances, Mapping):
            raise InputShapeError(
                "Expected a collection of instances, got a single mapping; "
                "use score_one() or score()"
            )

        if isinstance(instances, (str, os.PathLike)) or _is_text_stream(instances):
            reverse_index = self._require_feature_index()
            return self._score_lines(iter_sparse_lines(instances), reverse_index)

        if isinstance(instances, Sequence) and not isinstance(instances, bytes):
            if all(isinstance(item, Mapping) for item in instances):
                return self._score_vectors(instances)
            if all(isinstance(item, str) for item in instances):
                reverse_index = self._require_feature_index()
                return self._score_lines(instances, reverse_index)
            raise InputShapeError(
                "Expected every instance to be a feature mapping or every "
                "instance to be a sparse line"
            )

        raise InputShapeError(
            "Expected a sequence of instances, a path or a text stream, "
            f"got {type(instances).__name__}"
        )

    def score_many(self, instances: Instances) -> np.ndarray:
        """Score a batch of instances in input order.

        Streamed input is read one line at a time; only the scores are
        materialized.

        Args:
            instances: See :meth:`iter_scores`.

        Returns:
            Probabilities of shape (n_instances,).
        """
        scores = np.fromiter(self.iter_scores(instances), dtype=np.float64)
        if self.verbose > 0:
            logger.info(f"Scored {scores.shape[0]} instances")
        return scores

    def score(self, instances: FeatureVector | Instances) -> float | np.ndarray:
        """Score one instance or a batch, depending on the input.

        Args:
            instances: A single feature mapping, or anything accepted by
                :meth:`score_many`.

        Returns:
            A probability for a single mapping, otherwise an array.
        """
        if isinstance(instances, Mapping):
            return self.score_one(instances)
        return self.score_many(instances)

    def _score_vectors(self, vectors: Iterable[FeatureVector]) -> Iterator[float]:
        for n, features in enumerate(vectors, start=1):
            yield self.score_one(features)
            self._log_progress(n)

    def _score_lines(
        self, lines: Iterable[str], reverse_index: Mapping[int, str]
    ) -> Iterator[float]:
        for n, line in enumerate(lines, start=1):
            features = parse_sparse_line(line, reverse_index, line_number=n)
            yield self.score_one(features)
            self._log_progress(n)

    def _log_progress(self, n: int) -> None:
        if self.verbose > 0 and n % LOG_EVERY == 0:
            logger.info(f"Scored {n} instances")

    def _require_feature_index(self) -> Mapping[int, str]:
        if self.reverse_feature_index_ is None:
            raise ConfigurationError(
                "Sparse input requires a feature index; "
                "pass feature_index when constructing the scorer"
            )
        return self.reverse_feature_index_

    @staticmethod
    def _check_instance(features: Any) -> None:
        if not isinstance(features, Mapping):
            raise InputShapeError(
                f"Expected a feature mapping, got {type(features).__name__}"
            )
