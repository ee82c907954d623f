"""Base classes for XGB Scorer scorers."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

import numpy as np


class BaseScorer(ABC):
    """Abstract base class for all XGB Scorer scorers.

    All scorers should specify all the parameters that can be set
    at the class level in their ``__init__`` as explicit keyword arguments.
    A scorer is immutable once constructed.
    """

    @abstractmethod
    def score_one(self, features: Mapping[str, float]) -> float:
        """Score a single instance.

        Args:
            features: Feature name to value.

        Returns:
            Probability in (0, 1).
        """

    @abstractmethod
    def score_many(self, instances: Any) -> np.ndarray:
        """Score a batch of instances.

        Args:
            instances: Collection or stream of instances.

        Returns:
            Probabilities of shape (n_instances,), in input order.
        """

    def get_params(self) -> dict[str, Any]:
        """Get parameters for this scorer.

        Returns:
            Parameter names mapped to their values.
        """
        code = self.__init__.__code__
        return {
            key: getattr(self, key)
            for key in code.co_varnames[1 : code.co_argcount]
            if hasattr(self, key)
        }
