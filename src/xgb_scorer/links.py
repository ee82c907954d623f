"""Link functions mapping summed raw scores to probabilities."""

import numpy as np


def sigmoid(x: float) -> float:
    """Logistic sigmoid ``1 / (1 + e^(-x))``.

    Evaluated so that ``e^(...)`` is only ever taken of a non-positive
    number, which avoids overflow for large ``|x|``.

    Args:
        x: Raw score (log-odds).

    Returns:
        Probability in (0, 1); NaN if ``x`` is NaN.
    """
    if x >= 0:
        return float(1.0 / (1.0 + np.exp(-x)))
    z = np.exp(x)
    # NaN fails the comparison above and propagates through here.
    return float(z / (1.0 + z))


class LogisticLink:
    """Logistic link for binary:logistic boosters."""

    @staticmethod
    def transform(raw: float) -> float:
        """Map a raw score to a probability.

        Args:
            raw: Summed raw score.

        Returns:
            Probability in (0, 1).
        """
        return sigmoid(raw)

    @staticmethod
    def inverse(prob: float) -> float:
        """Map a probability back to a raw score (logit).

        Args:
            prob: Probability in [0, 1].

        Returns:
            Log-odds; infinite at the bounds.
        """
        with np.errstate(divide="ignore"):
            return float(np.log(prob) - np.log1p(-prob))
