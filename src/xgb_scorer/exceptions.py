"""Exception types raised by XGB Scorer."""


class XGBScorerError(Exception):
    """Base class for all XGB Scorer errors."""


class ModelIntegrityError(XGBScorerError, ValueError):
    """The model references a node that does not exist or is malformed."""


class ConfigurationError(XGBScorerError, ValueError):
    """The scorer was not configured for the requested operation."""


class InputShapeError(XGBScorerError, TypeError):
    """Scoring input is not an instance, a collection, or a stream."""


class SparseFormatError(XGBScorerError, ValueError):
    """A sparse input line contains a token that cannot be parsed."""
