"""Data utilities for XGB Scorer."""

import json
import logging
import os
from collections.abc import Mapping
from typing import Any

from xgb_scorer.exceptions import ConfigurationError, InputShapeError

logger = logging.getLogger(__name__)

PathLike = str | os.PathLike


def load_json(path: PathLike) -> Any:
    """Read and parse a JSON file.

    Args:
        path: File to read.

    Returns:
        Parsed JSON value.
    """
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def load_model(source: PathLike | list) -> list:
    """Load a dumped model as a list of booster roots.

    Args:
        source: Path to a model JSON file, or the already parsed list.

    Returns:
        List of booster root objects.

    Raises:
        InputShapeError: If the model is not a list.
    """
    if isinstance(source, (str, os.PathLike)):
        logger.debug(f"Loading model from {os.fspath(source)}")
        source = load_json(source)
    if not isinstance(source, list):
        raise InputShapeError(
            f"Expected model to be a list of tree roots, got {type(source).__name__}"
        )
    return source


def load_feature_index(source: PathLike | Mapping[str, int]) -> dict[str, int]:
    """Load a feature name to slot mapping.

    Args:
        source: Path to a feature index JSON file, or the mapping itself.

    Returns:
        Mapping from feature name to integer slot.

    Raises:
        ConfigurationError: If the index is not an object of
            non-negative integer slots.
    """
    if isinstance(source, (str, os.PathLike)):
        logger.debug(f"Loading feature index from {os.fspath(source)}")
        source = load_json(source)
    if not isinstance(source, Mapping):
        raise ConfigurationError(
            f"Expected feature index to be an object, got {type(source).__name__}"
        )

    index = {}
    for name, slot in source.items():
        if isinstance(slot, bool) or not isinstance(slot, int) or slot < 0:
            raise ConfigurationError(
                f"Feature {name!r} has invalid slot {slot!r}, "
                "expected a non-negative integer"
            )
        index[str(name)] = slot
    return index


def reverse_feature_index(index: Mapping[str, int]) -> dict[int, str]:
    """Invert a feature index to map slots back to names.

    Args:
        index: Mapping from feature name to slot.

    Returns:
        Mapping from slot to feature name.

    Raises:
        ConfigurationError: If two names share a slot.
    """
    reverse: dict[int, str] = {}
    for name, slot in index.items():
        if slot in reverse:
            raise ConfigurationError(
                f"Slot {slot} is assigned to both {reverse[slot]!r} and {name!r}"
            )
        reverse[slot] = name
    return reverse
