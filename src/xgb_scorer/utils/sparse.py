"""Sparse ``label slot:value ...`` line format.

Each line is one instance: a leading label token, which is ignored,
followed by ``slot:value`` pairs. Slots are translated to feature names
through a reverse feature index.
"""

import os
from collections.abc import Iterator, Mapping
from typing import TextIO

from xgb_scorer.exceptions import ConfigurationError, SparseFormatError


def _where(line_number: int | None) -> str:
    return f" on line {line_number}" if line_number is not None else ""


def parse_sparse_line(
    line: str,
    reverse_index: Mapping[int, str],
    line_number: int | None = None,
) -> dict[str, float]:
    """Translate one sparse line into a feature vector.

    Args:
        line: Whitespace-separated tokens; the first one is skipped.
        reverse_index: Mapping from slot to feature name.
        line_number: 1-based position in the source, used in error messages.

    Returns:
        Feature name to value. A repeated slot keeps its last value.

    Raises:
        ConfigurationError: If a slot is not in ``reverse_index``.
        SparseFormatError: If a token is not ``slot:value``.
    """
    features: dict[str, float] = {}
    for token in line.split()[1:]:
        slot_text, sep, value_text = token.partition(":")
        if not sep:
            raise SparseFormatError(
                f"Expected 'slot:value', got {token!r}{_where(line_number)}"
            )
        # int() and float() also take signs, underscores and non-ASCII digits.
        if not (slot_text.isascii() and slot_text.isdigit()) or "_" in value_text:
            raise SparseFormatError(
                f"Cannot parse token {token!r}{_where(line_number)}"
            )
        slot = int(slot_text)
        try:
            value = float(value_text)
        except ValueError:
            raise SparseFormatError(
                f"Cannot parse token {token!r}{_where(line_number)}"
            ) from None
        if slot not in reverse_index:
            raise ConfigurationError(
                f"Unknown feature slot {slot}{_where(line_number)}"
            )
        features[reverse_index[slot]] = value
    return features


def iter_sparse_lines(source: str | os.PathLike | TextIO) -> Iterator[str]:
    """Yield lines from a file path or an open text stream, one at a time.

    A path is opened on first iteration and closed when the generator is
    exhausted or closed.

    Args:
        source: Path to a sparse file, or a text stream.

    Yields:
        Lines without their trailing newline.
    """
    if isinstance(source, (str, os.PathLike)):
        with open(source, encoding="utf-8") as f:
            yield from (line.rstrip("\r\n") for line in f)
    else:
        for line in source:
            yield line.rstrip("\r\n")
