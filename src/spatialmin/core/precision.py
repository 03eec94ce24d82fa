# src/spatialmin/core/precision.py
"""Decimal precision reduction on serialized JSON text.

Works on the text, not the tree: every number literal with a fractional
part or an exponent is rounded to a fixed number of decimal places and
written back in plain (non-exponent) notation. String literals are matched
as whole tokens and passed through untouched, so a quoted ``"v1.25"`` or
``"1.5"`` keeps its exact text.
"""

from __future__ import annotations

import math
import re

from spatialmin.core.logging import get_logger

logger = get_logger(__name__)

MIN_PRECISION = 1
MAX_PRECISION = 15
DEFAULT_PRECISION = 6

# Alternation order matters: a string token is consumed whole before any
# digits inside it can be seen as a number.
_TOKEN = re.compile(
    r'"(?:[^"\\]|\\.)*"'
    r"|(?P<number>-?\d+(?:\.\d+(?:[eE][+-]?\d+)?|[eE][+-]?\d+))"
)


def round_decimal(literal: str, max_digits: int) -> str:
    """Round one number literal to ``max_digits`` places after the point.

    The result is written in fixed notation with trailing zeros and a
    dangling point stripped: ``"1.500000"`` becomes ``"1.5"``,
    ``"1.0000000001"`` becomes ``"1"`` and ``"1.23e-05"`` becomes ``"0"``
    at six places. Values that round to zero lose their sign.

    A literal whose value is already exact at ``max_digits`` places keeps
    its original text when that is shorter than the fixed rendering
    (``"1e+300"`` stays as is). Literals that do not parse to a finite
    float are returned unchanged.
    """
    try:
        value = float(literal)
    except ValueError:
        return literal
    if not math.isfinite(value):
        return literal

    rounded = round(value, max_digits)
    rendered = f"{rounded:.{max_digits}f}"
    if "." in rendered:
        rendered = rendered.rstrip("0").rstrip(".")
    if rendered == "-0":
        rendered = "0"

    if rounded == value and len(literal) < len(rendered):
        return literal
    return rendered


def reduce_precision(serialized_text: str, max_digits: int = DEFAULT_PRECISION) -> str:
    """Rewrite every fractional or exponent number in ``serialized_text``.

    Args:
        serialized_text: JSON text produced by the serializer
        max_digits: Decimal places to keep (1-15)

    Returns:
        Text with each such number rounded; strings, integers and
        whitespace byte-for-byte identical

    Raises:
        ValueError: If max_digits is outside 1-15
    """
    if not MIN_PRECISION <= max_digits <= MAX_PRECISION:
        raise ValueError(f"max_digits must be between {MIN_PRECISION} and {MAX_PRECISION}, got {max_digits}")

    literals = 0
    changed = 0

    def _replace(match: re.Match[str]) -> str:
        nonlocal literals, changed
        literal = match.group("number")
        if literal is None:
            return match.group(0)
        literals += 1
        rendered = round_decimal(literal, max_digits)
        if rendered != literal:
            changed += 1
        return rendered

    reduced = _TOKEN.sub(_replace, serialized_text)
    logger.debug(
        "precision_reduced",
        max_digits=max_digits,
        literals=literals,
        changed=changed,
        saved_chars=len(serialized_text) - len(reduced),
    )
    return reduced
