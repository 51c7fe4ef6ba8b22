"""Line classification and label stripping for summary lines."""

import re
from functools import lru_cache

from receiptline.domain.receipt import LineKind, TypedLine

from .common import (
    SUBTOTAL_KEYWORD,
    SUBTOTAL_LABEL_PATTERN,
    TOTAL_KEYWORDS,
    TOTAL_LABEL_PATTERN,
    normalize_for_matching,
)

_LABEL_PATTERNS = {
    LineKind.SUBTOTAL: SUBTOTAL_LABEL_PATTERN,
    LineKind.TOTAL: TOTAL_LABEL_PATTERN,
}


def classify_line(line: str) -> LineKind:
    """
    Classify a line as subtotal, total or normal.

    "subtotal" is checked first since it also contains "total".
    """
    normalized = normalize_for_matching(line)
    if SUBTOTAL_KEYWORD in normalized:
        return LineKind.SUBTOTAL
    if any(keyword in normalized for keyword in TOTAL_KEYWORDS):
        return LineKind.TOTAL
    return LineKind.NORMAL


@lru_cache(maxsize=8)
def _compile_label_pattern(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern, re.IGNORECASE)


def strip_label(line: str, kind: LineKind) -> str:
    """
    Remove the leading subtotal/total label from a line.

    Never raises: when no label matches, or the pattern cannot be applied,
    the trimmed line is returned unchanged.
    """
    pattern = _LABEL_PATTERNS.get(kind)
    if pattern is None:
        return line.strip()
    try:
        stripped = _compile_label_pattern(pattern).sub("", line, count=1)
    except re.error:
        return line.strip()
    return stripped.strip()


def type_line(line: str) -> TypedLine:
    """Classify one line and strip its label."""
    kind = classify_line(line)
    return TypedLine(original=line, text=strip_label(line, kind), kind=kind)


def type_lines(lines: list[str]) -> list[TypedLine]:
    """Classify and strip every line, preserving order."""
    return [type_line(line) for line in lines]
