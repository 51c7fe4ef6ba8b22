"""Date helpers for receipt parsing and formatting."""

import re
from datetime import date, datetime

_MONTH_NAMES = r"(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Sept|Oct|Nov|Dec)[a-z]*\.?"

# (pattern, formats) families, tried in order on each line.
# Numeric families try month-first before day-first; there is no locale
# signal to disambiguate 03/04/2024.
DATE_PATTERN_FAMILIES: list[tuple[re.Pattern[str], tuple[str, ...]]] = [
    # YYYY-MM-DD or YYYY/MM/DD
    (
        re.compile(r"\b\d{4}[/-]\d{1,2}[/-]\d{1,2}\b"),
        ("%Y-%m-%d", "%Y/%m/%d"),
    ),
    # MM/DD/YYYY or DD/MM/YYYY (slash or hyphen)
    (
        re.compile(r"\b\d{1,2}[/-]\d{1,2}[/-]\d{4}\b"),
        ("%m/%d/%Y", "%d/%m/%Y", "%m-%d-%Y", "%d-%m-%Y"),
    ),
    # MM/DD/YY or DD/MM/YY
    (
        re.compile(r"\b\d{1,2}[/-]\d{1,2}[/-]\d{2}\b"),
        ("%m/%d/%y", "%d/%m/%y", "%m-%d-%y", "%d-%m-%y"),
    ),
    # Mon D, YYYY
    (
        re.compile(_MONTH_NAMES + r"\s+\d{1,2},?\s+\d{4}\b", re.IGNORECASE),
        ("%b %d, %Y", "%B %d, %Y", "%b %d %Y", "%B %d %Y"),
    ),
]


def _normalize_month_name_text(text: str) -> str:
    """Collapse spacing and drop abbreviation dots ("Sept. 5,  2024" -> "Sep 5, 2024")."""
    text = " ".join(text.split()).replace(".", "")
    month, _, rest = text.partition(" ")
    if month.lower().startswith("sept") and len(month) == 4:
        month = "Sep"
    return f"{month.title()} {rest}"


def parse_date_text(text: str, formats: tuple[str, ...]) -> date | None:
    """Parse text against formats in order; first success wins."""
    for fmt in formats:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def find_date_in_line(line: str) -> date | None:
    """
    Return the leftmost parseable date in a single line, or None.

    Candidates from every family are tried by start position; on a tie the
    earlier family wins.
    """
    candidates = sorted(
        (match.start(), family_index, match.group(0))
        for family_index, (pattern, _) in enumerate(DATE_PATTERN_FAMILIES)
        for match in pattern.finditer(line)
    )
    for _, family_index, candidate in candidates:
        formats = DATE_PATTERN_FAMILIES[family_index][1]
        if candidate[0].isalpha():
            candidate = _normalize_month_name_text(candidate)
        parsed = parse_date_text(candidate, formats)
        if parsed is not None:
            return parsed
    return None


def extract_date(lines: list[str]) -> date | None:
    """
    Find the receipt date by scanning raw lines top to bottom.

    Returns None when no line carries a parseable date; callers fall back to
    the receipt's creation timestamp.
    """
    for line in lines:
        parsed = find_date_in_line(line)
        if parsed is not None:
            return parsed
    return None
