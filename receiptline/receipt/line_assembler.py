"""Group positioned OCR fragments into reading-ordered lines."""

from collections.abc import Iterable

from receiptline.domain.receipt import LogicalLine, TextFragment

# Max distance between a fragment's anchor and its row's running mean,
# as a fraction of normalized image height.
ROW_Y_THRESHOLD = 0.01


def _group_fragments_by_row(fragments: list[TextFragment]) -> list[list[TextFragment]]:
    """
    Partition fragments into rows, top to bottom.

    Fragments are sorted by anchor y descending and grouped greedily. A fragment
    joins the current row while it stays within ROW_Y_THRESHOLD of the row's
    running mean anchor, so slow drift across a wide row does not split it.
    """
    ordered = sorted(fragments, key=lambda f: f.anchor_y, reverse=True)

    rows: list[list[TextFragment]] = []
    current: list[TextFragment] = []
    current_mean = 0.0
    for fragment in ordered:
        if current and abs(fragment.anchor_y - current_mean) <= ROW_Y_THRESHOLD:
            current.append(fragment)
            current_mean = sum(f.anchor_y for f in current) / len(current)
            continue
        if current:
            rows.append(current)
        current = [fragment]
        current_mean = fragment.anchor_y
    if current:
        rows.append(current)

    return rows


def assemble_lines(fragments: Iterable[TextFragment]) -> list[LogicalLine]:
    """
    Reconstruct logical lines from unordered OCR fragments.

    Fragments with empty or whitespace-only text are discarded; nothing else
    is dropped. Lines come out top to bottom, fragments within a line left to
    right.

    Args:
        fragments: OCR fragments in any order

    Returns:
        Logical lines in reading order (empty when no fragment survives)
    """
    usable = [fragment for fragment in fragments if fragment.text.strip()]
    if not usable:
        return []

    return [
        LogicalLine(fragments=tuple(sorted(row, key=lambda f: f.anchor_x)))
        for row in _group_fragments_by_row(usable)
    ]


def assemble_text_lines(fragments: Iterable[TextFragment]) -> list[str]:
    """Assemble fragments and return just the joined line strings."""
    return [line.text for line in assemble_lines(fragments)]
