"""Amount normalization for OCR summary lines."""

import re
import string

from .common import TOTAL_LABEL_PATTERN

# Optional "$", digits, optional 2-digit decimal group
CURRENCY_TOKEN = re.compile(r"\$?\d+(?:\.\d{2})?")


def _keep_digits_and_last(text: str, separator: str) -> str:
    last_index = text.rfind(separator)
    out = []
    for index, ch in enumerate(text):
        if ch in string.digits:
            out.append(ch)
        elif index == last_index:
            out.append(".")
    return "".join(out)


def normalize_amount(text: str) -> str:
    """
    Extract a clean decimal numeral from noisy OCR text.

    Only the last "." (or, failing that, the last ",") is trusted as the
    decimal point; earlier separators are dropped. "$7. 02" -> "7.02",
    "12,50" -> "12.50".

    Returns:
        The numeral, or "" when the text has no digits. "" means no value,
        not zero.
    """
    cleaned = "".join(text.replace("$", "").split())
    if "." in cleaned:
        result = _keep_digits_and_last(cleaned, ".")
    elif "," in cleaned:
        result = _keep_digits_and_last(cleaned, ",")
    else:
        result = "".join(ch for ch in cleaned if ch in string.digits)
    if not any(ch in string.digits for ch in result):
        return ""
    return result


def extract_currency_token(line: str) -> str | None:
    """
    Pick the last currency-shaped token from a line for compact display.

    Whitespace is removed before matching so "$ 5.48" still reads as one
    token. Without any token, the total/balance label and leading punctuation
    are stripped and the remaining text is returned instead.
    """
    compact = "".join(line.split())
    matches = CURRENCY_TOKEN.findall(compact)
    if matches:
        return matches[-1].lstrip("$")

    remainder = re.sub(TOTAL_LABEL_PATTERN, "", line, count=1, flags=re.IGNORECASE)
    remainder = re.sub(r"^[^\w$]+", "", remainder)
    remainder = " ".join(remainder.split())
    return remainder or None
