# =============================================================================
# lib/delimiter.py - Delimiter Detection
# =============================================================================
# Picks the field separator of a CSV document from its first few lines.
# =============================================================================

import logging

logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

# Preference order: earlier candidates win ties.
DELIMITERS_TO_TRY = [",", ";", "\t", "|"]
DEFAULT_DELIMITER = ","
DEFAULT_SAMPLE_LINES = 5


def _sample_lines(text: str, count: int) -> list[str]:
    """Return up to `count` non-blank lines from the start of the text."""
    lines = []
    for line in text.split("\n"):
        line = line.rstrip("\r")
        if not line.strip():
            continue
        lines.append(line)
        if len(lines) >= count:
            break
    return lines


def detect_delimiter(text: str, sample_lines: int = DEFAULT_SAMPLE_LINES) -> str:
    """
    Detect the delimiter used in a CSV document.

    Each candidate splits every sampled line naively (quotes are ignored).
    A candidate qualifies when every line yields the same field count and
    that count is greater than one; the qualifying candidate with the most
    fields wins. Falls back to comma when nothing qualifies.

    Args:
        text: Document text (only the first lines are inspected)
        sample_lines: How many non-blank lines to inspect

    Returns:
        A single delimiter character
    """
    lines = _sample_lines(text, sample_lines)
    if not lines:
        return DEFAULT_DELIMITER

    best_delimiter = DEFAULT_DELIMITER
    best_count = 1
    for delimiter in DELIMITERS_TO_TRY:
        counts = {len(line.split(delimiter)) for line in lines}
        if len(counts) != 1:
            continue
        field_count = counts.pop()
        if field_count > best_count:
            best_count = field_count
            best_delimiter = delimiter

    logger.debug(f"Detected delimiter: {best_delimiter!r} ({best_count} fields)")
    return best_delimiter
