# =============================================================================
# lib/encoding.py - Input Decoding
# =============================================================================
# Turns uploaded or on-disk bytes into text for the analyzer.
#
# Encodings are tried in order. "utf-8-sig" comes first so a UTF-8 byte order
# mark is removed; "latin-1" comes last because it accepts any byte sequence.
# =============================================================================

import logging
from pathlib import Path
from typing import Union

from lib.errors import DecodingError

logger = logging.getLogger(__name__)

ENCODINGS_TO_TRY = ["utf-8-sig", "utf-8", "cp1252", "latin-1"]


def decode_bytes(
    content: bytes,
    encodings: list[str] = ENCODINGS_TO_TRY,
) -> tuple[str, str]:
    """
    Decode bytes with the first encoding that accepts them.

    Args:
        content: Raw file contents
        encodings: Encodings to try, in order

    Returns:
        Tuple of (text, encoding used)

    Raises:
        DecodingError: If no encoding in the list can decode the content
    """
    for encoding in encodings:
        try:
            text = content.decode(encoding)
        except (UnicodeDecodeError, UnicodeError):
            continue
        logger.debug(f"Decoded {len(content)} bytes as {encoding}")
        return text, encoding
    raise DecodingError(list(encodings))


def read_text_file(file_path: Union[str, Path]) -> tuple[str, str]:
    """Read a file and decode it. Returns (text, encoding used)."""
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")
    return decode_bytes(file_path.read_bytes())
