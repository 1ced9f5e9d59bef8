# =============================================================================
# lib/tokenizer.py - CSV Tokenizer
# =============================================================================
# Splits document text into rows of fields in a single forward pass.
#
# Quoting rules:
#   - A field that starts with the quote character is quoted
#   - Inside quotes, delimiters and line breaks are part of the field
#   - A doubled quote inside quotes stands for one quote character
#   - Anything between a closing quote and the next delimiter is kept as-is
#   - A quote in the middle of an unquoted field is an ordinary character
#
# Rows end at "\r\n", "\n" or a lone "\r". The empty row left behind by a
# final line break is dropped.
# =============================================================================

from collections.abc import Iterator

from lib.errors import MalformedQuotingError

DEFAULT_QUOTE = '"'


def tokenize(text: str, delimiter: str, quote: str = DEFAULT_QUOTE) -> Iterator[list[str]]:
    """
    Lazily yield the rows of a delimiter-separated document.

    Args:
        text: Full document text
        delimiter: Single-character field separator
        quote: Single-character quote

    Yields:
        One list of field strings per row

    Raises:
        MalformedQuotingError: If a quoted field is still open at end of input
    """
    row: list[str] = []
    field: list[str] = []
    in_quotes = False
    # A field that has just been closed by a quote, or was quoted at all,
    # is a real (possibly empty) field even if no characters follow.
    field_started = False
    line = 1
    quote_line = 1

    i = 0
    length = len(text)
    while i < length:
        char = text[i]

        if in_quotes:
            if char == quote:
                if i + 1 < length and text[i + 1] == quote:
                    field.append(quote)
                    i += 2
                    continue
                in_quotes = False
            else:
                if char == "\n":
                    line += 1
                field.append(char)
            i += 1
            continue

        if char == delimiter:
            row.append("".join(field))
            field = []
            field_started = False
        elif char == "\n" or char == "\r":
            if char == "\r" and i + 1 < length and text[i + 1] == "\n":
                i += 1
            row.append("".join(field))
            yield row
            row = []
            field = []
            field_started = False
            line += 1
        elif char == quote and not field and not field_started:
            in_quotes = True
            field_started = True
            quote_line = line
        else:
            field.append(char)
            field_started = True
        i += 1

    if in_quotes:
        raise MalformedQuotingError(quote_line)

    # Text that does not end with a line break leaves one last row open.
    if row or field or field_started:
        row.append("".join(field))
        yield row
