"""
Lightweight scanner for semi-trusted JSON-like service responses.

Only the handful of fields the pipeline needs are pulled out, so the scanner
works on raw text instead of decoding the whole document. Two limitations are
kept on purpose because callers depend on the resulting behavior:

- Delimiter matching counts every brace/bracket, including ones that appear
  inside quoted strings. A string value containing a literal ``{`` or ``]``
  can therefore shift the matched position.
- Quoted values end at the next ``"`` character; escaped quotes are not
  recognised. Unquoted values are read as a run of digits and ``.`` only, so
  signs and exponents are not supported.
"""

from typing import Iterator, Optional, Tuple

_CLOSERS = {"{": "}", "[": "]"}

# The literal backslash sequence \r\n as it appears inside a JSON string
_ESCAPED_CRLF = "\\r\\n"


def find_matching_delimiter(text: str, open_index: int) -> Optional[int]:
    """
    Return the index of the delimiter closing the one at ``open_index``.

    Args:
        text: text to scan
        open_index: position of an opening ``{`` or ``[``

    Returns:
        Index of the matching close, or None when the text ends first.
    """
    if open_index < 0 or open_index >= len(text):
        return None
    opener = text[open_index]
    closer = _CLOSERS.get(opener)
    if closer is None:
        raise ValueError(f"Character at index {open_index} is not an opening delimiter: {opener!r}")

    depth = 1
    for i in range(open_index + 1, len(text)):
        ch = text[i]
        if ch == opener:
            depth += 1
        elif ch == closer:
            depth -= 1
            if depth == 0:
                return i
    return None


def extract_value(text: str, key: str, start: int = 0) -> Optional[str]:
    """
    Extract the scalar value following the first ``"key":`` at or after ``start``.

    Quoted values are returned without quotes, with escaped CRLF pairs turned
    into a space and surrounding whitespace trimmed. Anything else is read as
    a numeric literal (possibly empty when the value is not a number).

    Returns:
        The value as a string, or None when the key is absent or a quoted
        value is unterminated.
    """
    search_key = f'"{key}":'
    key_index = text.find(search_key, start)
    if key_index == -1:
        return None

    value_start = key_index + len(search_key)
    if value_start < len(text) and text[value_start] == '"':
        value_start += 1
        value_end = text.find('"', value_start)
        if value_end == -1:
            return None
        return text[value_start:value_end].replace(_ESCAPED_CRLF, " ").strip()

    end = value_start
    while end < len(text) and (text[end].isdigit() or text[end] == "."):
        end += 1
    return text[value_start:end]


def find_keyed_array(text: str, key: str, start: int = 0) -> Optional[Tuple[int, int]]:
    """
    Locate ``"key":[ ... ]`` and return the (open, close) bracket indexes.
    """
    search_key = f'"{key}":['
    key_index = text.find(search_key, start)
    if key_index == -1:
        return None
    open_index = key_index + len(search_key) - 1
    close_index = find_matching_delimiter(text, open_index)
    if close_index is None:
        return None
    return open_index, close_index


def iter_objects(body: str) -> Iterator[str]:
    """
    Yield each top-level ``{...}`` slice of an array body in order.

    Stops at the first object whose closing brace cannot be found.
    """
    cursor = 0
    while cursor < len(body):
        obj_start = body.find("{", cursor)
        if obj_start == -1:
            return
        obj_end = find_matching_delimiter(body, obj_start)
        if obj_end is None:
            return
        yield body[obj_start:obj_end + 1]
        cursor = obj_end + 1
