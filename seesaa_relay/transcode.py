"""
EUC-JP <-> Unicode conversion and path-segment percent escaping.

seesaawiki.jp addresses pages by the EUC-JP bytes of their title, percent
escaped into the path. Conversions here are strict: a character that has no
EUC-JP form (or a byte sequence that is not valid EUC-JP) raises instead of
being replaced, because a substituted character yields a URL for a different
page.
"""

import re
from urllib.parse import quote, unquote_to_bytes

from .errors import EncodingError, PathDecodeError

LEGACY_ENCODING = "euc_jp"

# unreserved characters are always kept by quote(); these are the extra
# characters a path segment may carry literally
_PATH_SEGMENT_SAFE = "$&+:=@"

_BAD_ESCAPE = re.compile(rb"%(?![0-9A-Fa-f]{2})")
_ASCII_RUN = re.compile(r"[\x00-\x7f]+")


def decode_legacy(data: bytes) -> str:
    try:
        return data.decode(LEGACY_ENCODING)
    except UnicodeDecodeError as e:
        raise EncodingError(f"invalid EUC-JP sequence at byte {e.start}") from e


def encode_legacy(text: str) -> bytes:
    try:
        return text.encode(LEGACY_ENCODING)
    except UnicodeEncodeError as e:
        raise EncodingError(f"{text[e.start:e.end]!r} has no EUC-JP representation") from e


def decode_legacy_lenient(value: str):
    """
    Decode an attribute value that was parsed byte-for-byte (latin-1) back
    into text, reading the underlying bytes as EUC-JP.

    Returns None when the value cannot be recovered. Only metadata
    extraction uses this; URL paths always go through the strict functions.
    """
    try:
        raw = value.encode("latin-1")
    except UnicodeEncodeError:
        return None
    try:
        return raw.decode(LEGACY_ENCODING)
    except UnicodeDecodeError:
        return None


def unescape_path(raw) -> bytes:
    """Percent-unescape a path. '+' is left alone (path, not form, semantics)."""
    if isinstance(raw, str):
        raw_bytes = raw.encode("utf-8")
    else:
        raw_bytes = bytes(raw)
    bad = _BAD_ESCAPE.search(raw_bytes)
    if bad:
        snippet = raw_bytes[bad.start():bad.start() + 3].decode("ascii", "backslashreplace")
        raise PathDecodeError(f"invalid URL escape {snippet!r}")
    return unquote_to_bytes(raw_bytes)


def escape_path(data: bytes) -> str:
    escaped = quote(data, safe=_PATH_SEGMENT_SAFE)
    # wiki titles may contain '/', and the origin expects it as a separator
    return escaped.replace("%2F", "/")


def escape_readable_path(text: str) -> str:
    """
    Escape the ASCII characters of a Unicode path that would change the
    URL's meaning ('?', '#', '%', spaces, ...). Non-ASCII text stays literal
    so the path remains readable.
    """
    return _ASCII_RUN.sub(lambda m: quote(m.group(), safe="/" + _PATH_SEGMENT_SAFE), text)
