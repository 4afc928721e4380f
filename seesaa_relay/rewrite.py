"""URL rewriting between the origin wiki and the relay host."""

from urllib.parse import urlsplit, urlunsplit

from .errors import InvalidURLError, PathDecodeError
from .transcode import (
    decode_legacy,
    encode_legacy,
    escape_path,
    escape_readable_path,
    unescape_path,
)


def _split_url(input_url: str):
    try:
        parts = urlsplit(input_url.strip())
        hostname = parts.hostname
        parts.port  # raises ValueError for a malformed port
    except ValueError as e:
        raise InvalidURLError(str(e)) from e
    if parts.scheme not in ("http", "https"):
        raise InvalidURLError(f"unsupported scheme {parts.scheme!r}")
    if not hostname:
        raise InvalidURLError("missing host")
    return parts


def _substitute_host(netloc: str, config) -> str:
    userinfo, at, hostport = netloc.rpartition("@")
    start = hostport.lower().find(config.origin_host.lower())
    if start >= 0:
        hostport = hostport[:start] + config.relay_host + hostport[start + len(config.origin_host):]
    return userinfo + at + hostport


def to_display_url(input_url: str, config) -> str:
    """
    Turn a pasted origin URL (EUC-JP path, percent escaped) into the relay
    URL with a readable Unicode path. The query and fragment are kept as-is.
    """
    parts = _split_url(input_url)
    path = escape_readable_path(decode_legacy(unescape_path(parts.path)))
    host = _substitute_host(parts.netloc, config)
    return urlunsplit((config.display_scheme, host, path, parts.query, parts.fragment))


def to_fetch_url(raw_path, config) -> str:
    """
    Turn a relay route path (percent-escaped UTF-8) into the origin URL,
    i.e. the same title as escaped EUC-JP bytes.
    """
    raw = unescape_path(raw_path)
    try:
        title = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise PathDecodeError(f"path is not valid UTF-8 at byte {e.start}") from e
    encoded = escape_path(encode_legacy(title.lstrip("/")))
    return config.origin_base + encoded
