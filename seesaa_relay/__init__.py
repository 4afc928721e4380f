"""seesaa-relay: readable URLs and link previews for seesaawiki pages."""

from .config import ConfigError, RelayConfig
from .errors import (
    EncodingError,
    FetchError,
    InvalidURLError,
    ParseError,
    PathDecodeError,
    RelayError,
)

__all__ = [
    "ConfigError",
    "EncodingError",
    "FetchError",
    "InvalidURLError",
    "ParseError",
    "PathDecodeError",
    "RelayConfig",
    "RelayError",
]
