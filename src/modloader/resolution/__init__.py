"""Resolution module initialization."""

from .canonicalizer import (
    PathCanonicalizer, dirname, realpath, normalize, get_host,
    normalize_pathname, is_absolute_path
)
from .alias import AliasMapper, parse_alias
from .resolver import UriResolver

__all__ = [
    "PathCanonicalizer", "dirname", "realpath", "normalize", "get_host",
    "normalize_pathname", "is_absolute_path", "AliasMapper", "parse_alias",
    "UriResolver"
]
