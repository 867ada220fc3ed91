"""Rules module initialization."""

from .engine import MapRule, MapRewriter, parse_map, DEFERRED_ORDER

__all__ = ["MapRule", "MapRewriter", "parse_map", "DEFERRED_ORDER"]
