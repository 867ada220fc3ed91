"""Alias substitution for module ids."""

from typing import Dict, List, Optional


def parse_alias(id: str, alias: Optional[Dict[str, str]]) -> str:
    """Replace the first or last segment of an id using an alias table.

    Only the prefix and the suffix are looked at. A first-segment match
    wins; the last segment is tried only when the first did not match and
    the id has more than one segment.
    """
    if not alias:
        return id

    parts = id.split('/')
    if _substitute(parts, 0, alias):
        return '/'.join(parts)

    last = len(parts) - 1
    if last and _substitute(parts, last, alias):
        return '/'.join(parts)

    return id


def _substitute(parts: List[str], index: int, alias: Dict[str, str]) -> bool:
    part = parts[index]
    if part in alias:
        parts[index] = alias[part]
        return True
    return False


class AliasMapper:
    """Applies a configured alias table to module ids."""

    def __init__(self, alias: Optional[Dict[str, str]] = None) -> None:
        self.alias = alias or {}

    def parse(self, id: str) -> str:
        """Rewrite the first or last segment of an id."""
        return parse_alias(id, self.alias)
