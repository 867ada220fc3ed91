"""Errors raised while resolving module identifiers."""

from typing import Optional


class ResolutionError(Exception):
    """Base class for resolution failures."""


class InvalidPath(ResolutionError):
    """A '..' segment escapes the root of the path."""

    def __init__(self, path: str) -> None:
        super().__init__(f"invalid path: {path}")
        self.path = path


class MissingBaseConfig(ResolutionError):
    """A top-level identifier was resolved without a configured base."""

    def __init__(self, id: Optional[str] = None) -> None:
        message = "the config.base is empty"
        if id:
            message += f" (resolving top-level id '{id}')"
        super().__init__(message)
        self.id = id


class DuplicateModuleError(ResolutionError):
    """A module was declared twice under the same canonical location."""

    def __init__(self, location: str) -> None:
        super().__init__(f"module already declared: {location}")
        self.location = location


class InvalidMapRule(ResolutionError, ValueError):
    """A map rule entry could not be understood."""
