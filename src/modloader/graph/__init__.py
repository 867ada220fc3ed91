"""Graph module initialization."""

from .graph import DependencyGraph

__all__ = ["DependencyGraph"]
