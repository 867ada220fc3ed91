"""Circular dependency detection for pending modules."""

from typing import Iterable, List, Optional, Set
import logging

from .module import ModuleRecord
from .store import ModuleRegistry

logger = logging.getLogger(__name__)


class CycleGuard:
    """Breaks circular waits between modules that are not ready yet.

    If a -> [b -> [c -> [a, e], d]], then while deciding whether c may
    become ready, prune_cyclic_waits(c, [a, e]) returns [e]: a only waits
    because it transitively waits on c.

    Pruning lets the target proceed; it does not make the pruned
    dependency's exports available any earlier.
    """

    def __init__(self, registry: ModuleRegistry) -> None:
        self.registry = registry

    def depends_on_cyclically(self, record: Optional[ModuleRecord], target: str) -> bool:
        """Check whether a pending module transitively waits on target.

        Ready modules never wait, so they are neither reported nor searched
        through. Each location is expanded at most once.
        """
        if record is None or record.ready:
            return False

        visited: Set[str] = {record.id}
        stack: List[ModuleRecord] = [record]

        while stack:
            current = stack.pop()
            deps = current.dependencies or []
            if target in deps:
                return True

            # Push in reverse so dependencies are searched in declared order
            for dep in reversed(deps):
                if dep in visited:
                    continue
                visited.add(dep)
                dep_record = self.registry.get(dep)
                if dep_record is not None and not dep_record.ready:
                    stack.append(dep_record)

        return False

    def prune_cyclic_waits(self, target: str, deps: Iterable[str]) -> List[str]:
        """Drop the dependencies that are only pending because of target."""
        kept = []
        for dep in deps:
            if self.depends_on_cyclically(self.registry.get(dep), target):
                logger.debug(f"[module:cycle] {target} stops waiting for {dep}")
            else:
                kept.append(dep)
        return kept
