"""Readiness tracking for registered modules."""

from typing import Iterable, List
import logging

from .store import ModuleRegistry

logger = logging.getLogger(__name__)


class ReadinessTracker:
    """Flips modules to ready and reports which locations are still pending."""

    def __init__(self, registry: ModuleRegistry) -> None:
        self.registry = registry

    def mark_ready(self, locations: Iterable[str]) -> List[str]:
        """Set ready on every registered module among the locations.

        Unknown locations are ignored; they may be plain resources with no
        module body. Returns the locations that were flipped by this call.
        """
        flipped = []
        for location in locations:
            record = self.registry.get(location)
            if record is not None and not record.ready:
                record.ready = True
                flipped.append(location)
                logger.debug(f"[module:ready] {location}")
        return flipped

    def unready_of(self, locations: Iterable[str]) -> List[str]:
        """Filter out the locations whose modules are ready.

        A location with no registered module counts as not ready.
        """
        unready = []
        for location in locations:
            record = self.registry.get(location)
            if record is None or not record.ready:
                unready.append(location)
        return unready
