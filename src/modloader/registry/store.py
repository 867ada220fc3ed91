"""Module registry storage."""

from typing import Dict, Iterator, List, Optional
import logging

from modloader.errors import DuplicateModuleError
from modloader.resolution.resolver import UriResolver
from .module import ModuleRecord

logger = logging.getLogger(__name__)


class ModuleRegistry:
    """Declared modules keyed by canonical location.

    Entries are created once and never removed for the lifetime of the
    registry.
    """

    def __init__(self, resolver: Optional[UriResolver] = None) -> None:
        self.resolver = resolver or UriResolver()
        self._modules: Dict[str, ModuleRecord] = {}

    def memoize(self, id: str, requested_location: str, record: ModuleRecord) -> ModuleRecord:
        """Register a declared module.

        With an explicit id (define('id', deps, fn)) the canonical location
        is resolved from the id against the requested location; without
        one the requested location is used as is. Dependencies are resolved
        relative to the canonical location.

        A module whose canonical location differs from the location it was
        requested through is a guest packaged inside its host's file; its
        dependencies are added to the host so that they still get loaded.

        Raises:
            DuplicateModuleError: if the canonical location is already taken
        """
        if id:
            location = self.resolver.resolve_id(id, requested_location, alias_parsed=True)
        else:
            location = requested_location

        if location in self._modules:
            raise DuplicateModuleError(location)

        dependencies = self.resolver.resolve_ids(record.dependencies, location)

        record.id = location
        record.dependencies = dependencies
        record.requested_location = requested_location
        self._modules[location] = record

        logger.debug(f"[module:memoize] {location} deps={record.dependencies}")

        if id and requested_location != location:
            host = self._modules.get(requested_location)
            if host is not None:
                added = augment_host_dependencies(host.dependencies, record.dependencies)
                if added:
                    logger.debug(
                        f"[module:package] guest {location} added {added} dependencies "
                        f"to host {requested_location}"
                    )

        return record

    def get(self, location: str) -> Optional[ModuleRecord]:
        """Get a record by canonical location."""
        return self._modules.get(location)

    def records(self) -> List[ModuleRecord]:
        """Get all records in declaration order."""
        return list(self._modules.values())

    def guests_of(self, host_location: str) -> List[ModuleRecord]:
        """Get the guest modules delivered through a host location."""
        return [
            record for record in self._modules.values()
            if record.is_guest and record.requested_location == host_location
        ]

    def get_stats(self) -> Dict[str, int]:
        """Get statistics about registered modules."""
        ready = len([r for r in self._modules.values() if r.ready])
        return {
            "total_modules": len(self._modules),
            "ready_modules": ready,
            "pending_modules": len(self._modules) - ready,
            "guest_modules": len([r for r in self._modules.values() if r.is_guest])
        }

    def __contains__(self, location: object) -> bool:
        return location in self._modules

    def __len__(self) -> int:
        return len(self._modules)

    def __iter__(self) -> Iterator[str]:
        return iter(self._modules)


def augment_host_dependencies(host_deps: List[str], guest_deps: List[str]) -> int:
    """Add a guest's dependencies to its host's dependency list.

    For example, a combined host.js holding:

        define('./host', ['./guest'], ...)
        define('./guest', ['jquery'], ...)

    jquery is not part of host.js, so it has to be added to the host's
    dependencies. The host list is changed in place; returns the number
    of dependencies added.
    """
    added = 0
    for dep in guest_deps:
        if dep not in host_deps:
            host_deps.append(dep)
            added += 1
    return added
