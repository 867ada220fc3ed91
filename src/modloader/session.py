"""Load session tying resolution, registry and readiness together."""

from typing import Any, List, Optional, Sequence
import logging

from modloader.config import LoaderConfig
from modloader.registry import CycleGuard, ModuleRecord, ModuleRegistry, ReadinessTracker
from modloader.resolution import UriResolver

logger = logging.getLogger(__name__)


class LoadSession:
    """One loader session: declared modules and their readiness.

    The session stands in for the loader that fetches and executes module
    bodies. It only records declarations and decides readiness; nothing is
    fetched.
    """

    def __init__(self, config: Optional[LoaderConfig] = None) -> None:
        self.config = config or LoaderConfig.load_default()
        self.resolver = UriResolver(self.config)
        self.registry = ModuleRegistry(self.resolver)
        self.tracker = ReadinessTracker(self.registry)
        self.guard = CycleGuard(self.registry)

    def define(
        self,
        id: Optional[str],
        dependencies: Sequence[str] = (),
        requested_location: Optional[str] = None,
        payload: Any = None
    ) -> ModuleRecord:
        """Declare a module as define(id, dependencies, factory) would.

        Without a requested location the module is taken to have been
        requested through its own id.
        """
        # memoize expects an id whose alias is already parsed
        id = self.resolver.alias_mapper.parse(id) if id else ""

        if requested_location is None:
            if not id:
                raise ValueError("an anonymous module needs a requested location")
            requested_location = self.resolver.resolve_id(id, alias_parsed=True)

        record = ModuleRecord(dependencies=list(dependencies), payload=payload)
        return self.registry.memoize(id, requested_location, record)

    def require(self, ids: Sequence[str], ref_location: Optional[str] = None) -> List[str]:
        """Resolve the locations a require() call would load."""
        return self.resolver.resolve_ids(ids, ref_location)

    def waits_for(self, location: str) -> List[str]:
        """Get the dependencies a module still has to wait for.

        Dependencies stuck only because they wait on this module are left out.
        """
        record = self.registry.get(location)
        if record is None:
            return []
        deps = self.guard.prune_cyclic_waits(location, record.dependencies)
        return self.tracker.unready_of(deps)

    def settle(self) -> List[str]:
        """Mark ready every module whose waits are over, until nothing changes.

        Returns the newly ready locations in the order they became ready.
        A dependency that is never declared keeps its dependents pending.
        """
        newly_ready: List[str] = []
        changed = True
        while changed:
            changed = False
            for location in self.pending():
                if not self.waits_for(location):
                    newly_ready.extend(self.tracker.mark_ready([location]))
                    changed = True

        if newly_ready:
            logger.debug(f"Settled {len(newly_ready)} modules, {len(self.pending())} pending")
        return newly_ready

    def pending(self) -> List[str]:
        """Get the locations of declared modules that are not ready."""
        return [record.id for record in self.registry.records() if not record.ready]
