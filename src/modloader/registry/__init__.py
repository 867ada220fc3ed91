"""Registry module initialization."""

from .module import ModuleRecord
from .store import ModuleRegistry, augment_host_dependencies
from .readiness import ReadinessTracker
from .cycles import CycleGuard

__all__ = [
    "ModuleRecord",
    "ModuleRegistry",
    "augment_host_dependencies",
    "ReadinessTracker",
    "CycleGuard"
]
