"""Module id resolution and readiness tracking for define/require loaders."""

__version__ = "0.1.0"

from .config import LoaderConfig, EnvironmentLocation, load_config
from .errors import (
    ResolutionError, InvalidPath, MissingBaseConfig, DuplicateModuleError, InvalidMapRule
)
from .resolution import UriResolver, AliasMapper, PathCanonicalizer
from .rules import MapRule, MapRewriter, parse_map
from .registry import (
    ModuleRecord, ModuleRegistry, ReadinessTracker, CycleGuard, augment_host_dependencies
)
from .session import LoadSession

__all__ = [
    "LoaderConfig",
    "EnvironmentLocation",
    "load_config",
    "ResolutionError",
    "InvalidPath",
    "MissingBaseConfig",
    "DuplicateModuleError",
    "InvalidMapRule",
    "UriResolver",
    "AliasMapper",
    "PathCanonicalizer",
    "MapRule",
    "MapRewriter",
    "parse_map",
    "ModuleRecord",
    "ModuleRegistry",
    "ReadinessTracker",
    "CycleGuard",
    "augment_host_dependencies",
    "LoadSession",
]
