"""Module record model."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class ModuleRecord:
    """A declared module, keyed in the registry by its canonical location."""

    id: str = ""
    dependencies: List[str] = field(default_factory=list)
    ready: bool = False

    # Owned by the loader (factory, exports); never inspected here
    payload: Any = None

    # Location the module was requested through; differs from id for guests
    requested_location: Optional[str] = None

    @property
    def is_guest(self) -> bool:
        """Whether the module was delivered inside another module's file."""
        return self.requested_location is not None and self.requested_location != self.id

    def to_dict(self) -> Dict[str, Any]:
        """Convert record to dictionary."""
        return {
            "id": self.id,
            "dependencies": list(self.dependencies),
            "ready": self.ready,
            "requested_location": self.requested_location,
            "is_guest": self.is_guest
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ModuleRecord":
        """Create record from dictionary."""
        return cls(
            id=data.get("id", ""),
            dependencies=list(data.get("dependencies", [])),
            ready=bool(data.get("ready", False)),
            requested_location=data.get("requested_location")
        )
