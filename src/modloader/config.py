"""Configuration management for the module loader."""

from pathlib import Path
from typing import Any, Dict, List, Optional
import yaml
from pydantic import BaseModel, Field, field_validator

from modloader.rules.engine import MapRule


class EnvironmentLocation(BaseModel):
    """Scheme, host and pathname of the hosting page or process."""

    protocol: str = "file:"
    host: str = ""
    pathname: str = Field(default_factory=lambda: Path.cwd().as_posix().rstrip("/") + "/")

    @classmethod
    def from_url(cls, url: str) -> "EnvironmentLocation":
        """Split a url such as 'http://example.com/app/index.html'."""
        scheme, sep, rest = url.partition("//")
        if not sep:
            return cls(pathname=url)
        host, slash, path = rest.partition("/")
        return cls(protocol=scheme, host=host, pathname=slash + path)


class LoaderConfig(BaseModel):
    """Main loader configuration."""

    base: Optional[str] = None
    alias: Dict[str, str] = Field(default_factory=dict)
    map: List[Any] = Field(default_factory=list)
    location: EnvironmentLocation = Field(default_factory=EnvironmentLocation)
    debug: bool = False

    @field_validator("map")
    @classmethod
    def _build_map_rules(cls, value: List[Any]) -> List[MapRule]:
        return [MapRule.from_config(entry) for entry in value if entry]

    @field_validator("location", mode="before")
    @classmethod
    def _parse_location(cls, value: Any) -> Any:
        if isinstance(value, str):
            return EnvironmentLocation.from_url(value)
        return value

    @classmethod
    def load_from_file(cls, config_path: Path) -> "LoaderConfig":
        """Load configuration from YAML file."""
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LoaderConfig":
        """Build a config from a mapping, ignoring keys it does not know."""
        known = {key: value for key, value in data.items() if key in cls.model_fields}
        return cls(**known)

    @classmethod
    def load_default(cls) -> "LoaderConfig":
        """Load default configuration."""
        return cls()

    def save_to_file(self, config_path: Path) -> None:
        """Save configuration to YAML file."""
        data = self.model_dump(exclude={"map"})
        data["map"] = [_dump_rule(rule) for rule in self.map]
        with open(config_path, "w") as f:
            yaml.dump(data, f, default_flow_style=False)


def _dump_rule(rule: MapRule) -> Dict[str, Any]:
    if callable(rule.replacement):
        raise ValueError(f"cannot save a map rule with a callable replacement: {rule.pattern!r}")
    pattern = rule.pattern.pattern if hasattr(rule.pattern, "pattern") else rule.pattern
    data: Dict[str, Any] = {"pattern": pattern, "replacement": rule.replacement}
    if rule.deferred:
        data["last"] = True
    if rule.regex:
        data["regex"] = True
    if rule.count != 1:
        data["count"] = rule.count
    return data


def load_config(config_path: Optional[str] = None) -> LoaderConfig:
    """Load configuration from file or defaults."""
    if config_path:
        return LoaderConfig.load_from_file(Path(config_path))

    # Try to find config in standard locations
    standard_paths = [
        Path("modloader.yaml"),
        Path("config/modloader.yaml"),
        Path.home() / ".modloader" / "config.yaml"
    ]

    for path in standard_paths:
        if path.exists():
            return LoaderConfig.load_from_file(path)

    return LoaderConfig.load_default()
