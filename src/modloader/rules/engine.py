"""Map rule engine for rewriting resolved locations."""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Pattern, Union
import logging
import re
import yaml
from pathlib import Path

from modloader.errors import InvalidMapRule

logger = logging.getLogger(__name__)

# Order marker for rules applied after every other rule: [match, replace, -1]
DEFERRED_ORDER = -1

Replacement = Union[str, Callable[[re.Match], str]]


@dataclass
class MapRule:
    """A single pattern -> replacement rewrite rule."""

    pattern: Union[str, Pattern]
    replacement: Replacement
    deferred: bool = False
    regex: bool = False
    count: int = 1  # 0 replaces every occurrence

    _compiled_pattern: Optional[Pattern] = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Compile the pattern for regex rules."""
        if isinstance(self.pattern, re.Pattern):
            self.regex = True
            self._compiled_pattern = self.pattern
        elif self.regex:
            self._compiled_pattern = re.compile(self.pattern)

        if not self.regex and callable(self.replacement):
            raise InvalidMapRule(f"callable replacement needs a regex pattern: {self.pattern!r}")

    def apply(self, url: str) -> str:
        """Rewrite a url with this rule."""
        if self._compiled_pattern is not None:
            return self._compiled_pattern.sub(self.replacement, url, count=self.count)

        if self.count == 0:
            return url.replace(self.pattern, self.replacement)
        return url.replace(self.pattern, self.replacement, self.count)

    @classmethod
    def from_config(cls, entry: Any) -> "MapRule":
        """Create a rule from a config entry.

        Accepts an existing rule, a [match, replace] or [match, replace, order]
        sequence, or a mapping with pattern/replacement and optional
        regex/last/count keys.
        """
        if isinstance(entry, MapRule):
            return entry

        if isinstance(entry, dict):
            data = entry.copy()
            try:
                pattern = data.pop("pattern")
                replacement = data.pop("replacement")
            except KeyError as e:
                raise InvalidMapRule(f"map rule is missing {e.args[0]!r}: {entry!r}") from e
            last = bool(data.pop("last", False))
            deferred = data.pop("order", None) == DEFERRED_ORDER or last
            regex = bool(data.pop("regex", False))
            count = int(data.pop("count", 1))
            if data:
                raise InvalidMapRule(f"unknown map rule keys {sorted(data)}: {entry!r}")
            return cls(
                pattern=pattern,
                replacement=replacement,
                deferred=deferred,
                regex=regex,
                count=count,
            )

        if isinstance(entry, (list, tuple)):
            if len(entry) < 2:
                raise InvalidMapRule(f"map rule needs a match and a replacement: {entry!r}")
            deferred = len(entry) > 2 and entry[2] == DEFERRED_ORDER
            return cls(pattern=entry[0], replacement=entry[1], deferred=deferred)

        raise InvalidMapRule(f"unsupported map rule: {entry!r}")


def _coerce_rules(rules: Iterable[Any]) -> List[MapRule]:
    """Turn raw rule entries into MapRules, skipping empty or short ones."""
    coerced = []
    for entry in rules:
        if isinstance(entry, (list, tuple)) and len(entry) < 2:
            continue
        if not entry:
            continue
        coerced.append(MapRule.from_config(entry))
    return coerced


class MapRewriter:
    """Applies ordered map rules to resolved locations."""

    def __init__(self, rules: Optional[Iterable[Any]] = None) -> None:
        self.rules: List[MapRule] = _coerce_rules(rules or [])

    def add_rule(self, rule: Any) -> None:
        """Append a rule to the end of the rule list."""
        self.rules.append(MapRule.from_config(rule))

    def load_rules_from_yaml(self, yaml_path: Path) -> None:
        """Load rules from a YAML file with a top-level 'map' list."""
        with open(yaml_path, "r") as f:
            data = yaml.safe_load(f) or {}

        entries = data.get("map", [])
        for entry in entries:
            self.add_rule(entry)

        logger.debug(f"Loaded {len(entries)} map rules from {yaml_path}")

    def apply(self, url: str) -> str:
        """Rewrite a url with every rule."""
        return parse_map(url, self.rules)

    def get_stats(self) -> Dict[str, int]:
        """Get statistics about loaded rules."""
        deferred = len([r for r in self.rules if r.deferred])
        return {
            "total_rules": len(self.rules),
            "deferred_rules": deferred,
            "regex_rules": len([r for r in self.rules if r.regex]),
        }


def parse_map(url: str, rules: Iterable[Any]) -> str:
    """Apply map rules to a url.

    Rules run in declaration order and each one sees the output of the
    previous one. Deferred rules run afterwards as a separate pass over
    the result.
    """
    rules = _coerce_rules(rules)
    if not rules:
        return url

    last: List[MapRule] = []
    for rule in rules:
        if rule.deferred:
            last.append(MapRule(
                pattern=rule._compiled_pattern or rule.pattern,
                replacement=rule.replacement,
                regex=rule.regex,
                count=rule.count,
            ))
        else:
            url = rule.apply(url)

    if last:
        url = parse_map(url, last)

    return url
