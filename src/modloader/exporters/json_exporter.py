"""JSON exporter for registry snapshots."""

from pathlib import Path
import json
import logging
from typing import Optional

from modloader.graph import DependencyGraph
from modloader.registry import ModuleRegistry

logger = logging.getLogger(__name__)


class JSONExporter:
    """Export a module registry and its dependency graph to JSON."""

    def export(
        self,
        registry: ModuleRegistry,
        output_path: Path,
        graph: Optional[DependencyGraph] = None
    ) -> None:
        """Export registry to JSON file."""
        graph = graph or DependencyGraph.from_registry(registry)
        data = {
            "metadata": {
                **registry.get_stats(),
                **graph.get_stats()
            },
            "modules": [record.to_dict() for record in registry.records()],
            "edges": [
                {"source": source, "target": target}
                for source, target in graph.graph.edges()
            ],
            "cycles": graph.find_cycles(),
            "missing": graph.missing_locations()
        }

        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w") as f:
            json.dump(data, f, indent=2, default=str)

        logger.info(f"Exported registry to {output_path}")
