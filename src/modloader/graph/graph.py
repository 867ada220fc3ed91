"""Dependency graph view over a module registry."""

from typing import Dict, List, Set
import networkx as nx

from modloader.registry import ModuleRegistry


class DependencyGraph:
    """Directed graph of module dependencies (dependent -> dependency).

    Locations that are depended on but not declared yet show up as nodes
    with declared=False.
    """

    def __init__(self) -> None:
        self.graph = nx.DiGraph()

    @classmethod
    def from_registry(cls, registry: ModuleRegistry) -> "DependencyGraph":
        """Build a graph from a snapshot of the registry."""
        dep_graph = cls()
        for record in registry.records():
            dep_graph.graph.add_node(
                record.id,
                declared=True,
                ready=record.ready,
                guest=record.is_guest
            )

        for record in registry.records():
            for dep in record.dependencies:
                if dep not in dep_graph.graph:
                    dep_graph.graph.add_node(dep, declared=False, ready=False, guest=False)
                dep_graph.graph.add_edge(record.id, dep)

        return dep_graph

    def get_dependencies(self, location: str) -> List[str]:
        """Get direct dependencies of a module."""
        if location not in self.graph:
            return []
        return list(self.graph.successors(location))

    def get_dependents(self, location: str) -> List[str]:
        """Get modules that depend directly on a location."""
        if location not in self.graph:
            return []
        return list(self.graph.predecessors(location))

    def get_transitive_dependencies(self, location: str) -> Set[str]:
        """Get all transitively reachable dependencies."""
        if location not in self.graph:
            return set()
        return set(nx.descendants(self.graph, location))

    def find_cycles(self) -> List[List[str]]:
        """Find elementary dependency cycles.

        Each cycle starts at its smallest location so that the output does
        not depend on traversal order.
        """
        cycles = []
        for cycle in nx.simple_cycles(self.graph):
            start = cycle.index(min(cycle))
            cycles.append(cycle[start:] + cycle[:start])
        return sorted(cycles)

    def missing_locations(self) -> List[str]:
        """Get locations that are depended on but were never declared."""
        return sorted(
            node for node, declared in self.graph.nodes(data="declared") if not declared
        )

    def get_stats(self) -> Dict[str, int]:
        """Get graph statistics."""
        return {
            "total_nodes": self.graph.number_of_nodes(),
            "total_edges": self.graph.number_of_edges(),
            "missing_nodes": len(self.missing_locations()),
            "cycles": len(self.find_cycles()),
        }
