"""
Initialization ordering.

Units must start after everything they depend on. Kahn's algorithm is run with
each unit's in-degree equal to its number of outgoing dependency edges, and a
finished unit releases the units that depend on it through the reverse
adjacency. A cycle always fails the request; no partial order is returned.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Sequence

from ..core.config import InitializationConfig
from ..core.exceptions import CircularDependencyError, InitializationOrderError
from ..core.logging import get_logger
from .graph import DependencyGraph

logger = get_logger(__name__)


class InitializationOrderer:
    """Computes dependency-respecting startup orders for a DependencyGraph."""

    def __init__(self, graph: DependencyGraph, config: InitializationConfig | None = None) -> None:
        self.graph = graph
        self.config = config or InitializationConfig()

    def _kahn(self) -> tuple[list[int], list[int]]:
        """Return (ordered ids, level of every id); ordered is short when a cycle exists."""
        graph = self.graph
        pending = [len(graph.successors(i)) for i in graph.node_ids()]
        levels = [0] * len(graph)
        queue = deque(i for i in graph.node_ids() if pending[i] == 0)
        ordered: list[int] = []

        while queue:
            current = queue.popleft()
            ordered.append(current)
            for dependent in graph.predecessors(current):
                levels[dependent] = max(levels[dependent], levels[current] + 1)
                pending[dependent] -= 1
                if pending[dependent] == 0:
                    queue.append(dependent)

        return ordered, levels

    def _fail_on_cycle(self, ordered: list[int]) -> None:
        if len(ordered) == len(self.graph):
            return
        done = set(ordered)
        remaining = [self.graph.node_name(i) for i in self.graph.node_ids() if i not in done]
        logger.warning("Initialization order blocked by circular dependency", units=remaining)
        raise CircularDependencyError(
            message="Cannot determine initialization order due to circular dependencies",
            units=remaining,
        )

    def initialization_order(self) -> list[str]:
        """Total order over all units with every dependency before its dependents.

        Raises:
            CircularDependencyError: If the graph contains a cycle.
        """
        ordered, _ = self._kahn()
        self._fail_on_cycle(ordered)
        return [self.graph.node_name(i) for i in ordered]

    def initialization_phases(self) -> list[list[str]]:
        """Group the initialization order into phases.

        Phase 0 holds units without dependencies; a unit is in phase k when its
        deepest dependency is in phase k - 1. Units within a phase do not depend
        on each other and keep their initialization-order position.

        Raises:
            CircularDependencyError: If the graph contains a cycle.
        """
        ordered, levels = self._kahn()
        self._fail_on_cycle(ordered)

        phases: list[list[str]] = []
        for node_id in ordered:
            level = levels[node_id]
            while len(phases) <= level:
                phases.append([])
            phases[level].append(self.graph.node_name(node_id))
        return phases

    def validate_order(self, order: Sequence[str]) -> None:
        """Check an externally supplied order against the graph.

        Raises:
            InitializationOrderError: If a unit is missing, unknown or repeated,
                or appears before one of its dependencies.
        """
        seen: set[str] = set()
        for name in order:
            if name not in self.graph:
                raise InitializationOrderError(
                    message=f"Unknown unit '{name}' in manual initialization order", units=[name]
                )
            if name in seen:
                raise InitializationOrderError(
                    message=f"Unit '{name}' appears more than once in manual initialization order",
                    units=[name],
                )
            seen.add(name)

        missing = [name for name in self.graph.node_names if name not in seen]
        if missing:
            raise InitializationOrderError(
                message="Units missing from manual initialization order", units=missing
            )

        position = {name: index for index, name in enumerate(order)}
        for edge in self.graph.edges:
            if position[edge.target] > position[edge.source]:
                raise InitializationOrderError(
                    message=f"Dependency violation: '{edge.source}' depends on '{edge.target}' "
                    "but is initialized before it",
                    units=[edge.source, edge.target],
                )

    def resolve_order(self) -> list[str]:
        """Return the configured manual order, validated, or the computed order."""
        if self.config.auto_determine_order:
            return self.initialization_order()
        self.validate_order(self.config.manual_order)
        return list(self.config.manual_order)
