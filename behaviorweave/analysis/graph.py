"""
Dependency graph between behavior units.

Nodes live in an index-stable arena (unit name -> integer id) and adjacency is
kept as integer lists, so traversals never hash names in their inner loops.
All public queries take and return unit names.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence

from ..core.config import ClassificationConfig, Config
from ..core.exceptions import GraphError, ValidationError
from ..core.logging import get_logger
from ..core.types import UnitName
from ..models.graph import BehaviorNode, DependencyEdge
from ..models.units import BehaviorUnit, InterUnitCall
from .classification import classify_dependency_strength, dependency_kind_for

logger = get_logger(__name__)


class DependencyGraph:
    """Directed graph of behavior units connected by inter-unit calls.

    An edge points from the dependent unit (the caller) to its dependency (the
    unit owning the called function). Forward and reverse adjacency are derived
    from the edge list and rebuilt whenever edges are added.
    """

    def __init__(self) -> None:
        self._ids: dict[UnitName, int] = {}
        self._nodes: list[BehaviorNode] = []
        self._edges: list[DependencyEdge] = []
        self._forward: list[list[int]] = []
        self._reverse: list[list[int]] = []
        self._unresolved: list[InterUnitCall] = []
        self._revision = 0

    # -- construction -----------------------------------------------------

    def add_node(self, node: BehaviorNode) -> int:
        """Add a node and return its arena id.

        Raises:
            ValidationError: If a node with the same name already exists.
        """
        if node.name in self._ids:
            raise ValidationError(
                message=f"Duplicate behavior unit '{node.name}'",
                field_name="name",
                expected_type="unique unit name",
                actual_value=node.name,
            )
        node_id = len(self._nodes)
        self._ids[node.name] = node_id
        self._nodes.append(node)
        self._forward.append([])
        self._reverse.append([])
        self._revision += 1
        return node_id

    def add_edges(self, edges: Iterable[DependencyEdge]) -> None:
        """Append edges and rebuild the adjacency indexes once.

        Raises:
            GraphError: If an edge references a unit that is not a node.
        """
        new_edges = list(edges)
        for edge in new_edges:
            for endpoint in (edge.source, edge.target):
                if endpoint not in self._ids:
                    raise GraphError(
                        message=f"Edge {edge.label} references an undefined unit",
                        unit_name=endpoint,
                    )
        self._edges.extend(new_edges)
        self._rebuild_adjacency()
        self._revision += 1

    def add_edge(self, edge: DependencyEdge) -> None:
        self.add_edges([edge])

    def record_unresolved(self, call: InterUnitCall) -> None:
        """Remember a call whose target unit is not part of the graph."""
        self._unresolved.append(call)

    def _rebuild_adjacency(self) -> None:
        self._forward = [[] for _ in self._nodes]
        self._reverse = [[] for _ in self._nodes]
        for edge in self._edges:
            source = self._ids[edge.source]
            target = self._ids[edge.target]
            self._forward[source].append(target)
            self._reverse[target].append(source)

    # -- arena access (used by the analysis algorithms) -------------------

    def node_id(self, name: UnitName) -> int:
        try:
            return self._ids[name]
        except KeyError:
            raise GraphError(message="Unknown behavior unit", unit_name=name) from None

    def node_name(self, node_id: int) -> UnitName:
        return self._nodes[node_id].name

    def successors(self, node_id: int) -> Sequence[int]:
        """Arena ids of the units node_id depends on, one entry per edge."""
        return self._forward[node_id]

    def predecessors(self, node_id: int) -> Sequence[int]:
        """Arena ids of the units depending on node_id, one entry per edge."""
        return self._reverse[node_id]

    def node_ids(self) -> range:
        return range(len(self._nodes))

    @property
    def revision(self) -> int:
        """Incremented on every structural change; lets callers cache derived results."""
        return self._revision

    # -- name based views -------------------------------------------------

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, name: object) -> bool:
        return name in self._ids

    def __iter__(self) -> Iterator[BehaviorNode]:
        return iter(self._nodes)

    @property
    def nodes(self) -> dict[UnitName, BehaviorNode]:
        return {node.name: node for node in self._nodes}

    @property
    def node_names(self) -> list[UnitName]:
        return [node.name for node in self._nodes]

    @property
    def edges(self) -> tuple[DependencyEdge, ...]:
        return tuple(self._edges)

    @property
    def unresolved_calls(self) -> tuple[InterUnitCall, ...]:
        return tuple(self._unresolved)

    @property
    def forward_adjacency(self) -> dict[UnitName, list[UnitName]]:
        """unit -> dependencies, one entry per edge."""
        return {
            node.name: [self._nodes[t].name for t in self._forward[i]]
            for i, node in enumerate(self._nodes)
        }

    @property
    def reverse_adjacency(self) -> dict[UnitName, list[UnitName]]:
        """unit -> dependents, one entry per edge."""
        return {
            node.name: [self._nodes[s].name for s in self._reverse[i]]
            for i, node in enumerate(self._nodes)
        }

    def get_node(self, name: UnitName) -> BehaviorNode | None:
        node_id = self._ids.get(name)
        return self._nodes[node_id] if node_id is not None else None

    def _distinct_names(self, ids: Iterable[int]) -> list[UnitName]:
        return [self._nodes[i].name for i in dict.fromkeys(ids)]

    def direct_dependencies(self, name: UnitName) -> list[UnitName]:
        """Distinct units that name calls into, in first-edge order."""
        node_id = self._ids.get(name)
        if node_id is None:
            return []
        return self._distinct_names(self._forward[node_id])

    def direct_dependents(self, name: UnitName) -> list[UnitName]:
        """Distinct units calling into name, in first-edge order."""
        node_id = self._ids.get(name)
        if node_id is None:
            return []
        return self._distinct_names(self._reverse[node_id])

    def _reachable(self, start: int, adjacency: list[list[int]]) -> set[int]:
        seen: set[int] = set()
        stack = list(adjacency[start])
        while stack:
            current = stack.pop()
            if current in seen:
                continue
            seen.add(current)
            stack.extend(adjacency[current])
        return seen

    def all_dependencies(self, name: UnitName) -> set[UnitName]:
        """Direct and transitive dependencies of a unit."""
        node_id = self._ids.get(name)
        if node_id is None:
            return set()
        return {self._nodes[i].name for i in self._reachable(node_id, self._forward)}

    def all_dependents(self, name: UnitName) -> set[UnitName]:
        """Direct and transitive dependents of a unit."""
        node_id = self._ids.get(name)
        if node_id is None:
            return set()
        return {self._nodes[i].name for i in self._reachable(node_id, self._reverse)}

    def has_dependency_path(self, source: UnitName, target: UnitName) -> bool:
        """Return True if source reaches target by following dependency edges."""
        if source not in self._ids or target not in self._ids:
            return False
        if source == target:
            return True
        return self._ids[target] in self._reachable(self._ids[source], self._forward)

    def edges_between(self, source: UnitName, target: UnitName) -> list[DependencyEdge]:
        return [edge for edge in self._edges if edge.source == source and edge.target == target]

    def edges_for(self, name: UnitName) -> list[DependencyEdge]:
        """Edges touching a unit in either direction."""
        return [edge for edge in self._edges if name in (edge.source, edge.target)]


class DependencyGraphBuilder:
    """Turns behavior units into a DependencyGraph.

    Calls into undefined units are recorded on the graph as unresolved instead of
    failing the build, so validation can report every one of them in one pass.
    """

    def __init__(self, config: ClassificationConfig | None = None) -> None:
        self.config = config or Config().classification

    def build(self, units: Iterable[BehaviorUnit]) -> DependencyGraph:
        """Build the graph for one analysis pass.

        Args:
            units: Behavior units, already deduplicated by name.

        Returns:
            The populated dependency graph.

        Raises:
            ValidationError: If two units share a name.
        """
        unit_list = list(units)
        graph = DependencyGraph()

        for unit in unit_list:
            graph.add_node(
                BehaviorNode(
                    name=unit.name,
                    entry_function=unit.entry_function,
                    local_functions=unit.local_functions,
                    lifecycle_events=unit.lifecycle_events,
                    is_entry_point=bool(unit.entry_function),
                )
            )

        edges: list[DependencyEdge] = []
        for unit in unit_list:
            for call in unit.inter_unit_calls:
                if call.source_unit != unit.name:
                    logger.warning(
                        "Call source differs from owning unit, using owner",
                        unit=unit.name,
                        declared_source=call.source_unit,
                        function=call.function_name,
                    )
                    call = call.model_copy(update={"source_unit": unit.name})
                if call.target_unit not in graph:
                    logger.warning(
                        "Call targets undefined unit",
                        unit=unit.name,
                        target=call.target_unit,
                        function=call.function_name,
                    )
                    graph.record_unresolved(call)
                    continue
                if call.target_unit == unit.name:
                    logger.debug("Skipping self-call", unit=unit.name, function=call.function_name)
                    continue
                edges.append(
                    DependencyEdge(
                        source=unit.name,
                        target=call.target_unit,
                        function_name=call.function_name,
                        kind=dependency_kind_for(call.call_kind),
                        strength=classify_dependency_strength(call.function_name, self.config),
                    )
                )

        graph.add_edges(edges)
        logger.info(
            "Dependency graph built",
            units=len(graph),
            edges=len(edges),
            unresolved=len(graph.unresolved_calls),
        )
        return graph


def build_dependency_graph(
    units: Iterable[BehaviorUnit], config: Config | None = None
) -> DependencyGraph:
    """Convenience wrapper around DependencyGraphBuilder."""
    cfg = config or Config()
    return DependencyGraphBuilder(cfg.classification).build(units)
