"""
Circular dependency detection.

Strongly connected components are found with Tarjan's algorithm in a single
O(V+E) pass. Every component with more than one unit is a circular dependency;
for each one a concrete closed walk is reconstructed so the report can name the
functions that tie the units together.
"""

from __future__ import annotations

from ..core.logging import get_logger
from ..models.dependency import CircularDependencyInfo, CycleSeverity, CycleStep
from ..models.graph import DependencyKind
from .graph import DependencyGraph

logger = get_logger(__name__)

_KIND_ORDER = list(DependencyKind)


def strongly_connected_components(graph: DependencyGraph) -> list[list[int]]:
    """Tarjan's SCC algorithm over the graph arena.

    Iterative, so deep dependency chains do not hit the recursion limit.

    Returns:
        Components as lists of arena ids, in the order Tarjan emits them
        (reverse topological order of the condensation).
    """
    size = len(graph)
    indices = [-1] * size
    lowlinks = [0] * size
    on_stack = [False] * size
    stack: list[int] = []
    components: list[list[int]] = []
    counter = 0

    for root in graph.node_ids():
        if indices[root] != -1:
            continue

        indices[root] = lowlinks[root] = counter
        counter += 1
        stack.append(root)
        on_stack[root] = True
        work = [(root, iter(graph.successors(root)))]

        while work:
            v, successors = work[-1]
            descended = False
            for w in successors:
                if indices[w] == -1:
                    indices[w] = lowlinks[w] = counter
                    counter += 1
                    stack.append(w)
                    on_stack[w] = True
                    work.append((w, iter(graph.successors(w))))
                    descended = True
                    break
                if on_stack[w]:
                    lowlinks[v] = min(lowlinks[v], indices[w])
            if descended:
                continue

            work.pop()
            if work:
                parent = work[-1][0]
                lowlinks[parent] = min(lowlinks[parent], lowlinks[v])

            if lowlinks[v] == indices[v]:
                component = []
                while True:
                    w = stack.pop()
                    on_stack[w] = False
                    component.append(w)
                    if w == v:
                        break
                components.append(component)

    return components


def _find_cycle_from(graph: DependencyGraph, start: int, members: set[int]) -> list[int] | None:
    """Depth-first search for a closed walk from start back to start.

    Only edges with both endpoints in members are followed and no unit is
    entered twice, so the walk is at most len(members) + 1 long.
    """
    path = [start]
    on_path = {start}
    exhausted: set[int] = set()
    frontier = [iter(graph.successors(start))]

    while frontier:
        descended = False
        for w in frontier[-1]:
            if w not in members:
                continue
            if w == start:
                return path + [start]
            if w in on_path or w in exhausted:
                continue
            path.append(w)
            on_path.add(w)
            frontier.append(iter(graph.successors(w)))
            descended = True
            break
        if not descended:
            frontier.pop()
            finished = path.pop()
            on_path.discard(finished)
            exhausted.add(finished)

    return None


def _ordered_kinds(kinds: set[DependencyKind]) -> list[DependencyKind]:
    return [kind for kind in _KIND_ORDER if kind in kinds]


def cycle_severity(kinds: list[DependencyKind] | set[DependencyKind]) -> CycleSeverity:
    """Network coupling in a cycle is critical; every other cycle is high."""
    if DependencyKind.NETWORK in kinds:
        return CycleSeverity.CRITICAL
    return CycleSeverity.HIGH


def cycle_suggestions(units: list[str], kinds: list[DependencyKind] | set[DependencyKind]) -> list[str]:
    """Remediation advice for one circular dependency."""
    suggestions = [
        "Decouple the units in this cycle so that dependencies flow in one direction only",
    ]

    if DependencyKind.DIRECT in kinds:
        suggestions.append("Extract the shared functionality into a separate shared runtime module")
        suggestions.append("Use dependency injection to break direct coupling between the units")

    if DependencyKind.EVENT in kinds:
        suggestions.append("Route events through a mediator so units do not reference each other")
        suggestions.append("Introduce a message bus for inter-unit communication")

    if DependencyKind.NETWORK in kinds:
        suggestions.append("Centralize networked calls through a single coordinator unit")

    if len(units) == 2:
        suggestions.append(
            f"Consider merging '{units[0]}' and '{units[1]}' into a single unit if they are tightly coupled"
        )
    else:
        suggestions.append("Break the larger units in this cycle into smaller, more focused units")

    suggestions.append("Define explicit initialization phases to establish a deterministic startup order")
    return suggestions


def _cycle_message(units: list[str], cycle_path: list[str]) -> str:
    if not cycle_path:
        return (
            f"Circular dependency detected between units: {', '.join(units)}. "
            "These units depend on each other, creating an initialization deadlock."
        )
    return (
        f"Circular dependency detected: {' -> '.join(cycle_path)}. "
        "This creates an initialization deadlock where units cannot be properly ordered. "
        f"The cycle involves {len(units)} units and must be resolved before generation can proceed."
    )


class CycleDetector:
    """Finds and explains circular dependencies in a DependencyGraph.

    The SCC computation is cached per graph revision, so has_cycles() and
    detect() can be called repeatedly without redoing the traversal.
    """

    def __init__(self, graph: DependencyGraph) -> None:
        self.graph = graph
        self._cached_revision: int | None = None
        self._components: list[list[int]] = []

    def _nontrivial_components(self) -> list[list[int]]:
        if self._cached_revision != self.graph.revision:
            self._components = [
                component
                for component in strongly_connected_components(self.graph)
                if len(component) > 1
            ]
            self._cached_revision = self.graph.revision
        return self._components

    def has_cycles(self) -> bool:
        return bool(self._nontrivial_components())

    def components(self) -> list[list[str]]:
        """Unit names of every non-trivial component, each sorted."""
        return sorted(
            (sorted(self.graph.node_name(i) for i in component) for component in self._nontrivial_components()),
            key=lambda names: (-len(names), names),
        )

    def detect(self) -> list[CircularDependencyInfo]:
        """Describe every circular dependency, largest first."""
        cycles = [self._describe(component) for component in self._nontrivial_components()]
        cycles.sort(key=lambda info: (-info.size, info.units))
        if cycles:
            logger.info("Circular dependencies detected", count=len(cycles))
        return cycles

    def _reconstruct_path(self, component: list[int]) -> list[str]:
        members = set(component)
        for start in sorted(component, key=self.graph.node_name):
            walk = _find_cycle_from(self.graph, start, members)
            if walk:
                return [self.graph.node_name(i) for i in walk]
        return []

    def _describe(self, component: list[int]) -> CircularDependencyInfo:
        units = sorted(self.graph.node_name(i) for i in component)
        cycle_path = self._reconstruct_path(component)

        steps: list[CycleStep] = []
        involved_functions: dict[str, str] = {}
        kinds: set[DependencyKind] = set()

        if cycle_path:
            for source, target in zip(cycle_path, cycle_path[1:]):
                edges = self.graph.edges_between(source, target)
                if not edges:
                    continue
                step_kinds = _ordered_kinds({edge.kind for edge in edges})
                steps.append(
                    CycleStep(
                        source=source,
                        target=target,
                        function_name=edges[0].function_name,
                        kinds=step_kinds,
                    )
                )
                involved_functions[f"{source} -> {target}"] = edges[0].function_name
                kinds.update(step_kinds)
        else:
            # A non-trivial SCC always contains a cycle; reaching this is a bug.
            logger.error("Cycle path reconstruction failed", units=units)
            member_names = set(units)
            kinds = {
                edge.kind
                for edge in self.graph.edges
                if edge.source in member_names and edge.target in member_names
            }

        ordered_kinds = _ordered_kinds(kinds)
        return CircularDependencyInfo(
            units=units,
            cycle_path=cycle_path,
            steps=steps,
            involved_functions=involved_functions,
            dependency_kinds=ordered_kinds,
            severity=cycle_severity(kinds),
            message=_cycle_message(units, cycle_path),
            suggestions=cycle_suggestions(units, kinds),
        )
