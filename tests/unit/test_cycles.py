"""Unit tests for circular dependency detection."""

from behaviorweave.analysis.cycles import CycleDetector, cycle_severity, strongly_connected_components
from behaviorweave.analysis.graph import DependencyGraph, build_dependency_graph
from behaviorweave.models.dependency import CycleSeverity
from behaviorweave.models.graph import BehaviorNode, DependencyEdge, DependencyKind
from behaviorweave.models.units import CallKind


def _component_names(graph, components):
    return sorted(sorted(graph.node_name(i) for i in component) for component in components)


class TestStronglyConnectedComponents:
    """Tests for the Tarjan pass."""

    def test_every_node_in_exactly_one_component(self, make_unit):
        """Test component partitioning.

        Verifies that trivial nodes form their own components and that the
        cycle is reported as one component.
        """
        graph = build_dependency_graph(
            [
                make_unit("A", calls=[("B", "f")]),
                make_unit("B", calls=[("C", "g")]),
                make_unit("C", calls=[("A", "h"), ("D", "i")]),
                make_unit("D"),
            ]
        )

        components = strongly_connected_components(graph)

        assert _component_names(graph, components) == [["A", "B", "C"], ["D"]]
        assert sorted(i for component in components for i in component) == list(graph.node_ids())

    def test_long_chain_does_not_recurse(self, make_unit):
        """Test deep graphs.

        Verifies that a chain far deeper than the recursion limit is handled.
        """
        size = 5000
        units = [make_unit(f"U{i}", calls=[(f"U{i + 1}", "next_step")]) for i in range(size - 1)]
        units.append(make_unit(f"U{size - 1}", calls=[("U0", "wrap")]))
        graph = build_dependency_graph(units)

        components = strongly_connected_components(graph)

        assert len(components) == 1
        assert len(components[0]) == size


class TestCycleDetector:
    """Tests for cycle descriptions."""

    def test_two_unit_cycle(self, mutual_pair):
        """Test a direct two-unit cycle.

        Verifies exactly one cycle over {A, B} with HIGH severity and a
        closed path naming the function carried by each hop.
        """
        detector = CycleDetector(build_dependency_graph(mutual_pair))

        cycles = detector.detect()

        assert detector.has_cycles()
        assert len(cycles) == 1
        cycle = cycles[0]
        assert cycle.units == ["A", "B"]
        assert cycle.severity == CycleSeverity.HIGH
        assert cycle.cycle_path == ["A", "B", "A"]
        assert cycle.involved_functions == {"A -> B": "defend", "B -> A": "attack"}
        assert cycle.dependency_kinds == [DependencyKind.DIRECT]
        assert "A -> B -> A" in cycle.message

    def test_cycle_path_follows_edges(self, make_unit):
        """Test path reconstruction.

        Verifies that the path is closed, stays inside the component, and
        that every hop is an actual edge.
        """
        graph = build_dependency_graph(
            [
                make_unit("A", calls=[("B", "f"), ("Out", "o")]),
                make_unit("B", calls=[("C", "g")]),
                make_unit("C", calls=[("A", "h"), ("B", "back")]),
                make_unit("Out"),
            ]
        )

        (cycle,) = CycleDetector(graph).detect()

        assert cycle.units == ["A", "B", "C"]
        assert cycle.cycle_path[0] == cycle.cycle_path[-1]
        assert set(cycle.cycle_path) <= set(cycle.units)
        for source, target in zip(cycle.cycle_path, cycle.cycle_path[1:]):
            assert graph.edges_between(source, target)
        assert len(cycle.steps) == len(cycle.cycle_path) - 1

    def test_network_cycle_is_critical(self, make_unit):
        """Test severity escalation for networked calls."""
        graph = build_dependency_graph(
            [
                make_unit("A", calls=[("B", "sync", CallKind.NETWORK)]),
                make_unit("B", calls=[("A", "reply", CallKind.EVENT)]),
            ]
        )

        (cycle,) = CycleDetector(graph).detect()

        assert cycle.severity == CycleSeverity.CRITICAL
        assert cycle.dependency_kinds == [DependencyKind.EVENT, DependencyKind.NETWORK]

    def test_event_cycle_is_high(self, make_unit):
        """Test that event-only cycles are never downgraded."""
        assert cycle_severity({DependencyKind.EVENT}) == CycleSeverity.HIGH
        assert cycle_severity({DependencyKind.DIRECT}) == CycleSeverity.HIGH
        assert cycle_severity({DependencyKind.DIRECT, DependencyKind.NETWORK}) == CycleSeverity.CRITICAL

    def test_suggestions_for_two_units(self, mutual_pair):
        """Test remediation advice.

        Verifies the generic advice comes first, direct-call advice is
        included, merging is suggested for two units and initialization
        phases come last.
        """
        (cycle,) = CycleDetector(build_dependency_graph(mutual_pair)).detect()

        assert cycle.suggestions[0].startswith("Decouple")
        assert any("dependency injection" in s for s in cycle.suggestions)
        assert any("merging 'A' and 'B'" in s for s in cycle.suggestions)
        assert "initialization phases" in cycle.suggestions[-1]
        assert not any("mediator" in s for s in cycle.suggestions)

    def test_suggestions_for_larger_event_cycle(self, make_unit):
        """Test remediation advice for a three-unit event cycle."""
        graph = build_dependency_graph(
            [
                make_unit("A", calls=[("B", "ping", CallKind.EVENT)]),
                make_unit("B", calls=[("C", "ping", CallKind.EVENT)]),
                make_unit("C", calls=[("A", "ping", CallKind.EVENT)]),
            ]
        )

        (cycle,) = CycleDetector(graph).detect()

        assert any("mediator" in s for s in cycle.suggestions)
        assert any("smaller" in s for s in cycle.suggestions)
        assert not any("merging" in s for s in cycle.suggestions)

    def test_multiple_cycles_largest_first(self, make_unit):
        """Test ordering of several independent cycles."""
        graph = build_dependency_graph(
            [
                make_unit("A", calls=[("B", "f")]),
                make_unit("B", calls=[("A", "f")]),
                make_unit("X", calls=[("Y", "f")]),
                make_unit("Y", calls=[("Z", "f")]),
                make_unit("Z", calls=[("X", "f")]),
            ]
        )

        detector = CycleDetector(graph)

        assert [cycle.units for cycle in detector.detect()] == [["X", "Y", "Z"], ["A", "B"]]
        assert detector.components() == [["X", "Y", "Z"], ["A", "B"]]

    def test_acyclic_graph(self, make_unit):
        """Test a graph without cycles."""
        graph = build_dependency_graph([make_unit("P", calls=[("Q", "f")]), make_unit("Q")])
        detector = CycleDetector(graph)

        assert not detector.has_cycles()
        assert detector.detect() == []

    def test_detection_follows_graph_changes(self):
        """Test result caching.

        Verifies that the cached components are recomputed once the graph
        changes.
        """
        graph = DependencyGraph()
        graph.add_node(BehaviorNode(name="A"))
        graph.add_node(BehaviorNode(name="B"))
        graph.add_edge(DependencyEdge(source="A", target="B", function_name="f", kind=DependencyKind.DIRECT))
        detector = CycleDetector(graph)
        assert not detector.has_cycles()

        graph.add_edge(DependencyEdge(source="B", target="A", function_name="g", kind=DependencyKind.DIRECT))

        assert detector.has_cycles()

    def test_detect_is_repeatable(self, mutual_pair):
        """Test that repeated detection returns equal results."""
        detector = CycleDetector(build_dependency_graph(mutual_pair))

        assert detector.detect() == detector.detect()
