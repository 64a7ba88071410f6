"""Unit tests for the analyzer facade and the dependency analysis service."""

import pytest

from behaviorweave.analysis import DependencyAnalyzer
from behaviorweave.core.config import Config, InitializationConfig
from behaviorweave.core.exceptions import CircularDependencyError
from behaviorweave.models.sharing import SharingStrategy
from behaviorweave.services import DependencyAnalysisService
from behaviorweave.services.dependency_analysis import DependencyAnalysisInput


class TestDependencyAnalyzer:
    """Tests for the DependencyAnalyzer facade."""

    def test_entry_points_on_acyclic_units(self, analyze, make_unit):
        """Test the facade on a single dependency."""
        analyzer = analyze([make_unit("P", calls=[("Q", "serve")]), make_unit("Q", functions=["serve"])])

        assert analyzer.initialization_order() == ["Q", "P"]
        assert analyzer.initialization_phases() == [["Q"], ["P"]]
        assert analyzer.resolve_initialization_order() == ["Q", "P"]
        assert not analyzer.has_circular_dependencies()
        assert analyzer.detect_circular_dependencies() == []
        assert analyzer.validate_dependencies().is_valid
        assert analyzer.dependency_graph.direct_dependencies("P") == ["Q"]

    def test_cycle_entry_points(self, analyze, mutual_pair):
        """Test the facade on a two-unit cycle."""
        analyzer = analyze(mutual_pair)

        assert analyzer.has_circular_dependencies()
        with pytest.raises(CircularDependencyError):
            analyzer.initialization_order()
        assert not analyzer.validate_dependencies().is_valid

    def test_metrics(self, analyze, make_unit):
        """Test dependency metrics."""
        analyzer = analyze(
            [
                make_unit("A", calls=[("B", "f"), ("B", "g"), ("C", "h")]),
                make_unit("B", calls=[("C", "h")]),
                make_unit("C"),
                make_unit("D"),
            ]
        )

        metrics = analyzer.calculate_dependency_metrics()

        assert metrics.total_units == 4
        assert metrics.total_dependencies == 4
        assert metrics.max_dependencies == 2
        assert metrics.max_dependents == 2
        assert metrics.avg_dependencies == pytest.approx(0.75)
        assert metrics.avg_dependents == pytest.approx(0.75)
        assert metrics.independent_units == ["C", "D"]
        assert metrics.leaf_units == ["A", "D"]

    def test_metrics_without_units(self, analyze):
        """Test metrics for an empty input."""
        assert analyze([]).calculate_dependency_metrics().total_units == 0

    def test_report_for_acyclic_units(self, analyze, shared_distance_units):
        """Test the full report.

        Verifies that every section is filled in for a valid input.
        """
        report = analyze(shared_distance_units).analyze()

        assert len(report.nodes) == 3
        assert len(report.edges) == 2
        assert report.initialization_order == ["X", "Y", "Z"]
        assert report.initialization_phases == [["X"], ["Y", "Z"]]
        assert not report.has_circular_dependencies
        assert not report.blocks_generation
        assert report.sharing.shared_functions["calculate_distance"].strategy == SharingStrategy.MOVE_TO_SHARED_RUNTIME
        assert report.recommendations[0].function_name == "calculate_distance"

    def test_report_for_cycle_does_not_raise(self, analyze, mutual_pair):
        """Test the full report on a cycle.

        Verifies that the cycle is reported and the order is left empty.
        """
        report = analyze(mutual_pair).analyze()

        assert report.has_circular_dependencies
        assert report.initialization_order is None
        assert report.initialization_phases is None
        assert report.blocks_generation

    def test_manual_order(self, make_unit):
        """Test the configured order through the facade."""
        config = Config(initialization=InitializationConfig(auto_determine_order=False, manual_order=["R", "Q", "P"]))
        analyzer = DependencyAnalyzer(
            [make_unit("P", calls=[("Q", "serve")]), make_unit("Q"), make_unit("R")], config
        )

        assert analyzer.analyze().initialization_order == ["R", "Q", "P"]

    def test_repeated_analysis_is_identical(self, analyze, shared_distance_units):
        """Test idempotence of the full report."""
        analyzer = analyze(shared_distance_units)

        assert analyzer.analyze() == analyzer.analyze()


class TestDependencyAnalysisService:
    """Tests for the service boundary."""

    def test_successful_analysis(self, make_unit):
        """Test a clean run.

        Verifies an ok result without warnings and timing metadata.
        """
        service = DependencyAnalysisService()

        result = service.analyze(
            DependencyAnalysisInput(units=[make_unit("P", calls=[("Q", "serve")]), make_unit("Q")])
        )

        assert result.success
        assert result.data.initialization_order == ["Q", "P"]
        assert result.warnings == []
        assert "duration_ms" in result.metadata

    def test_advisory_issues_become_warnings(self, make_unit):
        """Test that non-blocking issues are passed through as warnings."""
        result = DependencyAnalysisService().analyze(DependencyAnalysisInput(units=[make_unit("Loner")]))

        assert result.success
        assert len(result.warnings) == 1
        assert "Loner" in result.warnings[0]

    def test_blocking_issues_still_return_report(self, mutual_pair):
        """Test that a cycle is reported rather than failing the run."""
        result = DependencyAnalysisService().analyze(DependencyAnalysisInput(units=mutual_pair))

        assert result.success
        assert result.data.blocks_generation

    def test_duplicate_units_fail(self, make_unit):
        """Test malformed input.

        Verifies that duplicate unit names produce a failed result instead
        of an exception.
        """
        result = DependencyAnalysisService().analyze(DependencyAnalysisInput(units=[make_unit("A"), make_unit("A")]))

        assert not result.success
        assert "Duplicate" in result.error

    def test_invalid_manual_order_fails(self, make_unit):
        """Test a manual order that breaks a dependency."""
        config = Config(initialization=InitializationConfig(auto_determine_order=False, manual_order=["P", "Q"]))

        result = DependencyAnalysisService(config).analyze(
            DependencyAnalysisInput(units=[make_unit("P", calls=[("Q", "serve")]), make_unit("Q")])
        )

        assert not result.success
        assert "Dependency violation" in result.error

    def test_run_id_generated(self):
        """Test default run identifiers."""
        first = DependencyAnalysisInput(units=[])
        second = DependencyAnalysisInput(units=[])

        assert first.run_id != second.run_id
