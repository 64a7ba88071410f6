"""
Dependency analyzer facade.

Builds the dependency graph once from the behavior units and exposes every
analysis entry point over it: cycle detection, initialization ordering,
shared-function analysis, validation and metrics. Each entry point can be called
repeatedly; nothing is re-derived from the input units.
"""

from __future__ import annotations

from collections.abc import Iterable

from ..core.config import Config
from ..core.exceptions import CircularDependencyError
from ..core.logging import get_logger
from ..models.dependency import CircularDependencyInfo, DependencyMetrics, DependencyValidationResult
from ..models.report import DependencyAnalysisReport
from ..models.sharing import SharedFunctionAnalysis, SharingRecommendation
from ..models.units import BehaviorUnit
from .cycles import CycleDetector
from .graph import DependencyGraph, DependencyGraphBuilder
from .ordering import InitializationOrderer
from .sharing import SharingAnalyzer
from .validation import DependencyValidator

logger = get_logger(__name__)


class DependencyAnalyzer:
    """Analyzes dependencies between behavior units.

    Args:
        units: Behavior units for one analysis pass, unique by name.
        config: Analysis configuration. Defaults to Config() rather than the
            environment-derived global, so separate analyzers never share state.

    Raises:
        ValidationError: If two units share a name.
    """

    def __init__(self, units: Iterable[BehaviorUnit], config: Config | None = None) -> None:
        self.config = config or Config()
        self.units = tuple(units)
        self._graph = DependencyGraphBuilder(self.config.classification).build(self.units)
        self._detector = CycleDetector(self._graph)
        self._orderer = InitializationOrderer(self._graph, self.config.initialization)
        self._sharing = SharingAnalyzer(self.units, self.config)
        self._validator = DependencyValidator(self._graph, self._detector, self.config.validation)

    @property
    def dependency_graph(self) -> DependencyGraph:
        return self._graph

    # Ordering

    def initialization_order(self) -> list[str]:
        """Dependency-respecting startup order.

        Raises:
            CircularDependencyError: If the graph contains a cycle. Use
                detect_circular_dependencies() for details.
        """
        return self._orderer.initialization_order()

    def initialization_phases(self) -> list[list[str]]:
        return self._orderer.initialization_phases()

    def resolve_initialization_order(self) -> list[str]:
        """The manual order from config when auto ordering is off, else the computed one."""
        return self._orderer.resolve_order()

    # Cycles

    def detect_circular_dependencies(self) -> list[CircularDependencyInfo]:
        return self._detector.detect()

    def has_circular_dependencies(self) -> bool:
        return self._detector.has_cycles()

    # Sharing

    def identify_shared_functions(self) -> SharedFunctionAnalysis:
        return self._sharing.identify_shared_functions()

    def generate_sharing_recommendations(
        self, analysis: SharedFunctionAnalysis | None = None
    ) -> list[SharingRecommendation]:
        return self._sharing.generate_recommendations(analysis)

    # Validation and metrics

    def validate_dependencies(self) -> DependencyValidationResult:
        return self._validator.validate()

    def calculate_dependency_metrics(self) -> DependencyMetrics:
        """Summarize the shape of the graph."""
        graph = self._graph
        names = graph.node_names
        if not names:
            return DependencyMetrics()

        dependency_counts = {name: len(graph.direct_dependencies(name)) for name in names}
        dependent_counts = {name: len(graph.direct_dependents(name)) for name in names}

        return DependencyMetrics(
            total_units=len(names),
            total_dependencies=len(graph.edges),
            max_dependencies=max(dependency_counts.values()),
            max_dependents=max(dependent_counts.values()),
            avg_dependencies=sum(dependency_counts.values()) / len(names),
            avg_dependents=sum(dependent_counts.values()) / len(names),
            independent_units=[name for name in names if dependency_counts[name] == 0],
            leaf_units=[name for name in names if dependent_counts[name] == 0],
        )

    def analyze(self) -> DependencyAnalysisReport:
        """Run every analysis and collect the results.

        Cycles do not raise here: the report carries them, and the order and
        phases are left as None.
        """
        validation = self.validate_dependencies()

        order: list[str] | None = None
        phases: list[list[str]] | None = None
        try:
            order = self.resolve_initialization_order()
            phases = self.initialization_phases()
        except CircularDependencyError:
            logger.info("Skipping initialization order", reason="circular dependencies")

        sharing = self.identify_shared_functions()
        report = DependencyAnalysisReport(
            nodes=list(self._graph),
            edges=list(self._graph.edges),
            circular_dependencies=validation.circular_dependencies,
            initialization_order=order,
            initialization_phases=phases,
            metrics=self.calculate_dependency_metrics(),
            validation=validation,
            sharing=sharing,
            recommendations=self.generate_sharing_recommendations(sharing),
        )
        logger.info(
            "Dependency analysis complete",
            units=len(report.nodes),
            edges=len(report.edges),
            cycles=len(report.circular_dependencies),
            is_valid=validation.is_valid,
        )
        return report
