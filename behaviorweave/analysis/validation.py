"""
Dependency graph validation.

Collects every health finding in a single pass instead of stopping at the first
one. Cycles and calls into undefined units are errors and block generation;
excessive fan-out is a warning and isolated units are informational.
"""

from __future__ import annotations

from ..core.config import ValidationConfig
from ..core.logging import get_logger
from ..models.dependency import (
    CircularDependencyInfo,
    DependencyIssue,
    DependencyValidationResult,
    IssueKind,
    IssueSeverity,
)
from .cycles import CycleDetector
from .graph import DependencyGraph

logger = get_logger(__name__)

MISSING_DEPENDENCY_SUGGESTIONS = (
    "Check for typos in unit names",
    "Verify that all required units are included",
)


class DependencyValidator:
    """Checks a DependencyGraph for structural problems."""

    def __init__(
        self,
        graph: DependencyGraph,
        detector: CycleDetector | None = None,
        config: ValidationConfig | None = None,
    ) -> None:
        self.graph = graph
        self.detector = detector or CycleDetector(graph)
        self.config = config or ValidationConfig()

    def validate(self) -> DependencyValidationResult:
        """Run all checks.

        Returns:
            A result whose issues are ranked errors first, then warnings, then
            info. is_valid is False when any error was found.
        """
        cycles = self.detector.detect()

        issues: list[DependencyIssue] = []
        issues.extend(self._circular_issues(cycles))
        issues.extend(self._missing_issues())
        issues.extend(self._excessive_issues())
        issues.extend(self._isolated_issues())

        # Stable sort keeps discovery order within each severity
        issues.sort(key=lambda issue: -issue.severity.rank)

        result = DependencyValidationResult(
            is_valid=not any(issue.is_blocking for issue in issues),
            issues=issues,
            warnings=[issue for issue in issues if not issue.is_blocking],
            circular_dependencies=cycles,
        )
        logger.info(
            "Dependency validation complete",
            is_valid=result.is_valid,
            errors=len(result.errors),
            warnings=len(result.warnings),
        )
        return result

    def _circular_issues(self, cycles: list[CircularDependencyInfo]) -> list[DependencyIssue]:
        return [
            DependencyIssue(
                kind=IssueKind.CIRCULAR_DEPENDENCY,
                severity=IssueSeverity.ERROR,
                message=cycle.message,
                affected_units=cycle.units,
                suggestions=cycle.suggestions,
            )
            for cycle in cycles
        ]

    def _missing_issues(self) -> list[DependencyIssue]:
        issues = []
        seen: set[tuple[str, str]] = set()
        for call in self.graph.unresolved_calls:
            pair = (call.source_unit, call.target_unit)
            if pair in seen:
                continue
            seen.add(pair)
            issues.append(
                DependencyIssue(
                    kind=IssueKind.MISSING_DEPENDENCY,
                    severity=IssueSeverity.ERROR,
                    message=(
                        f"Unit '{call.source_unit}' calls '{call.function_name}' on undefined "
                        f"unit '{call.target_unit}'"
                    ),
                    affected_units=[call.source_unit, call.target_unit],
                    suggestions=[
                        f"Ensure unit '{call.target_unit}' is properly defined",
                        *MISSING_DEPENDENCY_SUGGESTIONS,
                    ],
                )
            )
        return issues

    def _excessive_issues(self) -> list[DependencyIssue]:
        limit = self.config.max_direct_dependencies
        issues = []
        for name in self.graph.node_names:
            dependencies = self.graph.direct_dependencies(name)
            if len(dependencies) <= limit:
                continue
            issues.append(
                DependencyIssue(
                    kind=IssueKind.EXCESSIVE_DEPENDENCIES,
                    severity=IssueSeverity.WARNING,
                    message=(
                        f"Unit '{name}' has {len(dependencies)} direct dependencies "
                        f"(more than {limit})"
                    ),
                    affected_units=[name],
                    suggestions=[
                        "Split the unit into smaller units with fewer responsibilities",
                        "Move commonly used functions into the shared runtime",
                        "Replace direct calls with events where ordering does not matter",
                    ],
                )
            )
        return issues

    def _isolated_issues(self) -> list[DependencyIssue]:
        issues = []
        for name in self.graph.node_names:
            if self.graph.direct_dependencies(name) or self.graph.direct_dependents(name):
                continue
            issues.append(
                DependencyIssue(
                    kind=IssueKind.ISOLATED_BEHAVIOR,
                    severity=IssueSeverity.INFO,
                    message=f"Unit '{name}' has no dependencies and nothing depends on it",
                    affected_units=[name],
                    suggestions=["Verify that the unit is still needed"],
                )
            )
        return issues
