"""
Cycle, validation and metrics result models.

These are produced fresh by every analysis pass and are consumed by the code
generator or a reporting tool. Unit lists are sorted so results compare equal
across runs.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from .graph import DependencyKind


class CycleSeverity(str, Enum):
    """Severity of a circular dependency. Cycles are never below HIGH."""

    HIGH = "high"
    CRITICAL = "critical"


class CycleStep(BaseModel):
    """One hop along a reconstructed cycle path."""

    source: str
    target: str
    function_name: str
    kinds: list[DependencyKind] = Field(default_factory=list)


class CircularDependencyInfo(BaseModel):
    """A non-trivial strongly connected component of the dependency graph."""

    units: list[str] = Field(description="Units in the component, sorted")
    cycle_path: list[str] = Field(
        default_factory=list,
        description="Closed walk through the component; first and last entries are equal",
    )
    steps: list[CycleStep] = Field(default_factory=list)
    involved_functions: dict[str, str] = Field(
        default_factory=dict, description="'A -> B' mapped to the function carried by that hop"
    )
    dependency_kinds: list[DependencyKind] = Field(default_factory=list)
    severity: CycleSeverity = CycleSeverity.HIGH
    message: str = ""
    suggestions: list[str] = Field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.units)


class IssueKind(str, Enum):
    """Category of a dependency issue."""

    CIRCULAR_DEPENDENCY = "circular_dependency"
    MISSING_DEPENDENCY = "missing_dependency"
    EXCESSIVE_DEPENDENCIES = "excessive_dependencies"
    ISOLATED_BEHAVIOR = "isolated_behavior"


class IssueSeverity(str, Enum):
    """Severity of a dependency issue. Only ERROR blocks generation."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {
    IssueSeverity.INFO: 0,
    IssueSeverity.WARNING: 1,
    IssueSeverity.ERROR: 2,
}


class DependencyIssue(BaseModel):
    """A single finding from graph validation."""

    kind: IssueKind
    severity: IssueSeverity
    message: str
    affected_units: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)

    @property
    def is_blocking(self) -> bool:
        return self.severity == IssueSeverity.ERROR


class DependencyValidationResult(BaseModel):
    """Outcome of a validation pass.

    issues holds every finding ranked by severity (errors first); warnings is the
    non-blocking subset of issues (WARNING and INFO).
    """

    is_valid: bool
    issues: list[DependencyIssue] = Field(default_factory=list)
    warnings: list[DependencyIssue] = Field(default_factory=list)
    circular_dependencies: list[CircularDependencyInfo] = Field(default_factory=list)

    @property
    def errors(self) -> list[DependencyIssue]:
        return [issue for issue in self.issues if issue.is_blocking]

    def issues_of(self, kind: IssueKind) -> list[DependencyIssue]:
        """Return all issues of one kind, in ranked order."""
        return [issue for issue in self.issues if issue.kind == kind]


class DependencyMetrics(BaseModel):
    """Shape of the dependency graph."""

    total_units: int = 0
    total_dependencies: int = Field(default=0, description="Number of edges")
    max_dependencies: int = Field(default=0, description="Most distinct dependencies of any unit")
    max_dependents: int = Field(default=0, description="Most distinct dependents of any unit")
    avg_dependencies: float = 0.0
    avg_dependents: float = 0.0
    independent_units: list[str] = Field(default_factory=list, description="Units with no dependencies")
    leaf_units: list[str] = Field(default_factory=list, description="Units nothing depends on")
