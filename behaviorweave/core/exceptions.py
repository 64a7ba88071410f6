"""
Custom exception hierarchy for behaviorweave.

All exceptions inherit from BehaviorWeaveError to enable consistent error handling
at the service boundary. Graph health problems (missing targets, fan-out, isolated
units, cycles) are reported as DependencyIssue values, not raised; exceptions are
reserved for malformed input and for requests that cannot be answered at all.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class BehaviorWeaveError(Exception):
    """Base exception for all behaviorweave errors."""

    message: str
    context: dict[str, Any] = field(default_factory=dict)
    cause: Exception | None = None

    def __str__(self) -> str:
        ctx = f" | context: {self.context}" if self.context else ""
        cause = f" | caused by: {self.cause}" if self.cause else ""
        return f"{self.message}{ctx}{cause}"


@dataclass
class ValidationError(BehaviorWeaveError):
    """Raised when the behavior unit input breaks its contract."""

    field_name: str | None = None
    expected_type: str | None = None
    actual_value: Any = None

    def __str__(self) -> str:
        base = super().__str__()
        if self.field_name:
            return f"Validation failed for '{self.field_name}': {base}"
        return f"Validation failed: {base}"


@dataclass
class GraphError(BehaviorWeaveError):
    """Raised when a dependency graph invariant would be violated."""

    unit_name: str = ""

    def __str__(self) -> str:
        base = super().__str__()
        if self.unit_name:
            return f"[unit: {self.unit_name}] {base}"
        return base


@dataclass
class InitializationOrderError(BehaviorWeaveError):
    """Raised when no valid initialization order can be produced."""

    units: list[str] = field(default_factory=list)

    def __str__(self) -> str:
        base = super().__str__()
        if self.units:
            return f"{base} | units: {', '.join(self.units)}"
        return base


@dataclass
class CircularDependencyError(InitializationOrderError):
    """Raised when a cycle prevents topological ordering.

    The units attribute lists every unit that could not be ordered. Use
    DependencyAnalyzer.detect_circular_dependencies() for the cycle details.
    """

    def __str__(self) -> str:
        return f"CIRCULAR DEPENDENCY: {super().__str__()}"
