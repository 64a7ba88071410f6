"""
Dependency graph element models.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class DependencyKind(str, Enum):
    """Kind of dependency, mirrored from the call kind."""

    DIRECT = "direct"
    EVENT = "event"
    NETWORK = "network"


class DependencyStrength(str, Enum):
    """How strongly a dependency constrains startup, inferred from the function name."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class BehaviorNode(BaseModel):
    """Node in the dependency graph representing one behavior unit."""

    name: str
    entry_function: str = ""
    local_functions: frozenset[str] = Field(default_factory=frozenset)
    lifecycle_events: tuple[str, ...] = Field(default_factory=tuple)
    is_entry_point: bool = Field(default=False, description="Unit declares an entry function")

    model_config = {"frozen": True}


class DependencyEdge(BaseModel):
    """Edge from a dependent unit (source) to the unit it calls into (target)."""

    source: str
    target: str
    function_name: str
    kind: DependencyKind
    strength: DependencyStrength = DependencyStrength.LOW

    model_config = {"frozen": True}

    @property
    def label(self) -> str:
        return f"{self.source} -> {self.target}"
