"""
Aggregate analysis report handed to the code generator.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from .dependency import CircularDependencyInfo, DependencyMetrics, DependencyValidationResult
from .graph import BehaviorNode, DependencyEdge
from .sharing import SharedFunctionAnalysis, SharingRecommendation


class DependencyAnalysisReport(BaseModel):
    """Everything one analysis pass produces."""

    nodes: list[BehaviorNode] = Field(default_factory=list)
    edges: list[DependencyEdge] = Field(default_factory=list)
    circular_dependencies: list[CircularDependencyInfo] = Field(default_factory=list)
    initialization_order: list[str] | None = Field(
        default=None, description="None when a cycle prevents ordering"
    )
    initialization_phases: list[list[str]] | None = Field(default=None)
    metrics: DependencyMetrics = Field(default_factory=DependencyMetrics)
    validation: DependencyValidationResult
    sharing: SharedFunctionAnalysis = Field(default_factory=SharedFunctionAnalysis)
    recommendations: list[SharingRecommendation] = Field(default_factory=list)

    @property
    def has_circular_dependencies(self) -> bool:
        return bool(self.circular_dependencies)

    @property
    def blocks_generation(self) -> bool:
        return not self.validation.is_valid
