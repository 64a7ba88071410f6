"""
behaviorweave data models.

Pydantic models for the behavior unit input, the dependency graph elements, and
every result produced by an analysis pass.
"""

from .units import BehaviorUnit, CallKind, InterUnitCall
from .graph import BehaviorNode, DependencyEdge, DependencyKind, DependencyStrength
from .dependency import (
    CircularDependencyInfo,
    CycleSeverity,
    CycleStep,
    DependencyIssue,
    DependencyMetrics,
    DependencyValidationResult,
    IssueKind,
    IssueSeverity,
)
from .sharing import (
    CallSite,
    FunctionType,
    FunctionUsageInfo,
    RecommendationType,
    SharedFunctionAnalysis,
    SharedFunctionInfo,
    SharingOpportunity,
    SharingRecommendation,
    SharingStrategy,
)
from .report import DependencyAnalysisReport

__all__ = [
    # Input models
    "BehaviorUnit",
    "CallKind",
    "InterUnitCall",
    # Graph models
    "BehaviorNode",
    "DependencyEdge",
    "DependencyKind",
    "DependencyStrength",
    # Cycle and validation models
    "CircularDependencyInfo",
    "CycleSeverity",
    "CycleStep",
    "DependencyIssue",
    "DependencyMetrics",
    "DependencyValidationResult",
    "IssueKind",
    "IssueSeverity",
    # Sharing models
    "CallSite",
    "FunctionType",
    "FunctionUsageInfo",
    "RecommendationType",
    "SharedFunctionAnalysis",
    "SharedFunctionInfo",
    "SharingOpportunity",
    "SharingRecommendation",
    "SharingStrategy",
    # Report
    "DependencyAnalysisReport",
]
