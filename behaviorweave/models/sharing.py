"""
Shared-function analysis models.

Describe how each function is used across behavior units and whether it should
be centralized into the shared runtime. The generator decides how a shared
runtime is emitted; these models only carry the decision.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from .units import CallKind


class FunctionType(str, Enum):
    """Role of a function, inferred from its name."""

    UNITY_EVENT = "unity_event"
    UTILITY = "utility"
    DATA_ACCESS = "data_access"
    EVENT_HANDLER = "event_handler"
    BUSINESS_LOGIC = "business_logic"


class SharingStrategy(str, Enum):
    """Recommended way to deduplicate a function."""

    NO_SHARING = "no_sharing"
    STATIC_METHOD = "static_method"
    MOVE_TO_SHARED_RUNTIME = "move_to_shared_runtime"
    INTERFACE_METHOD = "interface_method"


class CallSite(BaseModel):
    """A unit calling a function owned elsewhere."""

    calling_unit: str
    call_kind: CallKind


class FunctionUsageInfo(BaseModel):
    """Usage of one function name across all units."""

    function_name: str
    used_by: list[str] = Field(default_factory=list, description="Owners and callers, sorted")
    total_calls: int = 0
    call_sites: list[CallSite] = Field(default_factory=list)
    is_entry_point: bool = False
    function_type: FunctionType = FunctionType.BUSINESS_LOGIC

    @property
    def unit_count(self) -> int:
        return len(self.used_by)

    @property
    def external_user_count(self) -> int:
        """Units using the function beyond the one that would keep the implementation."""
        return max(len(self.used_by) - 1, 0)


class SharedFunctionInfo(BaseModel):
    """A function referenced by enough units to be scored."""

    function_name: str
    used_by: list[str] = Field(default_factory=list)
    function_type: FunctionType
    call_frequency: int = 0
    benefit_score: float = 0.0
    strategy: SharingStrategy = SharingStrategy.NO_SHARING
    estimated_size_reduction: int = Field(default=0, ge=0)


class SharingOpportunity(BaseModel):
    """A ranked candidate for centralization."""

    function_name: str
    strategy: SharingStrategy
    benefit_score: float
    affected_units: list[str] = Field(default_factory=list)


class SharedFunctionAnalysis(BaseModel):
    """Result of the sharing analyzer."""

    function_usage: dict[str, FunctionUsageInfo] = Field(default_factory=dict)
    shared_functions: dict[str, SharedFunctionInfo] = Field(default_factory=dict)
    sharing_opportunities: list[SharingOpportunity] = Field(
        default_factory=list, description="Ranked by benefit score, highest first"
    )
    utility_functions: list[str] = Field(
        default_factory=list, description="Functions always promoted to shared code, sorted"
    )
    total_functions: int = 0
    shareable_functions: int = 0
    sharing_ratio: float = 0.0
    estimated_total_size_reduction: int = 0


class RecommendationType(str, Enum):
    """Kind of sharing recommendation."""

    HIGH_PRIORITY_SHARING = "high_priority_sharing"
    UTILITY_CONSOLIDATION = "utility_consolidation"
    INTERFACE_EXTRACTION = "interface_extraction"


class SharingRecommendation(BaseModel):
    """Actionable advice derived from the sharing analysis."""

    recommendation_type: RecommendationType
    function_name: str = Field(description="Function, or 'multiple' for group recommendations")
    strategy: SharingStrategy
    benefit_score: float
    description: str
    affected_units: list[str] = Field(default_factory=list)
