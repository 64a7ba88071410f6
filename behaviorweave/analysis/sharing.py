"""
Shared-runtime analysis.

Aggregates how every function is referenced across behavior units, scores the
benefit of centralizing it, and recommends a sharing strategy. The analyzer
holds no state between calls: every result is recomputed from the units and the
config, so repeated runs give identical output.
"""

from __future__ import annotations

from collections.abc import Iterable

from ..core.config import Config
from ..core.logging import get_logger
from ..core.types import FunctionName, UnitName
from ..models.sharing import (
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
from ..models.units import BehaviorUnit
from .classification import classify_function_type

logger = get_logger(__name__)


def _high_priority_description(opportunity: SharingOpportunity) -> str:
    units = len(opportunity.affected_units)
    score = f"{opportunity.benefit_score:.1f}"
    if opportunity.strategy == SharingStrategy.NO_SHARING:
        return (
            f"Keep '{opportunity.function_name}' per unit despite benefit score {score}; "
            f"it is used by {units} units but cannot be shared"
        )
    return (
        f"Share '{opportunity.function_name}' ({opportunity.strategy.value.replace('_', ' ')}) - "
        f"used by {units} units with benefit score {score}"
    )


class SharingAnalyzer:
    """Decides which functions belong in shared code.

    Scoring, for a function referenced by at least two units, where users is the
    number of external users (units beyond the one keeping the implementation):

        score = ((users - 1) * 10 + calls * 2) * type_multiplier - entry_point_penalty
    """

    def __init__(self, units: Iterable[BehaviorUnit], config: Config | None = None) -> None:
        self.units = tuple(units)
        self.config = config or Config()

    def analyze_function_usage(self) -> dict[FunctionName, FunctionUsageInfo]:
        """Collect per-function usage across all units.

        Owners register through their local-function sets; callers register
        through their inter-unit calls, which also count toward total_calls.
        Calls to functions no unit declares are ignored.

        Returns:
            Usage info keyed by function name, in name order.
        """
        classification = self.config.classification
        entry_points = {unit.entry_function for unit in self.units if unit.entry_function}

        users: dict[FunctionName, set[UnitName]] = {}
        for unit in self.units:
            for function_name in unit.local_functions:
                users.setdefault(function_name, set()).add(unit.name)

        calls: dict[FunctionName, list[CallSite]] = {name: [] for name in users}
        for unit in self.units:
            for call in unit.inter_unit_calls:
                if call.function_name not in users:
                    continue
                users[call.function_name].add(unit.name)
                calls[call.function_name].append(
                    CallSite(calling_unit=unit.name, call_kind=call.call_kind)
                )

        return {
            name: FunctionUsageInfo(
                function_name=name,
                used_by=sorted(users[name]),
                total_calls=len(calls[name]),
                call_sites=calls[name],
                is_entry_point=name in entry_points,
                function_type=classify_function_type(name, classification),
            )
            for name in sorted(users)
        }

    def benefit_score(self, usage: FunctionUsageInfo) -> float:
        cfg = self.config.sharing
        deduplication = (usage.external_user_count - 1) * cfg.deduplication_weight
        frequency = usage.total_calls * cfg.call_frequency_weight
        multiplier = cfg.type_multipliers.get(usage.function_type, 1.0)
        penalty = cfg.entry_point_penalty if usage.is_entry_point else 0.0
        return (deduplication + frequency) * multiplier - penalty

    def sharing_strategy(self, usage: FunctionUsageInfo, score: float | None = None) -> SharingStrategy:
        """Pick a strategy; rules are evaluated in order and the first match wins."""
        cfg = self.config.sharing
        if usage.function_name in cfg.excluded_functions:
            return SharingStrategy.NO_SHARING
        if usage.is_entry_point or usage.function_type == FunctionType.UNITY_EVENT:
            return SharingStrategy.NO_SHARING

        if score is None:
            score = self.benefit_score(usage)
        if score > cfg.shared_runtime_threshold:
            return SharingStrategy.MOVE_TO_SHARED_RUNTIME
        if score > cfg.static_method_threshold:
            return SharingStrategy.STATIC_METHOD
        if score > cfg.interface_method_threshold and usage.external_user_count > cfg.interface_method_min_users:
            return SharingStrategy.INTERFACE_METHOD
        return SharingStrategy.NO_SHARING

    def estimate_size_reduction(self, usage: FunctionUsageInfo) -> int:
        """Generated-size saving from keeping a single copy; never negative."""
        cfg = self.config.sharing
        users = usage.external_user_count
        if users <= 1:
            return 0
        base_size = cfg.base_sizes.get(usage.function_type, 0)
        return max(base_size * (users - 1) - cfg.shared_access_overhead, 0)

    def identify_utility_functions(
        self, function_usage: dict[FunctionName, FunctionUsageInfo]
    ) -> list[FunctionName]:
        """Functions promoted to shared code regardless of their strategy.

        Excluded functions are never promoted.
        """
        cfg = self.config.sharing
        promoted = []
        for name, usage in function_usage.items():
            if name in cfg.excluded_functions:
                continue
            if usage.function_type == FunctionType.UTILITY and usage.unit_count >= cfg.min_units:
                promoted.append(name)
            elif (
                usage.function_type == FunctionType.DATA_ACCESS
                and usage.unit_count > cfg.data_access_promotion_min_units
            ):
                promoted.append(name)
        return sorted(promoted)

    def identify_shared_functions(self) -> SharedFunctionAnalysis:
        """Run usage aggregation, scoring and strategy selection."""
        function_usage = self.analyze_function_usage()
        shared_functions: dict[FunctionName, SharedFunctionInfo] = {}
        opportunities: list[SharingOpportunity] = []

        for name, usage in function_usage.items():
            if usage.unit_count < self.config.sharing.min_units:
                continue
            score = self.benefit_score(usage)
            strategy = self.sharing_strategy(usage, score)
            shared_functions[name] = SharedFunctionInfo(
                function_name=name,
                used_by=usage.used_by,
                function_type=usage.function_type,
                call_frequency=usage.total_calls,
                benefit_score=score,
                strategy=strategy,
                estimated_size_reduction=self.estimate_size_reduction(usage),
            )
            opportunities.append(
                SharingOpportunity(
                    function_name=name,
                    strategy=strategy,
                    benefit_score=score,
                    affected_units=usage.used_by,
                )
            )

        opportunities.sort(key=lambda op: (-op.benefit_score, op.function_name))

        total = len(function_usage)
        shareable = len(shared_functions)
        analysis = SharedFunctionAnalysis(
            function_usage=function_usage,
            shared_functions=shared_functions,
            sharing_opportunities=opportunities,
            utility_functions=self.identify_utility_functions(function_usage),
            total_functions=total,
            shareable_functions=shareable,
            sharing_ratio=shareable / total if total else 0.0,
            estimated_total_size_reduction=sum(
                info.estimated_size_reduction for info in shared_functions.values()
            ),
        )
        logger.info(
            "Shared function analysis complete",
            total_functions=total,
            shareable_functions=shareable,
            utility_functions=len(analysis.utility_functions),
        )
        return analysis

    def generate_recommendations(
        self, analysis: SharedFunctionAnalysis | None = None
    ) -> list[SharingRecommendation]:
        """Turn an analysis into recommendations, highest benefit first.

        Args:
            analysis: A previous result of identify_shared_functions(). Computed
                when omitted.
        """
        cfg = self.config.sharing
        if analysis is None:
            analysis = self.identify_shared_functions()

        recommendations: list[SharingRecommendation] = []

        excluded = set(cfg.excluded_functions)
        candidates = [op for op in analysis.sharing_opportunities if op.function_name not in excluded]

        for opportunity in candidates:
            if opportunity.benefit_score > cfg.high_priority_threshold:
                recommendations.append(
                    SharingRecommendation(
                        recommendation_type=RecommendationType.HIGH_PRIORITY_SHARING,
                        function_name=opportunity.function_name,
                        strategy=opportunity.strategy,
                        benefit_score=opportunity.benefit_score,
                        description=_high_priority_description(opportunity),
                        affected_units=opportunity.affected_units,
                    )
                )

        if analysis.utility_functions:
            affected = {
                unit
                for name in analysis.utility_functions
                for unit in analysis.function_usage[name].used_by
            }
            recommendations.append(
                SharingRecommendation(
                    recommendation_type=RecommendationType.UTILITY_CONSOLIDATION,
                    function_name="multiple",
                    strategy=SharingStrategy.MOVE_TO_SHARED_RUNTIME,
                    benefit_score=len(analysis.utility_functions) * cfg.utility_consolidation_weight,
                    description=(
                        f"Consolidate {len(analysis.utility_functions)} utility functions into the "
                        f"shared runtime: {', '.join(analysis.utility_functions)}"
                    ),
                    affected_units=sorted(affected),
                )
            )

        widely_shared = [
            op
            for op in candidates
            if len(op.affected_units) > cfg.interface_extraction_min_units
            and op.benefit_score > cfg.interface_extraction_threshold
        ]
        if widely_shared:
            recommendations.append(
                SharingRecommendation(
                    recommendation_type=RecommendationType.INTERFACE_EXTRACTION,
                    function_name="multiple",
                    strategy=SharingStrategy.INTERFACE_METHOD,
                    benefit_score=len(widely_shared) * cfg.interface_extraction_weight,
                    description=(
                        f"Consider extracting interfaces for {len(widely_shared)} functions "
                        "used across many units"
                    ),
                    affected_units=sorted({unit for op in widely_shared for unit in op.affected_units}),
                )
            )

        recommendations.sort(key=lambda rec: -rec.benefit_score)
        return recommendations
