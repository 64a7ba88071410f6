"""
Configuration management for behaviorweave.

Provides type-safe configuration with environment variable overrides. The naming
heuristics keep their keyword lists here as data so they can be tuned without
touching the analysis algorithms.
"""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from ..models.sharing import FunctionType

# Load .env file if it exists (looks in cwd and parent directories)
load_dotenv()


class ClassificationConfig(BaseModel):
    """Keyword lists for the name-based classifiers.

    All matching is case-insensitive substring matching, except for the
    event handler prefixes which must match at the start of the name.
    """

    lifecycle_keywords: list[str] = Field(
        default_factory=lambda: ["start", "awake", "update", "fixed_update", "on_enable", "on_disable"],
        description="Names treated as host lifecycle (Unity event) functions",
    )
    utility_keywords: list[str] = Field(
        default_factory=lambda: [
            "calculate", "compute", "convert", "format", "parse", "validate", "helper", "util",
        ],
    )
    data_access_keywords: list[str] = Field(
        default_factory=lambda: ["get", "set", "load", "save", "read", "write"],
    )
    event_handler_prefixes: list[str] = Field(default_factory=lambda: ["on_"])
    event_handler_keywords: list[str] = Field(
        default_factory=lambda: ["handle", "event", "trigger"],
    )
    critical_strength_keywords: list[str] = Field(
        default_factory=lambda: ["init", "start", "awake"],
        description="Call targets that make a dependency critical for startup",
    )
    high_strength_keywords: list[str] = Field(default_factory=lambda: ["update", "fixed_update"])
    medium_strength_keywords: list[str] = Field(default_factory=lambda: ["event", "trigger"])


def _default_type_multipliers() -> dict[FunctionType, float]:
    return {
        FunctionType.UTILITY: 2.0,
        FunctionType.DATA_ACCESS: 1.5,
        FunctionType.BUSINESS_LOGIC: 1.0,
        FunctionType.EVENT_HANDLER: 0.8,
        FunctionType.UNITY_EVENT: 0.3,
    }


def _default_base_sizes() -> dict[FunctionType, int]:
    return {
        FunctionType.UTILITY: 50,
        FunctionType.EVENT_HANDLER: 75,
        FunctionType.DATA_ACCESS: 100,
        FunctionType.UNITY_EVENT: 150,
        FunctionType.BUSINESS_LOGIC: 200,
    }


class SharingConfig(BaseModel):
    """Scoring model for shared-runtime recommendations."""

    min_units: int = Field(default=2, ge=2, description="Units that must reference a function to score it")
    deduplication_weight: float = Field(default=10.0, ge=0.0, description="Score per additional external user")
    call_frequency_weight: float = Field(default=2.0, ge=0.0, description="Score per inter-unit call")
    entry_point_penalty: float = Field(default=50.0, ge=0.0)
    type_multipliers: dict[FunctionType, float] = Field(default_factory=_default_type_multipliers)
    base_sizes: dict[FunctionType, int] = Field(
        default_factory=_default_base_sizes,
        description="Estimated generated size of one copy of a function, per type",
    )
    shared_access_overhead: int = Field(default=20, ge=0, description="Size cost of routing through shared code")

    # Strategy thresholds, evaluated in this order
    shared_runtime_threshold: float = Field(default=20.0)
    static_method_threshold: float = Field(default=10.0)
    interface_method_threshold: float = Field(default=5.0)
    interface_method_min_users: int = Field(default=2, description="External users must exceed this")

    # Recommendations
    high_priority_threshold: float = Field(default=15.0)
    interface_extraction_min_units: int = Field(default=3, description="Units must exceed this")
    interface_extraction_threshold: float = Field(default=10.0)
    utility_consolidation_weight: float = Field(default=5.0)
    interface_extraction_weight: float = Field(default=8.0)

    # Utility promotion
    data_access_promotion_min_units: int = Field(default=2, description="Units must exceed this")

    excluded_functions: list[str] = Field(
        default_factory=list, description="Functions that are never shared"
    )


class ValidationConfig(BaseModel):
    """Graph health check limits."""

    max_direct_dependencies: int = Field(
        default=5, ge=0, description="More distinct direct dependencies than this raise a warning"
    )


class InitializationConfig(BaseModel):
    """Initialization order resolution."""

    auto_determine_order: bool = Field(default=True, description="Compute order from the graph")
    manual_order: list[str] = Field(
        default_factory=list, description="Explicit order, used when auto_determine_order is off"
    )


class Config(BaseModel):
    """Root configuration for behaviorweave."""

    project_name: str = Field(default="behaviorweave", description="Project identifier")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging level"
    )
    classification: ClassificationConfig = Field(default_factory=ClassificationConfig)
    sharing: SharingConfig = Field(default_factory=SharingConfig)
    validation: ValidationConfig = Field(default_factory=ValidationConfig)
    initialization: InitializationConfig = Field(default_factory=InitializationConfig)

    model_config = {"extra": "ignore"}

    @classmethod
    def from_env(cls) -> Config:
        """Create configuration from environment variables."""
        excluded = os.environ.get("BW_EXCLUDED_FUNCTIONS", "")
        return cls(
            log_level=os.environ.get("BW_LOG_LEVEL", "INFO"),  # type: ignore
            sharing=SharingConfig(
                excluded_functions=[name.strip() for name in excluded.split(",") if name.strip()],
            ),
            validation=ValidationConfig(
                max_direct_dependencies=int(os.environ.get("BW_MAX_DIRECT_DEPENDENCIES", "5")),
            ),
        )


@lru_cache(maxsize=1)
def get_config() -> Config:
    """Get cached configuration instance."""
    return Config.from_env()
