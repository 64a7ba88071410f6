"""
Behavior unit input models.

A behavior unit is one independently addressable block of host-runtime logic,
roughly one generated class. Units are produced by an external extraction stage
and are read-only to the analysis engine.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class CallKind(str, Enum):
    """How one unit reaches a function owned by another."""

    DIRECT = "direct"  # same-process method call
    EVENT = "event"  # fire-and-forget message
    NETWORK = "network"  # replicated/broadcast message


class InterUnitCall(BaseModel):
    """A reference from one behavior unit to a function owned by another."""

    source_unit: str = Field(description="Unit issuing the call")
    target_unit: str = Field(description="Unit owning the called function")
    function_name: str = Field(description="Called function")
    call_kind: CallKind = Field(default=CallKind.DIRECT)

    model_config = {"frozen": True}


class BehaviorUnit(BaseModel):
    """One logical unit as delivered by the extraction stage."""

    name: str = Field(description="Unique unit name")
    entry_function: str = Field(default="", description="Entry function identifier")
    local_functions: frozenset[str] = Field(
        default_factory=frozenset, description="Functions owned by this unit"
    )
    lifecycle_events: tuple[str, ...] = Field(
        default_factory=tuple, description="Lifecycle events handled, in declaration order"
    )
    inter_unit_calls: tuple[InterUnitCall, ...] = Field(default_factory=tuple)

    model_config = {"frozen": True}

    @property
    def call_targets(self) -> list[str]:
        """Distinct target units, in first-call order."""
        return list(dict.fromkeys(call.target_unit for call in self.inter_unit_calls))
