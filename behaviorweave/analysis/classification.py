"""
Name-based heuristics.

Each classifier is a pure function of a name and a ClassificationConfig. The
keyword lists live in the config, so tuning a heuristic never touches the
graph or sharing algorithms.
"""

from __future__ import annotations

from collections.abc import Iterable

from ..core.config import ClassificationConfig
from ..models.graph import DependencyKind, DependencyStrength
from ..models.sharing import FunctionType
from ..models.units import CallKind

_DEFAULT = ClassificationConfig()


def _contains_any(name: str, keywords: Iterable[str]) -> bool:
    return any(keyword.lower() in name for keyword in keywords)


def classify_dependency_strength(
    function_name: str, config: ClassificationConfig | None = None
) -> DependencyStrength:
    """Infer how strongly a call constrains startup from the called function's name.

    Args:
        function_name: Name of the called function.
        config: Keyword lists to use. Defaults to the built-in lists.

    Returns:
        CRITICAL for init/start/awake, HIGH for update, MEDIUM for event/trigger,
        LOW otherwise.
    """
    cfg = config or _DEFAULT
    name = function_name.lower()

    if _contains_any(name, cfg.critical_strength_keywords):
        return DependencyStrength.CRITICAL
    if _contains_any(name, cfg.high_strength_keywords):
        return DependencyStrength.HIGH
    if _contains_any(name, cfg.medium_strength_keywords):
        return DependencyStrength.MEDIUM
    return DependencyStrength.LOW


def is_lifecycle_function(function_name: str, config: ClassificationConfig | None = None) -> bool:
    """Return True if the name looks like a host lifecycle callback."""
    cfg = config or _DEFAULT
    return _contains_any(function_name.lower(), cfg.lifecycle_keywords)


def classify_function_type(
    function_name: str, config: ClassificationConfig | None = None
) -> FunctionType:
    """Infer a function's role from its name.

    The first matching rule wins: lifecycle, utility, data access, event
    handler, then business logic as the fallback.

    Args:
        function_name: Function to classify.
        config: Keyword lists to use. Defaults to the built-in lists.

    Returns:
        The inferred FunctionType.
    """
    cfg = config or _DEFAULT
    name = function_name.lower()

    if _contains_any(name, cfg.lifecycle_keywords):
        return FunctionType.UNITY_EVENT
    if _contains_any(name, cfg.utility_keywords):
        return FunctionType.UTILITY
    if _contains_any(name, cfg.data_access_keywords):
        return FunctionType.DATA_ACCESS
    if any(name.startswith(prefix.lower()) for prefix in cfg.event_handler_prefixes) or _contains_any(
        name, cfg.event_handler_keywords
    ):
        return FunctionType.EVENT_HANDLER
    return FunctionType.BUSINESS_LOGIC


def dependency_kind_for(call_kind: CallKind) -> DependencyKind:
    """Map a call kind onto the matching dependency kind."""
    return DependencyKind(call_kind.value)
