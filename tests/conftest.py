"""Test configuration for behaviorweave."""

from collections.abc import Callable, Iterable

import pytest

from behaviorweave.analysis import DependencyAnalyzer
from behaviorweave.core.config import Config
from behaviorweave.models.units import BehaviorUnit, CallKind, InterUnitCall


def _make_unit(
    name: str,
    functions: Iterable[str] = (),
    calls: Iterable[tuple] = (),
    entry_function: str = "",
    lifecycle_events: Iterable[str] = (),
) -> BehaviorUnit:
    inter_unit_calls = []
    for call in calls:
        target, function_name, *rest = call
        inter_unit_calls.append(
            InterUnitCall(
                source_unit=name,
                target_unit=target,
                function_name=function_name,
                call_kind=rest[0] if rest else CallKind.DIRECT,
            )
        )
    return BehaviorUnit(
        name=name,
        entry_function=entry_function,
        local_functions=frozenset(functions),
        lifecycle_events=tuple(lifecycle_events),
        inter_unit_calls=tuple(inter_unit_calls),
    )


@pytest.fixture
def make_unit() -> Callable[..., BehaviorUnit]:
    """Factory for behavior units.

    Calls are given as (target, function) or (target, function, CallKind)
    tuples; the source unit is always the unit being built.

    Returns:
        Callable building a BehaviorUnit.
    """
    return _make_unit


@pytest.fixture
def config() -> Config:
    """Default configuration, independent of the environment.

    Returns:
        Config: A fresh Config with built-in defaults.
    """
    return Config()


@pytest.fixture
def analyze(config):
    """Build a DependencyAnalyzer from units.

    Args:
        config: Pytest fixture providing the default configuration.

    Returns:
        Callable taking units (and an optional config) and returning a
        DependencyAnalyzer.
    """

    def _analyze(units, cfg=None):
        return DependencyAnalyzer(units, cfg or config)

    return _analyze


@pytest.fixture
def mutual_pair(make_unit) -> list[BehaviorUnit]:
    """Two units calling each other directly.

    Args:
        make_unit: Pytest fixture providing the unit factory.

    Returns:
        list[BehaviorUnit]: Units A and B forming a two-unit cycle.
    """
    return [
        make_unit("A", functions=["attack"], calls=[("B", "defend")]),
        make_unit("B", functions=["defend"], calls=[("A", "attack")]),
    ]


@pytest.fixture
def shared_distance_units(make_unit) -> list[BehaviorUnit]:
    """calculate_distance owned by X and called by Y and Z.

    Args:
        make_unit: Pytest fixture providing the unit factory.

    Returns:
        list[BehaviorUnit]: Units X, Y and Z.
    """
    return [
        make_unit("X", functions=["calculate_distance"]),
        make_unit("Y", functions=["chase"], calls=[("X", "calculate_distance")]),
        make_unit("Z", functions=["flee"], calls=[("X", "calculate_distance")]),
    ]
