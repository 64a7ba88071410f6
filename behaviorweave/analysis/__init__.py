"""
Dependency and sharing analysis engine.

The DependencyAnalyzer facade is the usual entry point; the individual
components are exported for callers that only need one of them.
"""

from .analyzer import DependencyAnalyzer
from .classification import (
    classify_dependency_strength,
    classify_function_type,
    dependency_kind_for,
    is_lifecycle_function,
)
from .cycles import CycleDetector, strongly_connected_components
from .graph import DependencyGraph, DependencyGraphBuilder, build_dependency_graph
from .ordering import InitializationOrderer
from .sharing import SharingAnalyzer
from .validation import DependencyValidator

__all__ = [
    "DependencyAnalyzer",
    # Naming heuristics
    "classify_dependency_strength",
    "classify_function_type",
    "dependency_kind_for",
    "is_lifecycle_function",
    # Components
    "CycleDetector",
    "DependencyGraph",
    "DependencyGraphBuilder",
    "DependencyValidator",
    "InitializationOrderer",
    "SharingAnalyzer",
    "build_dependency_graph",
    "strongly_connected_components",
]
