"""Services package for behaviorweave."""

from .dependency_analysis import DependencyAnalysisService

__all__ = [
    "DependencyAnalysisService",
]
