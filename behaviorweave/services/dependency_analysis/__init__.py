"""Dependency analysis service."""

from .service import DependencyAnalysisInput, DependencyAnalysisService

__all__ = ["DependencyAnalysisInput", "DependencyAnalysisService"]
