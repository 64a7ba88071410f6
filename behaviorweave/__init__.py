"""
behaviorweave: dependency and sharing analysis for multi-behavior code generation.

Builds a call graph between independently authored behavior units, detects
circular dependencies, computes a safe initialization order, and decides which
functions should be centralized into a shared runtime instead of duplicated.
"""

__version__ = "1.0.0"
__author__ = "behaviorweave Team"
