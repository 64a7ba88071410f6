"""Core infrastructure components for behaviorweave."""

from .config import Config, get_config
from .exceptions import (
    BehaviorWeaveError,
    CircularDependencyError,
    GraphError,
    InitializationOrderError,
    ValidationError,
)
from .logging import get_logger, setup_logging
from .types import FunctionName, ServiceResult, UnitName

__all__ = [
    "Config",
    "get_config",
    "BehaviorWeaveError",
    "CircularDependencyError",
    "GraphError",
    "InitializationOrderError",
    "ValidationError",
    "get_logger",
    "setup_logging",
    "FunctionName",
    "ServiceResult",
    "UnitName",
]
