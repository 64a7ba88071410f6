"""
Dependency Analysis Service.

Runs one full dependency and sharing analysis pass over extracted behavior units
and hands the report to the code generation stage.
"""

from __future__ import annotations

import time
import uuid

from pydantic import BaseModel, Field

from ...analysis import DependencyAnalyzer
from ...core.config import Config
from ...core.exceptions import BehaviorWeaveError
from ...core.logging import bind_context, clear_context, get_logger
from ...core.types import ServiceResult
from ...models.report import DependencyAnalysisReport
from ...models.units import BehaviorUnit

logger = get_logger(__name__)


class DependencyAnalysisInput(BaseModel):
    """Input for the dependency analysis service."""

    units: list[BehaviorUnit] = Field(description="Behavior units, unique by name")
    run_id: str = Field(default_factory=lambda: uuid.uuid4().hex, description="Identifier bound to log entries")


class DependencyAnalysisService:
    """Service for analyzing dependencies between behavior units.

    This service:
    1. Builds the dependency graph
    2. Detects circular dependencies
    3. Computes the initialization order and phases
    4. Identifies functions to move into the shared runtime
    5. Validates the graph and collects every issue
    """

    def __init__(self, config: Config | None = None) -> None:
        """Initialize the dependency analysis service.

        Args:
            config: Analysis configuration. Defaults to Config().
        """
        self.config = config or Config()

    def analyze(self, input_data: DependencyAnalysisInput) -> ServiceResult[DependencyAnalysisReport]:
        """Analyze a set of behavior units.

        A report with blocking issues is still a successful result; callers
        check report.blocks_generation. Non-blocking issues are passed through
        as result warnings.

        Args:
            input_data: Units to analyze

        Returns:
            ServiceResult containing the DependencyAnalysisReport or error
        """
        start_time = time.perf_counter()
        bind_context(run_id=input_data.run_id)

        try:
            logger.info("Starting dependency analysis", units=len(input_data.units))

            analyzer = DependencyAnalyzer(input_data.units, self.config)
            report = analyzer.analyze()

            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.info(
                "Dependency analysis completed",
                is_valid=report.validation.is_valid,
                cycles=len(report.circular_dependencies),
                recommendations=len(report.recommendations),
                duration_ms=duration_ms,
            )

            warnings = [issue.message for issue in report.validation.warnings]
            if warnings:
                return ServiceResult.with_warnings(report, warnings, duration_ms=duration_ms)
            return ServiceResult.ok(report, duration_ms=duration_ms)

        except BehaviorWeaveError as e:
            logger.error("Dependency analysis failed", error=str(e))
            return ServiceResult.fail(str(e))
        finally:
            clear_context()
