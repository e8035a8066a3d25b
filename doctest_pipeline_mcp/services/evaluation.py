"""Doctest evaluation service.

Extracts doctests and runs each one with the Python reference evaluator.
Every doctest runs in its own child process with a time limit, so a
failure or an endless loop in one never affects another, nor the server.
"""


from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..constants import EVALUATION_TIMEOUT
from ..core.collector import DocTest
from ..core.evaluator import run_in_subprocess
from ..core.extractor import DocContext
from .base import ErrorCode, ServiceResult
from .extraction import ExtractionResult, ExtractionService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DoctestOutcome:
    """Result of running one doctest."""
    name: str
    line: int
    passed: bool
    message: str | None = None
    error_code: ErrorCode | None = None     # Set when the doctest could not finish


@dataclass(frozen=True)
class EvaluationReport:
    """Results of running every doctest of one source."""
    source_name: str
    outcomes: list[DoctestOutcome] = field(default_factory=list)

    @property
    def passed(self) -> int:
        return sum(1 for o in self.outcomes if o.passed)

    @property
    def failed(self) -> int:
        return len(self.outcomes) - self.passed

    @property
    def success(self) -> bool:
        return self.failed == 0

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON response."""
        return {
            "source": self.source_name,
            "total": len(self.outcomes),
            "passed": self.passed,
            "failed": self.failed,
            "success": self.success,
            "results": [
                {
                    "name": o.name,
                    "line": o.line,
                    "passed": o.passed,
                    "message": o.message,
                    "error_code": o.error_code.value if o.error_code else None,
                }
                for o in self.outcomes
            ],
        }


class EvaluationService:
    """Extract doctests and run them with the Python evaluator."""

    def __init__(
        self,
        extraction_service: ExtractionService | None = None,
        timeout: float = EVALUATION_TIMEOUT
    ):
        self._extractor = extraction_service or ExtractionService()
        self._timeout = timeout

    async def run_document(
        self,
        text: str | None = None,
        file_path: str | None = None
    ) -> ServiceResult[EvaluationReport]:
        """Run the doctests of a standalone document."""
        extracted = self._extractor.extract_document(text=text, file_path=file_path)
        return await self._run_extracted(extracted)

    async def run_units(
        self,
        module: str,
        units: list[dict],
        only: list[str] | None = None,
        exclude: list[str] | None = None,
        file: str | None = None
    ) -> ServiceResult[EvaluationReport]:
        """Run the doctests of per-callable documentation units."""
        extracted = self._extractor.extract_units(
            module, units, only=only, exclude=exclude, file=file
        )
        return await self._run_extracted(extracted)

    async def _run_extracted(
        self,
        extracted: ServiceResult[ExtractionResult]
    ) -> ServiceResult[EvaluationReport]:
        if not extracted.success:
            return ServiceResult.fail(
                extracted.error.code,
                extracted.error.message,
                extracted.error.details
            )

        result = extracted.data
        context = DocContext(name=result.source_name, file=result.file)
        outcomes = [await self._run_one(test, context) for test in result.doctests]
        report = EvaluationReport(source_name=result.source_name, outcomes=outcomes)

        logger.info(
            f"Ran {len(outcomes)} doctest(s) from {result.source_name}: "
            f"{report.passed} passed, {report.failed} failed"
        )
        return ServiceResult.ok(report)

    async def _run_one(self, test: DocTest, context: DocContext) -> DoctestOutcome:
        run = await run_in_subprocess(test.group, context, timeout=self._timeout)

        error_code = None
        if run.timed_out:
            error_code = ErrorCode.TIMEOUT_ERROR
            logger.warning(f"Doctest {test.name} timed out after {self._timeout}s")
        elif run.crashed:
            error_code = ErrorCode.EXECUTION_ERROR
            logger.warning(f"Doctest {test.name} did not report a result: {run.message}")

        return DoctestOutcome(
            name=test.name,
            line=run.line or test.line,
            passed=run.passed,
            message=run.message,
            error_code=error_code
        )
