"""
Extraction Service - Business logic for doctest extraction.

Orchestrates:
1. Load documentation (file or text), or accept per-callable doc units
2. Extract and classify examples
3. Apply only/except selection and name the resulting doctests

Structural errors come back as failed ServiceResults, never as exceptions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..core.collector import DocTest, DocUnit, collect_doctests, collect_file_doctests
from ..core.extractor import (
    DocTestError,
    ExpectedClassification,
    Identifier,
    classify,
    format_identifier,
    parse_identifier,
)
from .base import ErrorCode, ServiceResult
from .doc_loader import DocLoader

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExtractionResult:
    """
    Doctests extracted from one document or module.

    Attributes:
        source_name: File path, "<text>", or module name
        doctests: Named doctests in run order
        file: File the documentation came from, for error messages
    """
    source_name: str
    doctests: list[DocTest]
    file: str | None = None

    @property
    def example_count(self) -> int:
        return sum(len(t.group.expressions) for t in self.doctests)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON response."""
        return {
            "source": self.source_name,
            "total_doctests": len(self.doctests),
            "total_examples": self.example_count,
            "doctests": [
                {
                    "name": t.name,
                    "line": t.line,
                    "identifier": format_identifier(t.group.identifier),
                    "tags": t.tags,
                    "examples": [
                        {
                            "source": pair.source,
                            "expected": classification_to_dict(pair.expected),
                            "doctest": pair.display_text,
                        }
                        for pair in t.group.expressions
                    ],
                }
                for t in self.doctests
            ],
        }


def classification_to_dict(classification: ExpectedClassification) -> dict:
    """Flatten a classification into a JSON-friendly dict."""
    result = {"kind": classification.kind}
    for key, value in vars(classification).items():
        if key != "kind":
            result[key] = value
    return result


class ExtractionService:
    """
    Service for extracting doctests from documentation.

    This class is stateless - inject dependencies via __init__.
    """

    def __init__(self, doc_loader: DocLoader | None = None):
        self._loader = doc_loader or DocLoader()

    def extract_document(
        self,
        text: str | None = None,
        file_path: str | None = None
    ) -> ServiceResult[ExtractionResult]:
        """
        Extract doctests from a standalone document (e.g. README.md).

        Args:
            text: Documentation text
            file_path: Path to a documentation file

        Returns:
            ServiceResult containing ExtractionResult
        """
        load_result = self._loader.load(text=text, file_path=file_path)
        if not load_result.success:
            return ServiceResult.fail(
                load_result.error.code,
                load_result.error.message,
                load_result.error.details
            )

        loaded = load_result.data

        try:
            doctests = collect_file_doctests(loaded.name, loaded.content)
        except DocTestError as e:
            logger.warning(f"Doctest extraction failed for {loaded.name}: {e.message}")
            return ServiceResult.from_error(e)

        result = ExtractionResult(
            source_name=loaded.name,
            doctests=doctests,
            file=loaded.name
        )
        logger.info(
            f"Extracted {len(doctests)} doctest(s) with "
            f"{result.example_count} example(s) from {loaded.name}"
        )
        return ServiceResult.ok(result)

    def extract_units(
        self,
        module: str,
        units: list[dict],
        only: list[str] | None = None,
        exclude: list[str] | None = None,
        file: str | None = None
    ) -> ServiceResult[ExtractionResult]:
        """
        Extract doctests from per-callable documentation units.

        Args:
            module: Module name used for test names
            units: Dicts with "identifier" ("moduledoc" or "name/arity"),
                "line" and "text"
            only: Identifiers to run exclusively
            exclude: Identifiers to skip
            file: Source file, for error messages

        Returns:
            ServiceResult containing ExtractionResult
        """
        if not module:
            return ServiceResult.fail(ErrorCode.MISSING_INPUT, "'module' is required")

        try:
            doc_units = [self._to_unit(u) for u in units]
            only_ids = self._parse_identifiers(only) if only is not None else None
            exclude_ids = self._parse_identifiers(exclude or [])
        except (KeyError, TypeError, ValueError) as e:
            return ServiceResult.fail(
                ErrorCode.VALIDATION_ERROR,
                f"Invalid doctest units: {e}"
            )

        try:
            doctests = collect_doctests(
                module,
                doc_units,
                only=only_ids,
                exclude=exclude_ids,
                file=file
            )
        except DocTestError as e:
            logger.warning(f"Doctest extraction failed for {module}: {e.message}")
            return ServiceResult.from_error(e)

        result = ExtractionResult(source_name=module, doctests=doctests, file=file)
        logger.info(f"Extracted {len(doctests)} doctest(s) from {len(doc_units)} unit(s) of {module}")
        return ServiceResult.ok(result)

    def classify(self, expected: str | None) -> ServiceResult[ExpectedClassification]:
        """Classify a raw expected-output text."""
        if expected is None:
            return ServiceResult.fail(ErrorCode.MISSING_INPUT, "'expected' is required")
        return ServiceResult.ok(classify(expected))

    def _to_unit(self, unit: dict) -> DocUnit:
        if not isinstance(unit, dict):
            raise TypeError(f"each unit must be an object, got {type(unit).__name__}")
        return DocUnit(
            identifier=parse_identifier(str(unit.get("identifier", "moduledoc"))),
            line=int(unit.get("line", 0)),
            text=unit["text"]
        )

    def _parse_identifiers(self, values: list[str]) -> list[Identifier]:
        return [parse_identifier(str(v)) for v in values]
