"""Services package.

Exposes stateless service classes and shared result types used by the MCP handlers.
"""


# Base utilities
from .base import (
    ErrorCode,
    ServiceError,
    ServiceResult,
)

# Documentation loading
from .doc_loader import (
    DocLoader,
    LoadedDoc,
)

# Services
from .evaluation import DoctestOutcome, EvaluationReport, EvaluationService
from .extraction import ExtractionResult, ExtractionService

__all__ = [
    # Base
    "ServiceResult",
    "ServiceError",
    "ErrorCode",
    # Documentation loading
    "DocLoader",
    "LoadedDoc",
    # Services
    "ExtractionService",
    "ExtractionResult",
    "EvaluationService",
    "EvaluationReport",
    "DoctestOutcome",
]


# =============================================================================
# Convenience factory functions
# =============================================================================

def create_extraction_service(doc_loader: DocLoader | None = None) -> ExtractionService:
    """Factory for ExtractionService (optionally inject a DocLoader)."""

    return ExtractionService(doc_loader=doc_loader)


def create_evaluation_service(
    extraction_service: ExtractionService | None = None
) -> EvaluationService:
    """Factory for EvaluationService (optionally inject an ExtractionService)."""

    return EvaluationService(extraction_service=extraction_service)
