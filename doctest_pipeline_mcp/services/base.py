"""
Service Layer Base - result and error types shared by all services.

This module provides:
- ServiceResult: A generic result wrapper (success/failure)
- ServiceError: Structured error information
- ErrorCode: Standard error codes, one per structural doctest error

Services never raise for expected failures; handlers inspect the result.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

from ..core.extractor import (
    DocTestError,
    IndentationMismatchError,
    MalformedSourceError,
    MultipleExceptionSpecsError,
    UndefinedSelectorError,
    UnknownPromptFormatError,
)

# Generic type for result data
T = TypeVar("T")


class ErrorCode(str, Enum):
    """
    Standard error codes for service operations.

    Using string enum for easy serialization.
    """
    # Input validation
    VALIDATION_ERROR = "validation_error"
    MISSING_INPUT = "missing_input"

    # File operations
    FILE_NOT_FOUND = "file_not_found"
    PERMISSION_DENIED = "permission_denied"
    FILE_TOO_LARGE = "file_too_large"
    INVALID_EXTENSION = "invalid_extension"

    # Doctest structure
    INDENTATION_MISMATCH = "indentation_mismatch"
    UNKNOWN_PROMPT_FORMAT = "unknown_prompt_format"
    MULTIPLE_EXCEPTIONS = "multiple_exceptions"
    UNDEFINED_SELECTOR = "undefined_selector"
    MALFORMED_SOURCE = "malformed_source"
    DOCTEST_ERROR = "doctest_error"

    # Evaluation
    EXECUTION_ERROR = "execution_error"
    TIMEOUT_ERROR = "timeout_error"

    # General
    INTERNAL_ERROR = "internal_error"


_ERROR_CODES: dict[type[DocTestError], ErrorCode] = {
    IndentationMismatchError: ErrorCode.INDENTATION_MISMATCH,
    UnknownPromptFormatError: ErrorCode.UNKNOWN_PROMPT_FORMAT,
    MultipleExceptionSpecsError: ErrorCode.MULTIPLE_EXCEPTIONS,
    UndefinedSelectorError: ErrorCode.UNDEFINED_SELECTOR,
    MalformedSourceError: ErrorCode.MALFORMED_SOURCE,
}


def error_code_for(error: DocTestError) -> ErrorCode:
    """Map a structural doctest error to its ErrorCode."""
    return _ERROR_CODES.get(type(error), ErrorCode.DOCTEST_ERROR)


@dataclass(frozen=True)
class ServiceError:
    """
    Structured error information.

    Attributes:
        code: Error code for programmatic handling
        message: Human-readable error message
        details: Optional additional context (e.g. the offending line)
    """
    code: ErrorCode
    message: str
    details: dict | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        result = {
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


@dataclass(frozen=True)
class ServiceResult(Generic[T]):
    """
    Generic result wrapper for service operations.

    Either success with data, or failure with error. Never both.

    Usage:
        result = ServiceResult.ok(doctests)
        result = ServiceResult.fail(ErrorCode.FILE_NOT_FOUND, "File not found")
        result = ServiceResult.from_error(doc_test_error)
    """
    success: bool
    data: T | None = None
    error: ServiceError | None = None

    @classmethod
    def ok(cls, data: T) -> ServiceResult[T]:
        """Create a successful result."""
        return cls(success=True, data=data, error=None)

    @classmethod
    def fail(
        cls,
        code: ErrorCode,
        message: str,
        details: dict | None = None
    ) -> ServiceResult[T]:
        """
        Create a failed result.

        Args:
            code: Error code for programmatic handling
            message: Human-readable error message
            details: Optional additional context
        """
        return cls(
            success=False,
            data=None,
            error=ServiceError(code=code, message=message, details=details)
        )

    @classmethod
    def from_error(cls, error: DocTestError) -> ServiceResult[T]:
        """Create a failed result from a structural doctest error."""
        details = {"line": error.line} if error.line is not None else None
        return cls.fail(error_code_for(error), str(error), details)

    def map(self, func) -> ServiceResult:
        """Transform the data if successful; failures pass through unchanged."""
        if self.success:
            return ServiceResult.ok(func(self.data))
        return self
