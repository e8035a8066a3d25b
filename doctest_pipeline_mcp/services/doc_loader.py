"""
Doc Loader Service - Loads documentation text from files or direct input.

Centralizes:
- File path validation (extension, existence, permissions)
- Size validation
- Naming of the loaded document for test names and error messages
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..constants import ALLOWED_EXTENSIONS, MAX_DOC_SIZE
from .base import ErrorCode, ServiceResult


@dataclass(frozen=True)
class LoadedDoc:
    """
    Result of successfully loading documentation.

    Attributes:
        content: The documentation text
        name: File path as given, or "<text>" for direct input
        source_path: Original file path (None if loaded from string)
    """
    content: str
    name: str
    source_path: str | None = None


class DocLoader:
    """
    Loads documentation from files or direct input.

    Stateless - configuration goes to __init__, state to methods.
    """

    def __init__(
        self,
        max_size: int = MAX_DOC_SIZE,
        allowed_extensions: frozenset[str] = ALLOWED_EXTENSIONS
    ):
        self._max_size = max_size
        self._allowed_extensions = allowed_extensions

    def load(
        self,
        text: str | None = None,
        file_path: str | None = None
    ) -> ServiceResult[LoadedDoc]:
        """
        Load documentation from file path or direct input.

        A file path wins over text when both are given.

        Args:
            text: Direct documentation text (optional)
            file_path: Path to a documentation file (optional)

        Returns:
            ServiceResult with LoadedDoc on success, error on failure
        """
        if file_path:
            return self._load_from_file(file_path)
        if text is not None:
            return self._load_from_string(text)
        return ServiceResult.fail(
            ErrorCode.MISSING_INPUT,
            "Please provide either 'file_path' or 'text'"
        )

    def _load_from_file(self, file_path: str) -> ServiceResult[LoadedDoc]:
        path = Path(file_path)

        if path.suffix not in self._allowed_extensions:
            return ServiceResult.fail(
                ErrorCode.INVALID_EXTENSION,
                f"Only documentation files allowed (got {path.suffix or 'no extension'})",
                details={
                    "extension": path.suffix,
                    "allowed": sorted(self._allowed_extensions)
                }
            )

        if not path.exists():
            return ServiceResult.fail(
                ErrorCode.FILE_NOT_FOUND,
                f"File not found: {file_path}"
            )

        if not path.is_file():
            return ServiceResult.fail(
                ErrorCode.VALIDATION_ERROR,
                f"Path is not a file: {file_path}"
            )

        try:
            content = path.read_text(encoding="utf-8")
        except PermissionError:
            return ServiceResult.fail(
                ErrorCode.PERMISSION_DENIED,
                f"Permission denied: {file_path}"
            )
        except (OSError, UnicodeDecodeError) as e:
            return ServiceResult.fail(
                ErrorCode.INTERNAL_ERROR,
                f"Error reading file: {e}"
            )

        size_error = self._check_size(content, "File")
        if size_error:
            return size_error

        return ServiceResult.ok(LoadedDoc(
            content=content,
            name=file_path,
            source_path=file_path
        ))

    def _load_from_string(self, text: str) -> ServiceResult[LoadedDoc]:
        size_error = self._check_size(text, "Text")
        if size_error:
            return size_error

        return ServiceResult.ok(LoadedDoc(content=text, name="<text>"))

    def _check_size(self, content: str, what: str) -> ServiceResult[LoadedDoc] | None:
        if len(content) > self._max_size:
            return ServiceResult.fail(
                ErrorCode.FILE_TOO_LARGE,
                f"{what} too large: {len(content):,} bytes (max: {self._max_size:,})",
                details={"size": len(content), "max_size": self._max_size}
            )
        return None
