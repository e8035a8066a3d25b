"""
Tests for the Service Layer.

Services are tested without any MCP infrastructure: inputs go in as plain
Python values and every expected failure comes back as a ServiceResult.
"""

import os
import tempfile
from pathlib import Path
from unittest.mock import Mock

import pytest

from doctest_pipeline_mcp.core.extractor import (
    IndentationMismatchError,
    MalformedSourceError,
    UndefinedSelectorError,
)
from doctest_pipeline_mcp.services import (
    # Base
    ServiceResult,
    ErrorCode,
    # Documentation loading
    DocLoader,
    LoadedDoc,
    # Services
    ExtractionService,
    EvaluationService,
    create_evaluation_service,
    create_extraction_service,
)
from doctest_pipeline_mcp.services.base import error_code_for


SAMPLE_DOC = Path(__file__).parent.parent / "examples" / "sample_doc.md"

ADD_UNITS = [
    {"identifier": "moduledoc", "line": 1, "text": "    iex> 1 + 1\n    2\n"},
    {"identifier": "add/2", "line": 10, "text": "    iex> 2 + 3\n    5\n"},
]


# =============================================================================
# ServiceResult Tests
# =============================================================================

class TestServiceResult:
    """Tests for the ServiceResult pattern."""

    def test_ok_creates_success_result(self):
        """Test creating a successful result."""
        result = ServiceResult.ok({"key": "value"})

        assert result.success is True
        assert result.data == {"key": "value"}
        assert result.error is None

    def test_fail_creates_failure_result(self):
        """Test creating a failed result."""
        result = ServiceResult.fail(
            ErrorCode.VALIDATION_ERROR,
            "Something went wrong",
            details={"field": "units"}
        )

        assert result.success is False
        assert result.data is None
        assert result.error.code == ErrorCode.VALIDATION_ERROR
        assert result.error.message == "Something went wrong"
        assert result.error.details == {"field": "units"}

    def test_from_error_keeps_line(self):
        """Structural errors become failures with their line in the details."""
        error = IndentationMismatchError("indentation level mismatch", line=12)
        result = ServiceResult.from_error(error)

        assert result.success is False
        assert result.error.code == ErrorCode.INDENTATION_MISMATCH
        assert result.error.details == {"line": 12}
        assert result.error.message == "line 12: indentation level mismatch"

    def test_from_error_without_line(self):
        result = ServiceResult.from_error(UndefinedSelectorError("undefined"))

        assert result.error.code == ErrorCode.UNDEFINED_SELECTOR
        assert result.error.details is None

    def test_error_code_for(self):
        assert error_code_for(MalformedSourceError("bad")) == ErrorCode.MALFORMED_SOURCE

    def test_map_transforms_success(self):
        """Test map transforms data on success."""
        mapped = ServiceResult.ok(5).map(lambda x: x * 2)

        assert mapped.success is True
        assert mapped.data == 10

    def test_map_preserves_failure(self):
        """Test map preserves error on failure."""
        result = ServiceResult.fail(ErrorCode.INTERNAL_ERROR, "error")
        mapped = result.map(lambda x: x * 2)

        assert mapped.success is False
        assert mapped.error.message == "error"

    def test_map_transforms_empty_data(self):
        """Empty data (such as an empty report text) is still mapped."""
        mapped = ServiceResult.ok("").map(len)

        assert mapped.success is True
        assert mapped.data == 0

    def test_error_to_dict(self):
        """Test error serialization."""
        result = ServiceResult.fail(
            ErrorCode.FILE_NOT_FOUND,
            "File missing",
            details={"path": "/README.md"}
        )

        error_dict = result.error.to_dict()

        assert error_dict["code"] == "file_not_found"
        assert error_dict["message"] == "File missing"
        assert error_dict["details"]["path"] == "/README.md"


# =============================================================================
# DocLoader Tests
# =============================================================================

class TestDocLoader:
    """Tests for DocLoader."""

    def test_load_from_string(self):
        """Test loading documentation from direct string input."""
        result = DocLoader().load(text="iex> 1\n1")

        assert result.success is True
        assert result.data.content == "iex> 1\n1"
        assert result.data.name == "<text>"
        assert result.data.source_path is None

    def test_load_empty_string(self):
        """Empty text is valid documentation without examples."""
        result = DocLoader().load(text="")

        assert result.success is True
        assert result.data.content == ""

    def test_load_rejects_too_large_text(self):
        """Test that oversized documentation is rejected."""
        result = DocLoader(max_size=100).load(text="iex> 1\n1\n" * 50)

        assert result.success is False
        assert result.error.code == ErrorCode.FILE_TOO_LARGE

    def test_load_requires_text_or_file(self):
        """Test that either text or file_path is required."""
        result = DocLoader().load()

        assert result.success is False
        assert result.error.code == ErrorCode.MISSING_INPUT

    def test_load_validates_extension(self):
        """Test that only documentation files are allowed."""
        result = DocLoader().load(file_path="module.py")

        assert result.success is False
        assert result.error.code == ErrorCode.INVALID_EXTENSION
        assert ".md" in result.error.details["allowed"]

    def test_load_from_real_file(self):
        """Test loading from an actual file."""
        with tempfile.NamedTemporaryFile(
            mode="w", suffix=".md", delete=False
        ) as f:
            f.write("    iex> 1 + 1\n    2\n")
            temp_path = f.name

        try:
            result = DocLoader().load(file_path=temp_path)

            assert result.success is True
            assert result.data.content == "    iex> 1 + 1\n    2\n"
            assert result.data.name == temp_path
            assert result.data.source_path == temp_path
        finally:
            os.unlink(temp_path)

    def test_load_file_not_found(self):
        """Test error when file doesn't exist."""
        result = DocLoader().load(file_path="/nonexistent/README.md")

        assert result.success is False
        assert result.error.code == ErrorCode.FILE_NOT_FOUND

    def test_load_directory(self, tmp_path):
        """A directory with a documentation suffix is not a file."""
        directory = tmp_path / "docs.md"
        directory.mkdir()

        result = DocLoader().load(file_path=str(directory))

        assert result.error.code == ErrorCode.VALIDATION_ERROR

    def test_file_path_wins_over_text(self):
        """Test that a given file path is used even when text is given too."""
        result = DocLoader().load(text="iex> 1", file_path="/nonexistent/README.md")

        assert result.success is False
        assert result.error.code == ErrorCode.FILE_NOT_FOUND


# =============================================================================
# ExtractionService Tests
# =============================================================================

class TestExtractionService:
    """Tests for ExtractionService."""

    def test_extract_sample_document(self):
        result = ExtractionService().extract_document(file_path=str(SAMPLE_DOC))

        assert result.success is True
        assert len(result.data.doctests) == 6
        assert result.data.example_count == 7
        assert result.data.doctests[0].name == f"{SAMPLE_DOC} (1)"
        assert result.data.doctests[0].line == 5

    def test_extract_text(self):
        result = ExtractionService().extract_document(text="iex> 1 + 1\n2\n")

        assert result.success is True
        assert [t.name for t in result.data.doctests] == ["<text> (1)"]

    def test_to_dict(self):
        result = ExtractionService().extract_document(
            text="iex> int('x')\n** (ValueError) bad\n"
        )

        data = result.data.to_dict()
        assert data["source"] == "<text>"
        assert data["total_doctests"] == 1
        assert data["total_examples"] == 1

        doctest = data["doctests"][0]
        assert doctest["identifier"] == "moduledoc"
        assert doctest["tags"] == {"doctest": "<text>", "doctest_line": 1}
        assert doctest["examples"][0]["expected"] == {
            "kind": "exception",
            "exception_name": "ValueError",
            "message": "bad",
        }

    def test_structural_error_is_failure(self):
        """Indentation errors come back as failed results with the line."""
        result = ExtractionService().extract_document(text="    iex> 1\n   1\n")

        assert result.success is False
        assert result.error.code == ErrorCode.INDENTATION_MISMATCH
        assert result.error.details == {"line": 2}
        assert result.error.message.startswith("<text>:2:")

    def test_unknown_prompt_is_failure(self):
        result = ExtractionService().extract_document(text="iex(1 oops\n")

        assert result.error.code == ErrorCode.UNKNOWN_PROMPT_FORMAT

    def test_multiple_exceptions_is_failure(self):
        text = (
            "iex> raise ValueError('a')\n"
            "** (ValueError) a\n"
            "iex> raise ValueError('b')\n"
            "** (ValueError) b\n"
        )
        result = ExtractionService().extract_document(text=text)

        assert result.error.code == ErrorCode.MULTIPLE_EXCEPTIONS

    def test_loader_failure_is_passed_through(self):
        result = ExtractionService().extract_document()

        assert result.error.code == ErrorCode.MISSING_INPUT

    def test_with_custom_loader(self):
        """Test dependency injection of the loader."""
        mock_loader = Mock()
        mock_loader.load.return_value = ServiceResult.ok(
            LoadedDoc(content="iex> 2\n2\n", name="mocked.md")
        )

        result = ExtractionService(doc_loader=mock_loader).extract_document(file_path="x.md")

        mock_loader.load.assert_called_once_with(text=None, file_path="x.md")
        assert result.data.source_name == "mocked.md"
        assert result.data.doctests[0].name == "mocked.md (1)"

    def test_extract_units(self):
        result = ExtractionService().extract_units("MyMath", ADD_UNITS)

        assert result.success is True
        assert [t.name for t in result.data.doctests] == [
            "module MyMath (1)",
            "MyMath.add/2 (2)",
        ]

    def test_extract_units_with_selection(self):
        result = ExtractionService().extract_units(
            "MyMath", ADD_UNITS, only=["add/2", "moduledoc"], exclude=["moduledoc"]
        )

        assert [t.name for t in result.data.doctests] == ["MyMath.add/2 (1)"]

    def test_extract_units_undefined_selector(self):
        result = ExtractionService().extract_units("MyMath", ADD_UNITS, only=["mul/2"])

        assert result.error.code == ErrorCode.UNDEFINED_SELECTOR
        assert "MyMath.mul/2" in result.error.message

    def test_extract_units_invalid_identifier(self):
        units = [{"identifier": "add", "line": 1, "text": ""}]
        result = ExtractionService().extract_units("MyMath", units)

        assert result.error.code == ErrorCode.VALIDATION_ERROR

    def test_extract_units_missing_text(self):
        result = ExtractionService().extract_units("MyMath", [{"identifier": "moduledoc"}])

        assert result.error.code == ErrorCode.VALIDATION_ERROR

    def test_extract_units_non_object_entry(self):
        result = ExtractionService().extract_units("MyMath", ["x"])

        assert result.error.code == ErrorCode.VALIDATION_ERROR
        assert "each unit must be an object, got str" in result.error.message

    def test_extract_units_keeps_file(self):
        result = ExtractionService().extract_units("MyMath", ADD_UNITS, file="lib/my_math.ex")

        assert result.data.source_name == "MyMath"
        assert result.data.file == "lib/my_math.ex"

    def test_extract_units_requires_module(self):
        result = ExtractionService().extract_units("", ADD_UNITS)

        assert result.error.code == ErrorCode.MISSING_INPUT

    def test_classify(self):
        result = ExtractionService().classify("#MapSet<[]>")

        assert result.success is True
        assert result.data.kind == "inspect"

    def test_classify_requires_expected(self):
        result = ExtractionService().classify(None)

        assert result.error.code == ErrorCode.MISSING_INPUT



# =============================================================================
# EvaluationService Tests
# =============================================================================

class TestEvaluationService:
    """Tests for EvaluationService (each doctest runs in a child process)."""

    @pytest.mark.asyncio
    async def test_run_sample_document(self):
        """Every example in the sample document passes."""
        result = await EvaluationService().run_document(file_path=str(SAMPLE_DOC))

        assert result.success is True
        report = result.data
        assert report.passed == 6
        assert report.failed == 0
        assert report.success is True

    @pytest.mark.asyncio
    async def test_failure_is_reported(self):
        text = "iex> 1 + 1\n2\n\niex> 1 + 1\n3\n"
        report = (await EvaluationService().run_document(text=text)).data

        assert report.passed == 1
        assert report.failed == 1

        failed = report.outcomes[1]
        assert failed.name == "<text> (2)"
        assert failed.line == 4
        assert "Doctest failed" in failed.message
        assert failed.error_code is None

    @pytest.mark.asyncio
    async def test_unexpected_exception(self):
        """An example that raises without an exception expectation fails."""
        report = (await EvaluationService().run_document(text="iex> 1 / 0\n1\n")).data

        outcome = report.outcomes[0]
        assert outcome.passed is False
        assert outcome.message.startswith("Doctest raised ZeroDivisionError")

    @pytest.mark.asyncio
    async def test_groups_do_not_share_names(self):
        """Each doctest runs with a fresh namespace."""
        text = "iex> a = 1\n1\n\niex> a\n1\n"
        report = (await EvaluationService().run_document(text=text)).data

        assert [o.passed for o in report.outcomes] == [True, False]
        assert "NameError" in report.outcomes[1].message

    @pytest.mark.asyncio
    async def test_endless_example_times_out(self):
        """A doctest that never finishes is stopped; the next one still runs."""
        text = "iex> while True: pass\n\niex> 1 + 1\n2\n"
        report = (await EvaluationService(timeout=2).run_document(text=text)).data

        timed_out, passed = report.outcomes
        assert timed_out.passed is False
        assert timed_out.error_code == ErrorCode.TIMEOUT_ERROR
        assert timed_out.message == "Doctest timed out (2s limit)"
        assert timed_out.line == 1
        assert passed.passed is True
        assert report.to_dict()["results"][0]["error_code"] == "timeout_error"

    @pytest.mark.asyncio
    async def test_process_exit_is_execution_error(self):
        report = (await EvaluationService().run_document(
            text="iex> import os; os._exit(3)\n"
        )).data

        outcome = report.outcomes[0]
        assert outcome.passed is False
        assert outcome.error_code == ErrorCode.EXECUTION_ERROR
        assert "exited with code 3" in outcome.message

    @pytest.mark.asyncio
    async def test_printed_output_is_ignored(self):
        report = (await EvaluationService().run_document(text="iex> print('noise')\n")).data

        assert report.outcomes[0].passed is True

    @pytest.mark.asyncio
    async def test_run_units(self):
        result = await EvaluationService().run_units("MyMath", ADD_UNITS, exclude=["moduledoc"])

        assert result.success is True
        assert result.data.to_dict()["results"] == [
            {
                "name": "MyMath.add/2 (1)",
                "line": 11,
                "passed": True,
                "message": None,
                "error_code": None,
            }
        ]

    @pytest.mark.asyncio
    async def test_run_units_compiles_with_source_file(self):
        """Examples of units are compiled under the given file name."""
        units = [{
            "identifier": "where/0",
            "line": 3,
            "text": (
                "    iex> import sys\n"
                "    ...> sys._getframe().f_code.co_filename\n"
                "    'lib/my_math.ex'\n"
            ),
        }]
        result = await EvaluationService().run_units("MyMath", units, file="lib/my_math.ex")

        assert result.data.outcomes[0].passed is True

    @pytest.mark.asyncio
    async def test_extraction_failure_is_passed_through(self):
        result = await EvaluationService().run_document(text="    iex> 1\n  1\n")

        assert result.success is False
        assert result.error.code == ErrorCode.INDENTATION_MISMATCH


# =============================================================================
# Factory Tests
# =============================================================================

class TestFactories:
    """Tests for the convenience factories."""

    def test_create_extraction_service(self):
        assert isinstance(create_extraction_service(), ExtractionService)

    @pytest.mark.asyncio
    async def test_create_evaluation_service_with_injection(self):
        extraction = Mock()
        extraction.extract_document.return_value = ServiceResult.fail(
            ErrorCode.FILE_NOT_FOUND, "missing"
        )

        service = create_evaluation_service(extraction_service=extraction)
        result = await service.run_document(file_path="missing.md")

        assert result.error.code == ErrorCode.FILE_NOT_FOUND
