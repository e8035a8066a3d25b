"""
Shared constants used across the project.
"""

from typing import Final

# Interactive prompts. Numbered forms (iex(1)>) are canonicalized before scanning.
IEX_PROMPTS: Final[tuple[str, ...]] = ("iex>", "iex(")
DOT_PROMPTS: Final[tuple[str, ...]] = ("...>", "...(")
ALL_PROMPTS: Final[tuple[str, ...]] = IEX_PROMPTS + DOT_PROMPTS

# Markdown code block delimiters
FENCES: Final[tuple[str, ...]] = ("```", "~~~")

# Marker that opens an expected exception line: ** (RuntimeError) boom
EXCEPTION_MARKER: Final[str] = "** ("

# File constraints
MAX_DOC_SIZE: Final[int] = 1_000_000  # 1MB
ALLOWED_EXTENSIONS: Final[frozenset[str]] = frozenset({
    '.md', '.markdown', '.txt', '.rst'
})

# Server configuration
SERVER_NAME: Final[str] = "doctest-pipeline"
LOG_LEVEL_ENV: Final[str] = "DOCTEST_PIPELINE_LOG_LEVEL"
DEFAULT_LOG_LEVEL: Final[str] = "INFO"

# Evaluation: every doctest runs in its own child process
EVALUATION_TIMEOUT: Final[int] = 30  # seconds
EVALUATION_WORKER: Final[str] = "doctest_pipeline_mcp.core.evaluator.worker"
