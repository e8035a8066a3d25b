"""Evaluator - the runtime contract each classified example must satisfy."""

from .comparator import (
    DoctestFailure,
    SourceEvaluator,
    check_inspect,
    check_raises,
    check_value,
    compile_failure,
    exception_matches,
    run_group,
    run_pair,
)
from .executor import (
    GroupRun,
    group_from_payload,
    group_to_payload,
    run_in_subprocess,
)
from .python_evaluator import PythonEvaluator

__all__ = [
    "DoctestFailure",
    "SourceEvaluator",
    "PythonEvaluator",
    "check_value",
    "check_inspect",
    "check_raises",
    "compile_failure",
    "exception_matches",
    "run_pair",
    "run_group",
    # Child-process execution
    "GroupRun",
    "run_in_subprocess",
    "group_to_payload",
    "group_from_payload",
]
