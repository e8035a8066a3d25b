"""Child-process entry point that runs a single example group.

Reads a JSON payload (executor.group_to_payload) from stdin and writes the
outcome to stdout:

    {"passed": false, "line": 12, "message": "Doctest failed ..."}

Anything the examples print themselves is discarded.
"""

from __future__ import annotations

import contextlib
import io
import json
import sys

from .comparator import DoctestFailure, run_group
from .executor import group_from_payload
from .python_evaluator import PythonEvaluator


def run_payload(payload: dict) -> dict:
    """Run the group described by payload and return the outcome as a dict."""
    group, context = group_from_payload(payload)
    evaluator = PythonEvaluator(context=context)

    try:
        with contextlib.redirect_stdout(io.StringIO()):
            run_group(group, evaluator)
    except DoctestFailure as failure:
        return {"passed": False, "line": failure.line, "message": failure.report()}
    except (Exception, SystemExit) as e:
        # The example raised while no exception was expected
        return {
            "passed": False,
            "line": None,
            "message": f"Doctest raised {type(e).__name__}: {e}",
        }

    return {"passed": True, "line": None, "message": None}


def main() -> None:
    payload = json.load(sys.stdin)
    json.dump(run_payload(payload), sys.stdout)


if __name__ == "__main__":
    main()
