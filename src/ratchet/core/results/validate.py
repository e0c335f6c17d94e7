from __future__ import annotations

from typing import Any

from ratchet.core.constants import RESULTS_SCHEMA_VERSION
from ratchet.core.errors import ResultsFileError

SUPPORTED_RESULTS_SCHEMA_VERSIONS = {RESULTS_SCHEMA_VERSION}


def _validate_issue(raw: Any, *, test_name: str, path: str, index: int) -> list[Any]:
    where = f"test `{test_name}` file `{path}` issue {index}"
    if not isinstance(raw, list) or len(raw) != 5:
        raise ResultsFileError(f"Results {where} must be a 5 element array")
    line, column, length, message, issue_hash = raw
    for name, value in (("line", line), ("column", column), ("length", length)):
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ResultsFileError(f"Results {where} requires non-negative integer `{name}`")
    if not isinstance(message, str):
        raise ResultsFileError(f"Results {where} requires string `message`")
    if not isinstance(issue_hash, str):
        raise ResultsFileError(f"Results {where} requires string `hash`")
    return [line, column, length, message, issue_hash]


def _validate_file(raw: Any, *, test_name: str, path: str) -> dict[str, Any]:
    if not isinstance(raw, dict):
        raise ResultsFileError(f"Results test `{test_name}` file `{path}` must be an object")
    file_hash = raw.get("hash")
    if not isinstance(file_hash, str):
        raise ResultsFileError(f"Results test `{test_name}` file `{path}` requires string field `hash`")
    issues = raw.get("issues", [])
    if not isinstance(issues, list):
        raise ResultsFileError(f"Results test `{test_name}` file `{path}` field `issues` must be an array")
    return {
        "hash": file_hash,
        "issues": [
            _validate_issue(issue, test_name=test_name, path=path, index=index)
            for index, issue in enumerate(issues)
        ],
    }


def validate_results_dict(data: Any) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise ResultsFileError("Results document must be an object")

    schema_version = data.get("schema_version")
    if schema_version is None:
        raise ResultsFileError("Missing required results schema_version")
    if str(schema_version) not in SUPPORTED_RESULTS_SCHEMA_VERSIONS:
        supported = ", ".join(sorted(SUPPORTED_RESULTS_SCHEMA_VERSIONS))
        raise ResultsFileError(
            f"Unsupported results schema_version '{schema_version}'. Supported versions: {supported}."
        )

    tests = data.get("tests", {})
    if not isinstance(tests, dict):
        raise ResultsFileError("Results field `tests` must be an object")

    normalized_tests: dict[str, Any] = {}
    for test_name, test in tests.items():
        if not isinstance(test, dict):
            raise ResultsFileError(f"Results test `{test_name}` must be an object")
        files = test.get("files", {})
        if not isinstance(files, dict):
            raise ResultsFileError(f"Results test `{test_name}` field `files` must be an object")
        normalized_tests[str(test_name)] = {
            "files": {
                str(path): _validate_file(file, test_name=str(test_name), path=str(path))
                for path, file in files.items()
            }
        }

    return {"schema_version": str(schema_version), "tests": normalized_tests}


__all__ = ["SUPPORTED_RESULTS_SCHEMA_VERSIONS", "validate_results_dict"]
