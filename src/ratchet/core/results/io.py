from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from ratchet.core.constants import RESULTS_SCHEMA_VERSION
from ratchet.core.errors import ResultsFileError
from ratchet.core.results.models import FileSnapshot, ResultSnapshot, deserialise_issue, serialise_issue
from ratchet.core.results.validate import validate_results_dict

# Test name -> snapshot of that test's issues.
ResultsDocument = dict[str, ResultSnapshot]


def _absolute_path(stored: str, cwd: Path) -> str:
    if Path(stored).is_absolute():
        return stored
    return os.path.normpath(os.path.join(str(cwd), stored))


def _stored_path(absolute_path: str, cwd: Path) -> str:
    try:
        return Path(absolute_path).relative_to(cwd).as_posix()
    except ValueError:
        return absolute_path


def results_from_dict(data: dict[str, Any], cwd: Path) -> ResultsDocument:
    validated = validate_results_dict(data)
    results: ResultsDocument = {}
    for test_name, test in validated["tests"].items():
        files = [
            FileSnapshot(
                absolute_path=_absolute_path(path, cwd),
                hash=file["hash"],
                issues=tuple(deserialise_issue(issue) for issue in file["issues"]),
            )
            for path, file in test["files"].items()
        ]
        try:
            results[test_name] = ResultSnapshot(files)
        except ValueError as exc:
            raise ResultsFileError(f"Results test `{test_name}` is invalid: {exc}") from exc
    return results


def results_to_dict(results: ResultsDocument, cwd: Path) -> dict[str, Any]:
    tests: dict[str, Any] = {}
    for test_name in sorted(results):
        snapshot = results[test_name]
        files: dict[str, Any] = {}
        for file in sorted(snapshot, key=lambda value: _stored_path(value.absolute_path, cwd)):
            files[_stored_path(file.absolute_path, cwd)] = {
                "hash": file.hash,
                "issues": [list(serialise_issue(issue)) for issue in file.issues],
            }
        tests[test_name] = {"files": files}
    return validate_results_dict({"schema_version": RESULTS_SCHEMA_VERSION, "tests": tests})


def parse_results(text: str, cwd: Path) -> ResultsDocument:
    if not text.strip():
        return {}
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ResultsFileError(f"Results document is not valid JSON: {exc}") from exc
    return results_from_dict(raw, cwd)


def dump_results(results: ResultsDocument, cwd: Path) -> str:
    return json.dumps(results_to_dict(results, cwd), indent=2, ensure_ascii=False) + "\n"


def read_results(path: Path, cwd: Path) -> ResultsDocument:
    if not path.exists():
        return {}
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ResultsFileError(f"Results file is not valid UTF-8: {path}", details={"path": str(path)}) from exc
    return parse_results(text, cwd)


def write_results(path: Path, results: ResultsDocument, cwd: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_results(results, cwd), encoding="utf-8")


__all__ = [
    "ResultsDocument",
    "dump_results",
    "parse_results",
    "read_results",
    "results_from_dict",
    "results_to_dict",
    "write_results",
]
