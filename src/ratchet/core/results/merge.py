"""Resolve git merge conflicts in a results document.

Both sides of a conflict are parsed as complete results documents and merged
entry by entry.
"""
from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from ratchet.core.constants import CONFLICT_BASE, CONFLICT_END, CONFLICT_SEPARATOR, CONFLICT_START
from ratchet.core.errors import MergeError, ResultsFileError
from ratchet.core.results.io import ResultsDocument, parse_results, write_results
from ratchet.core.results.models import ResultSnapshot

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class MergeOptions:
    contents: list[str]
    cwd: Path
    results_path: Path


def split_conflict(text: str) -> tuple[str, str]:
    """Split conflicted text into (ours, theirs).

    Lines outside conflict blocks belong to both sides. A diff3 base section
    is dropped.
    """
    ours: list[str] = []
    theirs: list[str] = []
    state = "both"
    for number, line in enumerate(text.splitlines(keepends=True), start=1):
        if line.startswith(CONFLICT_START):
            if state != "both":
                raise MergeError(f"Nested conflict marker at line {number}", details={"line": number})
            state = "ours"
        elif line.startswith(CONFLICT_BASE) and state == "ours":
            state = "base"
        elif line.startswith(CONFLICT_SEPARATOR) and state in ("ours", "base"):
            state = "theirs"
        elif line.startswith(CONFLICT_END) and state == "theirs":
            state = "both"
        elif line.startswith((CONFLICT_BASE, CONFLICT_SEPARATOR, CONFLICT_END)) and state != "both":
            raise MergeError(f"Unexpected conflict marker at line {number}", details={"line": number})
        elif state == "both":
            ours.append(line)
            theirs.append(line)
        elif state == "ours":
            ours.append(line)
        elif state == "theirs":
            theirs.append(line)
    if state != "both":
        raise MergeError("Unterminated conflict block in results document")
    return "".join(ours), "".join(theirs)


def merge_documents(ours: ResultsDocument, theirs: ResultsDocument) -> ResultsDocument:
    """Union of both documents. Where a test file exists on both sides, ours wins."""
    merged: ResultsDocument = {}
    for test_name in [*ours, *(name for name in theirs if name not in ours)]:
        if test_name not in theirs:
            merged[test_name] = ours[test_name]
            continue
        if test_name not in ours:
            merged[test_name] = theirs[test_name]
            continue
        ours_snapshot = ours[test_name]
        extra = [file for file in theirs[test_name] if file.absolute_path not in ours_snapshot]
        merged[test_name] = ResultSnapshot([*ours_snapshot, *extra])
    return merged


def _parse_side(text: str, cwd: Path, side: str) -> ResultsDocument:
    try:
        return parse_results(text, cwd)
    except ResultsFileError as exc:
        raise MergeError(f"Could not parse {side} results: {exc}", details={"side": side}) from exc


def merge_results(contents: Sequence[str], cwd: Path, results_path: Path) -> ResultsDocument:
    """Merge a conflicted results document and write it to `results_path`.

    `contents` may be empty (read `results_path`), a single conflicted text,
    or the two sides as separate texts.
    """
    if not results_path.is_absolute():
        results_path = cwd / results_path

    if len(contents) > 2:
        raise MergeError(f"Expected at most 2 contents to merge, got {len(contents)}")
    if len(contents) == 2:
        ours_text, theirs_text = contents
    else:
        if contents:
            conflicted = contents[0]
        elif results_path.exists():
            try:
                conflicted = results_path.read_text(encoding="utf-8")
            except UnicodeDecodeError as exc:
                raise MergeError(
                    f"Results file is not valid UTF-8: {results_path}", details={"path": str(results_path)}
                ) from exc
        else:
            raise MergeError(f"Results file not found: {results_path}", details={"path": str(results_path)})
        ours_text, theirs_text = split_conflict(conflicted)

    merged = merge_documents(_parse_side(ours_text, cwd, "ours"), _parse_side(theirs_text, cwd, "theirs"))
    write_results(results_path, merged, cwd)
    logger.info("event=results_merged path=%s tests=%d", results_path, len(merged))
    return merged


def merge(options: MergeOptions) -> ResultsDocument:
    return merge_results(options.contents, options.cwd, options.results_path)


__all__ = ["MergeOptions", "merge", "merge_documents", "merge_results", "split_conflict"]
