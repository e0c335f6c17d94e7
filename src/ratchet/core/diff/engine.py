from __future__ import annotations

import logging

from ratchet.core.diff.files import match_files, matched_pairs
from ratchet.core.diff.issues import diff_issues
from ratchet.core.diff.models import CodeContext, DiffLog, FileDiff, FileTestDiff
from ratchet.core.results.models import ResultSnapshot, deserialise_issue, serialise_issue

logger = logging.getLogger(__name__)


def _issues_word(count: int) -> str:
    return "issue" if count == 1 else "issues"


def _build_logs(diff: dict[str, FileDiff], result: ResultSnapshot) -> list[DiffLog]:
    logs: list[DiffLog] = []
    for file_path, entry in diff.items():
        fixed = entry.fixed or []
        existing = entry.existing or []
        new = entry.new or []
        if fixed:
            logs.append(DiffLog("success", f'{len(fixed)} fixed {_issues_word(len(fixed))} in "{file_path}".'))
        if existing:
            logs.append(
                DiffLog("warn", f'{len(existing)} existing {_issues_word(len(existing))} in "{file_path}".')
            )
        if not new:
            continue

        logs.append(DiffLog("error", f'New {_issues_word(len(new))} in "{file_path}"!'))
        if len(new) > 1:
            logs.append(DiffLog("error", f"Showing first of {len(new):,} new issues:"))

        first = deserialise_issue(new[0])
        result_file = result.get_file(file_path)
        logs.append(
            DiffLog(
                "code",
                code=CodeContext(
                    message=first.message,
                    file_path=file_path,
                    file_text=result_file.text if result_file is not None else None,
                    line=first.line,
                    column=first.column,
                    length=first.length,
                ),
            )
        )
    return logs


def differ(expected: ResultSnapshot, result: ResultSnapshot) -> FileTestDiff:
    """Diff two snapshots of the same test.

    Only files with at least one fixed or new issue get an entry. Files whose
    issues merely moved contribute to matching but are not reported.
    """
    diff: dict[str, FileDiff] = {}
    match = match_files(expected, result)
    logger.debug(
        "event=files_matched unchanged=%d changed=%d moved=%d fixed=%d new=%d",
        len(match.unchanged),
        len(match.changed),
        len(match.moved),
        len(match.fixed),
        len(match.new),
    )

    for fixed_file in match.fixed:
        if fixed_file.issues:
            diff[fixed_file.absolute_path] = FileDiff(fixed=[serialise_issue(issue) for issue in fixed_file.issues])

    for new_file in match.new:
        if new_file.issues:
            diff[new_file.absolute_path] = FileDiff(new=[serialise_issue(issue) for issue in new_file.issues])

    for result_file, expected_file in matched_pairs(expected, match):
        issue_diff = diff_issues(expected_file.issues, result_file.issues)
        if not issue_diff.has_changes:
            continue
        diff[result_file.absolute_path] = FileDiff(
            existing=[serialise_issue(issue) for issue in issue_diff.existing],
            fixed=[serialise_issue(issue) for issue in issue_diff.fixed],
            new=[serialise_issue(issue) for issue in issue_diff.new],
        )

    return FileTestDiff(diff=diff, logs=_build_logs(diff, result))


__all__ = ["differ"]
