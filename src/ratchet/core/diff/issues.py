from __future__ import annotations

from collections.abc import Sequence

from ratchet.core.diff.models import IssueDiff
from ratchet.core.errors import DiffInvariantError
from ratchet.core.results.models import Issue


def _distance(origin: Issue, candidate: Issue) -> tuple[int, int]:
    return (abs(origin.line - candidate.line), abs(origin.column - candidate.column))


def _nearest(origin: Issue, candidates: list[int], pool: list[Issue]) -> int:
    """Index into `pool` of the candidate closest to `origin`.

    Closer line wins, then closer column. Ties keep the earlier candidate.
    """
    best: int | None = None
    best_distance: tuple[int, int] | None = None
    for index in candidates:
        distance = _distance(origin, pool[index])
        if best_distance is None or distance < best_distance:
            best = index
            best_distance = distance
    if best is None:
        raise DiffInvariantError(f"No move candidate found for issue with hash {origin.hash!r}")
    return best


def diff_issues(expected_issues: Sequence[Issue], result_issues: Sequence[Issue]) -> IssueDiff:
    """Classify the issues of one matched file pair.

    Issues at the same (line, column, length, hash) are unchanged. Remaining
    expected issues are matched to remaining result issues with the same hash
    as moves, nearest position first. Whatever is left over is fixed (expected
    side) or new (result side).
    """
    issue_diff = IssueDiff()

    new_or_moved: list[Issue] = list(result_issues)
    fixed_or_moved: list[Issue] = []
    for expected_issue in expected_issues:
        for index, result_issue in enumerate(new_or_moved):
            if result_issue.key == expected_issue.key:
                del new_or_moved[index]
                issue_diff.unchanged.append(expected_issue)
                break
        else:
            fixed_or_moved.append(expected_issue)

    for expected_issue in fixed_or_moved:
        candidates = [index for index, issue in enumerate(new_or_moved) if issue.hash == expected_issue.hash]
        if not candidates:
            issue_diff.fixed.append(expected_issue)
            continue
        best = _nearest(expected_issue, candidates, new_or_moved)
        issue_diff.moved.append(new_or_moved.pop(best))

    issue_diff.new = new_or_moved
    return issue_diff


__all__ = ["diff_issues"]
