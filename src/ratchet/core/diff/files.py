from __future__ import annotations

from ratchet.core.diff.models import FileMatch
from ratchet.core.errors import DiffInvariantError
from ratchet.core.results.models import FileSnapshot, ResultSnapshot


def _take_first_with_hash(pool: list[FileSnapshot], file_hash: str) -> FileSnapshot | None:
    for index, candidate in enumerate(pool):
        if candidate.hash == file_hash:
            return pool.pop(index)
    return None


def match_files(expected: ResultSnapshot, result: ResultSnapshot) -> FileMatch:
    """Resolve file identity between two snapshots.

    A file missing at its old path is treated as moved when a file that is
    new at its path has the same content hash. When several new files share
    that hash, the first one encountered is the move target and the rest stay
    new files.
    """
    match = FileMatch()
    new_or_moved: list[FileSnapshot] = []
    for result_file in result:
        expected_file = expected.get_file(result_file.absolute_path)
        if expected_file is None:
            new_or_moved.append(result_file)
        elif expected_file.hash == result_file.hash:
            match.unchanged.append(result_file)
        else:
            match.changed.append(result_file)

    fixed_or_moved = [file for file in expected if file.absolute_path not in result]

    for expected_file in fixed_or_moved:
        moved = _take_first_with_hash(new_or_moved, expected_file.hash)
        if moved is None:
            match.fixed.append(expected_file)
            continue
        match.moved.append((moved, expected_file))

    match.new = new_or_moved
    return match


def matched_pairs(
    expected: ResultSnapshot,
    match: FileMatch,
) -> list[tuple[FileSnapshot, FileSnapshot]]:
    """(result file, expected file) pairs that need issue-level diffing."""
    pairs: list[tuple[FileSnapshot, FileSnapshot]] = []
    for result_file in [*match.unchanged, *match.changed]:
        expected_file = expected.get_file(result_file.absolute_path)
        if expected_file is None:
            raise DiffInvariantError(f"Matched file missing from expected snapshot: {result_file.absolute_path}")
        pairs.append((result_file, expected_file))
    pairs.extend(match.moved)
    return pairs


__all__ = ["match_files", "matched_pairs"]
