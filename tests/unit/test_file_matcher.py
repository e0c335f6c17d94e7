from __future__ import annotations

import pytest

from ratchet.core.diff.files import match_files, matched_pairs
from ratchet.core.diff.models import FileMatch
from ratchet.core.errors import DiffInvariantError
from ratchet.core.results.models import FileSnapshot, Issue, ResultSnapshot


def _file(path: str, file_hash: str) -> FileSnapshot:
    return FileSnapshot(
        absolute_path=path,
        hash=file_hash,
        issues=(Issue(line=0, column=0, length=1, message="m", hash="X"),),
    )


def _paths(files: list[FileSnapshot]) -> list[str]:
    return [file.absolute_path for file in files]


def test_partitions_same_path_files_by_hash() -> None:
    expected = ResultSnapshot([_file("/a.py", "H1"), _file("/b.py", "H2")])
    result = ResultSnapshot([_file("/a.py", "H1"), _file("/b.py", "H3")])

    match = match_files(expected, result)

    assert _paths(match.unchanged) == ["/a.py"]
    assert _paths(match.changed) == ["/b.py"]
    assert match.moved == []
    assert match.fixed == []
    assert match.new == []


def test_same_content_at_new_path_is_a_move() -> None:
    expected = ResultSnapshot([_file("/old.py", "H")])
    result = ResultSnapshot([_file("/new.py", "H")])

    match = match_files(expected, result)

    assert [(moved.absolute_path, original.absolute_path) for moved, original in match.moved] == [
        ("/new.py", "/old.py")
    ]
    assert match.fixed == []
    assert match.new == []


def test_missing_file_without_twin_is_fixed_and_unknown_file_is_new() -> None:
    expected = ResultSnapshot([_file("/gone.py", "H1")])
    result = ResultSnapshot([_file("/fresh.py", "H2")])

    match = match_files(expected, result)

    assert _paths(match.fixed) == ["/gone.py"]
    assert _paths(match.new) == ["/fresh.py"]
    assert match.moved == []


def test_duplicate_content_moves_to_first_candidate_only() -> None:
    expected = ResultSnapshot([_file("/old.py", "H")])
    result = ResultSnapshot([_file("/copy1.py", "H"), _file("/copy2.py", "H")])

    match = match_files(expected, result)

    assert [moved.absolute_path for moved, _ in match.moved] == ["/copy1.py"]
    assert _paths(match.new) == ["/copy2.py"]


def test_consecutive_moves_are_all_detected() -> None:
    expected = ResultSnapshot([_file("/a.py", "HA"), _file("/b.py", "HB"), _file("/c.py", "HC")])
    result = ResultSnapshot([_file("/x.py", "HC"), _file("/y.py", "HA"), _file("/z.py", "HB")])

    match = match_files(expected, result)

    assert [(moved.absolute_path, original.absolute_path) for moved, original in match.moved] == [
        ("/y.py", "/a.py"),
        ("/z.py", "/b.py"),
        ("/x.py", "/c.py"),
    ]
    assert match.fixed == []
    assert match.new == []


def test_merged_duplicates_leave_extra_old_files_fixed() -> None:
    expected = ResultSnapshot([_file("/a.py", "H"), _file("/b.py", "H")])
    result = ResultSnapshot([_file("/merged.py", "H")])

    match = match_files(expected, result)

    assert [(moved.absolute_path, original.absolute_path) for moved, original in match.moved] == [
        ("/merged.py", "/a.py")
    ]
    assert _paths(match.fixed) == ["/b.py"]


def test_every_file_is_classified_once() -> None:
    expected = ResultSnapshot(
        [_file("/same.py", "S"), _file("/edit.py", "E1"), _file("/old.py", "M"), _file("/gone.py", "G")]
    )
    result = ResultSnapshot(
        [_file("/same.py", "S"), _file("/edit.py", "E2"), _file("/moved.py", "M"), _file("/fresh.py", "F")]
    )

    match = match_files(expected, result)

    result_side = [*match.unchanged, *match.changed, *(moved for moved, _ in match.moved), *match.new]
    expected_side = [
        *(expected.get_file(file.absolute_path) for file in [*match.unchanged, *match.changed]),
        *(original for _, original in match.moved),
        *match.fixed,
    ]
    assert sorted(_paths(result_side)) == sorted(result.paths)
    assert sorted(file.absolute_path for file in expected_side if file is not None) == sorted(expected.paths)


def test_matched_pairs_use_move_counterpart() -> None:
    expected = ResultSnapshot([_file("/a.py", "H1"), _file("/old.py", "M")])
    result = ResultSnapshot([_file("/a.py", "H2"), _file("/new.py", "M")])

    pairs = matched_pairs(expected, match_files(expected, result))

    assert [(left.absolute_path, right.absolute_path) for left, right in pairs] == [
        ("/a.py", "/a.py"),
        ("/new.py", "/old.py"),
    ]


def test_matched_pairs_rejects_inconsistent_match() -> None:
    match = FileMatch(unchanged=[_file("/nowhere.py", "H")])

    with pytest.raises(DiffInvariantError, match="/nowhere.py"):
        matched_pairs(ResultSnapshot(), match)
