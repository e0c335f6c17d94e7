from __future__ import annotations

import json
from pathlib import Path

import pytest

from ratchet.core.errors import MergeError
from ratchet.core.results.io import read_results
from ratchet.core.results.merge import MergeOptions, merge, merge_documents, merge_results, split_conflict
from ratchet.core.results.models import FileSnapshot, ResultSnapshot


def _results_text(tests: dict[str, dict[str, str]]) -> str:
    payload = {
        "schema_version": "1",
        "tests": {
            name: {"files": {path: {"hash": file_hash, "issues": []} for path, file_hash in files.items()}}
            for name, files in tests.items()
        },
    }
    return json.dumps(payload, indent=2) + "\n"


def test_split_conflict_separates_sides() -> None:
    text = "shared\n<<<<<<< HEAD\nmine\n=======\nyours\n>>>>>>> branch\ntail\n"

    ours, theirs = split_conflict(text)

    assert ours == "shared\nmine\ntail\n"
    assert theirs == "shared\nyours\ntail\n"


def test_split_conflict_drops_diff3_base() -> None:
    text = "<<<<<<< ours\nmine\n||||||| base\noriginal\n=======\nyours\n>>>>>>> theirs\n"

    assert split_conflict(text) == ("mine\n", "yours\n")


def test_split_conflict_without_markers_returns_text_twice() -> None:
    assert split_conflict("plain\n") == ("plain\n", "plain\n")


@pytest.mark.parametrize(
    "text",
    [
        "<<<<<<< ours\nmine\n=======\nyours\n",
        "<<<<<<< ours\n<<<<<<< again\n",
        "<<<<<<< ours\nmine\n>>>>>>> theirs\n",
    ],
)
def test_split_conflict_rejects_malformed_blocks(text: str) -> None:
    with pytest.raises(MergeError):
        split_conflict(text)


def test_merge_documents_prefers_ours_and_keeps_both_sides() -> None:
    ours = {
        "lint": ResultSnapshot([FileSnapshot("/a.py", "OURS"), FileSnapshot("/b.py", "B")]),
        "types": ResultSnapshot([FileSnapshot("/t.py", "T")]),
    }
    theirs = {
        "lint": ResultSnapshot([FileSnapshot("/a.py", "THEIRS"), FileSnapshot("/c.py", "C")]),
        "tests": ResultSnapshot([FileSnapshot("/x.py", "X")]),
    }

    merged = merge_documents(ours, theirs)

    assert list(merged) == ["lint", "types", "tests"]
    lint = merged["lint"]
    assert lint.paths == ["/a.py", "/b.py", "/c.py"]
    assert lint.get_file("/a.py") == FileSnapshot("/a.py", "OURS")


def test_merge_results_resolves_conflicted_file(tmp_path: Path) -> None:
    ours = _results_text({"lint": {"a.py": "H1"}})
    theirs = _results_text({"lint": {"b.py": "H2"}})
    results_path = tmp_path / ".ratchet.results.json"
    results_path.write_text(f"<<<<<<< HEAD\n{ours}=======\n{theirs}>>>>>>> feature\n", encoding="utf-8")

    merged = merge_results([], tmp_path, results_path)

    assert sorted(merged["lint"].paths) == sorted([str(tmp_path / "a.py"), str(tmp_path / "b.py")])
    assert read_results(results_path, tmp_path) == merged


def test_merge_results_accepts_both_sides_as_contents(tmp_path: Path) -> None:
    ours = _results_text({"lint": {"a.py": "H1"}})
    theirs = _results_text({"types": {"b.py": "H2"}})

    merged = merge(MergeOptions(contents=[ours, theirs], cwd=tmp_path, results_path=Path("results.json")))

    assert list(merged) == ["lint", "types"]
    assert (tmp_path / "results.json").exists()


def test_merge_results_rejects_unparseable_side(tmp_path: Path) -> None:
    with pytest.raises(MergeError, match="Could not parse theirs results"):
        merge_results([_results_text({}), "{broken"], tmp_path, tmp_path / "results.json")


def test_merge_results_rejects_too_many_contents(tmp_path: Path) -> None:
    with pytest.raises(MergeError, match="at most 2"):
        merge_results(["a", "b", "c"], tmp_path, tmp_path / "results.json")


def test_merge_results_requires_existing_file(tmp_path: Path) -> None:
    with pytest.raises(MergeError, match="Results file not found"):
        merge_results([], tmp_path, tmp_path / "missing.json")


def test_merge_results_rejects_undecodable_file(tmp_path: Path) -> None:
    results_path = tmp_path / "results.json"
    results_path.write_bytes(b"<<<<<<< HEAD\n\xff\xfe\n=======\n{}\n>>>>>>> x\n")

    with pytest.raises(MergeError, match="not valid UTF-8"):
        merge_results([], tmp_path, results_path)
