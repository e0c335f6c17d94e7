from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from ratchet.core.errors import SnapshotValidationError

SerialisedIssue = tuple[int, int, int, str, str]
IssueKey = tuple[int, int, int, str]


def _require_coordinate(name: str, value: object) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise SnapshotValidationError(
            f"Issue `{name}` must be a non-negative integer, got: {value!r}",
            details={"field": name},
        )


@dataclass(slots=True, frozen=True)
class Issue:
    line: int
    column: int
    length: int
    message: str
    hash: str

    def __post_init__(self) -> None:
        _require_coordinate("line", self.line)
        _require_coordinate("column", self.column)
        _require_coordinate("length", self.length)
        if not isinstance(self.message, str):
            raise SnapshotValidationError("Issue `message` must be a string")
        if not isinstance(self.hash, str):
            raise SnapshotValidationError("Issue `hash` must be a string")

    @property
    def key(self) -> IssueKey:
        """Equality key within a single file."""
        return (self.line, self.column, self.length, self.hash)


@dataclass(slots=True, frozen=True)
class FileSnapshot:
    absolute_path: str
    hash: str
    issues: tuple[Issue, ...] = ()
    text: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.absolute_path, str) or not self.absolute_path:
            raise SnapshotValidationError("File snapshot requires a non-empty `absolute_path`")
        if not isinstance(self.hash, str):
            raise SnapshotValidationError(
                f"File snapshot `hash` must be a string: {self.absolute_path}",
                details={"path": self.absolute_path},
            )
        # Accept any iterable of issues but store a tuple.
        object.__setattr__(self, "issues", tuple(self.issues))


class ResultSnapshot:
    """All file snapshots of one run, keyed by absolute path."""

    __slots__ = ("_by_path", "_files")

    def __init__(self, files: Iterable[FileSnapshot] = ()) -> None:
        self._files: tuple[FileSnapshot, ...] = tuple(files)
        self._by_path: dict[str, FileSnapshot] = {}
        for file in self._files:
            if file.absolute_path in self._by_path:
                raise SnapshotValidationError(
                    f"Duplicate file path in snapshot: {file.absolute_path}",
                    details={"path": file.absolute_path},
                )
            self._by_path[file.absolute_path] = file

    @property
    def files(self) -> tuple[FileSnapshot, ...]:
        return self._files

    @property
    def paths(self) -> list[str]:
        return list(self._by_path)

    def get_file(self, absolute_path: str) -> FileSnapshot | None:
        return self._by_path.get(absolute_path)

    def __contains__(self, absolute_path: object) -> bool:
        return absolute_path in self._by_path

    def __iter__(self) -> Iterator[FileSnapshot]:
        return iter(self._files)

    def __len__(self) -> int:
        return len(self._files)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ResultSnapshot):
            return NotImplemented
        return self._files == other._files

    def __repr__(self) -> str:
        return f"ResultSnapshot(files={len(self._files)})"


def serialise_issue(issue: Issue) -> SerialisedIssue:
    return (issue.line, issue.column, issue.length, issue.message, issue.hash)


def deserialise_issue(raw: Iterable[object]) -> Issue:
    values = list(raw)
    if len(values) != 5:
        raise SnapshotValidationError(
            f"Serialised issue must have 5 elements (line, column, length, message, hash), got {len(values)}"
        )
    line, column, length, message, hash_ = values
    return Issue(line=line, column=column, length=length, message=message, hash=hash_)  # type: ignore[arg-type]


__all__ = [
    "FileSnapshot",
    "Issue",
    "IssueKey",
    "ResultSnapshot",
    "SerialisedIssue",
    "deserialise_issue",
    "serialise_issue",
]
