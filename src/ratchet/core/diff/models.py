from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

from ratchet.core.results.models import FileSnapshot, Issue, SerialisedIssue

LogLevel = Literal["success", "warn", "error", "code"]


@dataclass(slots=True)
class FileMatch:
    unchanged: list[FileSnapshot] = field(default_factory=list)
    changed: list[FileSnapshot] = field(default_factory=list)
    # (result file, expected file) in the order moves were detected.
    moved: list[tuple[FileSnapshot, FileSnapshot]] = field(default_factory=list)
    fixed: list[FileSnapshot] = field(default_factory=list)
    new: list[FileSnapshot] = field(default_factory=list)


@dataclass(slots=True)
class IssueDiff:
    unchanged: list[Issue] = field(default_factory=list)
    moved: list[Issue] = field(default_factory=list)
    fixed: list[Issue] = field(default_factory=list)
    new: list[Issue] = field(default_factory=list)

    @property
    def existing(self) -> list[Issue]:
        return [*self.unchanged, *self.moved]

    @property
    def has_changes(self) -> bool:
        return bool(self.fixed or self.new)


@dataclass(slots=True)
class FileDiff:
    fixed: list[SerialisedIssue] | None = None
    new: list[SerialisedIssue] | None = None
    existing: list[SerialisedIssue] | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        if self.fixed is not None:
            payload["fixed"] = [list(issue) for issue in self.fixed]
        if self.new is not None:
            payload["new"] = [list(issue) for issue in self.new]
        if self.existing is not None:
            payload["existing"] = [list(issue) for issue in self.existing]
        return payload


@dataclass(slots=True, frozen=True)
class CodeContext:
    message: str
    file_path: str
    file_text: str | None
    line: int
    column: int
    length: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "file_path": self.file_path,
            "line": self.line,
            "column": self.column,
            "length": self.length,
        }


@dataclass(slots=True, frozen=True)
class DiffLog:
    level: LogLevel
    message: str | None = None
    code: CodeContext | None = None

    def to_dict(self) -> dict[str, Any]:
        if self.code is not None:
            return {"level": self.level, "code": self.code.to_dict()}
        return {"level": self.level, "message": self.message}


@dataclass(slots=True)
class FileTestDiff:
    diff: dict[str, FileDiff]
    logs: list[DiffLog]

    @property
    def summary(self) -> dict[str, Any]:
        fixed = sum(len(entry.fixed or []) for entry in self.diff.values())
        new = sum(len(entry.new or []) for entry in self.diff.values())
        existing = sum(len(entry.existing or []) for entry in self.diff.values())
        return {
            "regression": new > 0,
            "files": len(self.diff),
            "fixed": fixed,
            "new": new,
            "existing": existing,
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "summary": self.summary,
            "diff": {path: entry.to_dict() for path, entry in self.diff.items()},
            "logs": [log.to_dict() for log in self.logs],
        }


__all__ = [
    "CodeContext",
    "DiffLog",
    "FileDiff",
    "FileMatch",
    "FileTestDiff",
    "IssueDiff",
    "LogLevel",
]
