from __future__ import annotations

from typing import Any

ERROR_CODE_SNAPSHOT_INVALID = "SNAPSHOT_INVALID"
ERROR_CODE_RESULTS_FILE_INVALID = "RESULTS_FILE_INVALID"
ERROR_CODE_MERGE_FAILED = "MERGE_FAILED"


class RatchetError(Exception):
    """Expected failure with a stable error code."""

    code = "RATCHET_ERROR"

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = dict(details or {})

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class SnapshotValidationError(RatchetError, ValueError):
    code = ERROR_CODE_SNAPSHOT_INVALID


class ResultsFileError(RatchetError, ValueError):
    code = ERROR_CODE_RESULTS_FILE_INVALID


class MergeError(RatchetError):
    code = ERROR_CODE_MERGE_FAILED


class DiffInvariantError(AssertionError):
    """Raised when the differ reaches a state its matching rules forbid."""


__all__ = [
    "ERROR_CODE_MERGE_FAILED",
    "ERROR_CODE_RESULTS_FILE_INVALID",
    "ERROR_CODE_SNAPSHOT_INVALID",
    "DiffInvariantError",
    "MergeError",
    "RatchetError",
    "ResultsFileError",
    "SnapshotValidationError",
]
