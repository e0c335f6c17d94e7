from ratchet.core.diff.engine import differ
from ratchet.core.diff.files import match_files, matched_pairs
from ratchet.core.diff.issues import diff_issues
from ratchet.core.diff.models import CodeContext, DiffLog, FileDiff, FileMatch, FileTestDiff, IssueDiff

__all__ = [
    "CodeContext",
    "DiffLog",
    "FileDiff",
    "FileMatch",
    "FileTestDiff",
    "IssueDiff",
    "diff_issues",
    "differ",
    "match_files",
    "matched_pairs",
]
