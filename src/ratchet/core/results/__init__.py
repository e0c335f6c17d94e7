"""Snapshot models and the persisted results document."""
from ratchet.core.results.io import (
    ResultsDocument,
    dump_results,
    parse_results,
    read_results,
    write_results,
)
from ratchet.core.results.merge import MergeOptions, merge, merge_documents, merge_results, split_conflict
from ratchet.core.results.models import (
    FileSnapshot,
    Issue,
    ResultSnapshot,
    SerialisedIssue,
    deserialise_issue,
    serialise_issue,
)

__all__ = [
    "FileSnapshot",
    "Issue",
    "MergeOptions",
    "ResultSnapshot",
    "ResultsDocument",
    "SerialisedIssue",
    "deserialise_issue",
    "dump_results",
    "merge",
    "merge_documents",
    "merge_results",
    "parse_results",
    "read_results",
    "serialise_issue",
    "split_conflict",
    "write_results",
]
