from __future__ import annotations

from pathlib import Path

# Results document format version.
RESULTS_SCHEMA_VERSION = "1"

CONFIG_FILE = Path(".ratchet.yaml")
DEFAULT_RESULTS_PATH = Path(".ratchet.results.json")
DEFAULT_CONTEXT_LINES = 2

RESULTS_PATH_ENV = "RATCHET_RESULTS"

# Git conflict markers, as written by `git merge`.
CONFLICT_START = "<<<<<<<"
CONFLICT_BASE = "|||||||"
CONFLICT_SEPARATOR = "======="
CONFLICT_END = ">>>>>>>"

EXIT_SUCCESS = 0
EXIT_REGRESSION = 1
EXIT_INTERNAL_ERROR = 2
