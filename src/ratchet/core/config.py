from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from ratchet.core.constants import CONFIG_FILE, DEFAULT_CONTEXT_LINES, DEFAULT_RESULTS_PATH, RESULTS_PATH_ENV

logger = logging.getLogger(__name__)

_KNOWN_KEYS = {"results_path", "context_lines"}


@dataclass(slots=True)
class RatchetConfig:
    project_root: Path
    results_path: Path = DEFAULT_RESULTS_PATH
    context_lines: int = DEFAULT_CONTEXT_LINES

    @property
    def resolved_results_path(self) -> Path:
        if self.results_path.is_absolute():
            return self.results_path
        return self.project_root / self.results_path


def _load_yaml(path: Path) -> dict[str, Any]:
    try:
        loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
        raise ValueError(f"Invalid config file {path}: {exc}") from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ValueError(f"Config file must be a mapping: {path}")
    return loaded


def load_config(project_root: Path) -> RatchetConfig:
    config = RatchetConfig(project_root=project_root)
    config_path = project_root / CONFIG_FILE
    if config_path.exists():
        data = _load_yaml(config_path)
        unknown = sorted(set(data) - _KNOWN_KEYS)
        if unknown:
            logger.warning("event=config_unknown_keys path=%s keys=%s", config_path, ",".join(unknown))

        results_path = data.get("results_path")
        if results_path is not None:
            if not isinstance(results_path, str) or not results_path.strip():
                raise ValueError("`results_path` must be a non-empty string")
            config.results_path = Path(results_path)

        context_lines = data.get("context_lines")
        if context_lines is not None:
            if isinstance(context_lines, bool) or not isinstance(context_lines, int) or context_lines < 0:
                raise ValueError("`context_lines` must be a non-negative integer")
            config.context_lines = context_lines

    env_results = os.getenv(RESULTS_PATH_ENV)
    if env_results:
        config.results_path = Path(env_results)
    return config


__all__ = ["RatchetConfig", "load_config"]
