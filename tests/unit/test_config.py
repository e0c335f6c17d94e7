from __future__ import annotations

from pathlib import Path

import pytest

from ratchet.core.config import load_config
from ratchet.core.constants import DEFAULT_CONTEXT_LINES, DEFAULT_RESULTS_PATH


@pytest.fixture(autouse=True)
def _clear_results_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("RATCHET_RESULTS", raising=False)


def test_defaults_without_config_file(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert config.results_path == DEFAULT_RESULTS_PATH
    assert config.context_lines == DEFAULT_CONTEXT_LINES
    assert config.resolved_results_path == tmp_path / DEFAULT_RESULTS_PATH


def test_config_file_overrides_defaults(tmp_path: Path) -> None:
    (tmp_path / ".ratchet.yaml").write_text("results_path: ci/results.json\ncontext_lines: 0\n", encoding="utf-8")

    config = load_config(tmp_path)

    assert config.resolved_results_path == tmp_path / "ci" / "results.json"
    assert config.context_lines == 0


def test_empty_config_file_uses_defaults(tmp_path: Path) -> None:
    (tmp_path / ".ratchet.yaml").write_text("", encoding="utf-8")

    assert load_config(tmp_path).results_path == DEFAULT_RESULTS_PATH


def test_environment_overrides_config_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / ".ratchet.yaml").write_text("results_path: from-file.json\n", encoding="utf-8")
    monkeypatch.setenv("RATCHET_RESULTS", "from-env.json")

    assert load_config(tmp_path).resolved_results_path == tmp_path / "from-env.json"


def test_non_mapping_config_is_rejected(tmp_path: Path) -> None:
    (tmp_path / ".ratchet.yaml").write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(ValueError, match="must be a mapping"):
        load_config(tmp_path)


def test_invalid_context_lines_is_rejected(tmp_path: Path) -> None:
    (tmp_path / ".ratchet.yaml").write_text("context_lines: -1\n", encoding="utf-8")

    with pytest.raises(ValueError, match="context_lines"):
        load_config(tmp_path)


def test_malformed_yaml_is_rejected(tmp_path: Path) -> None:
    (tmp_path / ".ratchet.yaml").write_text("results_path: [unclosed\n", encoding="utf-8")

    with pytest.raises(ValueError, match="Invalid config file"):
        load_config(tmp_path)


def test_undecodable_config_is_rejected(tmp_path: Path) -> None:
    (tmp_path / ".ratchet.yaml").write_bytes(b"results_path: \xff\xfe\n")

    with pytest.raises(ValueError, match="Invalid config file"):
        load_config(tmp_path)
