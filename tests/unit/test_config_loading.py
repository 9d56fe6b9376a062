"""Tests for settings loading and validation."""

from __future__ import annotations

from pathlib import Path
import textwrap

import pytest

from hava_search.core.settings import SettingsError, load_settings


def _write_yaml(path: Path, content: str) -> None:
    path.write_text(textwrap.dedent(content).strip() + "\n", encoding="utf-8")


def test_load_settings_success(tmp_path: Path) -> None:
    config = """
    search:
      db_path: ./data/db/listings.db
      default_limit: 20
      max_limit: 50
    observability:
      log_level: DEBUG
      trace_enabled: true
      trace_file: ./logs/search_traces.jsonl
    """
    settings_path = tmp_path / "settings.yaml"
    _write_yaml(settings_path, config)

    settings = load_settings(settings_path)

    assert settings.search.db_path == "./data/db/listings.db"
    assert settings.search.default_limit == 20
    assert settings.search.max_limit == 50
    assert settings.observability.log_level == "DEBUG"
    assert settings.observability.trace_enabled is True


def test_limits_have_defaults(tmp_path: Path) -> None:
    config = """
    search:
      db_path: ./listings.db
    observability:
      log_level: INFO
      trace_enabled: false
      trace_file: ./traces.jsonl
    """
    settings_path = tmp_path / "settings.yaml"
    _write_yaml(settings_path, config)

    settings = load_settings(settings_path)

    assert (settings.search.default_limit, settings.search.max_limit) == (10, 100)


def test_repository_settings_file_loads() -> None:
    settings = load_settings(Path(__file__).parents[2] / "config" / "settings.yaml")
    assert settings.search.default_limit <= settings.search.max_limit


def test_missing_required_field_raises_error(tmp_path: Path) -> None:
    config = """
    search:
      default_limit: 10
    observability:
      log_level: INFO
      trace_enabled: false
      trace_file: ./traces.jsonl
    """
    settings_path = tmp_path / "settings.yaml"
    _write_yaml(settings_path, config)

    with pytest.raises(SettingsError, match="search.db_path"):
        load_settings(settings_path)


def test_missing_section_raises_error(tmp_path: Path) -> None:
    settings_path = tmp_path / "settings.yaml"
    _write_yaml(settings_path, "search:\n  db_path: ./listings.db\n")

    with pytest.raises(SettingsError, match="observability"):
        load_settings(settings_path)


@pytest.mark.parametrize(
    "search_block, message",
    [
        ("  db_path: x.db\n  default_limit: 0\n", "search.default_limit"),
        ("  db_path: x.db\n  default_limit: 20\n  max_limit: 5\n", "search.max_limit"),
        ("  db_path: x.db\n  default_limit: ten\n", "search.default_limit"),
        ("  db_path: ''\n", "search.db_path"),
    ],
)
def test_invalid_search_values(tmp_path: Path, search_block: str, message: str) -> None:
    settings_path = tmp_path / "settings.yaml"
    settings_path.write_text(
        "search:\n"
        + search_block
        + "observability:\n  log_level: INFO\n  trace_enabled: false\n  trace_file: t.jsonl\n",
        encoding="utf-8",
    )

    with pytest.raises(SettingsError, match=message):
        load_settings(settings_path)


def test_invalid_log_level(tmp_path: Path) -> None:
    config = """
    search:
      db_path: ./listings.db
    observability:
      log_level: LOUD
      trace_enabled: false
      trace_file: ./traces.jsonl
    """
    settings_path = tmp_path / "settings.yaml"
    _write_yaml(settings_path, config)

    with pytest.raises(SettingsError, match="observability.log_level"):
        load_settings(settings_path)


def test_missing_file_and_bad_yaml(tmp_path: Path) -> None:
    with pytest.raises(SettingsError, match="not found"):
        load_settings(tmp_path / "missing.yaml")

    bad = tmp_path / "bad.yaml"
    bad.write_text("search: [unclosed\n", encoding="utf-8")
    with pytest.raises(SettingsError, match="Invalid YAML"):
        load_settings(bad)
