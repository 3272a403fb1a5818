from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from chartseries.config import DEFAULT_COLOR, AppConfig, load_config


def test_load_config_reads_sections(tmp_path: Path) -> None:
    config_data = {
        "series": {"kind": "bar", "malformed_policy": "warn"},
        "style": {"label": "Sales", "line_type": "stepped"},
        "statistics": {"anomaly_threshold": 1.5},
    }
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.safe_dump(config_data), encoding="utf-8")

    cfg = load_config(config_path)

    assert cfg.series.kind == "bar"
    assert cfg.series.malformed_policy == "warn"
    assert cfg.series.window_mode == "sliding"
    assert cfg.style.label == "Sales"
    assert cfg.style.line_type == "stepped"
    assert cfg.style.color == DEFAULT_COLOR
    assert cfg.statistics.anomaly_threshold == 1.5


def test_load_config_empty_file_uses_defaults(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text("", encoding="utf-8")

    cfg = load_config(config_path)

    assert cfg == AppConfig()
    assert cfg.series.maximum_time_entries == 200


def test_load_config_env_overrides_log_level(monkeypatch, tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.safe_dump({"logging": {"level": "INFO"}}), encoding="utf-8")
    monkeypatch.setenv("CHARTSERIES_LOG_LEVEL", "DEBUG")

    assert load_config(config_path).logging.level == "DEBUG"


def test_load_config_rejects_unknown_sections_and_bad_values(tmp_path: Path) -> None:
    unknown = tmp_path / "unknown.yaml"
    unknown.write_text(yaml.safe_dump({"renderer": {}}), encoding="utf-8")
    with pytest.raises(ValidationError):
        load_config(unknown)

    bad = tmp_path / "bad.yaml"
    bad.write_text(yaml.safe_dump({"series": {"maximum_time_entries": 0}}), encoding="utf-8")
    with pytest.raises(ValidationError):
        load_config(bad)


def test_style_is_frozen() -> None:
    cfg = AppConfig()
    with pytest.raises(ValidationError):
        cfg.style.label = "changed"


def test_repository_default_config_is_valid() -> None:
    path = Path(__file__).resolve().parents[1] / "configs" / "default.yaml"
    cfg = load_config(path)
    assert cfg.series.kind == "line"


def test_load_config_without_path_validates_defaults() -> None:
    cfg = load_config(None)

    assert cfg == AppConfig()
    assert cfg.series.maximum_bar_slots == 100_000


def test_load_config_rejects_unknown_log_level(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.safe_dump({"logging": {"level": "verbose"}}), encoding="utf-8")

    with pytest.raises(ValidationError):
        load_config(config_path)
