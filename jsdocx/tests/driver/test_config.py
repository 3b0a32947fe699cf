# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import json
from pathlib import Path

import pytest

from jsdocx.config import (
	WORKER_COUNT_ENV,
	ConfigError,
	TranslateConfig,
	config_from_dict,
	default_worker_count,
	load_config_json,
)
from jsdocx.emit.languages import TargetLanguage


def _write(tmp_path: Path, obj) -> Path:
	path = tmp_path / "jsdocx.json"
	path.write_text(json.dumps(obj), encoding="utf-8")
	return path


def test_load_full_config(tmp_path: Path):
	path = _write(
		tmp_path,
		{
			"format": "jsdocx-config",
			"version": 0,
			"language": "go",
			"max_workers": 3,
			"batch_size": 4,
			"log_level": "info",
			"type_map": {"go": {"Buffer": "[]byte", "Symbol": None}},
		},
	)
	config = load_config_json(path)
	assert config.language is TargetLanguage.GO
	assert config.worker_count() == 3
	assert config.batch_size == 4
	assert config.log_level == "info"
	assert config.type_map_for("go") == {"Buffer": "[]byte", "Symbol": None}
	assert config.type_map_for(TargetLanguage.JAVA) == {}


def test_defaults():
	config = config_from_dict({"format": "jsdocx-config", "version": 0})
	assert config == TranslateConfig()
	assert config.language is TargetLanguage.PYTHON
	assert config.batch_size == 10


@pytest.mark.parametrize(
	"obj, fragment",
	[
		([], "JSON object"),
		({"format": "other", "version": 0}, "format/version"),
		({"format": "jsdocx-config", "version": 1}, "format/version"),
		({"format": "jsdocx-config", "version": 0, "language": "rust"}, "unknown target language"),
		({"format": "jsdocx-config", "version": 0, "max_workers": 0}, "max_workers"),
		({"format": "jsdocx-config", "version": 0, "batch_size": True}, "batch_size"),
		({"format": "jsdocx-config", "version": 0, "log_level": "loud"}, "log_level"),
		({"format": "jsdocx-config", "version": 0, "type_map": {"rust": {}}}, "type_map"),
		({"format": "jsdocx-config", "version": 0, "type_map": {"go": {"A": 1}}}, "type_map.go.A"),
	],
)
def test_invalid_configs(obj, fragment: str):
	with pytest.raises(ConfigError, match=fragment):
		config_from_dict(obj)


def test_unreadable_and_invalid_json(tmp_path: Path):
	with pytest.raises(ConfigError, match="cannot read config"):
		load_config_json(tmp_path / "missing.json")
	bad = tmp_path / "bad.json"
	bad.write_text("{not json", encoding="utf-8")
	with pytest.raises(ConfigError, match="not valid JSON"):
		load_config_json(bad)


def test_worker_count_env_override(monkeypatch: pytest.MonkeyPatch):
	monkeypatch.setenv(WORKER_COUNT_ENV, "5")
	assert default_worker_count() == 5
	assert TranslateConfig().worker_count() == 5
	assert TranslateConfig(max_workers=2).worker_count() == 2

	monkeypatch.setenv(WORKER_COUNT_ENV, "many")
	with pytest.raises(ConfigError):
		default_worker_count()


def test_default_worker_count_is_half_the_cores_capped(monkeypatch: pytest.MonkeyPatch):
	monkeypatch.delenv(WORKER_COUNT_ENV, raising=False)
	monkeypatch.setattr("os.cpu_count", lambda: 64)
	assert default_worker_count() == 16
	monkeypatch.setattr("os.cpu_count", lambda: 3)
	assert default_worker_count() == 2
	monkeypatch.setattr("os.cpu_count", lambda: None)
	assert default_worker_count() == 1
