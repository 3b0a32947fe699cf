# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Translator configuration.

Format (JSON, version 0):
{
  "format": "jsdocx-config",
  "version": 0,
  "language": "go",                 // optional, default "python"
  "max_workers": 4,                 // optional
  "batch_size": 10,                 // optional
  "log_level": "info",              // optional: quiet | info | verbose
  "type_map": {                     // optional, per target language
    "go": { "Buffer": "[]byte", "Symbol": null }
  }
}

A null type_map value means "no equivalent": the language's fallback type is
emitted. `JSDOCX_MAX_WORKER_COUNT` overrides the default worker count.
"""

from __future__ import annotations

import json
import math
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional

from jsdocx.emit.languages import TargetLanguage
from jsdocx.log import LEVELS

WORKER_COUNT_ENV = "JSDOCX_MAX_WORKER_COUNT"
DEFAULT_BATCH_SIZE = 10


class ConfigError(ValueError):
	"""Invalid configuration file or setting."""


def default_worker_count() -> int:
	"""
	About half the cores, capped at 16; hyperthreads add little for this
	CPU-bound work.
	"""
	raw = os.environ.get(WORKER_COUNT_ENV)
	if raw:
		try:
			count = int(raw)
		except ValueError:
			raise ConfigError(f"{WORKER_COUNT_ENV} must be an integer, got '{raw}'") from None
		if count < 1:
			raise ConfigError(f"{WORKER_COUNT_ENV} must be at least 1, got {count}")
		return count
	return min(16, max(1, math.ceil((os.cpu_count() or 1) / 2)))


@dataclass(frozen=True)
class TranslateConfig:
	language: TargetLanguage = TargetLanguage.PYTHON
	max_workers: Optional[int] = None
	batch_size: int = DEFAULT_BATCH_SIZE
	log_level: str = "quiet"
	type_map: Mapping[str, Mapping[str, Optional[str]]] = field(default_factory=dict)

	def worker_count(self) -> int:
		return self.max_workers if self.max_workers is not None else default_worker_count()

	def type_map_for(self, language: "str | TargetLanguage") -> dict[str, Optional[str]]:
		return dict(self.type_map.get(TargetLanguage.parse(language).value, {}))


def _positive_int(obj: Mapping[str, Any], key: str) -> Optional[int]:
	value = obj.get(key)
	if value is None:
		return None
	if isinstance(value, bool) or not isinstance(value, int) or value < 1:
		raise ConfigError(f"config '{key}' must be a positive integer")
	return value


def config_from_dict(obj: Any) -> TranslateConfig:
	if not isinstance(obj, dict):
		raise ConfigError("config must be a JSON object")
	if obj.get("format") != "jsdocx-config" or obj.get("version") != 0:
		raise ConfigError("unsupported config format/version")

	language = TargetLanguage.PYTHON
	if obj.get("language") is not None:
		try:
			language = TargetLanguage.parse(obj["language"])
		except ValueError as exc:
			raise ConfigError(str(exc)) from None

	log_level = obj.get("log_level") or "quiet"
	if log_level not in LEVELS:
		raise ConfigError(f"config 'log_level' must be one of: {', '.join(LEVELS)}")

	type_map: dict[str, dict[str, Optional[str]]] = {}
	tm_obj = obj.get("type_map") or {}
	if not isinstance(tm_obj, dict):
		raise ConfigError("config 'type_map' must be a JSON object")
	for lang_name, mapping in tm_obj.items():
		try:
			lang = TargetLanguage.parse(lang_name)
		except ValueError as exc:
			raise ConfigError(f"config 'type_map': {exc}") from None
		if not isinstance(mapping, dict):
			raise ConfigError(f"config 'type_map.{lang_name}' must be a JSON object")
		for name, target in mapping.items():
			if target is not None and not isinstance(target, str):
				raise ConfigError(f"config 'type_map.{lang_name}.{name}' must be a string or null")
		type_map[lang.value] = dict(mapping)

	return TranslateConfig(
		language=language,
		max_workers=_positive_int(obj, "max_workers"),
		batch_size=_positive_int(obj, "batch_size") or DEFAULT_BATCH_SIZE,
		log_level=log_level,
		type_map=type_map,
	)


def load_config_json(path: Path) -> TranslateConfig:
	"""Load and validate a config file; raises ConfigError."""
	try:
		obj = json.loads(Path(path).read_text(encoding="utf-8"))
	except OSError as exc:
		raise ConfigError(f"cannot read config '{path}': {exc.strerror or exc}") from exc
	except json.JSONDecodeError as exc:
		raise ConfigError(f"config '{path}' is not valid JSON: {exc.msg} (line {exc.lineno})") from exc
	return config_from_dict(obj)


__all__ = [
	"ConfigError",
	"DEFAULT_BATCH_SIZE",
	"TranslateConfig",
	"WORKER_COUNT_ENV",
	"config_from_dict",
	"default_worker_count",
	"load_config_json",
]
