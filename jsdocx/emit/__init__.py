# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Target emitter and per-language backends.

`get_backend` is the single lookup point used by the driver: it returns the
backend for a target language, optionally with user-configured type
mappings layered over the builtin policy.
"""

from __future__ import annotations

from typing import Mapping, Optional

from . import csharp, go, java, python
from .emitter import emit_type, translate_type_expr
from .languages import (
	HeaderParam,
	LanguageBackend,
	RenderedParam,
	TargetLanguage,
	find_closing_paren,
	split_params,
	string_end,
)
from .policy import NameMappingPolicy

BACKENDS: dict[TargetLanguage, LanguageBackend] = {
	TargetLanguage.PYTHON: python.BACKEND,
	TargetLanguage.GO: go.BACKEND,
	TargetLanguage.JAVA: java.BACKEND,
	TargetLanguage.CSHARP: csharp.BACKEND,
}


def get_backend(
	language: "str | TargetLanguage",
	type_map: Mapping[str, Optional[str]] | None = None,
) -> LanguageBackend:
	"""Backend for `language`; raises ValueError for unknown languages."""
	backend = BACKENDS[TargetLanguage.parse(language)]
	if not type_map:
		return backend
	return backend.with_policy(backend.policy.with_overrides(type_map))


__all__ = [
	"BACKENDS",
	"HeaderParam",
	"LanguageBackend",
	"NameMappingPolicy",
	"RenderedParam",
	"TargetLanguage",
	"emit_type",
	"find_closing_paren",
	"get_backend",
	"split_params",
	"string_end",
	"translate_type_expr",
]
