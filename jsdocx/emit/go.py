# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Go backend: `func name(a T, b U) R`."""

from __future__ import annotations

import re
from typing import Optional, Sequence

from .languages import HeaderParam, LanguageBackend, RenderedParam, TargetLanguage
from .policy import NameMappingPolicy

# No entry may contain parentheses or braces: rendered headers are
# recognised again with `[^()]*` parameter lists and a `{` body opener.
POLICY = NameMappingPolicy(
	language="go",
	builtins={
		"string": "string",
		"String": "string",
		"number": "float64",
		"Number": "float64",
		"boolean": "bool",
		"Boolean": "bool",
		"bigint": "*big.Int",
		"any": "any",
		"unknown": "any",
		"object": "any",
		"Object": "any",
		"void": None,
		"undefined": None,
		"null": None,
		"never": None,
		"symbol": None,
		"Date": "time.Time",
		"Error": "error",
		"Function": None,
		"RegExp": "*regexp.Regexp",
		"Promise": None,
		"Array": "[]any",
		"Map": "map[string]any",
		"Set": None,
		"Uint8Array": "[]byte",
	},
	fallback_type="any",
	array_template="[]{0}",
	union_template=None,
)


class GoBackend(LanguageBackend):
	language = TargetLanguage.GO
	version = "1"
	extension = ".go"
	header_re = re.compile(r"(?<![\w$.])func\s+(?P<name>[A-Za-z_$][\w$]*)\s*\(")
	header_tail_re = re.compile(r"(?:[ \t]+(?P<ret>[^\s{(][^{\n]*?))?(?=\s*(?:\{|$))", re.M)

	def split_rendered_param(self, raw: str) -> HeaderParam:
		return HeaderParam(name=raw.split()[0])

	def render_param(self, param: RenderedParam) -> str:
		# Go has no default arguments.
		return f"{param.name} {param.type_text or self.policy.fallback_type}"

	def render_header(self, name: str, params: Sequence[str], return_type: Optional[str], *, is_async: bool = False) -> str:
		ret = f" {return_type}" if return_type else ""
		return f"func {name}({', '.join(params)}){ret}"


BACKEND = GoBackend(POLICY)

__all__ = ["BACKEND", "GoBackend", "POLICY"]
