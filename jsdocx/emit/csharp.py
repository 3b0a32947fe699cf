# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""C# backend: `public static R Name(T a, U b)` with PascalCase method names."""

from __future__ import annotations

from .languages import RenderedParam, StaticMethodBackend, TargetLanguage
from .policy import NameMappingPolicy

POLICY = NameMappingPolicy(
	language="csharp",
	builtins={
		"string": "string",
		"String": "string",
		"number": "double",
		"Number": "double",
		"boolean": "bool",
		"Boolean": "bool",
		"bigint": "System.Numerics.BigInteger",
		"any": "object",
		"unknown": "object",
		"object": "object",
		"Object": "object",
		"void": None,
		"undefined": None,
		"null": None,
		"never": None,
		"symbol": None,
		"Date": "System.DateTime",
		"Error": "System.Exception",
		"Function": None,
		"RegExp": "System.Text.RegularExpressions.Regex",
		"Promise": "System.Threading.Tasks.Task",
		"Array": "object[]",
		"Map": "System.Collections.Generic.IDictionary<string, object>",
		"Set": "System.Collections.Generic.ISet<object>",
		"Uint8Array": "byte[]",
	},
	fallback_type="object",
	array_template="{0}[]",
	union_template=None,
)


class CSharpBackend(StaticMethodBackend):
	language = TargetLanguage.CSHARP
	version = "1"
	extension = ".cs"

	def function_name(self, name: str) -> str:
		return name[:1].upper() + name[1:]

	def render_param(self, param: RenderedParam) -> str:
		type_text = param.type_text or self.policy.fallback_type
		default = param.default
		if param.optional:
			if not type_text.endswith("?"):
				type_text += "?"
			if default is None:
				default = "null"
		out = f"{type_text} {param.name}"
		return out if default is None else f"{out} = {default}"


BACKEND = CSharpBackend(POLICY)

__all__ = ["BACKEND", "CSharpBackend", "POLICY"]
