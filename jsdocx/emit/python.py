# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Python backend: `def name(a: T, b: U) -> R` with snake_case function names."""

from __future__ import annotations

import re
from typing import Optional, Sequence

from .languages import HeaderParam, LanguageBackend, RenderedParam, TargetLanguage, split_default
from .policy import NameMappingPolicy

POLICY = NameMappingPolicy(
	language="python",
	builtins={
		"string": "str",
		"String": "str",
		"number": "float",
		"Number": "float",
		"boolean": "bool",
		"Boolean": "bool",
		"bigint": "int",
		"any": "typing.Any",
		"unknown": "typing.Any",
		"object": "object",
		"Object": "object",
		"void": "None",
		"undefined": "None",
		"null": "None",
		"never": "typing.NoReturn",
		"symbol": None,
		"Date": "datetime.datetime",
		"Error": "Exception",
		"Function": "typing.Callable",
		"RegExp": "re.Pattern",
		"Promise": "typing.Awaitable",
		"Array": "typing.List[typing.Any]",
		"Map": "typing.Mapping[typing.Any, typing.Any]",
		"Set": "typing.Set[typing.Any]",
		"Uint8Array": "bytes",
	},
	fallback_type="typing.Any",
	array_template="typing.List[{0}]",
	union_template="typing.Union[{0}]",
)


class PythonBackend(LanguageBackend):
	language = TargetLanguage.PYTHON
	version = "1"
	extension = ".py"
	void_return = "None"
	header_re = re.compile(r"(?<![\w$.])(?P<async>async\s+)?def\s+(?P<name>[A-Za-z_$][\w$]*)\s*\(")
	header_tail_re = re.compile(r"(?:\s*->\s*(?P<ret>[^\n{:]*?))?(?=\s*(?:[{:]|$))", re.M)

	def function_name(self, name: str) -> str:
		name = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)
		name = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", name)
		return name.lower()

	def split_rendered_param(self, raw: str) -> HeaderParam:
		head, default = split_default(raw)
		return HeaderParam(name=head.partition(":")[0].strip(), default=default)

	def render_param(self, param: RenderedParam) -> str:
		default = param.default
		if param.optional and default is None:
			default = "None"
		if param.type_text is None:
			return param.name if default is None else f"{param.name}={default}"
		type_text = param.type_text
		if param.optional and default == "None" and not type_text.startswith("typing.Optional["):
			type_text = f"typing.Optional[{type_text}]"
		out = f"{param.name}: {type_text}"
		return out if default is None else f"{out} = {default}"

	def render_header(self, name: str, params: Sequence[str], return_type: Optional[str], *, is_async: bool = False) -> str:
		prefix = "async def" if is_async else "def"
		ret = f" -> {return_type}" if return_type else ""
		return f"{prefix} {name}({', '.join(params)}){ret}"


BACKEND = PythonBackend(POLICY)

__all__ = ["BACKEND", "POLICY", "PythonBackend"]
