# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Target-language backends.

A backend owns everything language-specific: its name-mapping policy, the
way a translated function header is rendered, and a recogniser for headers
it rendered itself (so translating its own output again is stable).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence

from .policy import NameMappingPolicy


class TargetLanguage(str, Enum):
	PYTHON = "python"
	GO = "go"
	JAVA = "java"
	CSHARP = "csharp"

	@classmethod
	def parse(cls, value: "str | TargetLanguage") -> "TargetLanguage":
		if isinstance(value, cls):
			return value
		try:
			return cls(str(value).lower())
		except ValueError:
			known = ", ".join(lang.value for lang in cls)
			raise ValueError(f"unknown target language '{value}' (expected one of: {known})") from None


@dataclass(frozen=True)
class HeaderParam:
	"""A declared parameter as written in a header (`name` / `name = default`)."""

	name: str
	default: Optional[str] = None


@dataclass(frozen=True)
class RenderedParam:
	name: str
	# None when no `@param` type documents the parameter.
	type_text: Optional[str]
	optional: bool = False
	default: Optional[str] = None


_OPEN = "([{<"
_CLOSE = ")]}>"
_QUOTES = "'\"`"


def string_end(text: str, start: int) -> int:
	"""Index just past the string literal opening at `start` (end of text if unterminated)."""
	quote = text[start]
	idx = start + 1
	while idx < len(text):
		ch = text[idx]
		if ch == "\\":
			idx += 2
			continue
		if ch == quote:
			return idx + 1
		idx += 1
	return len(text)


def find_closing_paren(text: str, open_idx: int) -> int:
	"""Index of the `)` closing the `(` at `open_idx`, or -1; string literals are skipped."""
	depth = 0
	idx = open_idx
	while idx < len(text):
		ch = text[idx]
		if ch in _QUOTES:
			idx = string_end(text, idx)
			continue
		if ch in "([{":
			depth += 1
		elif ch in ")]}":
			depth -= 1
			if depth == 0:
				return idx if ch == ")" else -1
		idx += 1
	return -1


def split_params(text: str, *, angle_brackets: bool = True) -> List[str]:
	"""
	Split a parameter list on top-level commas.

	String literals are kept whole. `angle_brackets` also nests on `<...>`
	(generic types); JavaScript parameter lists pass False since `<` and `>`
	are operators there.
	"""
	opening = _OPEN if angle_brackets else _OPEN[:-1]
	closing = _CLOSE if angle_brackets else _CLOSE[:-1]
	parts: List[str] = []
	depth = 0
	current: List[str] = []
	idx = 0
	while idx < len(text):
		ch = text[idx]
		if ch in _QUOTES:
			end = string_end(text, idx)
			current.append(text[idx:end])
			idx = end
			continue
		if ch in opening:
			depth += 1
		elif ch in closing:
			depth = max(0, depth - 1)
		elif ch == "," and depth == 0:
			parts.append("".join(current).strip())
			current = []
			idx += 1
			continue
		current.append(ch)
		idx += 1
	tail = "".join(current).strip()
	if tail:
		parts.append(tail)
	return [p for p in parts if p]


def split_default(raw: str) -> tuple[str, Optional[str]]:
	idx = 0
	while idx < len(raw):
		ch = raw[idx]
		if ch in _QUOTES:
			idx = string_end(raw, idx)
			continue
		if ch == "=":
			default = raw[idx + 1:].strip()
			return raw[:idx].strip(), default or None
		idx += 1
	return raw.strip(), None


class LanguageBackend:
	language: TargetLanguage
	version: str
	extension: str
	policy: NameMappingPolicy
	# Matches a header this backend renders up to and including the `(` that
	# opens its parameter list; groups: name, async (optional).
	header_re: re.Pattern[str]
	# Matched right after the closing `)`; a header whose tail does not match is
	# not one of ours.
	header_tail_re: Optional[re.Pattern[str]] = None
	# Return type spelled for `@returns {void}`; None omits the return type.
	void_return: Optional[str] = None
	# Return type spelled when no `@returns` type is documented.
	missing_return: Optional[str] = None

	def __init__(self, policy: NameMappingPolicy) -> None:
		self.policy = policy

	def with_policy(self, policy: NameMappingPolicy) -> "LanguageBackend":
		return type(self)(policy)

	def function_name(self, name: str) -> str:
		return name

	def split_rendered_param(self, raw: str) -> HeaderParam:
		raise NotImplementedError

	def render_param(self, param: RenderedParam) -> str:
		raise NotImplementedError

	def render_header(self, name: str, params: Sequence[str], return_type: Optional[str], *, is_async: bool = False) -> str:
		raise NotImplementedError


class StaticMethodBackend(LanguageBackend):
	"""Java and C# both render `public static R name(...)`."""

	void_return = "void"
	missing_return = "void"
	header_re = re.compile(
		r"(?<![\w$.])public\s+static\s+(?P<ret>[\w$.<>\[\]?, ]+?)\s+(?P<name>[A-Za-z_$][\w$]*)\s*\(",
	)

	def split_rendered_param(self, raw: str) -> HeaderParam:
		head, default = split_default(raw)
		return HeaderParam(name=head.split()[-1], default=default)

	def render_header(self, name: str, params: Sequence[str], return_type: Optional[str], *, is_async: bool = False) -> str:
		return f"public static {return_type or 'void'} {name}({', '.join(params)})"


__all__ = [
	"HeaderParam",
	"LanguageBackend",
	"RenderedParam",
	"StaticMethodBackend",
	"TargetLanguage",
	"find_closing_paren",
	"split_default",
	"split_params",
	"string_end",
]
