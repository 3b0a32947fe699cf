# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, List, Optional, Tuple


@dataclass(frozen=True)
class Located:
	line: int
	column: int


class ImportKind(Enum):
	NAMED = "named"
	NAMESPACE = "namespace"


class TagKind(Enum):
	IMPORT = "import"
	PARAM = "param"
	RETURNS = "returns"
	OTHER = "other"


class TypeExpr:
	"""Base class of parsed JSDoc type expressions."""

	loc: Located

	def text(self) -> str:
		raise NotImplementedError


@dataclass(frozen=True)
class TypeRef(TypeExpr):
	"""
	Identifier with optional dotted member access:

	  SomeType
	  someOtherModule.SomeType
	"""

	loc: Located
	path: Tuple[str, ...]

	@property
	def base(self) -> str:
		return self.path[0]

	@property
	def rest(self) -> Tuple[str, ...]:
		return self.path[1:]

	@property
	def is_qualified(self) -> bool:
		return len(self.path) > 1

	def text(self) -> str:
		return ".".join(self.path)


@dataclass(frozen=True)
class ArrayType(TypeExpr):
	loc: Located
	element: TypeExpr

	def text(self) -> str:
		inner = self.element.text()
		if isinstance(self.element, UnionType):
			inner = f"({inner})"
		return f"{inner}[]"


@dataclass(frozen=True)
class UnionType(TypeExpr):
	loc: Located
	members: Tuple[TypeExpr, ...]

	def text(self) -> str:
		return "|".join(m.text() for m in self.members)


def type_refs(expr: TypeExpr) -> List[TypeRef]:
	"""Collect the TypeRef leaves of `expr` in source order."""
	if isinstance(expr, TypeRef):
		return [expr]
	if isinstance(expr, ArrayType):
		return type_refs(expr.element)
	if isinstance(expr, UnionType):
		out: List[TypeRef] = []
		for member in expr.members:
			out.extend(type_refs(member))
		return out
	raise TypeError(f"unexpected type expression {expr!r}")


@dataclass
class Tag:
	"""One parsed JSDoc block tag (`@name ...`)."""

	kind: ClassVar[TagKind] = TagKind.OTHER

	loc: Located
	# Raw tag text, `@` included, with comment decoration stripped.
	raw: str


@dataclass(frozen=True)
class ImportSpecifier:
	"""`Foo` or `Foo as Bar` inside `@import { ... }`."""

	imported: str
	local: str
	loc: Located


@dataclass
class ImportTag(Tag):
	"""
	JSDoc import tag:

	  @import { SomeType, Other as Alias } from "some-module"
	  @import * as someOtherModule from "some-other-module"
	"""

	kind: ClassVar[TagKind] = TagKind.IMPORT

	import_kind: ImportKind = ImportKind.NAMED
	module: str = ""
	specifiers: List[ImportSpecifier] = field(default_factory=list)
	# Namespace imports only.
	alias: Optional[str] = None


@dataclass
class ParamTag(Tag):
	"""
	JSDoc parameter tag:

	  @param {SomeType} first
	  @param {ns.Other} [second=1] - optional, with a default
	"""

	kind: ClassVar[TagKind] = TagKind.PARAM

	type_expr: Optional[TypeExpr] = None
	name: str = ""
	optional: bool = False
	default: Optional[str] = None
	description: str = ""

	@property
	def documents_property(self) -> bool:
		"""`@param {T} opts.name` documents a property of `opts`, not a parameter."""
		return "." in self.name


@dataclass
class ReturnsTag(Tag):
	"""`@returns {Type} description` (also spelled `@return`)."""

	kind: ClassVar[TagKind] = TagKind.RETURNS

	type_expr: Optional[TypeExpr] = None
	description: str = ""


@dataclass
class OtherTag(Tag):
	"""Any tag the translator does not interpret; kept for passthrough."""

	kind: ClassVar[TagKind] = TagKind.OTHER

	name: str = ""


@dataclass
class DocComment:
	"""
	One `/** ... */` block.

	`start`/`end` are character offsets into the source (end exclusive) so the
	driver can find the declaration that follows the block.
	"""

	loc: Located
	start: int
	end: int
	text: str
	tags: List[Tag] = field(default_factory=list)

	def imports(self) -> List[ImportTag]:
		return [t for t in self.tags if isinstance(t, ImportTag)]

	def params(self) -> List[ParamTag]:
		return [t for t in self.tags if isinstance(t, ParamTag)]

	def returns(self) -> Optional[ReturnsTag]:
		return next((t for t in self.tags if isinstance(t, ReturnsTag)), None)


__all__ = [
	"ArrayType",
	"DocComment",
	"ImportKind",
	"ImportSpecifier",
	"ImportTag",
	"Located",
	"OtherTag",
	"ParamTag",
	"ReturnsTag",
	"Tag",
	"TagKind",
	"TypeExpr",
	"TypeRef",
	"UnionType",
	"type_refs",
]
