# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Type expression resolver.

Given a parsed JSDoc type expression and the file's ImportTable, decide
which import binding (if any) each type reference names:

  SomeType                  -> named import `SomeType`, member_path ()
  someOtherModule.SomeType  -> namespace import, member_path ("SomeType",)
  string                    -> no binding (builtin or local name)

Invalid references (`named.Member`, a bare namespace alias) are reported and
fall back to an opaque reference whose dotted text is emitted literally.
Resolution is pure: no I/O and the table is never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from jsdocx.core.diagnostics import Diagnostic, DiagnosticKind
from jsdocx.core.span import Span
from jsdocx.import_table import ImportBinding, ImportTable
from jsdocx.parser.ast import ArrayType, ImportKind, TypeExpr, TypeRef, UnionType


@dataclass(frozen=True)
class ResolvedType:
	source: TypeRef
	binding: Optional[ImportBinding] = None
	member_path: Tuple[str, ...] = ()
	# Set by the fallback for invalid references.
	opaque: bool = False

	@property
	def is_imported(self) -> bool:
		return self.binding is not None


@dataclass(frozen=True)
class ResolvedArray:
	source: ArrayType
	element: "Resolved"


@dataclass(frozen=True)
class ResolvedUnion:
	source: UnionType
	members: Tuple["Resolved", ...]


Resolved = Union[ResolvedType, ResolvedArray, ResolvedUnion]


def resolve_type_ref(ref: TypeRef, table: ImportTable, *, file: str | None = None) -> tuple[ResolvedType, list[Diagnostic]]:
	binding = table.lookup(ref.base)
	if binding is None:
		return ResolvedType(source=ref), []

	if binding.kind is ImportKind.NAMED:
		if not ref.rest:
			return ResolvedType(source=ref, binding=binding), []
		diag = Diagnostic(
			kind=DiagnosticKind.INVALID_MEMBER_ACCESS_ON_NAMED_IMPORT,
			message=(
				f"'{ref.text()}' accesses a member of '{ref.base}', which is a named import "
				f"of '{binding.imported_symbol}' from '{binding.module_specifier}', not a namespace"
			),
			phase="resolve",
			span=Span.from_loc(ref.loc, file=file),
		)
		return ResolvedType(source=ref, opaque=True), [diag]

	if not ref.rest:
		diag = Diagnostic(
			kind=DiagnosticKind.NAMESPACE_USED_AS_TYPE,
			message=(
				f"'{ref.base}' is a namespace import of '{binding.module_specifier}' and is not a type; "
				f"qualify it, e.g. '{ref.base}.SomeType'"
			),
			phase="resolve",
			span=Span.from_loc(ref.loc, file=file),
		)
		return ResolvedType(source=ref, opaque=True), [diag]
	return ResolvedType(source=ref, binding=binding, member_path=ref.rest), []


def resolve_type_expr(expr: TypeExpr, table: ImportTable, *, file: str | None = None) -> tuple[Resolved, list[Diagnostic]]:
	"""Resolve every reference in `expr` (arrays and unions recurse)."""
	if isinstance(expr, TypeRef):
		return resolve_type_ref(expr, table, file=file)
	if isinstance(expr, ArrayType):
		element, diagnostics = resolve_type_expr(expr.element, table, file=file)
		return ResolvedArray(source=expr, element=element), diagnostics
	if isinstance(expr, UnionType):
		members: list[Resolved] = []
		diagnostics: list[Diagnostic] = []
		for member in expr.members:
			resolved, diags = resolve_type_expr(member, table, file=file)
			members.append(resolved)
			diagnostics.extend(diags)
		return ResolvedUnion(source=expr, members=tuple(members)), diagnostics
	raise TypeError(f"unsupported type expression {expr!r}")


__all__ = [
	"Resolved",
	"ResolvedArray",
	"ResolvedType",
	"ResolvedUnion",
	"resolve_type_expr",
	"resolve_type_ref",
]
