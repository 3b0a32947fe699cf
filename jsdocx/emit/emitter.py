# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Target emitter: render resolved type references as target-language text.

Rules for a single reference:
  - opaque fallback        -> dotted source text, unchanged
  - no binding             -> builtin mapping, else literal + UnknownTypeReference
  - named import           -> mapped-or-literal imported symbol (alias ignored)
  - namespace import       -> mapped-or-literal LAST member segment

Namespace qualification is dropped on purpose: the output model has no
qualified names, and existing fixtures expect the bare leaf name.
"""

from __future__ import annotations

from jsdocx.core.diagnostics import Diagnostic, DiagnosticKind
from jsdocx.core.span import Span
from jsdocx.import_table import ImportTable
from jsdocx.parser.ast import ImportKind, TypeExpr
from jsdocx.type_resolver import Resolved, ResolvedArray, ResolvedType, ResolvedUnion, resolve_type_expr

from .policy import NameMappingPolicy


def _emit_ref(resolved: ResolvedType, policy: NameMappingPolicy, file: str | None) -> tuple[str, list[Diagnostic]]:
	text = resolved.source.text()
	if resolved.opaque:
		return text, []
	binding = resolved.binding
	if binding is None:
		# Dotted names look up their full text (`NodeJS.Timeout`), so a type map can
		# target them; `string.Foo` is not the builtin `string`.
		known, _mapped = policy.lookup(text)
		if known:
			return policy.map_name(text), []
		diag = Diagnostic(
			kind=DiagnosticKind.UNKNOWN_TYPE_REFERENCE,
			message=f"unknown type '{text}' (not imported, not a {policy.language} builtin); emitted as written",
			phase="emit",
			span=Span.from_loc(resolved.source.loc, file=file),
		)
		return text, [diag]
	if binding.kind is ImportKind.NAMED:
		return policy.map_name(binding.imported_symbol or text), []
	return policy.map_name(resolved.member_path[-1]), []


def emit_type(resolved: Resolved, policy: NameMappingPolicy, *, file: str | None = None) -> tuple[str, list[Diagnostic]]:
	if isinstance(resolved, ResolvedType):
		return _emit_ref(resolved, policy, file)
	if isinstance(resolved, ResolvedArray):
		element, diagnostics = emit_type(resolved.element, policy, file=file)
		return policy.render_array(element), diagnostics
	if isinstance(resolved, ResolvedUnion):
		members: list[str] = []
		diagnostics: list[Diagnostic] = []
		for member in resolved.members:
			text, diags = emit_type(member, policy, file=file)
			members.append(text)
			diagnostics.extend(diags)
		return policy.render_union(members), diagnostics
	raise TypeError(f"unsupported resolved type {resolved!r}")


def translate_type_expr(
	expr: TypeExpr,
	table: ImportTable,
	policy: NameMappingPolicy,
	*,
	file: str | None = None,
) -> tuple[str, list[Diagnostic]]:
	"""Resolve `expr` against `table`, then emit it under `policy`."""
	resolved, diagnostics = resolve_type_expr(expr, table, file=file)
	text, emit_diags = emit_type(resolved, policy, file=file)
	return text, diagnostics + emit_diags


__all__ = ["emit_type", "translate_type_expr"]
