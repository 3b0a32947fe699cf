# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Per-file import table built from JSDoc `@import` tags.

Maps each local name (the imported symbol, its `as` alias, or a namespace
alias) to the binding it introduces. The table is built once per source
file in tag order and never mutated afterwards; it is passed explicitly to
the resolver so translation units stay independent.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Optional

from jsdocx.core.diagnostics import Diagnostic, DiagnosticKind
from jsdocx.core.span import Span
from jsdocx.parser.ast import ImportKind, ImportTag, Located, Tag


@dataclass(frozen=True)
class ImportBinding:
	"""
	One local name introduced by an `@import` tag.

	NAMED bindings carry `imported_symbol`; NAMESPACE bindings do not (the
	local name denotes the whole export surface of the module).
	"""

	local_name: str
	kind: ImportKind
	module_specifier: str
	imported_symbol: Optional[str] = None
	loc: Optional[Located] = None

	def __post_init__(self) -> None:
		if self.kind is ImportKind.NAMED and not self.imported_symbol:
			raise ValueError(f"named import binding '{self.local_name}' needs an imported symbol")
		if self.kind is ImportKind.NAMESPACE and self.imported_symbol is not None:
			raise ValueError(f"namespace import binding '{self.local_name}' cannot name a symbol")


class ImportTable(Mapping[str, ImportBinding]):
	"""Ordered, read-only mapping of local name -> ImportBinding."""

	def __init__(self, bindings: Iterable[ImportBinding] = ()) -> None:
		by_name: dict[str, ImportBinding] = {}
		for binding in bindings:
			if binding.local_name in by_name:
				raise ValueError(f"duplicate local name '{binding.local_name}'")
			by_name[binding.local_name] = binding
		self._bindings = MappingProxyType(by_name)

	def __getitem__(self, name: str) -> ImportBinding:
		return self._bindings[name]

	def __iter__(self) -> Iterator[str]:
		return iter(self._bindings)

	def __len__(self) -> int:
		return len(self._bindings)

	def lookup(self, name: str) -> Optional[ImportBinding]:
		return self._bindings.get(name)

	def __repr__(self) -> str:
		return f"ImportTable({list(self._bindings.values())!r})"


def _bindings_for(tag: ImportTag) -> list[ImportBinding]:
	if tag.import_kind is ImportKind.NAMESPACE:
		return [
			ImportBinding(
				local_name=tag.alias or "",
				kind=ImportKind.NAMESPACE,
				module_specifier=tag.module,
				loc=tag.loc,
			)
		]
	return [
		ImportBinding(
			local_name=spec.local,
			kind=ImportKind.NAMED,
			module_specifier=tag.module,
			imported_symbol=spec.imported,
			loc=spec.loc,
		)
		for spec in tag.specifiers
	]


def build_import_table(tags: Iterable[Tag], *, file: str | None = None) -> tuple[ImportTable, list[Diagnostic]]:
	"""
	Build the import table from `tags` (non-import tags are ignored).

	A local name bound twice keeps its first binding; every later one is
	reported as a DuplicateBindingError and dropped.
	"""
	accepted: dict[str, ImportBinding] = {}
	diagnostics: list[Diagnostic] = []
	for tag in tags:
		if not isinstance(tag, ImportTag):
			continue
		for binding in _bindings_for(tag):
			first = accepted.get(binding.local_name)
			if first is not None:
				first_line = first.loc.line if first.loc is not None else "?"
				diagnostics.append(
					Diagnostic(
						kind=DiagnosticKind.DUPLICATE_BINDING,
						message=f"'{binding.local_name}' is already imported (line {first_line}); keeping the first binding",
						phase="imports",
						span=Span.from_loc(binding.loc or tag.loc, file=file),
						notes=[f"first import from '{first.module_specifier}'"],
					)
				)
				continue
			accepted[binding.local_name] = binding
	return ImportTable(accepted.values()), diagnostics


__all__ = ["ImportBinding", "ImportTable", "build_import_table"]
