# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Name-mapping policy: how JavaScript/TypeScript type names map onto a target
language's types.

`builtins` maps a source type name to its target spelling. A value of None
means the target has no equivalent, and the policy's `fallback_type` is
emitted instead. Names absent from the map are not builtins at all; the
emitter passes them through literally.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Mapping, Optional, Sequence, Tuple


@dataclass(frozen=True)
class NameMappingPolicy:
	language: str
	builtins: Mapping[str, Optional[str]]
	fallback_type: str
	# `{0}` is replaced by the element type.
	array_template: str
	# `{0}` is replaced by the members joined with `union_separator`. None
	# means the target has no union types: unions emit `fallback_type`.
	union_template: Optional[str] = None
	union_separator: str = ", "
	overrides: Mapping[str, Optional[str]] = field(default_factory=dict)

	def __post_init__(self) -> None:
		object.__setattr__(self, "builtins", dict(self.builtins))
		object.__setattr__(self, "overrides", dict(self.overrides))

	def lookup(self, name: str) -> Tuple[bool, Optional[str]]:
		"""Return (known, target spelling or None for "no equivalent")."""
		if name in self.overrides:
			return True, self.overrides[name]
		if name in self.builtins:
			return True, self.builtins[name]
		return False, None

	def map_name(self, name: str) -> str:
		"""Mapped-or-literal spelling of `name` (never reports anything)."""
		known, mapped = self.lookup(name)
		if not known:
			return name
		return mapped if mapped is not None else self.fallback_type

	def render_array(self, element: str) -> str:
		return self.array_template.format(element)

	def render_union(self, members: Sequence[str]) -> str:
		unique: list[str] = []
		for member in members:
			if member not in unique:
				unique.append(member)
		if len(unique) == 1:
			return unique[0]
		if self.union_template is None:
			return self.fallback_type
		return self.union_template.format(self.union_separator.join(unique))

	def with_overrides(self, overrides: Mapping[str, Optional[str]] | None) -> "NameMappingPolicy":
		"""Return a copy with user-configured mappings layered over the builtins."""
		if not overrides:
			return self
		merged = dict(self.overrides)
		merged.update(overrides)
		return replace(self, overrides=merged)


__all__ = ["NameMappingPolicy"]
