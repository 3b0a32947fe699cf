# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Common diagnostic structure shared by the parser, resolver and emitter.

Diagnostics are collected per source file and returned as a batch next to
the translated text; none of them aborts a translation.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Optional

from .span import Span


class DiagnosticKind(Enum):
	MALFORMED_ANNOTATION = "MalformedAnnotation"
	DUPLICATE_BINDING = "DuplicateBindingError"
	INVALID_MEMBER_ACCESS_ON_NAMED_IMPORT = "InvalidMemberAccessOnNamedImport"
	NAMESPACE_USED_AS_TYPE = "NamespaceUsedAsType"
	UNKNOWN_TYPE_REFERENCE = "UnknownTypeReference"
	UNMATCHED_PARAM_ANNOTATION = "UnmatchedParamAnnotation"
	INTERNAL_ERROR = "InternalError"

	@property
	def code(self) -> str:
		return _CODES[self]

	@property
	def default_severity(self) -> str:
		return "warning" if self in _WARNINGS else "error"


_CODES: dict[DiagnosticKind, str] = {
	DiagnosticKind.MALFORMED_ANNOTATION: "E-JSDOC-MALFORMED",
	DiagnosticKind.DUPLICATE_BINDING: "E-IMPORT-DUPLICATE",
	DiagnosticKind.INVALID_MEMBER_ACCESS_ON_NAMED_IMPORT: "E-TYPE-NAMED-MEMBER",
	DiagnosticKind.NAMESPACE_USED_AS_TYPE: "E-TYPE-NAMESPACE",
	DiagnosticKind.UNKNOWN_TYPE_REFERENCE: "W-TYPE-UNKNOWN",
	DiagnosticKind.UNMATCHED_PARAM_ANNOTATION: "W-PARAM-UNMATCHED",
	DiagnosticKind.INTERNAL_ERROR: "E-INTERNAL",
}

_WARNINGS = frozenset(
	{
		DiagnosticKind.UNKNOWN_TYPE_REFERENCE,
		DiagnosticKind.UNMATCHED_PARAM_ANNOTATION,
	}
)


@dataclass
class Diagnostic:
	"""Represents a translator diagnostic (error/warning)."""

	kind: DiagnosticKind
	message: str
	# Phase label: "parser", "imports", "resolve", "emit" or "driver".
	phase: str | None = None
	severity: str = ""
	span: Span = field(default_factory=Span)  # Span() denotes unknown.
	notes: list[str] = field(default_factory=list)

	def __post_init__(self) -> None:
		if not self.severity:
			self.severity = self.kind.default_severity
		# Normalize missing spans to the sentinel Span() so downstream tooling
		# can rely on a structured object instead of None.
		if self.span is None:  # type: ignore[unreachable]
			self.span = Span()

	@property
	def code(self) -> str:
		return self.kind.code

	@property
	def line(self) -> Optional[int]:
		return self.span.line

	@property
	def is_error(self) -> bool:
		return self.severity == "error"

	def with_file(self, file: str | None) -> "Diagnostic":
		"""Return a copy pinned to `file` (existing file info wins)."""
		if file is None or self.span.file is not None:
			return self
		return replace(self, span=Span.from_loc(self.span, file=file))

	def to_dict(self) -> dict[str, Any]:
		return {
			"kind": self.kind.value,
			"code": self.code,
			"phase": self.phase,
			"message": self.message,
			"severity": self.severity,
			"file": self.span.file,
			"line": self.span.line,
			"column": self.span.column,
			"notes": list(self.notes),
		}

	def format_human(self) -> str:
		return f"{self.span}: {self.severity}: [{self.kind.value}] {self.message}"


def sort_diagnostics(diagnostics: list[Diagnostic]) -> list[Diagnostic]:
	"""Stable sort by (line, column); unknown positions go last."""
	big = 1 << 30
	return sorted(
		diagnostics,
		key=lambda d: (d.span.line if d.span.line is not None else big, d.span.column or 0),
	)


__all__ = ["Diagnostic", "DiagnosticKind", "sort_diagnostics"]
