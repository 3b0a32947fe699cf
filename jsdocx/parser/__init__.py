# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
JSDoc annotation parser.

Scans JavaScript source for `/** ... */` blocks and parses their tags into
the typed tag variants of `jsdocx.parser.ast`. Tag payloads (`@import`
clauses and `{...}` type expressions) are parsed with the lark grammar in
`grammar.lark`.

Malformed tags are reported as diagnostics instead of raised, so callers
can report them alongside resolver/emitter diagnostics.
"""

from __future__ import annotations

from typing import List, Tuple

from jsdocx.core.diagnostics import Diagnostic

from . import ast as parser_ast
from .parser import (
	AnnotationSyntaxError,
	SourceScan,
	parse_doc_comment,
	parse_tags,
	parse_type_expr,
	scan_source,
)


def parse_annotations(source: str, *, file: str | None = None) -> Tuple[SourceScan, List[Diagnostic]]:
	"""
	Parse every doc comment in `source`.

	Returns the source scan (doc comments with their tags, in file order) and
	the parser diagnostics.
	"""
	scan = scan_source(source)
	diagnostics: List[Diagnostic] = []
	for comment in scan.doc_comments:
		diagnostics.extend(parse_doc_comment(comment, file=file))
	return scan, diagnostics


def all_tags(scan: SourceScan) -> List[parser_ast.Tag]:
	"""Flatten the tags of every doc comment in file order."""
	return [tag for comment in scan.doc_comments for tag in comment.tags]


__all__ = [
	"AnnotationSyntaxError",
	"SourceScan",
	"all_tags",
	"parse_annotations",
	"parse_doc_comment",
	"parse_tags",
	"parse_type_expr",
	"scan_source",
]
