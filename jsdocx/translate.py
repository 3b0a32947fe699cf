# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Single-source translation driver.

Pipeline for one source text:

  scan comments -> parse doc comment tags -> build the import table from all
  `@import` tags -> resolve + emit every `@param` / `@returns` type once ->
  rewrite each documented function header in the target language.

Only function headers change. Everything else, comments included, is copied
through verbatim, so the output of a translation can be translated again
(headers in the target form are recognised too) with the same result.
"""

from __future__ import annotations

import bisect
import logging
import re
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from jsdocx.core.diagnostics import Diagnostic, DiagnosticKind, sort_diagnostics
from jsdocx.core.span import Span
from jsdocx.emit import (
	HeaderParam,
	LanguageBackend,
	RenderedParam,
	find_closing_paren,
	get_backend,
	split_params,
	string_end,
	translate_type_expr,
)
from jsdocx.import_table import ImportTable, build_import_table
from jsdocx.parser import SourceScan, all_tags, parse_annotations
from jsdocx.parser.ast import DocComment, ParamTag, ReturnsTag, TypeRef

logger = logging.getLogger(__name__)

# `[export [default]] [async] function [*] name(`; the parameter list is
# scanned separately up to its matching `)`.
_JS_HEADER_RE = re.compile(
	r"(?<![\w$.])(?:export\s+(?:default\s+)?)?(?P<async>async\s+)?function\b\s*\*?\s*"
	r"(?P<name>[A-Za-z_$][\w$]*)\s*\("
)

# `@returns {void}` / `{undefined}` spell "no return value" in every target.
_VOID_NAMES = frozenset({"void", "undefined"})


@dataclass
class TranslateResult:
	output_text: str
	diagnostics: List[Diagnostic] = field(default_factory=list)
	file: Optional[str] = None

	@property
	def has_errors(self) -> bool:
		return any(d.is_error for d in self.diagnostics)


@dataclass
class _Header:
	start: int
	end: int
	name: str
	params: List[HeaderParam]
	is_async: bool


def _split_js_param(raw: str) -> HeaderParam:
	"""`name`, `name = default`, `...rest` or a destructuring pattern."""
	depth = 0
	idx = 0
	while idx < len(raw):
		ch = raw[idx]
		if ch in "'\"`":
			idx = string_end(raw, idx)
			continue
		if ch in "[{":
			depth += 1
		elif ch in "]}":
			depth -= 1
		elif ch == "=" and depth == 0 and raw[idx + 1:idx + 2] != ">":
			name = raw[:idx].strip()
			default = raw[idx + 1:].strip() or None
			return HeaderParam(name=name.lstrip(".").strip(), default=default)
		idx += 1
	return HeaderParam(name=raw.strip().lstrip(".").strip())


def _scan_headers(
	source: str,
	head_re: re.Pattern[str],
	tail_re: Optional[re.Pattern[str]] = None,
) -> Iterator[Tuple[re.Match[str], str, int]]:
	"""
	Yield (head match, parameter text, header end) for each header in `source`.

	`head_re` stops at the `(` opening the parameter list; the list runs to
	the matching `)`, so defaults such as `g()` or `() => 1` stay inside it.
	"""
	for m in head_re.finditer(source):
		close = find_closing_paren(source, m.end() - 1)
		if close < 0:
			continue
		end = close + 1
		if tail_re is not None:
			tail = tail_re.match(source, end)
			if tail is None:
				continue
			end = tail.end()
		yield m, source[m.end():close], end


def _find_headers(scan: SourceScan, backend: LanguageBackend) -> List[_Header]:
	"""
	Locate JavaScript function headers and headers already in the target form.

	Matches starting inside a comment or string literal are ignored, as are
	matches overlapping an earlier header.
	"""
	found: List[_Header] = []
	for m, params_text, end in _scan_headers(scan.source, _JS_HEADER_RE):
		params = [_split_js_param(p) for p in split_params(params_text, angle_brackets=False)]
		found.append(_Header(m.start(), end, m.group("name"), params, bool(m.group("async"))))
	for m, params_text, end in _scan_headers(scan.source, backend.header_re, backend.header_tail_re):
		params = [backend.split_rendered_param(p) for p in split_params(params_text)]
		is_async = bool(m.groupdict().get("async"))
		found.append(_Header(m.start(), end, m.group("name"), params, is_async))
	found.sort(key=lambda h: h.start)

	headers: List[_Header] = []
	last_end = -1
	for header in found:
		if header.start < last_end or scan.is_opaque(header.start):
			continue
		headers.append(header)
		last_end = header.end
	return headers


def _preceding_comments(scan: SourceScan, offset: int) -> List[DocComment]:
	"""
	Doc comments directly in front of `offset` (only whitespace between).

	A run of adjacent blocks is returned whole, in source order.
	"""
	ends = [c.end for c in scan.doc_comments]
	idx = bisect.bisect_right(ends, offset) - 1
	out: List[DocComment] = []
	cursor = offset
	while idx >= 0:
		comment = scan.doc_comments[idx]
		if scan.source[comment.end:cursor].strip():
			break
		out.append(comment)
		cursor = comment.start
		idx -= 1
	out.reverse()
	return out


def _emit_tag_types(
	scan: SourceScan,
	table: ImportTable,
	backend: LanguageBackend,
	file: str | None,
) -> Tuple[Dict[int, str], List[Diagnostic]]:
	"""Resolve and emit every typed `@param` / `@returns` tag once, keyed by id(tag)."""
	emitted: Dict[int, str] = {}
	diagnostics: List[Diagnostic] = []
	for tag in all_tags(scan):
		if not isinstance(tag, (ParamTag, ReturnsTag)) or tag.type_expr is None:
			continue
		if isinstance(tag, ReturnsTag) and _is_void(tag, table):
			emitted[id(tag)] = backend.void_return or ""
			continue
		text, diags = translate_type_expr(tag.type_expr, table, backend.policy, file=file)
		emitted[id(tag)] = text
		diagnostics.extend(diags)
	return emitted, diagnostics


def _is_void(tag: ReturnsTag, table: ImportTable) -> bool:
	expr = tag.type_expr
	return isinstance(expr, TypeRef) and expr.text() in _VOID_NAMES and table.lookup(expr.base) is None


def _match_params(
	header: _Header,
	tags: List[ParamTag],
) -> Tuple[Dict[int, ParamTag], List[ParamTag]]:
	"""
	Pair declared parameters with `@param` tags.

	Tags match by name first; tags whose name matches nothing then fill the
	remaining parameters in order. Returns (param index -> tag, unmatched tags).
	"""
	candidates = [t for t in tags if not t.documents_property]
	by_name: Dict[str, ParamTag] = {}
	for tag in candidates:
		by_name.setdefault(tag.name, tag)

	assigned: Dict[int, ParamTag] = {}
	used: set[int] = set()
	for idx, param in enumerate(header.params):
		tag = by_name.get(param.name)
		if tag is not None and id(tag) not in used:
			assigned[idx] = tag
			used.add(id(tag))

	leftover = [t for t in candidates if id(t) not in used]
	free = [idx for idx in range(len(header.params)) if idx not in assigned]
	for idx, tag in zip(free, leftover):
		assigned[idx] = tag
	return assigned, leftover[len(free):]


def _render_header(
	header: _Header,
	comments: List[DocComment],
	emitted: Mapping[int, str],
	backend: LanguageBackend,
	file: str | None,
) -> Tuple[str, List[Diagnostic]]:
	param_tags = [t for c in comments for t in c.params()]
	returns = next((r for r in (c.returns() for c in comments) if r is not None), None)
	assigned, unmatched = _match_params(header, param_tags)

	rendered: List[str] = []
	for idx, param in enumerate(header.params):
		tag = assigned.get(idx)
		type_text = emitted.get(id(tag)) if tag is not None else None
		default = param.default if param.default is not None else (tag.default if tag is not None else None)
		optional = default is not None or (tag is not None and tag.optional)
		rendered.append(
			backend.render_param(RenderedParam(name=param.name, type_text=type_text, optional=optional, default=default))
		)

	if returns is not None and id(returns) in emitted:
		return_type: Optional[str] = emitted[id(returns)] or None
	else:
		return_type = backend.missing_return

	text = backend.render_header(
		backend.function_name(header.name),
		rendered,
		return_type,
		is_async=header.is_async,
	)

	diagnostics = [
		Diagnostic(
			kind=DiagnosticKind.UNMATCHED_PARAM_ANNOTATION,
			message=f"@param '{tag.name}' does not match any parameter of '{header.name}'",
			phase="driver",
			span=Span.from_loc(tag.loc, file=file),
		)
		for tag in unmatched
	]
	return text, diagnostics


def translate(
	source_text: str,
	language: str = "python",
	*,
	file: str | None = None,
	type_map: Mapping[str, Optional[str]] | None = None,
) -> TranslateResult:
	"""
	Translate the JSDoc-typed function headers of `source_text` into `language`.

	`type_map` layers extra source-name -> target-type mappings over the
	language's builtin policy (a None value means "no equivalent"). Raises
	ValueError for an unknown language; every problem in the source itself is
	reported as a diagnostic instead.
	"""
	backend = get_backend(language, type_map)
	scan, diagnostics = parse_annotations(source_text, file=file)

	table, import_diags = build_import_table(all_tags(scan), file=file)
	diagnostics.extend(import_diags)

	emitted, emit_diags = _emit_tag_types(scan, table, backend, file)
	diagnostics.extend(emit_diags)

	pieces: List[str] = []
	cursor = 0
	headers = _find_headers(scan, backend)
	for header in headers:
		comments = _preceding_comments(scan, header.start)
		text, header_diags = _render_header(header, comments, emitted, backend, file)
		diagnostics.extend(header_diags)
		pieces.append(source_text[cursor:header.start])
		pieces.append(text)
		cursor = header.end
	pieces.append(source_text[cursor:])

	logger.debug(
		"%s: %d import binding(s), %d header(s) rewritten, %d diagnostic(s)",
		file or "<source>",
		len(table),
		len(headers),
		len(diagnostics),
	)
	return TranslateResult(output_text="".join(pieces), diagnostics=sort_diagnostics(diagnostics), file=file)


__all__ = ["TranslateResult", "translate"]
