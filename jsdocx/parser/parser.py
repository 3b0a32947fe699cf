# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import bisect
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from lark import Lark, Token, Tree
from lark.exceptions import UnexpectedInput

from jsdocx.core.diagnostics import Diagnostic, DiagnosticKind
from jsdocx.core.span import Span

from .ast import (
	ArrayType,
	DocComment,
	ImportKind,
	ImportSpecifier,
	ImportTag,
	Located,
	OtherTag,
	ParamTag,
	ReturnsTag,
	Tag,
	TypeExpr,
	TypeRef,
	UnionType,
)

_GRAMMAR_PATH = Path(__file__).with_name("grammar.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text()

# The contextual lexer keeps NAME (import specifiers) and QUALNAME (type
# references) apart: each parser state only lexes the terminals it accepts.
_PARSER = Lark(
	_GRAMMAR_SRC,
	parser="lalr",
	lexer="contextual",
	start=["import_clause", "type_expr"],
	propagate_positions=True,
	maybe_placeholders=False,
)


class AnnotationSyntaxError(ValueError):
	"""
	User-facing error for a malformed `@import` / `@param` / `@returns` tag.

	Raised from the tag builders; `parse_doc_comment` converts it into a
	pinned MalformedAnnotation diagnostic instead of failing the file.
	"""

	def __init__(self, message: str, *, loc: Located | None) -> None:
		super().__init__(message)
		self.loc = loc


# --- Source scanning -------------------------------------------------------

_SOURCE_TOKEN_RE = re.compile(
	r"""
	(?P<doc>/\*\*(?!/).*?\*/)
	|(?P<block>/\*.*?\*/)
	|(?P<line>//[^\n]*)
	|(?P<str>"(?:[^"\\\n]|\\.)*"|'(?:[^'\\\n]|\\.)*'|`(?:[^`\\]|\\.)*`)
	""",
	re.S | re.X,
)


@dataclass
class SourceScan:
	"""
	Comment and string layout of one source text.

	`doc_comments` holds every `/** ... */` block (tags not parsed yet);
	`opaque_spans` holds every comment or string literal as (start, end) so
	the driver never rewrites text inside them.
	"""

	source: str
	doc_comments: List[DocComment] = field(default_factory=list)
	opaque_spans: List[Tuple[int, int]] = field(default_factory=list)
	line_starts: List[int] = field(default_factory=list)

	def locate(self, offset: int) -> Located:
		idx = bisect.bisect_right(self.line_starts, offset) - 1
		return Located(line=idx + 1, column=offset - self.line_starts[idx] + 1)

	def is_opaque(self, offset: int) -> bool:
		idx = bisect.bisect_right(self.opaque_spans, (offset, float("inf"))) - 1
		if idx < 0:
			return False
		start, end = self.opaque_spans[idx]
		return start <= offset < end


def scan_source(source: str) -> SourceScan:
	"""Find doc comments plus every comment/string span in `source`."""
	line_starts = [0]
	for m in re.finditer("\n", source):
		line_starts.append(m.end())
	scan = SourceScan(source=source, line_starts=line_starts)
	for m in _SOURCE_TOKEN_RE.finditer(source):
		scan.opaque_spans.append((m.start(), m.end()))
		if m.lastgroup == "doc":
			scan.doc_comments.append(
				DocComment(loc=scan.locate(m.start()), start=m.start(), end=m.end(), text=m.group(0))
			)
	return scan


# --- Tag splitting ---------------------------------------------------------

_TAG_START_RE = re.compile(r"@([A-Za-z][\w-]*)")
_DECORATION_RE = re.compile(r"^(\s*\*(?!/)\s?)?")


def _split_tags(comment: DocComment) -> List[Tuple[str, Located, str]]:
	"""
	Split a doc comment into (tag name, location, tag text) triples.

	Parsing is line-oriented: a tag starts with `@name` at the beginning of a
	(decoration-stripped) line and runs until the next tag or the end of the
	comment. Text before the first tag is the free-form description.
	"""
	body = comment.text[3:-2]
	lines = body.split("\n")
	out: List[Tuple[str, Located, List[str]]] = []
	for idx, raw_line in enumerate(lines):
		line_no = comment.loc.line + idx
		# Column of the first body character on this source line.
		base_col = comment.loc.column + 3 if idx == 0 else 1
		if idx == 0:
			content = raw_line
		else:
			content = raw_line[_DECORATION_RE.match(raw_line).end():]
		stripped = content.lstrip()
		col = base_col + (len(raw_line) - len(stripped))
		m = _TAG_START_RE.match(stripped)
		if m is not None:
			out.append((m.group(1), Located(line=line_no, column=col), [stripped.rstrip()]))
		elif out:
			out[-1][2].append(stripped.rstrip())
	return [(name, loc, "\n".join(parts).rstrip()) for name, loc, parts in out]


# --- Tag builders ----------------------------------------------------------

def _find_closing_brace(text: str, open_idx: int) -> int:
	depth = 0
	for i in range(open_idx, len(text)):
		ch = text[i]
		if ch == "{":
			depth += 1
		elif ch == "}":
			depth -= 1
			if depth == 0:
				return i
	return -1


def _offset_loc(base: Located, meta_line: int, meta_column: int) -> Located:
	"""Translate a fragment-relative lark position into source coordinates."""
	if meta_line <= 1:
		return Located(line=base.line, column=base.column + meta_column - 1)
	return Located(line=base.line + meta_line - 1, column=meta_column)


def _loc(tree: Tree, base: Located) -> Located:
	meta = tree.meta
	if getattr(meta, "empty", True):
		return base
	return _offset_loc(base, meta.line, meta.column)


def _loc_from_token(token: Token, base: Located) -> Located:
	return _offset_loc(base, token.line or 1, token.column or 1)


def _name(node: Tree | Token) -> str:
	if isinstance(node, Tree):
		data = node.data
		if isinstance(data, Token):
			return data.value
		return data
	if isinstance(node, Token):
		return node.type
	return str(node)


def _syntax_message(exc: UnexpectedInput, what: str) -> str:
	first = str(exc).strip().splitlines()[0] if str(exc).strip() else type(exc).__name__
	return f"invalid {what}: {first}"


def parse_type_expr(text: str, *, loc: Located | None = None) -> TypeExpr:
	"""Parse the text between `{` and `}` of a typed tag."""
	base = loc or Located(line=1, column=1)
	if not text.strip():
		raise AnnotationSyntaxError("empty type expression", loc=base)
	try:
		tree = _PARSER.parse(text, start="type_expr")
	except UnexpectedInput as exc:
		raise AnnotationSyntaxError(
			f"unsupported type expression '{text.strip()}' ({_syntax_message(exc, 'type')})",
			loc=base,
		) from exc
	return _build_type_expr(tree, base)


def _build_type_expr(tree: Tree | Token, base: Located) -> TypeExpr:
	kind = _name(tree)
	if kind == "type_ref":
		tok = tree.children[0]
		return TypeRef(loc=_loc_from_token(tok, base), path=tuple(tok.value.split(".")))
	if kind == "any_type":
		# JSDoc `*` is the "any" type.
		return TypeRef(loc=_loc(tree, base), path=("any",))
	if kind == "array_type":
		return ArrayType(loc=_loc(tree, base), element=_build_type_expr(tree.children[0], base))
	if kind == "union_type":
		members: List[TypeExpr] = []
		for child in tree.children:
			member = _build_type_expr(child, base)
			# `A|(B|C)` flattens to one union.
			if isinstance(member, UnionType):
				members.extend(member.members)
			else:
				members.append(member)
		return UnionType(loc=_loc(tree, base), members=tuple(members))
	raise ValueError(f"unexpected type expression node {kind!r}")


def _build_import_tag(text: str, loc: Located, body_loc: Located) -> ImportTag:
	body = text[len("@import"):]
	if "{" in body and _find_closing_brace(body, body.index("{")) < 0:
		raise AnnotationSyntaxError("@import is missing a closing brace", loc=loc)
	if not re.search(r"""\bfrom\s*["']""", body):
		raise AnnotationSyntaxError("@import is missing a quoted module specifier", loc=loc)
	try:
		tree = _PARSER.parse(body, start="import_clause")
	except UnexpectedInput as exc:
		raise AnnotationSyntaxError(_syntax_message(exc, "@import"), loc=loc) from exc

	clause = next(c for c in tree.children if isinstance(c, Tree) and _name(c) in {"named_imports", "namespace_import"})
	module_node = next(c for c in tree.children if isinstance(c, Tree) and _name(c) == "module_spec")
	module = module_node.children[0].value[1:-1]
	if not module:
		raise AnnotationSyntaxError("@import module specifier is empty", loc=loc)
	if _name(clause) == "namespace_import":
		alias_tok = next(c for c in clause.children if isinstance(c, Token) and c.type == "NAME")
		return ImportTag(
			loc=loc,
			raw=text,
			import_kind=ImportKind.NAMESPACE,
			module=module,
			alias=alias_tok.value,
		)
	specifiers: List[ImportSpecifier] = []
	for spec in clause.children:
		if not isinstance(spec, Tree) or _name(spec) != "import_specifier":
			continue
		names = [c for c in spec.children if isinstance(c, Token) and c.type == "NAME"]
		imported = names[0].value
		local = names[1].value if len(names) > 1 else imported
		specifiers.append(ImportSpecifier(imported=imported, local=local, loc=_loc_from_token(names[0], body_loc)))
	return ImportTag(loc=loc, raw=text, import_kind=ImportKind.NAMED, module=module, specifiers=specifiers)


def _split_typed_body(text: str, tag_name: str, loc: Located) -> Tuple[Optional[TypeExpr], str]:
	"""
	Split `{Type} rest` into a parsed type and the remaining text.

	Tags without a leading brace are untyped (valid JSDoc); a brace that never
	closes is malformed.
	"""
	body = text[len(tag_name) + 1:]
	stripped = body.lstrip()
	if not stripped.startswith("{"):
		return None, body.strip()
	open_idx = len(body) - len(stripped)
	close_idx = _find_closing_brace(body, open_idx)
	if close_idx < 0:
		raise AnnotationSyntaxError(f"@{tag_name} type is missing a closing brace", loc=loc)
	type_text = body[open_idx + 1:close_idx]
	type_loc = Located(line=loc.line, column=loc.column + len(tag_name) + 1 + open_idx + 1)
	if "\n" in body[:open_idx]:
		type_loc = loc
	return parse_type_expr(type_text, loc=type_loc), body[close_idx + 1:]


_PARAM_NAME_RE = re.compile(
	r"""
	\s*
	(?:
		\[\s*(?P<opt>[A-Za-z_$][\w$.]*)\s*(?:=\s*(?P<default>[^\]]*?))?\s*\]
		|(?P<name>[A-Za-z_$][\w$.]*)
	)
	""",
	re.X,
)


def _description(rest: str) -> str:
	desc = rest.strip()
	if desc.startswith("-"):
		desc = desc[1:].strip()
	return desc


def _build_param_tag(text: str, tag_name: str, loc: Located) -> ParamTag:
	type_expr, rest = _split_typed_body(text, tag_name, loc)
	m = _PARAM_NAME_RE.match(rest)
	if m is None:
		raise AnnotationSyntaxError(f"@{tag_name} is missing a parameter name", loc=loc)
	optional = m.group("opt") is not None
	return ParamTag(
		loc=loc,
		raw=text,
		type_expr=type_expr,
		name=m.group("opt") if optional else m.group("name"),
		optional=optional,
		default=(m.group("default") or None) if optional else None,
		description=_description(rest[m.end():]),
	)


def _build_returns_tag(text: str, tag_name: str, loc: Located) -> ReturnsTag:
	type_expr, rest = _split_typed_body(text, tag_name, loc)
	return ReturnsTag(loc=loc, raw=text, type_expr=type_expr, description=_description(rest))


_PARAM_TAGS = {"param", "arg", "argument"}
_RETURNS_TAGS = {"returns", "return"}


def _build_tag(name: str, loc: Located, text: str) -> Tag:
	if name == "import":
		body_loc = Located(line=loc.line, column=loc.column + len("@import"))
		return _build_import_tag(text, loc, body_loc)
	if name in _PARAM_TAGS:
		return _build_param_tag(text, name, loc)
	if name in _RETURNS_TAGS:
		return _build_returns_tag(text, name, loc)
	return OtherTag(loc=loc, raw=text, name=name)


def parse_doc_comment(comment: DocComment, *, file: str | None = None) -> List[Diagnostic]:
	"""
	Parse the tags of `comment` in place.

	Malformed tags never fail the comment: each becomes an OtherTag (so the
	tag sequence still mirrors the comment) and yields one MalformedAnnotation
	diagnostic pinned to the tag's line.
	"""
	diagnostics: List[Diagnostic] = []
	tags: List[Tag] = []
	for name, loc, text in _split_tags(comment):
		try:
			tags.append(_build_tag(name, loc, text))
		except AnnotationSyntaxError as exc:
			diagnostics.append(
				Diagnostic(
					kind=DiagnosticKind.MALFORMED_ANNOTATION,
					message=str(exc),
					phase="parser",
					span=Span.from_loc(exc.loc or loc, file=file),
				)
			)
			tags.append(OtherTag(loc=loc, raw=text, name=name))
	comment.tags = tags
	return diagnostics


def parse_tags(text: str) -> Tuple[List[Tag], List[Diagnostic]]:
	"""Parse a standalone `/** ... */` block (useful for tests/REPL)."""
	comment = DocComment(loc=Located(line=1, column=1), start=0, end=len(text), text=text)
	diagnostics = parse_doc_comment(comment)
	return comment.tags, diagnostics


__all__ = [
	"AnnotationSyntaxError",
	"SourceScan",
	"parse_doc_comment",
	"parse_tags",
	"parse_type_expr",
	"scan_source",
]
