# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from jsdocx.core.diagnostics import DiagnosticKind
from jsdocx.emit import get_backend, translate_type_expr
from jsdocx.import_table import ImportBinding, ImportTable
from jsdocx.parser import parse_type_expr
from jsdocx.parser.ast import ImportKind

_TABLE = ImportTable(
	[
		ImportBinding("SomeType", ImportKind.NAMED, "some-module", imported_symbol="SomeType"),
		ImportBinding("Local", ImportKind.NAMED, "some-module", imported_symbol="Remote"),
		ImportBinding("Shadow", ImportKind.NAMED, "some-module", imported_symbol="Date"),
		ImportBinding("ns", ImportKind.NAMESPACE, "some-other-module"),
	]
)


def _emit(text: str, language: str = "python", type_map=None):
	policy = get_backend(language, type_map).policy
	return translate_type_expr(parse_type_expr(text), _TABLE, policy, file="t.js")


def test_named_import_emits_imported_symbol_not_alias():
	assert _emit("SomeType") == ("SomeType", [])
	assert _emit("Local") == ("Remote", [])


def test_named_import_of_a_builtin_name_is_mapped():
	assert _emit("Shadow") == ("datetime.datetime", [])
	assert _emit("Shadow", "go") == ("time.Time", [])


def test_namespace_member_emits_last_segment():
	assert _emit("ns.SomeType") == ("SomeType", [])
	assert _emit("ns.inner.Deep") == ("Deep", [])
	assert _emit("ns.Date", "csharp") == ("System.DateTime", [])


def test_opaque_fallback_emits_dotted_text_without_extra_diagnostics():
	text, diagnostics = _emit("SomeType.Inner")
	assert text == "SomeType.Inner"
	assert [d.kind for d in diagnostics] == [DiagnosticKind.INVALID_MEMBER_ACCESS_ON_NAMED_IMPORT]

	text, diagnostics = _emit("ns")
	assert text == "ns"
	assert [d.kind for d in diagnostics] == [DiagnosticKind.NAMESPACE_USED_AS_TYPE]


@pytest.mark.parametrize("name", ["Unknown", "Widget", "foo.Bar"])
def test_unknown_reference_passes_through_with_one_warning(name: str):
	text, diagnostics = _emit(name)
	assert text == name
	assert len(diagnostics) == 1
	diag = diagnostics[0]
	assert diag.kind is DiagnosticKind.UNKNOWN_TYPE_REFERENCE
	assert diag.severity == "warning"
	assert diag.phase == "emit"


@pytest.mark.parametrize(
	"language, text, expected",
	[
		("python", "string", "str"),
		("python", "number", "float"),
		("python", "*", "typing.Any"),
		("python", "Uint8Array", "bytes"),
		("go", "number", "float64"),
		("go", "Error", "error"),
		("java", "boolean", "Boolean"),
		("java", "bigint", "java.math.BigInteger"),
		("csharp", "number", "double"),
		("csharp", "RegExp", "System.Text.RegularExpressions.Regex"),
	],
)
def test_builtin_mappings(language: str, text: str, expected: str):
	assert _emit(text, language) == (expected, [])


@pytest.mark.parametrize(
	"language, fallback",
	[("python", "typing.Any"), ("go", "any"), ("java", "Object"), ("csharp", "object")],
)
def test_builtins_without_equivalent_emit_fallback(language: str, fallback: str):
	assert _emit("symbol", language) == (fallback, [])


@pytest.mark.parametrize(
	"language, expected",
	[
		("python", "typing.List[str]"),
		("go", "[]string"),
		("java", "java.util.List<String>"),
		("csharp", "string[]"),
	],
)
def test_arrays(language: str, expected: str):
	assert _emit("string[]", language) == (expected, [])


def test_unions():
	assert _emit("string|number") == ("typing.Union[str, float]", [])
	# Members mapping to the same type collapse.
	assert _emit("string|String") == ("str", [])
	assert _emit("(string|null)[]") == ("typing.List[typing.Union[str, None]]", [])
	# Targets without union types use their fallback type.
	assert _emit("string|number", "go") == ("any", [])
	assert _emit("string|number", "java") == ("Object", [])
	assert _emit("string|String", "go") == ("string", [])
	assert _emit("number|Number", "csharp") == ("double", [])


def test_union_members_still_report_diagnostics():
	text, diagnostics = _emit("Unknown|ns", "go")
	assert text == "any"
	assert [d.kind for d in diagnostics] == [
		DiagnosticKind.NAMESPACE_USED_AS_TYPE,
		DiagnosticKind.UNKNOWN_TYPE_REFERENCE,
	]


def test_type_map_overrides():
	assert _emit("Buffer", "go", {"Buffer": "[]byte"}) == ("[]byte", [])
	assert _emit("string", "go", {"string": "MyString"}) == ("MyString", [])
	# None means "no equivalent".
	assert _emit("Date", "python", {"Date": None}) == ("typing.Any", [])
	# Overrides do not leak into the shared backend.
	assert _emit("Buffer", "go")[0] == "Buffer"


def test_unbound_dotted_name_looks_up_its_full_text():
	text, diagnostics = _emit("string.Foo", "go")
	assert text == "string.Foo"
	assert [d.kind for d in diagnostics] == [DiagnosticKind.UNKNOWN_TYPE_REFERENCE]
	assert _emit("NodeJS.Timeout", "go", {"NodeJS.Timeout": "*time.Timer"}) == ("*time.Timer", [])
