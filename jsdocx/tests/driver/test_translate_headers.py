# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from jsdocx import translate
from jsdocx.core.diagnostics import DiagnosticKind


def test_params_match_by_name_then_position():
	source = """/**
 * @param {string} a
 * @param {number} b
 * @param {boolean} c
 */
function f(a, z) {}
"""
	result = translate(source)
	assert "def f(a: str, z: float) {}" in result.output_text
	assert [d.kind for d in result.diagnostics] == [DiagnosticKind.UNMATCHED_PARAM_ANNOTATION]
	assert result.diagnostics[0].line == 4
	assert "'c'" in result.diagnostics[0].message


def test_tags_out_of_order_match_by_name():
	source = "/**\n * @param {number} b\n * @param {string} a\n */\nfunction f(a, b) {}\n"
	assert "def f(a: str, b: float) {}" in translate(source).output_text


def test_property_params_are_not_matched():
	source = """/**
 * @param {Object} opts
 * @param {string} opts.name
 */
function configure(opts) {}
"""
	result = translate(source)
	assert result.diagnostics == []
	assert "def configure(opts: object) {}" in result.output_text


def test_undocumented_function_gets_untyped_params():
	source = "function g(a, b) {}\n"
	assert translate(source).output_text == "def g(a, b) {}\n"
	assert translate(source, "go").output_text == "func g(a any, b any) {}\n"
	assert translate(source, "java").output_text == "public static void g(final Object a, final Object b) {}\n"
	assert translate(source, "csharp").output_text == "public static void G(object a, object b) {}\n"


def test_comment_separated_by_code_does_not_apply():
	source = "/** @param {Widget} a */\nconst x = 1;\nfunction f(a) {}\n"
	result = translate(source)
	assert result.output_text.endswith("def f(a) {}\n")
	# The detached tag is still resolved, but never reported as unmatched.
	assert [d.kind for d in result.diagnostics] == [DiagnosticKind.UNKNOWN_TYPE_REFERENCE]


def test_js_defaults_and_rest_params():
	source = "/**\n * @param {number} a\n * @param {string[]} items\n */\nfunction f(a = 1, ...items) {}\n"
	assert "def f(a: float = 1, items: typing.List[str]) {}" in translate(source).output_text
	assert "public static void F(double? a = 1, string[] items) {}" in translate(source, "csharp").output_text
	assert "func f(a float64, items []string) {}" in translate(source, "go").output_text


@pytest.mark.parametrize(
	"language, header",
	[
		("python", 'def f(a: str = "x,y", b: float) {}'),
		("go", "func f(a string, b float64) {}"),
		("java", "public static void f(final String a, final Number b) {}"),
		("csharp", 'public static void F(string? a = "x,y", double b) {}'),
	],
)
def test_commas_inside_string_defaults_stay_in_one_param(language: str, header: str):
	source = '/**\n * @param {string} a\n * @param {number} b\n */\nfunction f(a = "x,y", b) {}\n'
	result = translate(source, language)
	assert result.diagnostics == []
	assert result.output_text.endswith(header + "\n")
	assert translate(result.output_text, language).output_text == result.output_text


def test_parens_inside_string_default_do_not_end_the_header():
	source = "function f(a = \")\", b = ',') {}\n"
	assert translate(source).output_text == "def f(a=\")\", b=',') {}\n"


@pytest.mark.parametrize(
	"language, header",
	[
		("python", "def f(a: str = g(), cb: typing.Callable = () => 1) {}"),
		("go", "func f(a string, cb any) {}"),
		("csharp", "public static void F(string? a = g(), object? cb = () => 1) {}"),
	],
)
def test_call_and_arrow_defaults_are_rewritten(language: str, header: str):
	source = "/**\n * @param {string} a\n * @param {Function} cb\n */\nfunction f(a = g(), cb = () => 1) {}\n"
	result = translate(source, language)
	assert result.diagnostics == []
	assert result.output_text.endswith(header + "\n")
	assert translate(result.output_text, language).output_text == result.output_text


def test_comparison_default_is_not_a_generic():
	source = "/**\n * @param {boolean} a\n * @param {number} b\n */\nfunction f(a = x < y, b) {}\n"
	assert translate(source, "go").output_text.endswith("func f(a bool, b float64) {}\n")


def test_export_default_and_generator_prefixes_are_dropped():
	source = "/** @returns {number} */\nexport default function* counter() {}\n"
	assert translate(source).output_text.endswith("def counter() -> float {}\n")


@pytest.mark.parametrize(
	"language, header",
	[
		("python", "def done() -> None {}"),
		("go", "func done() {}"),
		("java", "public static void done() {}"),
		("csharp", "public static void Done() {}"),
	],
)
def test_void_returns(language: str, header: str):
	source = "/** @returns {void} */\nfunction done() {}\n"
	result = translate(source, language)
	assert result.diagnostics == []
	assert result.output_text.endswith(header + "\n")


def test_headers_inside_strings_and_comments_are_untouched():
	source = """const s = "function f(a) {}";
// function g(b) {}
/* function h(c) {} */
function k(d) {}
"""
	out = translate(source).output_text
	assert 'const s = "function f(a) {}";' in out
	assert "// function g(b) {}" in out
	assert "/* function h(c) {} */" in out
	assert "def k(d) {}" in out


def test_everything_outside_headers_is_verbatim():
	source = """// leading comment
/**
 * Adds numbers.
 * @param {number} a
 * @param {number} b
 * @returns {number}
 */
function add(a, b) {
  return a + b; // sum
}
module.exports = { add };
"""
	out = translate(source, "go").output_text
	assert out == source.replace("function add(a, b) {", "func add(a float64, b float64) float64 {")


def test_type_map_reaches_the_emitter():
	source = "/** @param {Buffer} data */\nfunction write(data) {}\n"
	result = translate(source, "go", type_map={"Buffer": "[]byte"})
	assert result.diagnostics == []
	assert result.output_text.endswith("func write(data []byte) {}\n")


def test_unknown_language_raises():
	with pytest.raises(ValueError):
		translate("function f() {}", "cobol")
