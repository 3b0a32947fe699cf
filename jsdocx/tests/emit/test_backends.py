# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pickle

import pytest

from jsdocx.emit import BACKENDS, RenderedParam, TargetLanguage, find_closing_paren, get_backend, split_params
from jsdocx.emit.languages import split_default


def test_target_language_parse():
	assert TargetLanguage.parse("Go") is TargetLanguage.GO
	assert TargetLanguage.parse(TargetLanguage.JAVA) is TargetLanguage.JAVA
	with pytest.raises(ValueError, match="unknown target language 'rust'"):
		TargetLanguage.parse("rust")
	with pytest.raises(ValueError):
		get_backend("rust")


def test_every_language_has_a_backend():
	assert set(BACKENDS) == set(TargetLanguage)
	assert {b.extension for b in BACKENDS.values()} == {".py", ".go", ".java", ".cs"}


def test_split_params_respects_nesting():
	assert split_params("") == []
	assert split_params("a, b = [1, 2], {c, d}") == ["a", "b = [1, 2]", "{c, d}"]
	assert split_params("final java.util.Map<String, Object> m, final Object o") == [
		"final java.util.Map<String, Object> m",
		"final Object o",
	]
	assert split_params("a = \"x,y\", b = '(', c = `${d}, e`") == ["a = \"x,y\"", "b = '('", "c = `${d}, e`"]
	assert split_params("a = x < y, b", angle_brackets=False) == ["a = x < y", "b"]


def test_split_default_skips_strings():
	assert split_default("a: str = \"k=v\"") == ("a: str", "\"k=v\"")
	assert split_default("final String a") == ("final String a", None)


def test_find_closing_paren():
	text = "f(a = g(1), b = \")\") {}"
	assert find_closing_paren(text, 1) == text.index(") {")
	assert find_closing_paren("f(a, b", 1) == -1
	assert find_closing_paren("f(a]", 1) == -1


def test_function_names():
	assert get_backend("python").function_name("doSomething") == "do_something"
	assert get_backend("python").function_name("parseHTTPResponse") == "parse_http_response"
	assert get_backend("python").function_name("already_snake") == "already_snake"
	assert get_backend("go").function_name("doSomething") == "doSomething"
	assert get_backend("csharp").function_name("doSomething") == "DoSomething"


@pytest.mark.parametrize(
	"language, param, expected",
	[
		("python", RenderedParam("a", "str"), "a: str"),
		("python", RenderedParam("a", None), "a"),
		("python", RenderedParam("a", None, optional=True), "a=None"),
		("python", RenderedParam("a", "str", optional=True), "a: typing.Optional[str] = None"),
		("python", RenderedParam("a", "float", optional=True, default="1"), "a: float = 1"),
		("go", RenderedParam("a", "string", optional=True, default='"x"'), "a string"),
		("go", RenderedParam("a", None), "a any"),
		("java", RenderedParam("a", "String"), "final String a"),
		("java", RenderedParam("a", None), "final Object a"),
		("csharp", RenderedParam("a", "string"), "string a"),
		("csharp", RenderedParam("a", "string", optional=True), "string? a = null"),
		("csharp", RenderedParam("a", "double", optional=True, default="1"), "double? a = 1"),
	],
)
def test_render_param(language: str, param: RenderedParam, expected: str):
	assert get_backend(language).render_param(param) == expected


@pytest.mark.parametrize(
	"language, expected",
	[
		("python", "async def f(a, b) -> R"),
		("go", "func f(a, b) R"),
		("java", "public static R f(a, b)"),
		("csharp", "public static R f(a, b)"),
	],
)
def test_render_header(language: str, expected: str):
	assert get_backend(language).render_header("f", ["a", "b"], "R", is_async=True) == expected


def test_render_header_without_return_type():
	assert get_backend("python").render_header("f", [], None) == "def f()"
	assert get_backend("go").render_header("f", [], None) == "func f()"
	assert get_backend("java").render_header("f", [], None) == "public static void f()"


@pytest.mark.parametrize(
	"language, raw, name, default",
	[
		("python", "a: typing.Optional[str] = None", "a", "None"),
		("python", "a", "a", None),
		("go", "a []string", "a", None),
		("java", "final java.util.List<String> names", "names", None),
		("csharp", 'string? locale = "en"', "locale", '"en"'),
	],
)
def test_split_rendered_param(language: str, raw: str, name: str, default: str | None):
	param = get_backend(language).split_rendered_param(raw)
	assert (param.name, param.default) == (name, default)


def test_backends_with_overrides_survive_pickling():
	backend = get_backend("go", {"Buffer": "[]byte"})
	clone = pickle.loads(pickle.dumps(backend.policy))
	assert clone.map_name("Buffer") == "[]byte"
	assert clone == backend.policy
