# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Golden translations: every `translations/<category>/<name>.js` has one
expected output per target language, named by the language's extension.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from jsdocx import TargetLanguage, translate
from jsdocx.emit import get_backend

_ROOT = Path(__file__).resolve().parent.parent / "translations"
_SOURCES = sorted(_ROOT.glob("*/*.js"))
_CASES = [
	pytest.param(src, lang, id=f"{src.parent.name}/{src.stem}-{lang.value}")
	for src in _SOURCES
	for lang in TargetLanguage
]


def test_fixture_corpus_is_present():
	assert _ROOT / "imports" / "jsdoc-import-tag.js" in _SOURCES


@pytest.mark.parametrize("src, language", _CASES)
def test_golden_translation(src: Path, language: TargetLanguage):
	expected = src.with_suffix(get_backend(language).extension).read_text(encoding="utf-8")
	result = translate(src.read_text(encoding="utf-8"), language, file=src.name)
	assert result.diagnostics == []
	assert result.output_text == expected


@pytest.mark.parametrize("src, language", _CASES)
def test_translation_is_idempotent(src: Path, language: TargetLanguage):
	first = translate(src.read_text(encoding="utf-8"), language)
	second = translate(first.output_text, language)
	assert second.output_text == first.output_text
	assert {d.kind for d in second.diagnostics} <= {d.kind for d in first.diagnostics}


_MESSY = """/** @import { SomeType } from "m" */
/** @import * as ns from "n" */
/**
 * @param {SomeType.Bad} a
 * @param {ns} b
 * @param {Unknown|string} c
 * @param {number} [d=2]
 * @param {boolean} extra
 * @returns {ns.Result[]}
 */
export async function process(a, b, c, d) {}

/** @param {string} [name] */
function greet(name) {}
"""


@pytest.mark.parametrize("language", list(TargetLanguage))
def test_idempotent_with_diagnostics(language: TargetLanguage):
	first = translate(_MESSY, language)
	assert first.diagnostics
	second = translate(first.output_text, language)
	assert second.output_text == first.output_text
	assert [(d.kind, d.line) for d in second.diagnostics] == [(d.kind, d.line) for d in first.diagnostics]
