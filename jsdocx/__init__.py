# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
jsdocx: translate JSDoc `@import` / `@param` / `@returns` type annotations
into the type references of a target language and splice them into the
function headers they document.
"""

from jsdocx.emit.languages import TargetLanguage
from jsdocx.translate import TranslateResult, translate
from jsdocx.translate_all import SourceFile, translate_all

__all__ = [
	"SourceFile",
	"TargetLanguage",
	"TranslateResult",
	"translate",
	"translate_all",
]
