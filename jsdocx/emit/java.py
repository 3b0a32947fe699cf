# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Java backend: `public static R name(final T a, final U b)`."""

from __future__ import annotations

from .languages import HeaderParam, RenderedParam, StaticMethodBackend, TargetLanguage
from .policy import NameMappingPolicy

POLICY = NameMappingPolicy(
	language="java",
	builtins={
		"string": "String",
		"String": "String",
		"number": "Number",
		"Number": "Number",
		"boolean": "Boolean",
		"Boolean": "Boolean",
		"bigint": "java.math.BigInteger",
		"any": "Object",
		"unknown": "Object",
		"object": "Object",
		"Object": "Object",
		"void": None,
		"undefined": None,
		"null": None,
		"never": None,
		"symbol": None,
		"Date": "java.time.Instant",
		"Error": "Exception",
		"Function": None,
		"RegExp": "java.util.regex.Pattern",
		"Promise": "java.util.concurrent.CompletableFuture<Object>",
		"Array": "java.util.List<Object>",
		"Map": "java.util.Map<String, Object>",
		"Set": "java.util.Set<Object>",
		"Uint8Array": "byte[]",
	},
	fallback_type="Object",
	array_template="java.util.List<{0}>",
	union_template=None,
)


class JavaBackend(StaticMethodBackend):
	language = TargetLanguage.JAVA
	version = "1"
	extension = ".java"

	def split_rendered_param(self, raw: str) -> HeaderParam:
		# Java has no default arguments, so rendered headers never carry one.
		return HeaderParam(name=raw.split()[-1])

	def render_param(self, param: RenderedParam) -> str:
		return f"final {param.type_text or self.policy.fallback_type} {param.name}"


BACKEND = JavaBackend(POLICY)

__all__ = ["BACKEND", "JavaBackend", "POLICY"]
