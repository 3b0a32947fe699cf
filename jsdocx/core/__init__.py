"""
jsdocx.core: shared core types used across the translation stages.

Modules:
  - span: Span source positions
  - diagnostics: Diagnostic / DiagnosticKind batch reporting
"""

__all__ = [
    "diagnostics",
    "span",
]
