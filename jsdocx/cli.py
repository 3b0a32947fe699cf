# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Command-line driver: `python -m jsdocx SOURCE... [-l LANG] [-o OUT_DIR]`.

Exit status is 1 when any diagnostic (error or warning) was produced, 0
otherwise, and 2 for usage errors (bad flags, unreadable config or sources).
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from dataclasses import replace
from pathlib import Path
from typing import List

from jsdocx import log
from jsdocx.config import ConfigError, TranslateConfig, load_config_json
from jsdocx.core.diagnostics import Diagnostic
from jsdocx.emit import get_backend
from jsdocx.emit.languages import TargetLanguage
from jsdocx.translate import TranslateResult
from jsdocx.translate_all import SourceFile, translate_all

logger = logging.getLogger(__name__)


def _diag_to_json(diag: Diagnostic, source: str) -> dict:
	"""Render a Diagnostic to a structured JSON-friendly dict."""
	out = diag.to_dict()
	if out["file"] is None:
		out["file"] = source
	return out


def _usage_error(msg: str, *, as_json: bool, file: str | None = None) -> int:
	if as_json:
		payload = {
			"exit_code": 2,
			"files": [
				{
					"file": file,
					"diagnostics": [
						{"phase": "driver", "message": msg, "severity": "error", "file": file, "line": None, "column": None}
					],
				}
			],
		}
		print(json.dumps(payload))
	else:
		print(f"{file or 'jsdocx'}: error: {msg}", file=sys.stderr)
	return 2


def _build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(
		prog="jsdocx",
		description="Translate JSDoc-typed JavaScript function headers into another language",
	)
	parser.add_argument("source", type=Path, nargs="+", help="Path(s) to JavaScript source file(s)")
	parser.add_argument(
		"-l",
		"--language",
		choices=[lang.value for lang in TargetLanguage],
		help="Target language (default: from config, else python)",
	)
	parser.add_argument("-o", "--output-dir", type=Path, help="Write translations into this directory")
	parser.add_argument(
		"--json",
		action="store_true",
		help="Emit diagnostics as JSON (kind/code/phase/message/severity/file/line/column)",
	)
	parser.add_argument("--config", type=Path, help="Path to a jsdocx JSON config file")
	parser.add_argument("-j", "--workers", type=int, help="Worker process count")
	parser.add_argument("--batch-size", type=int, help="Sources per worker batch")
	parser.add_argument("-v", "--verbose", action="count", default=0, help="More logging (repeatable)")
	parser.add_argument("-q", "--quiet", action="store_true", help="Only log warnings and errors")
	return parser


def _log_level(args: argparse.Namespace, config: TranslateConfig) -> str:
	if args.quiet:
		return "quiet"
	if args.verbose >= 2:
		return "verbose"
	if args.verbose == 1:
		return "info"
	return config.log_level


def main(argv: List[str] | None = None) -> int:
	parser = _build_parser()
	args = parser.parse_args(argv)

	config = TranslateConfig()
	if args.config is not None:
		try:
			config = load_config_json(args.config)
		except ConfigError as exc:
			return _usage_error(str(exc), as_json=args.json, file=str(args.config))
	if args.language is not None:
		config = replace(config, language=TargetLanguage.parse(args.language))
	if args.workers is not None:
		if args.workers < 1:
			parser.error("--workers must be at least 1")
		config = replace(config, max_workers=args.workers)
	if args.batch_size is not None:
		if args.batch_size < 1:
			parser.error("--batch-size must be at least 1")
		config = replace(config, batch_size=args.batch_size)

	log.configure(_log_level(args, config))

	sources: List[SourceFile] = []
	for path in args.source:
		try:
			sources.append(SourceFile(path=str(path), text=path.read_text(encoding="utf-8")))
		except OSError as exc:
			return _usage_error(f"cannot read source: {exc.strerror or exc}", as_json=args.json, file=str(path))

	try:
		workers = config.worker_count()
	except ConfigError as exc:
		return _usage_error(str(exc), as_json=args.json)

	results = translate_all(
		sources,
		config.language,
		max_workers=workers,
		batch_size=config.batch_size,
		type_map=config.type_map_for(config.language),
	)

	outputs = _write_outputs(results, args.output_dir, config.language)
	exit_code = 1 if any(r.diagnostics for r in results) else 0

	if args.json:
		files = []
		for result, output in zip(results, outputs):
			entry = {
				"file": result.file,
				"diagnostics": [_diag_to_json(d, result.file or "") for d in result.diagnostics],
			}
			if output is not None:
				entry["output"] = str(output)
			files.append(entry)
		print(json.dumps({"exit_code": exit_code, "files": files}))
	else:
		if args.output_dir is None:
			for result in results:
				sys.stdout.write(result.output_text)
		for result in results:
			for diag in result.diagnostics:
				print(diag.with_file(result.file).format_human(), file=sys.stderr)
	return exit_code


def _output_paths(files: List[str], out_dir: Path, extension: str) -> List[Path]:
	"""
	Mirror the sources' directory layout under `out_dir`, relative to their
	deepest common directory, so `a/x.js` and `b/x.js` do not collide.
	"""
	parents = [Path(f).resolve().parent for f in files]
	root = Path(os.path.commonpath(parents)) if parents else Path()
	return [out_dir / parent.relative_to(root) / (Path(f).stem + extension) for f, parent in zip(files, parents)]


def _write_outputs(results: List[TranslateResult], out_dir: Path | None, language: TargetLanguage) -> List[Path | None]:
	if out_dir is None:
		return [None] * len(results)
	extension = get_backend(language).extension
	targets = _output_paths([r.file or "out" for r in results], out_dir, extension)
	written: List[Path | None] = []
	for result, target in zip(results, targets):
		target.parent.mkdir(parents=True, exist_ok=True)
		target.write_text(result.output_text, encoding="utf-8")
		logger.info("wrote %s", target)
		written.append(target)
	return written


__all__ = ["main"]
