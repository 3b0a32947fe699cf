# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Parallel batch translation.

Sources are cut into small batches and fed to a process pool. Small batches
keep every worker busy until the queue drains; one large slice per worker
leaves some idle while others finish uneven work.
"""

from __future__ import annotations

import logging
import uuid
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional

from jsdocx import log
from jsdocx.config import DEFAULT_BATCH_SIZE, default_worker_count
from jsdocx.core.diagnostics import Diagnostic, DiagnosticKind
from jsdocx.core.span import Span
from jsdocx.emit.languages import TargetLanguage

from .translate import TranslateResult, translate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceFile:
	path: str
	text: str


@dataclass
class TranslateBatchRequest:
	worker_name: str
	sources: List[SourceFile]
	language: str
	type_map: Dict[str, Optional[str]] = field(default_factory=dict)
	log_level: str = "quiet"


def _run_batch(request: TranslateBatchRequest) -> List[TranslateResult]:
	logger.debug("translating %d source(s)", len(request.sources))
	return [
		translate(src.text, request.language, file=src.path, type_map=request.type_map)
		for src in request.sources
	]


def translate_batch(request: TranslateBatchRequest) -> List[TranslateResult]:
	"""Worker entry point: translate one batch, in order."""
	log.configure(request.log_level, prefix=request.worker_name)
	return _run_batch(request)


def batch_sources(
	sources: List[SourceFile],
	language: str,
	batch_size: int,
	type_map: Mapping[str, Optional[str]] | None = None,
) -> List[TranslateBatchRequest]:
	level = log.current()
	requests: List[TranslateBatchRequest] = []
	for start in range(0, len(sources), batch_size):
		# Unique only for log readability.
		worker_id = uuid.uuid4().hex[:4].upper()
		requests.append(
			TranslateBatchRequest(
				worker_name=f"Worker#{worker_id}",
				sources=sources[start:start + batch_size],
				language=language,
				type_map=dict(type_map or {}),
				log_level=level,
			)
		)
	return requests


def _failed_batch(request: TranslateBatchRequest, exc: BaseException) -> List[TranslateResult]:
	return [
		TranslateResult(
			output_text=src.text,
			diagnostics=[
				Diagnostic(
					kind=DiagnosticKind.INTERNAL_ERROR,
					message=f"translation failed in {request.worker_name}: {type(exc).__name__}: {exc}",
					phase="driver",
					span=Span(file=src.path),
				)
			],
			file=src.path,
		)
		for src in request.sources
	]


def translate_all(
	sources: Iterable[SourceFile],
	language: "str | TargetLanguage" = "python",
	*,
	max_workers: int | None = None,
	batch_size: int | None = None,
	type_map: Mapping[str, Optional[str]] | None = None,
) -> List[TranslateResult]:
	"""
	Translate many sources in parallel; results come back in input order.

	With a single worker everything runs in-process. A batch whose worker
	fails yields one InternalError diagnostic per source in it (with the
	source passed through untranslated) instead of aborting the run.
	"""
	lang = TargetLanguage.parse(language).value
	source_list = list(sources)
	workers = max_workers if max_workers is not None else default_worker_count()
	size = batch_size or DEFAULT_BATCH_SIZE
	requests = batch_sources(source_list, lang, size, type_map)
	logger.info(
		"Translating %d source(s) to %s using %d worker(s) (in batches of %d)",
		len(source_list),
		lang,
		workers,
		size,
	)

	results: List[TranslateResult] = []
	if workers <= 1 or len(requests) <= 1:
		for request in requests:
			results.extend(_run_batch(request))
		return results

	with ProcessPoolExecutor(max_workers=workers) as pool:
		futures = [pool.submit(translate_batch, request) for request in requests]
		for request, future in zip(requests, futures):
			try:
				results.extend(future.result())
			except Exception as exc:
				logger.error("%s failed: %s", request.worker_name, exc)
				results.extend(_failed_batch(request, exc))
	return results


__all__ = [
	"SourceFile",
	"TranslateBatchRequest",
	"batch_sources",
	"translate_all",
	"translate_batch",
]
