# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
import logging

import pytest

from jsdocx import log


@pytest.fixture(autouse=True)
def _reset_jsdocx_logging():
	"""
	CLI and worker code install a stderr handler bound to the stream that was
	current at the time; drop it after each test so later tests never write
	to a closed capture stream.
	"""
	yield
	logger = logging.getLogger("jsdocx")
	if log._handler is not None:
		logger.removeHandler(log._handler)
		log._handler = None
	logger.setLevel(logging.NOTSET)
	logger.propagate = True
	log._level_name = "quiet"
