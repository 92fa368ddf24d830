from __future__ import annotations

import logging
import os
import sys

from leadgen.backend import constants


_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str | None = None) -> None:
	"""Attach a single stdout handler to the ``leadgen`` logger tree.

	Safe to call more than once; the handler is only added the first time.
	"""
	raw = level or os.getenv("LEADGEN_LOG_LEVEL", constants.DEFAULT_LOG_LEVEL)
	log_level = getattr(logging, raw.strip().upper(), logging.INFO)
	if not isinstance(log_level, int):
		log_level = logging.INFO

	root = logging.getLogger("leadgen")
	root.setLevel(log_level)
	if not any(getattr(handler, "_leadgen_handler", False) for handler in root.handlers):
		handler = logging.StreamHandler(sys.stdout)
		handler.setFormatter(logging.Formatter(_LOG_FORMAT))
		handler._leadgen_handler = True  # type: ignore[attr-defined]
		root.addHandler(handler)
