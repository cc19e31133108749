"""Logging configuration for the command-line entry point."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def configure_logging(verbose: bool = False) -> None:
	"""Send log records to stderr: DEBUG when verbose, WARNING otherwise."""
	logging.basicConfig(
		level=logging.DEBUG if verbose else logging.WARNING,
		format=LOG_FORMAT,
		stream=sys.stderr,
		force=True,
	)
