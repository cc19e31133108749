"""Terminal helpers: ANSI colouring and a steady-tick progress spinner."""

from __future__ import annotations

import itertools
import os
import sys
import threading
from typing import IO

from soon_migrate.constants import SPINNER_FRAMES, SPINNER_TICK_SECONDS

_CODES = {
	"red": "31",
	"green": "32",
	"yellow": "33",
	"cyan": "36",
	"bold": "1",
}


def _colour_enabled(stream: IO[str] | None = None) -> bool:
	if os.environ.get("NO_COLOR"):
		return False
	stream = stream if stream is not None else sys.stdout
	isatty = getattr(stream, "isatty", None)
	return bool(isatty and isatty())


def style(text: str, *names: str, stream: IO[str] | None = None) -> str:
	"""Wrap ``text`` in ANSI codes when the target stream is a terminal."""
	if not names or not _colour_enabled(stream):
		return text
	codes = ";".join(_CODES[name] for name in names)
	return f"\033[{codes}m{text}\033[0m"


def red(text: str, stream: IO[str] | None = None) -> str:
	return style(text, "red", stream=stream)


def green(text: str, stream: IO[str] | None = None) -> str:
	return style(text, "green", stream=stream)


def yellow(text: str, stream: IO[str] | None = None) -> str:
	return style(text, "yellow", stream=stream)


def cyan(text: str, stream: IO[str] | None = None) -> str:
	return style(text, "cyan", stream=stream)


def bold(text: str, stream: IO[str] | None = None) -> str:
	return style(text, "bold", stream=stream)


class Spinner:
	"""Cosmetic spinner redrawn on a background thread.

	Only draws when stderr is a terminal; otherwise start/finish just print
	the final message. Has no effect on the work being done.
	"""

	def __init__(self, message: str = "", stream: IO[str] | None = None) -> None:
		self.message = message
		self._stream = stream if stream is not None else sys.stderr
		self._stop = threading.Event()
		self._thread: threading.Thread | None = None

	@property
	def active(self) -> bool:
		return self._thread is not None and self._thread.is_alive()

	def start(self, message: str | None = None) -> Spinner:
		if message is not None:
			self.message = message
		if self.active or not _colour_enabled(self._stream):
			return self
		self._stop.clear()
		self._thread = threading.Thread(target=self._run, name="spinner", daemon=True)
		self._thread.start()
		return self

	def _run(self) -> None:
		for frame in itertools.cycle(SPINNER_FRAMES):
			self._stream.write(f"\r{frame} {self.message}")
			self._stream.flush()
			if self._stop.wait(SPINNER_TICK_SECONDS):
				break

	def finish(self, message: str) -> None:
		"""Stop ticking and leave ``message`` on the spinner line."""
		if self._thread is not None:
			self._stop.set()
			self._thread.join()
			self._thread = None
			self._stream.write("\r\033[K")
		self._stream.write(f"{message}\n")
		self._stream.flush()
