"""Recursive project walker that skips build output and dependency caches."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterator
from pathlib import Path

from soon_migrate.constants import MAX_WALK_DEPTH, SKIPPED_DIRS
from soon_migrate.errors import OracleDetectionFailed

logger = logging.getLogger(__name__)


def iter_files(root: str | Path, max_depth: int = MAX_WALK_DEPTH) -> Iterator[Path]:
	"""Yield every regular file under ``root``.

	Directories named in SKIPPED_DIRS are pruned by basename. Order follows
	the filesystem and is not sorted. A directory already entered (same
	device and inode, e.g. via a symlink loop) is not entered again, and
	nesting deeper than ``max_depth`` is ignored.

	Raises OracleDetectionFailed if a directory cannot be listed.
	"""
	root = Path(root)
	if not root.is_dir():
		return
	visited: set[tuple[int, int]] = set()
	yield from _walk(root, 0, max_depth, visited)


def _walk(
	directory: Path,
	depth: int,
	max_depth: int,
	visited: set[tuple[int, int]],
) -> Iterator[Path]:
	try:
		st = directory.stat()
	except OSError as exc:
		raise OracleDetectionFailed(f"Failed to read directory: {exc}") from exc
	identity = (st.st_dev, st.st_ino)
	if identity in visited:
		logger.debug("Skipping already visited directory %s", directory)
		return
	visited.add(identity)

	if depth > max_depth:
		logger.warning("Not descending into %s: nesting exceeds %d levels", directory, max_depth)
		return

	try:
		with os.scandir(directory) as it:
			entries = list(it)
	except OSError as exc:
		raise OracleDetectionFailed(f"Failed to read directory: {exc}") from exc

	for entry in entries:
		path = Path(entry.path)
		try:
			is_dir = entry.is_dir()
			is_file = not is_dir and entry.is_file()
		except OSError as exc:
			raise OracleDetectionFailed(f"Failed to read directory entry: {exc}") from exc
		if is_dir:
			if entry.name in SKIPPED_DIRS:
				continue
			yield from _walk(path, depth + 1, max_depth, visited)
		elif is_file:
			yield path


def walk_directory(root: str | Path, visitor: Callable[[Path], None]) -> None:
	"""Apply ``visitor`` to every file yielded by iter_files."""
	for path in iter_files(root):
		visitor(path)
