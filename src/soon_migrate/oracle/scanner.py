"""Static oracle scanner: manifest and source substring matching, then merge."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

from soon_migrate.constants import CARGO_TOML, SOURCE_EXTENSION
from soon_migrate.errors import OracleDetectionFailed
from soon_migrate.oracle.models import DetectionLocation, OracleDetection, OracleReport, OracleType
from soon_migrate.oracle.patterns import (
	MANIFEST_PATTERNS,
	SOURCE_PATTERNS,
	ProviderPatterns,
	suggestion_for,
)
from soon_migrate.oracle.report import generate_apro_guide, generate_recommendations
from soon_migrate.oracle.walker import walk_directory

logger = logging.getLogger(__name__)

_TYPE_ORDER = {oracle_type: index for index, oracle_type in enumerate(OracleType)}


def find_line_number(content: str, pattern: str, case_sensitive: bool = True) -> int | None:
	"""Return the 1-based number of the first line containing ``pattern``.

	Lines end at ``\\n`` only (a trailing ``\\r`` is dropped); form feeds and
	Unicode separators do not start a new line.
	"""
	if not case_sensitive:
		pattern = pattern.lower()
	for number, line in enumerate(content.split("\n"), start=1):
		line = line.removesuffix("\r")
		haystack = line if case_sensitive else line.lower()
		if pattern in haystack:
			return number
	return None


def _first_match(content: str, provider: ProviderPatterns) -> str | None:
	if provider.case_sensitive:
		for pattern in provider.patterns:
			if pattern in content:
				return pattern
		return None
	lowered = content.lower()
	for pattern in provider.patterns:
		if pattern.lower() in lowered:
			return pattern
	return None


def scan_content(
	content: str,
	file_path: str,
	patterns: Sequence[ProviderPatterns] = SOURCE_PATTERNS,
) -> list[OracleDetection]:
	"""Match ``patterns`` against one file's text.

	At most one detection per provider: the first pattern of a provider that
	occurs anywhere in the text wins and the rest are not checked.
	"""
	detections: list[OracleDetection] = []
	for provider in patterns:
		pattern = _first_match(content, provider)
		if pattern is None:
			continue
		location = DetectionLocation(
			file_path=file_path,
			line_number=find_line_number(content, pattern, provider.case_sensitive),
			pattern_matched=pattern,
			context=provider.context_for(pattern),
		)
		detections.append(OracleDetection(
			oracle_type=provider.oracle_type,
			confidence=provider.confidence,
			locations=[location],
			migration_suggestion=suggestion_for(provider.oracle_type),
		))
	return detections


def scan_manifest(path: str | Path) -> list[OracleDetection]:
	"""Scan the project's Cargo.toml for oracle SDK dependencies.

	A missing manifest is not an error; an unreadable one is.
	"""
	cargo_path = Path(path) / CARGO_TOML
	if not cargo_path.exists():
		return []
	try:
		content = cargo_path.read_text(encoding="utf-8")
	except (OSError, UnicodeDecodeError) as exc:
		raise OracleDetectionFailed(f"Failed to read {CARGO_TOML}: {exc}") from exc
	return scan_content(content, CARGO_TOML, MANIFEST_PATTERNS)


def _display_path(file_path: Path, root: Path) -> str:
	try:
		return file_path.relative_to(root).as_posix()
	except ValueError:
		return file_path.as_posix()


def scan_source_files(path: str | Path) -> list[OracleDetection]:
	"""Scan every Rust source file under ``path``.

	Files that cannot be read or are not valid UTF-8 are skipped.
	"""
	root = Path(path)
	detections: list[OracleDetection] = []

	def visit(file_path: Path) -> None:
		if file_path.suffix != SOURCE_EXTENSION:
			return
		try:
			content = file_path.read_text(encoding="utf-8")
		except (OSError, UnicodeDecodeError) as exc:
			logger.debug("Skipping unreadable source file %s: %s", file_path, exc)
			return
		detections.extend(scan_content(content, _display_path(file_path, root)))

	walk_directory(root, visit)
	return detections


def merge_detections(detections: Iterable[OracleDetection]) -> list[OracleDetection]:
	"""Collapse per-file detections into one detection per provider.

	Locations are concatenated in encounter order and the confidence is the
	highest seen. Output is ordered by OracleType declaration order.
	"""
	merged: dict[OracleType, OracleDetection] = {}
	for detection in detections:
		existing = merged.get(detection.oracle_type)
		if existing is None:
			merged[detection.oracle_type] = OracleDetection(
				oracle_type=detection.oracle_type,
				confidence=detection.confidence,
				locations=list(detection.locations),
				migration_suggestion=suggestion_for(detection.oracle_type),
			)
			continue
		existing.locations.extend(detection.locations)
		existing.confidence = existing.confidence.promote(detection.confidence)
	return sorted(merged.values(), key=lambda d: _TYPE_ORDER[d.oracle_type])


def scan_project(path: str | Path) -> OracleReport:
	"""Scan a project for oracle usage and build the full report."""
	logger.info("Scanning %s for oracle usage", path)
	detections = scan_manifest(path)
	detections.extend(scan_source_files(path))
	merged = merge_detections(detections)
	logger.debug("Found %d raw detections across %d providers", len(detections), len(merged))

	return OracleReport(
		detected_oracles=merged,
		migration_recommendations=generate_recommendations(merged),
		apro_integration_guide=generate_apro_guide(merged) if merged else None,
	)


class OracleDetector:
	"""Thin OOP wrapper around scan_project."""

	def __init__(self, path: str | Path) -> None:
		self.path = Path(path)

	def scan(self) -> OracleReport:
		return scan_project(self.path)
