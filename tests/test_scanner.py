"""Tests for the oracle content scanner, merger, and full project scan."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from soon_migrate.errors import OracleDetectionFailed
from soon_migrate.oracle.models import ConfidenceLevel, DetectionLocation, OracleDetection, OracleType
from soon_migrate.oracle.patterns import MANIFEST_PATTERNS, suggestion_for
from soon_migrate.oracle.report import NO_ORACLES_MESSAGE
from soon_migrate.oracle.scanner import (
	OracleDetector,
	find_line_number,
	merge_detections,
	scan_content,
	scan_manifest,
	scan_project,
	scan_source_files,
)


def _detection(
	oracle_type: OracleType,
	confidence: ConfidenceLevel,
	file_path: str = "src/lib.rs",
) -> OracleDetection:
	return OracleDetection(
		oracle_type=oracle_type,
		confidence=confidence,
		locations=[DetectionLocation(file_path=file_path, line_number=1, pattern_matched="x")],
		migration_suggestion=suggestion_for(oracle_type),
	)


class TestFindLineNumber:
	def test_first_matching_line(self) -> None:
		content = "a\nb PriceUpdateV2\nc PriceUpdateV2\n"
		assert find_line_number(content, "PriceUpdateV2") == 2

	def test_first_line_is_one(self) -> None:
		assert find_line_number("use chainlink_solana;\n", "chainlink_solana") == 1

	def test_absent_returns_none(self) -> None:
		assert find_line_number("nothing here", "redstone") is None

	def test_case_insensitive(self) -> None:
		content = "fn main() {}\n// uses the Dia Oracle feed\n"
		assert find_line_number(content, "dia oracle") is None
		assert find_line_number(content, "dia oracle", case_sensitive=False) == 2

	def test_only_newline_ends_a_line(self) -> None:
		content = "fn a() {}\x0c\n//   \x85\nuse chainlink_solana;\n"
		assert find_line_number(content, "chainlink_solana") == 3
		detections = scan_content("fn a() {}\x0c\nuse chainlink_solana;\n", "src/lib.rs")
		assert detections[0].locations[0].line_number == 2

	def test_crlf_lines(self) -> None:
		assert find_line_number("a\r\nb\r\nlatest_round_data\r\n", "latest_round_data") == 3


class TestScanContent:
	def test_first_pattern_wins_per_provider(self) -> None:
		content = "let p = get_price_no_older_than(x);\nuse pyth_solana_receiver_sdk::PriceUpdateV2;\n"
		detections = scan_content(content, "src/lib.rs")
		assert len(detections) == 1
		location = detections[0].locations[0]
		# "use pyth_solana_receiver_sdk" precedes the other Pyth patterns in the table
		assert location.pattern_matched == "use pyth_solana_receiver_sdk"
		assert location.line_number == 2
		assert location.context == "Rust code usage: use pyth_solana_receiver_sdk"

	def test_multiple_providers_in_one_file(self) -> None:
		content = (
			"use switchboard_v2::AggregatorAccountData;\n"
			"let data = chainlink::latest_round_data(ctx, &feed)?;\n"
		)
		detections = scan_content(content, "src/lib.rs")
		types = {d.oracle_type for d in detections}
		assert types == {OracleType.SWITCHBOARD, OracleType.CHAINLINK}
		assert all(d.confidence == ConfidenceLevel.HIGH for d in detections)

	def test_weak_patterns_are_low_and_case_insensitive(self) -> None:
		content = "// pulls prices from the dia ORACLE\n"
		detections = scan_content(content, "src/lib.rs")
		assert len(detections) == 1
		dia = detections[0]
		assert dia.oracle_type == OracleType.DIA
		assert dia.confidence == ConfidenceLevel.LOW
		assert dia.locations[0].pattern_matched == "dia oracle"
		assert dia.locations[0].line_number == 1
		assert dia.locations[0].context == "Potential DIA usage: dia oracle"

	def test_redstone_heuristic(self) -> None:
		content = "// bridged via Wormhole\n"
		detections = scan_content(content, "src/lib.rs")
		assert [d.oracle_type for d in detections] == [OracleType.REDSTONE]
		assert detections[0].locations[0].pattern_matched == "wormhole"

	def test_strong_patterns_are_case_sensitive(self) -> None:
		assert scan_content("priceupdatev2", "src/lib.rs") == []

	def test_no_match(self) -> None:
		assert scan_content("fn main() {}\n", "src/main.rs") == []

	def test_suggestion_is_fixed_per_provider(self) -> None:
		detections = scan_content("use chainlink_solana;\n", "src/lib.rs")
		assert detections[0].migration_suggestion == suggestion_for(OracleType.CHAINLINK)


_CARGO_BASE = """\
[package]
name = "test"
version = "0.1.0"

[dependencies]
anchor-lang = "0.28.0"
"""


class TestScanManifest:
	def test_missing_manifest_is_empty(self, tmp_path: Path) -> None:
		assert scan_manifest(tmp_path) == []

	def test_detects_dependencies(self, tmp_path: Path) -> None:
		(tmp_path / "Cargo.toml").write_text(
			_CARGO_BASE + 'switchboard_on_demand = "0.1"\nchainlink_solana = "1.0"\n'
		)
		detections = scan_manifest(tmp_path)
		by_type = {d.oracle_type: d for d in detections}
		assert set(by_type) == {OracleType.SWITCHBOARD, OracleType.CHAINLINK}
		switchboard = by_type[OracleType.SWITCHBOARD].locations[0]
		assert switchboard.file_path == "Cargo.toml"
		assert switchboard.pattern_matched == "switchboard_on_demand"
		assert switchboard.line_number == 7
		assert switchboard.context == "Cargo.toml dependency"

	def test_source_only_patterns_ignored(self, tmp_path: Path) -> None:
		(tmp_path / "Cargo.toml").write_text(_CARGO_BASE + "# redstone wormhole\n")
		assert scan_manifest(tmp_path) == []

	def test_manifest_patterns_all_high(self) -> None:
		assert all(p.confidence == ConfidenceLevel.HIGH for p in MANIFEST_PATTERNS)

	def test_undecodable_manifest_raises(self, tmp_path: Path) -> None:
		(tmp_path / "Cargo.toml").write_bytes(b"\xff\xfe\x00bad")
		with pytest.raises(OracleDetectionFailed, match="Cargo.toml"):
			scan_manifest(tmp_path)


class TestScanSourceFiles:
	def test_only_rust_files_scanned(self, tmp_path: Path) -> None:
		(tmp_path / "src").mkdir()
		(tmp_path / "src" / "lib.rs").write_text("use chainlink_solana;\n")
		(tmp_path / "src" / "notes.md").write_text("PriceUpdateV2\n")
		detections = scan_source_files(tmp_path)
		assert [d.oracle_type for d in detections] == [OracleType.CHAINLINK]
		assert detections[0].locations[0].file_path == "src/lib.rs"

	def test_non_utf8_file_skipped(self, tmp_path: Path) -> None:
		(tmp_path / "bad.rs").write_bytes(b"\xff\xfePriceUpdateV2")
		(tmp_path / "good.rs").write_text("PriceUpdateV2\n")
		detections = scan_source_files(tmp_path)
		assert len(detections) == 1
		assert detections[0].locations[0].file_path == "good.rs"

	def test_target_dir_ignored(self, tmp_path: Path) -> None:
		(tmp_path / "target").mkdir()
		(tmp_path / "target" / "gen.rs").write_text("PriceUpdateV2\n")
		assert scan_source_files(tmp_path) == []


class TestMergeDetections:
	def test_one_detection_per_provider(self) -> None:
		merged = merge_detections([
			_detection(OracleType.PYTH, ConfidenceLevel.HIGH, "Cargo.toml"),
			_detection(OracleType.PYTH, ConfidenceLevel.HIGH, "src/a.rs"),
			_detection(OracleType.DIA, ConfidenceLevel.LOW, "src/b.rs"),
		])
		assert len(merged) == 2
		pyth = next(d for d in merged if d.oracle_type == OracleType.PYTH)
		assert [loc.file_path for loc in pyth.locations] == ["Cargo.toml", "src/a.rs"]

	def test_medium_promotes_low(self) -> None:
		merged = merge_detections([
			_detection(OracleType.DIA, ConfidenceLevel.LOW),
			_detection(OracleType.DIA, ConfidenceLevel.MEDIUM),
		])
		assert merged[0].confidence == ConfidenceLevel.MEDIUM

	def test_high_always_wins(self) -> None:
		merged = merge_detections([
			_detection(OracleType.REDSTONE, ConfidenceLevel.LOW),
			_detection(OracleType.REDSTONE, ConfidenceLevel.HIGH),
		])
		assert merged[0].confidence == ConfidenceLevel.HIGH

	def test_never_demotes_high(self) -> None:
		merged = merge_detections([
			_detection(OracleType.PYTH, ConfidenceLevel.HIGH),
			_detection(OracleType.PYTH, ConfidenceLevel.MEDIUM),
			_detection(OracleType.PYTH, ConfidenceLevel.LOW),
		])
		assert merged[0].confidence == ConfidenceLevel.HIGH
		assert len(merged[0].locations) == 3

	def test_inputs_not_mutated(self) -> None:
		first = _detection(OracleType.PYTH, ConfidenceLevel.LOW)
		merge_detections([first, _detection(OracleType.PYTH, ConfidenceLevel.HIGH)])
		assert first.confidence == ConfidenceLevel.LOW
		assert len(first.locations) == 1

	def test_empty(self) -> None:
		assert merge_detections([]) == []


class TestScanProject:
	def test_pyth_manifest_and_source(self, pyth_project: Path) -> None:
		report = scan_project(pyth_project)
		assert len(report.detected_oracles) == 1
		pyth = report.detected_oracles[0]
		assert pyth.oracle_type == OracleType.PYTH
		assert pyth.confidence == ConfidenceLevel.HIGH
		assert len(pyth.locations) == 2
		assert {loc.file_path for loc in pyth.locations} == {"Cargo.toml", "src/price.rs"}
		assert report.apro_integration_guide is not None
		assert "## Migrating from Pyth" in report.apro_integration_guide
		assert pyth.migration_suggestion.startswith("Replace Pyth price feeds with APRO")

	def test_no_oracles(self, anchor_project: Path) -> None:
		(anchor_project / "src").mkdir()
		(anchor_project / "src" / "lib.rs").write_text("fn main() {}\n")
		report = scan_project(anchor_project)
		assert report.detected_oracles == []
		assert report.apro_integration_guide is None
		assert report.migration_recommendations == [NO_ORACLES_MESSAGE]
		assert not report.has_oracles

	def test_weak_only_evidence(self, make_project: Callable[..., Path]) -> None:
		root = make_project("weak", sources={"src/lib.rs": "// RedStone price push\n"})
		report = scan_project(root)
		redstone = report.detection_for(OracleType.REDSTONE)
		assert redstone is not None
		assert redstone.confidence == ConfidenceLevel.LOW
		assert report.apro_integration_guide is not None
		assert "Migrating from" not in report.apro_integration_guide

	def test_detector_wrapper(self, pyth_project: Path) -> None:
		report = OracleDetector(pyth_project).scan()
		assert report.detection_for(OracleType.PYTH) is not None
