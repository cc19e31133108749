"""Recommendation lines, the APRO integration guide, and their terminal rendering."""

from __future__ import annotations

from collections.abc import Sequence

from soon_migrate import console
from soon_migrate.constants import (
	APRO_API_DEVNET,
	APRO_API_MAINNET,
	APRO_DEVNET_PRICE_FEEDS,
	APRO_PROGRAM_ID_DEVNET,
	APRO_PROGRAM_ID_MAINNET,
)
from soon_migrate.oracle.models import ConfidenceLevel, OracleDetection, OracleReport, OracleType
from soon_migrate.oracle.patterns import GUIDE_EXAMPLE_PROVIDERS

NO_ORACLES_MESSAGE = "No oracle usage detected. Your project should migrate smoothly to SOON Network."
RECOMMENDATIONS_HEADER = "🔍 Oracle usage detected in your project. Consider these migration steps:"
NEXT_STEPS_HEADER = "📚 Next steps:"
NEXT_STEPS: tuple[str, ...] = (
	"1. Review the APRO oracle integration guide generated below",
	"2. Update your dependencies to use APRO oracle SDK",
	"3. Replace oracle-specific code with APRO equivalents",
	"4. Test your price feed integrations on SOON devnet",
)

CONFIDENCE_ICONS = {
	ConfidenceLevel.HIGH: "🔴",
	ConfidenceLevel.MEDIUM: "🟡",
	ConfidenceLevel.LOW: "🟢",
}

CONFIDENCE_COLOURS = {
	ConfidenceLevel.HIGH: "red",
	ConfidenceLevel.MEDIUM: "yellow",
	ConfidenceLevel.LOW: "green",
}

_APRO_AFTER = """\
// After (APRO)
use oracle_sdk::load_price_feed_from_account_info;
let price_feed = load_price_feed_from_account_info(&price_account)?;
let {binding} = price_feed.benchmark_price;
"""

GUIDE_EXAMPLES: dict[OracleType, str] = {
	OracleType.PYTH: (
		"## Migrating from Pyth\n"
		"Replace your Pyth price feed calls:\n"
		"```rust\n"
		"// Before (Pyth)\n"
		"use pyth_solana_receiver_sdk::PriceUpdateV2;\n"
		"let price = price_update.get_price_no_older_than(&clock, max_age)?;\n\n"
		+ _APRO_AFTER.format(binding="price")
		+ "```\n\n"
	),
	OracleType.SWITCHBOARD: (
		"## Migrating from Switchboard\n"
		"Replace your Switchboard aggregator calls:\n"
		"```rust\n"
		"// Before (Switchboard)\n"
		"use switchboard_v2::AggregatorAccountData;\n"
		"let result = aggregator.get_result()?;\n\n"
		+ _APRO_AFTER.format(binding="result")
		+ "```\n\n"
	),
	OracleType.CHAINLINK: (
		"## Migrating from Chainlink\n"
		"Replace your Chainlink price feed calls:\n"
		"```rust\n"
		"// Before (Chainlink)\n"
		"use chainlink_solana as chainlink;\n"
		"let round_data = chainlink::latest_round_data(ctx, &feed_account)?;\n\n"
		+ _APRO_AFTER.format(binding="price")
		+ "```\n\n"
	),
}


def summary_line(detection: OracleDetection) -> str:
	icon = CONFIDENCE_ICONS[detection.confidence]
	return f"{icon} {detection.oracle_type} Oracle detected with {detection.confidence.value} confidence"


def generate_recommendations(detections: Sequence[OracleDetection]) -> list[str]:
	"""Build the ordered recommendation lines shown after a scan."""
	if not detections:
		return [NO_ORACLES_MESSAGE]

	lines = [RECOMMENDATIONS_HEADER, ""]
	for detection in detections:
		lines.append(summary_line(detection))
		for location in detection.locations:
			lines.append(f"   📁 {location.describe()}")
		lines.append(f"   💡 {detection.migration_suggestion}")
		lines.append("")

	lines.append(NEXT_STEPS_HEADER)
	lines.extend(NEXT_STEPS)
	return lines


def _guide_preamble() -> str:
	return (
		"# APRO Oracle Integration Guide for SOON Network\n\n"
		"## Overview\n"
		"APRO has chosen SOON as their first SVM chain to support oracle services. "
		"This guide will help you migrate your existing oracle integrations.\n\n"
		"## Program IDs\n"
		"```\n"
		f"Devnet:  {APRO_PROGRAM_ID_DEVNET}\n"
		f"Mainnet: {APRO_PROGRAM_ID_MAINNET}\n"
		"```\n\n"
		"## API Endpoints\n"
		"```\n"
		f"Devnet:  {APRO_API_DEVNET}\n"
		f"Mainnet: {APRO_API_MAINNET}\n"
		"```\n\n"
	)


def _guide_footer() -> str:
	feeds = "".join(f"- {pair}: {feed_id}\n" for pair, feed_id in APRO_DEVNET_PRICE_FEEDS)
	return (
		"## Available Price Feeds (Devnet)\n"
		f"{feeds}\n"
		"## Getting Started\n"
		"1. Contact APRO BD team for authorization:\n"
		"   - Email: bd@apro.com\n"
		"   - Telegram: Head of Business Development\n"
		"2. Add APRO oracle SDK to your Cargo.toml\n"
		"3. Update your price feed integration code\n"
		"4. Test on SOON devnet before mainnet deployment\n\n"
		"For detailed integration examples, see the complete APRO documentation.\n"
	)


def generate_apro_guide(detections: Sequence[OracleDetection]) -> str:
	"""Render the markdown APRO integration guide.

	Only Pyth, Switchboard and Chainlink get a before/after code example;
	other providers contribute nothing between the preamble and the footer.
	"""
	parts = [_guide_preamble()]
	for detection in detections:
		if detection.oracle_type in GUIDE_EXAMPLE_PROVIDERS:
			parts.append(GUIDE_EXAMPLES[detection.oracle_type])
	parts.append(_guide_footer())
	return "".join(parts)


def print_report(report: OracleReport, verbose: bool = False) -> None:
	print(console.bold(console.cyan("=== Oracle Detection Report ===")))
	print()

	if not report.detected_oracles:
		print(f"{console.green('✅')} No oracle usage detected")
		print("Your project should migrate smoothly to SOON Network without oracle changes.")
		return

	print(f"{console.yellow('🔍')} {len(report.detected_oracles)} oracle(s) detected:")
	print()

	for detection in report.detected_oracles:
		confidence = console.style(
			f"{detection.confidence.label} confidence",
			CONFIDENCE_COLOURS[detection.confidence],
		)
		print(f"{CONFIDENCE_ICONS[detection.confidence]} {detection.oracle_type} Oracle ({confidence})")
		if verbose:
			for location in detection.locations:
				print(f"  📁 {location.describe()}")
		print(f"  💡 {detection.migration_suggestion}")
		print()

	print(console.bold(console.cyan("=== Migration Recommendations ===")))
	for line in report.migration_recommendations:
		if line.startswith(("🔍", "📚")):
			print(console.bold(line))
		else:
			print(line)

	if report.apro_integration_guide is not None:
		print()
		print(console.yellow("💡 Run with --show-guide to see the complete APRO integration guide"))


def print_integration_guide(report: OracleReport) -> None:
	if report.apro_integration_guide is not None:
		print(report.apro_integration_guide)
	else:
		print("No oracle integration guide available.")
