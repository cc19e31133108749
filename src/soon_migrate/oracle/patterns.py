"""Static pattern tables used to recognise oracle providers.

Each table is an ordered tuple of ``ProviderPatterns``. Order matters twice:
providers are checked in table order, and within a provider the first
pattern that occurs in a file is the one recorded.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType

from soon_migrate.oracle.models import ConfidenceLevel, OracleType


@dataclass(frozen=True)
class ProviderPatterns:
	"""Literal substrings that indicate use of one provider."""

	oracle_type: OracleType
	patterns: tuple[str, ...]
	confidence: ConfidenceLevel
	context_template: str  # formatted with pattern=
	case_sensitive: bool = True

	def context_for(self, pattern: str) -> str:
		return self.context_template.format(pattern=pattern)


MIGRATION_SUGGESTIONS: MappingProxyType[OracleType, str] = MappingProxyType({
	OracleType.PYTH: (
		"Replace Pyth price feeds with APRO oracle integration. "
		"See APRO documentation for migration guide."
	),
	OracleType.SWITCHBOARD: (
		"Replace Switchboard aggregators with APRO oracle data feeds for SOON Network compatibility."
	),
	OracleType.CHAINLINK: (
		"Migrate Chainlink price feeds to APRO oracle for enhanced performance on SOON Network."
	),
	OracleType.DIA: (
		"If using DIA oracle, consider migrating to APRO for better SOON Network integration."
	),
	OracleType.REDSTONE: (
		"If using RedStone oracle, APRO provides similar RWA oracle capabilities for SOON Network."
	),
	OracleType.APRO: "APRO oracle is already supported on SOON Network. No oracle migration needed.",
	OracleType.UNKNOWN: (
		"Review this oracle integration manually and check whether APRO offers an equivalent feed."
	),
})


def suggestion_for(oracle_type: OracleType) -> str:
	return MIGRATION_SUGGESTIONS[oracle_type]


_MANIFEST_CONTEXT = "Cargo.toml dependency"
_CODE_CONTEXT = "Rust code usage: {pattern}"

MANIFEST_PATTERNS: tuple[ProviderPatterns, ...] = (
	ProviderPatterns(
		OracleType.PYTH,
		("pyth-solana-receiver-sdk",),
		ConfidenceLevel.HIGH,
		_MANIFEST_CONTEXT,
	),
	ProviderPatterns(
		OracleType.SWITCHBOARD,
		("switchboard-v2", "switchboard_on_demand"),
		ConfidenceLevel.HIGH,
		_MANIFEST_CONTEXT,
	),
	ProviderPatterns(
		OracleType.CHAINLINK,
		("chainlink_solana",),
		ConfidenceLevel.HIGH,
		_MANIFEST_CONTEXT,
	),
)

SOURCE_PATTERNS: tuple[ProviderPatterns, ...] = (
	ProviderPatterns(
		OracleType.PYTH,
		(
			"use pyth_solana_receiver_sdk",
			"PriceUpdateV2",
			"get_price_no_older_than",
			"pyth_solana_receiver_sdk::",
		),
		ConfidenceLevel.HIGH,
		_CODE_CONTEXT,
	),
	ProviderPatterns(
		OracleType.SWITCHBOARD,
		(
			"use switchboard_v2",
			"use switchboard_on_demand",
			"AggregatorAccountData",
			"get_result",
			"switchboard_v2::",
		),
		ConfidenceLevel.HIGH,
		_CODE_CONTEXT,
	),
	ProviderPatterns(
		OracleType.CHAINLINK,
		(
			"use chainlink_solana",
			"latest_round_data",
			"chainlink_solana::",
			"chainlink::",
		),
		ConfidenceLevel.HIGH,
		_CODE_CONTEXT,
	),
	# Weak heuristics: comments and loose mentions
	ProviderPatterns(
		OracleType.DIA,
		("CoinInfo", "// DIA", "dia oracle", "DIA Oracle"),
		ConfidenceLevel.LOW,
		"Potential DIA usage: {pattern}",
		case_sensitive=False,
	),
	ProviderPatterns(
		OracleType.REDSTONE,
		("redstone", "RedStone", "// RedStone", "wormhole"),
		ConfidenceLevel.LOW,
		"Potential RedStone usage: {pattern}",
		case_sensitive=False,
	),
)

# Providers with a before/after snippet in the APRO integration guide
GUIDE_EXAMPLE_PROVIDERS: frozenset[OracleType] = frozenset({
	OracleType.PYTH,
	OracleType.SWITCHBOARD,
	OracleType.CHAINLINK,
})
