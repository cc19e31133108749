"""Anchor.toml migration to SOON Network, plus backup and restore.

The rewrite contract: Anchor.toml is always copied to Anchor.toml.bak before
any potential mutation (dry runs included), and the file is written only
when not in dry-run mode AND at least one field actually changed.
"""

from __future__ import annotations

import logging
import re
import shutil
from collections.abc import MutableMapping
from dataclasses import dataclass, field
from pathlib import Path

import tomlkit
from tomlkit.exceptions import TOMLKitError
from tomlkit.items import Table
from tomlkit.toml_document import TOMLDocument

from soon_migrate.config import MigrateConfig
from soon_migrate.constants import (
	ANCHOR_TOML,
	BACKUP_SUFFIX,
	CARGO_TOML,
	CLUSTER_ENDPOINTS,
	LOCALNET_PROGRAMS_KEY,
	SOON_DEVNET_RPC,
)
from soon_migrate.errors import (
	BackupFailed,
	BackupNotFound,
	NotAnAnchorProject,
	ReadFailed,
	RestoreFailed,
	TomlParseError,
	WriteFailed,
)
from soon_migrate.oracle.models import ConfidenceLevel, OracleReport
from soon_migrate.oracle.scanner import OracleDetector

logger = logging.getLogger(__name__)

_BARE_LF = re.compile(r"(?<!\r)\n")

NEXT_STEPS: tuple[str, ...] = (
	"1. Update your dependencies if using oracles",
	"2. Test your project on SOON devnet",
	"3. Review oracle integration if detected",
	"4. Deploy to SOON Network",
)

ORACLE_WARNING = "Oracle usage detected in your project. Review the oracle migration recommendations."


@dataclass
class MigrationResult:
	"""Outcome of run_migration."""

	config_updated: bool = False
	oracle_report: OracleReport | None = None
	warnings: list[str] = field(default_factory=list)
	next_steps: list[str] = field(default_factory=list)
	dry_run_preview: str | None = None  # would-be Anchor.toml when dry-running


@dataclass
class AnchorRewrite:
	"""Result of rewriting one Anchor.toml."""

	changed: bool
	written: bool
	content: str
	backup_path: Path
	changes: list[str] = field(default_factory=list)


def anchor_toml_path(path: str | Path) -> Path:
	return Path(path) / ANCHOR_TOML


def backup_path_for(config_path: Path) -> Path:
	"""``Anchor.toml`` -> ``Anchor.toml.bak``."""
	return config_path.with_name(config_path.name + BACKUP_SUFFIX)


def map_cluster_to_soon(cluster: str) -> str:
	"""Map a Solana cluster name to a SOON RPC endpoint.

	Case-insensitive exact match; anything unrecognised, including an
	already-migrated URL, falls back to devnet.
	"""
	return CLUSTER_ENDPOINTS.get(cluster.strip().lower(), SOON_DEVNET_RPC)


def network_name_for(cluster: str) -> str:
	if "mainnet" in cluster:
		return "mainnet"
	if "testnet" in cluster:
		return "testnet"
	return "devnet"


def validate_anchor_project(path: str | Path) -> None:
	"""Raise NotAnAnchorProject unless both Anchor.toml and Cargo.toml exist."""
	root = Path(path)
	for name in (ANCHOR_TOML, CARGO_TOML):
		if not (root / name).is_file():
			logger.debug("%s missing from %s", name, root)
			raise NotAnAnchorProject(str(path))


def create_backup(config_path: Path) -> Path:
	backup = backup_path_for(config_path)
	try:
		shutil.copyfile(config_path, backup)
	except OSError as exc:
		raise BackupFailed(str(exc)) from exc
	logger.info("Backup created at %s", backup)
	return backup


def _read_config(config_path: Path) -> str:
	# Bytes in, bytes out: no newline translation
	try:
		return config_path.read_bytes().decode("utf-8")
	except (OSError, UnicodeDecodeError) as exc:
		raise ReadFailed(str(exc)) from exc


def _load_document(original: str) -> TOMLDocument:
	try:
		return tomlkit.parse(original)
	except TOMLKitError as exc:
		raise TomlParseError(str(exc)) from exc


def _rewrite_cluster(doc: TOMLDocument, changes: list[str]) -> str | None:
	"""Point provider.cluster at SOON. Returns the resulting cluster value."""
	provider = doc.get("provider")
	if not isinstance(provider, MutableMapping):
		return None
	cluster = provider.get("cluster")
	if cluster is None:
		return None
	old = str(cluster)
	new = map_cluster_to_soon(old)
	if new != old:
		provider["cluster"] = new
		changes.append(f"provider.cluster: '{old}' -> '{new}'")
		logger.info("Updating cluster from '%s' to '%s'", old, new)
	return new


def _fresh_table(source: MutableMapping) -> Table:
	# Parsed tables keep their original header name, so copy into a new one
	table = tomlkit.table()
	for key, value in source.items():
		table.add(key, value)
	table.add(tomlkit.nl())
	return table


def _rename_programs(doc: TOMLDocument, network: str, changes: list[str]) -> None:
	programs = doc.get("programs")
	if not isinstance(programs, MutableMapping) or LOCALNET_PROGRAMS_KEY not in programs:
		return
	if network in programs:
		logger.warning("programs.%s already exists and will be replaced by programs.localnet", network)

	renamed = tomlkit.table()
	for key, value in programs.items():
		if key == network:
			continue
		new_key = network if key == LOCALNET_PROGRAMS_KEY else key
		renamed.add(new_key, _fresh_table(value) if isinstance(value, MutableMapping) else value)
	doc["programs"] = renamed
	changes.append(f"programs.{LOCALNET_PROGRAMS_KEY} -> programs.{network}")
	logger.info("Updated programs.%s to programs.%s", LOCALNET_PROGRAMS_KEY, network)


def migrate_anchor_toml(path: str | Path, dry_run: bool = False) -> AnchorRewrite:
	"""Back up, rewrite, and (unless dry-running) save the project's Anchor.toml."""
	config_path = anchor_toml_path(path)
	backup = create_backup(config_path)
	original = _read_config(config_path)
	doc = _load_document(original)

	changes: list[str] = []
	cluster = _rewrite_cluster(doc, changes)
	_rename_programs(doc, network_name_for(cluster or ""), changes)

	try:
		content = tomlkit.dumps(doc)
	except TOMLKitError as exc:
		raise TomlParseError(str(exc)) from exc
	if "\r\n" in original:
		content = _BARE_LF.sub("\r\n", content)

	written = False
	if dry_run:
		logger.info("Dry run enabled. Changes not written.")
	elif not changes:
		logger.info("No changes needed to %s", ANCHOR_TOML)
	else:
		try:
			config_path.write_bytes(content.encode("utf-8"))
		except OSError as exc:
			raise WriteFailed(str(exc)) from exc
		written = True
		logger.info("%s written successfully", ANCHOR_TOML)

	return AnchorRewrite(
		changed=bool(changes),
		written=written,
		content=content,
		backup_path=backup,
		changes=changes,
	)


def oracle_warnings(report: OracleReport) -> list[str]:
	if not report.detected_oracles:
		return []
	warnings = [ORACLE_WARNING]
	for detection in report.detected_oracles:
		if detection.confidence == ConfidenceLevel.HIGH:
			warnings.append(
				f"{detection.oracle_type} oracle detected - migration required for SOON compatibility"
			)
	return warnings


def run_migration(config: MigrateConfig) -> MigrationResult:
	"""Validate the project, scan for oracles, then migrate Anchor.toml.

	In oracle-only mode the config file is neither backed up nor touched.
	"""
	validate_anchor_project(config.project_path)

	logger.info("Running oracle detection")
	report = OracleDetector(config.project_path).scan()
	result = MigrationResult(
		oracle_report=report,
		warnings=oracle_warnings(report),
		next_steps=list(NEXT_STEPS),
	)

	if config.oracle_only:
		logger.info("Oracle-only mode: skipping %s migration", ANCHOR_TOML)
		return result

	rewrite = migrate_anchor_toml(config.project_path, dry_run=config.dry_run)
	result.config_updated = rewrite.written
	if config.dry_run:
		result.dry_run_preview = rewrite.content
	return result


def run_oracle_scan_only(config: MigrateConfig) -> OracleReport:
	validate_anchor_project(config.project_path)
	return OracleDetector(config.project_path).scan()


def restore_backup(path: str | Path) -> None:
	"""Copy Anchor.toml.bak back over Anchor.toml and delete the backup."""
	config_path = anchor_toml_path(path)
	backup = backup_path_for(config_path)
	if not backup.exists():
		raise BackupNotFound(str(backup))
	try:
		shutil.copyfile(backup, config_path)
		backup.unlink()
	except OSError as exc:
		raise RestoreFailed(str(exc)) from exc
	logger.info("Restored %s from %s", config_path, backup)
