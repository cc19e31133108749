"""Command-line entry point for soon-migrate."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from soon_migrate import __version__, console
from soon_migrate.config import MigrateConfig, config_from_args, validate_config
from soon_migrate.errors import MigrationError, NotAnAnchorProject, OracleDetectionFailed
from soon_migrate.logging_setup import configure_logging
from soon_migrate.migration import MigrationResult, restore_backup, run_migration
from soon_migrate.oracle.report import print_integration_guide, print_report

logger = logging.getLogger(__name__)

ERROR_HINTS: dict[type[MigrationError], str] = {
	NotAnAnchorProject: "Make sure the path contains both Anchor.toml and Cargo.toml.",
	OracleDetectionFailed: "Re-run with --oracle-only --verbose to isolate the oracle scan.",
}


def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(
		prog="soon-migrate",
		description="Migrates Solana Anchor projects to SOON Network with oracle detection",
	)
	parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
	parser.add_argument("path", nargs="?", default=".", help="Path to the Anchor project")
	parser.add_argument("--dry-run", action="store_true", help="Show changes without applying them")
	parser.add_argument("-v", "--verbose", action="store_true", help="Enable detailed logging")
	parser.add_argument("--restore", action="store_true", help="Restore from backup")
	parser.add_argument(
		"--show-guide", action="store_true", help="Show detailed APRO integration guide",
	)
	parser.add_argument(
		"--oracle-only", action="store_true", help="Only scan for oracles, don't perform migration",
	)
	parser.add_argument(
		"--json", action="store_true", help="Print the result as JSON instead of a formatted report",
	)
	return parser


def _report_error(exc: MigrationError) -> None:
	print(console.red(str(exc), stream=sys.stderr), file=sys.stderr)
	for kind, hint in ERROR_HINTS.items():
		if isinstance(exc, kind):
			print(console.yellow(hint, stream=sys.stderr), file=sys.stderr)


def result_to_dict(result: MigrationResult) -> dict[str, object]:
	return {
		"config_updated": result.config_updated,
		"oracle_report": (
			result.oracle_report.model_dump(mode="json") if result.oracle_report is not None else None
		),
		"warnings": result.warnings,
		"next_steps": result.next_steps,
		"dry_run_preview": result.dry_run_preview,
	}


def _print_result(config: MigrateConfig, result: MigrationResult) -> None:
	if result.oracle_report is not None:
		print_report(result.oracle_report, verbose=config.verbose)
		if config.show_guide:
			print()
			print_integration_guide(result.oracle_report)

	if result.warnings:
		print()
		for warning in result.warnings:
			print(console.yellow(f"⚠ {warning}"))

	if config.oracle_only:
		return

	if result.dry_run_preview is not None:
		print()
		print(console.yellow("Dry run enabled. Changes not written."))
		print(console.cyan(result.dry_run_preview))
	elif not result.config_updated:
		print(console.green("No changes needed to Anchor.toml"))

	print()
	print(console.green("Migration successful!"))
	print(console.yellow("Next steps:"))
	for step in result.next_steps:
		print(step)


def cmd_restore(config: MigrateConfig) -> int:
	spinner = console.Spinner().start("Restoring from backup...")
	failed = console.red("Restore failed.", stream=sys.stderr)
	try:
		restore_backup(config.project_path)
	except MigrationError as exc:
		spinner.finish(failed)
		_report_error(exc)
		return 1
	except BaseException:
		spinner.finish(failed)
		raise
	spinner.finish(console.green("Backup restored successfully.", stream=sys.stderr))
	print(console.green("Restore complete."))
	return 0


def cmd_migrate(config: MigrateConfig) -> int:
	message = "Scanning for oracles..." if config.oracle_only else "Migrating project..."
	spinner = console.Spinner().start(message)
	failed = console.red("Migration failed.", stream=sys.stderr)
	try:
		result = run_migration(config)
	except MigrationError as exc:
		spinner.finish(failed)
		_report_error(exc)
		return 1
	except BaseException:
		# KeyboardInterrupt and unexpected errors still clear the spinner line
		spinner.finish(failed)
		raise
	done = "Oracle scan completed." if config.oracle_only else "Migration completed successfully."
	spinner.finish(console.green(done, stream=sys.stderr))

	if config.json_output:
		print(json.dumps(result_to_dict(result), indent=2, ensure_ascii=False))
	else:
		_print_result(config, result)
	return 0


def main(argv: list[str] | None = None) -> int:
	parser = build_parser()
	args = parser.parse_args(argv)
	config = config_from_args(args)

	problems = validate_config(config)
	if problems:
		for problem in problems:
			print(console.red(problem, stream=sys.stderr), file=sys.stderr)
		return 1

	configure_logging(config.verbose)
	logger.debug("Starting soon-migrate %s with %s", __version__, config)

	if config.restore:
		return cmd_restore(config)
	return cmd_migrate(config)


if __name__ == "__main__":
	sys.exit(main())
