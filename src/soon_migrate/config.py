"""Run configuration built from command-line arguments."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path


@dataclass
class MigrateConfig:
	"""Options for a single soon-migrate invocation."""

	path: str = "."
	dry_run: bool = False
	verbose: bool = False
	restore: bool = False
	show_guide: bool = False
	oracle_only: bool = False
	json_output: bool = False

	@property
	def project_path(self) -> Path:
		return Path(self.path).expanduser()


def config_from_args(args: argparse.Namespace) -> MigrateConfig:
	return MigrateConfig(
		path=args.path,
		dry_run=args.dry_run,
		verbose=args.verbose,
		restore=args.restore,
		show_guide=args.show_guide,
		oracle_only=args.oracle_only,
		json_output=args.json,
	)


def validate_config(config: MigrateConfig) -> list[str]:
	"""Return a list of problems with the option combination (empty = valid)."""
	problems: list[str] = []
	if not config.path.strip():
		problems.append("Project path must not be empty")
	if "\x00" in config.path:
		problems.append("Project path contains a null byte")
	if config.restore and config.dry_run:
		problems.append("--restore cannot be combined with --dry-run")
	if config.restore and config.oracle_only:
		problems.append("--restore cannot be combined with --oracle-only")
	if config.json_output and config.show_guide:
		problems.append("--json already includes the integration guide; drop --show-guide")
	return problems
