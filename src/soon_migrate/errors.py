"""Error types raised by the migration and oracle-scanning code paths."""

from __future__ import annotations


class MigrationError(Exception):
	"""Base class for every failure reported to the user.

	Subclasses set ``prefix``; the detail passed to the constructor is
	appended after a colon.
	"""

	prefix = "Migration failed"

	def __init__(self, detail: str = "") -> None:
		self.detail = detail
		super().__init__(f"{self.prefix}: {detail}" if detail else self.prefix)


class BackupFailed(MigrationError):
	prefix = "Failed to backup Anchor.toml"


class ReadFailed(MigrationError):
	prefix = "Failed to read Anchor.toml"


class TomlParseError(MigrationError):
	prefix = "Failed to parse Anchor.toml"


class WriteFailed(MigrationError):
	prefix = "Failed to write Anchor.toml"


class BackupNotFound(MigrationError):
	prefix = "Backup file not found at path"


class RestoreFailed(MigrationError):
	prefix = "Failed to restore from backup"


class NotAnAnchorProject(MigrationError):
	prefix = "The specified path is not a valid Anchor project"


class OracleDetectionFailed(MigrationError):
	prefix = "Oracle detection failed"
