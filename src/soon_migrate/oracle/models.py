"""Data models for oracle detection results."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class OracleType(str, Enum):
	"""Oracle providers the scanner knows about. Value is the display name."""

	PYTH = "Pyth"
	SWITCHBOARD = "Switchboard"
	CHAINLINK = "Chainlink"
	DIA = "DIA"
	REDSTONE = "RedStone"
	APRO = "APRO"
	UNKNOWN = "Unknown"

	def __str__(self) -> str:
		return self.value


_CONFIDENCE_RANK = {"low": 0, "medium": 1, "high": 2}


class ConfidenceLevel(str, Enum):
	"""How certain a detection is. Ordered Low < Medium < High."""

	LOW = "low"  # comments or weak textual hints
	MEDIUM = "medium"  # dependency OR clear code pattern
	HIGH = "high"  # dependency declaration or strong code pattern

	@property
	def rank(self) -> int:
		return _CONFIDENCE_RANK[self.value]

	@property
	def label(self) -> str:
		return self.value.capitalize()

	def promote(self, other: ConfidenceLevel) -> ConfidenceLevel:
		"""Return whichever of the two levels ranks higher; never demotes."""
		return other if other.rank > self.rank else self

	def __str__(self) -> str:
		return self.value


class DetectionLocation(BaseModel):
	"""Where in the project a provider pattern was matched."""

	model_config = ConfigDict(frozen=True)

	file_path: str
	line_number: int | None = Field(default=None, ge=1)
	pattern_matched: str
	context: str = ""

	def describe(self) -> str:
		"""Render as ``path[:line] - pattern``."""
		if self.line_number is not None:
			return f"{self.file_path}:{self.line_number} - {self.pattern_matched}"
		return f"{self.file_path} - {self.pattern_matched}"


class OracleDetection(BaseModel):
	"""Evidence of one oracle provider, possibly spanning several files."""

	oracle_type: OracleType
	confidence: ConfidenceLevel
	locations: list[DetectionLocation] = Field(default_factory=list)
	migration_suggestion: str = ""


class OracleReport(BaseModel):
	"""Result of a full project scan."""

	model_config = ConfigDict(frozen=True)

	detected_oracles: list[OracleDetection] = Field(default_factory=list)
	migration_recommendations: list[str] = Field(default_factory=list)
	apro_integration_guide: str | None = None

	@property
	def has_oracles(self) -> bool:
		return bool(self.detected_oracles)

	def detection_for(self, oracle_type: OracleType) -> OracleDetection | None:
		for detection in self.detected_oracles:
			if detection.oracle_type == oracle_type:
				return detection
		return None
