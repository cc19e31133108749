"""Static detection of third-party price-oracle usage in Anchor projects."""

from soon_migrate.oracle.models import (
	ConfidenceLevel,
	DetectionLocation,
	OracleDetection,
	OracleReport,
	OracleType,
)
from soon_migrate.oracle.report import (
	generate_apro_guide,
	generate_recommendations,
	print_integration_guide,
	print_report,
)
from soon_migrate.oracle.scanner import (
	OracleDetector,
	merge_detections,
	scan_content,
	scan_manifest,
	scan_project,
	scan_source_files,
)
from soon_migrate.oracle.walker import iter_files, walk_directory

__all__ = [
	"ConfidenceLevel",
	"DetectionLocation",
	"OracleDetection",
	"OracleDetector",
	"OracleReport",
	"OracleType",
	"generate_apro_guide",
	"generate_recommendations",
	"iter_files",
	"merge_detections",
	"print_integration_guide",
	"print_report",
	"scan_content",
	"scan_manifest",
	"scan_project",
	"scan_source_files",
	"walk_directory",
]
