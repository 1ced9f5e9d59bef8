# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - analysis.py: AnalyzerConfig, ColumnReport, AnalysisReport
#
# These models define the "contract" between the engine and its callers.
# =============================================================================

from .analysis import (
    TYPE_PRIORITY,
    AnalysisReport,
    AnalyzerConfig,
    ColumnReport,
    SemanticType,
)

__all__ = [
    "TYPE_PRIORITY",
    "AnalysisReport",
    "AnalyzerConfig",
    "ColumnReport",
    "SemanticType",
]
