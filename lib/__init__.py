# =============================================================================
# lib/ - Analysis Engine
# =============================================================================
# This package contains the CSV analysis engine:
# - delimiter.py: Field separator detection
# - tokenizer.py: Quote-aware row splitting
# - classifier.py: Per-value type recognizers
# - accumulator.py: Per-column statistics and type resolution
# - analyzer.py: Orchestrator (CSVAnalyzer, analyze, analyze_file)
# - encoding.py: Byte decoding for uploads and files
# - export.py: Report to spreadsheet CSV
# - errors.py: Engine error hierarchy
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.analyzer import CSVAnalyzer, SamplingController, analyze, analyze_file
from lib.errors import (
    AnalysisError,
    DecodingError,
    EmptyInputError,
    InvalidConfigurationError,
    MalformedQuotingError,
)

__all__ = [
    # Analyzer
    "CSVAnalyzer",
    "SamplingController",
    "analyze",
    "analyze_file",
    # Errors
    "AnalysisError",
    "DecodingError",
    "EmptyInputError",
    "InvalidConfigurationError",
    "MalformedQuotingError",
]
