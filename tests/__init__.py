# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the CSV Profiler:
# - test_delimiter.py, test_tokenizer.py, test_classifier.py: engine building blocks
# - test_accumulator.py: per-column statistics and type resolution
# - test_analyzer.py: end-to-end analysis of CSV text and files
# - test_models.py: Pydantic model validation
# - test_encoding.py, test_export.py: input decoding and report export
# - test_api.py: HTTP endpoints
#
# Run tests with: pytest
# =============================================================================
