# =============================================================================
# lib/analyzer.py - CSV Analysis Orchestrator
# =============================================================================
# Runs one analysis from raw text to AnalysisReport:
#
#   1. Pick the delimiter (configured, or detected from the first lines)
#   2. Tokenize; the first row is the header
#   3. Feed every data value to its column's accumulator, honoring the
#      sampling cap
#   4. Finalize each accumulator into a ColumnReport
#
# The analyzer holds nothing but its configuration, so one instance can be
# reused across calls and threads.
#
# Usage:
#   from lib.analyzer import CSVAnalyzer, analyze
#
#   report = analyze("id,name\n1,Alice\n2,Bob\n")
#   report = CSVAnalyzer(AnalyzerConfig(sample_size=1000)).analyze(text)
# =============================================================================

import logging
from pathlib import Path
from typing import Union

from core.models.analysis import AnalysisReport, AnalyzerConfig
from lib.accumulator import ColumnAccumulator
from lib.delimiter import detect_delimiter
from lib.encoding import read_text_file
from lib.errors import EmptyInputError, InvalidConfigurationError
from lib.tokenizer import DEFAULT_QUOTE, tokenize

logger = logging.getLogger(__name__)

BOM = "\ufeff"
FORBIDDEN_DELIMITERS = (DEFAULT_QUOTE, "\r", "\n")


# =============================================================================
# Sampling
# =============================================================================

class SamplingController:
    """
    Decides whether the next value of a column is analyzed.

    With no cap every value is analyzed. With a cap of N, the first N
    values of each column are analyzed and the rest are only counted.
    """

    def __init__(self, sample_size: int | None = None):
        self.sample_size = sample_size

    def should_analyze(self, analyzed_count: int) -> bool:
        return self.sample_size is None or analyzed_count < self.sample_size


# =============================================================================
# Analyzer
# =============================================================================

class CSVAnalyzer:
    """
    Infers column types and statistics for delimiter-separated text.

    Raises:
        InvalidConfigurationError: On construction, if the config has an
            unusable sample_size or delimiter
    """

    def __init__(self, config: AnalyzerConfig | None = None):
        self.config = config or AnalyzerConfig()
        _validate_config(self.config)
        self.sampling = SamplingController(self.config.sample_size)

    def analyze(self, text: str) -> AnalysisReport:
        """
        Analyze a whole document.

        Args:
            text: Document text; the first line is the header row

        Returns:
            AnalysisReport with one ColumnReport per header column

        Raises:
            EmptyInputError: If the text is empty or whitespace-only
            MalformedQuotingError: If a quoted field is never closed
        """
        if text.startswith(BOM):
            text = text[len(BOM):]
        if not text.strip():
            raise EmptyInputError()

        delimiter = self.config.delimiter or detect_delimiter(text)
        rows = tokenize(text, delimiter)

        header = _read_header(rows)
        if header is None:
            raise EmptyInputError()

        columns = [ColumnAccumulator(name.strip()) for name in header]
        width = len(columns)
        logger.debug(f"Header has {width} columns (delimiter {delimiter!r})")

        row_count = 0
        short_rows = 0
        long_rows = 0

        for row in rows:
            row_count += 1
            if len(row) < width:
                short_rows += 1
            elif len(row) > width:
                long_rows += 1

            for accumulator, value in zip(columns, row):
                accumulator.count_present()
                if self.sampling.should_analyze(accumulator.analyzed_count):
                    accumulator.add(value.strip())

        warnings = []
        if short_rows:
            warnings.append(
                f"{short_rows} row(s) had fewer fields than the header; "
                f"missing fields were not counted"
            )
        if long_rows:
            warnings.append(
                f"{long_rows} row(s) had more fields than the header; "
                f"extra fields were ignored"
            )
        for warning in warnings:
            logger.debug(warning)

        report = AnalysisReport(
            row_count=row_count,
            column_count=width,
            sample_size=self.config.sample_size,
            detected_delimiter=delimiter,
            columns=[accumulator.finalize() for accumulator in columns],
            warnings=warnings,
        )

        logger.info(f"Analyzed CSV: {row_count} rows × {width} columns")
        return report


def _validate_config(config: AnalyzerConfig) -> None:
    sample_size = config.sample_size
    if sample_size is not None:
        # bool is an int subclass; True is not a sample size.
        if isinstance(sample_size, bool) or not isinstance(sample_size, int):
            raise InvalidConfigurationError("sample_size", sample_size, "must be an integer")
        if sample_size <= 0:
            raise InvalidConfigurationError("sample_size", sample_size, "must be positive")

    delimiter = config.delimiter
    if delimiter is not None:
        if len(delimiter) != 1:
            raise InvalidConfigurationError("delimiter", delimiter, "must be a single character")
        if delimiter in FORBIDDEN_DELIMITERS:
            raise InvalidConfigurationError(
                "delimiter", delimiter, "cannot be a quote or line break"
            )


def _read_header(rows) -> list[str] | None:
    """Consume rows up to and including the first non-blank one."""
    for row in rows:
        if len(row) == 1 and not row[0].strip():
            continue
        return row
    return None


# =============================================================================
# Convenience Functions
# =============================================================================

def analyze(text: str, config: AnalyzerConfig | None = None) -> AnalysisReport:
    """Analyze CSV text in one call."""
    return CSVAnalyzer(config).analyze(text)


def analyze_file(
    file_path: Union[str, Path],
    config: AnalyzerConfig | None = None,
) -> AnalysisReport:
    """
    Analyze a CSV file in one call.

    Combines read_text_file() and CSVAnalyzer.analyze().
    """
    text, encoding = read_text_file(file_path)
    logger.debug(f"Read {file_path} as {encoding}")
    return CSVAnalyzer(config).analyze(text)
