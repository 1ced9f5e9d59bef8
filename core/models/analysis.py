# =============================================================================
# core/models/analysis.py - Column Analysis Schemas
# =============================================================================
# These models define the contract between the analysis engine (lib/analyzer.py)
# and its callers (the API routers, the export module, tests).
#
# - AnalyzerConfig: the one immutable input besides the raw CSV text
# - ColumnReport: per-column type inference and statistics
# - AnalysisReport: document-level report, columns in header order
# =============================================================================

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Enums for Type Classification
# =============================================================================

class SemanticType(str, Enum):
    """
    Closed set of types a raw CSV value can be classified as.

    NULL is only ever assigned to empty/blank values; STRING is the
    universal fallback that every non-empty value matches.
    """
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    DATE = "date"
    DATETIME = "datetime"
    TIME = "time"
    EMAIL = "email"
    URL = "url"
    IP = "ip"
    STRING = "string"
    NULL = "null"


# Most specific first. Used to break confidence ties between types.
TYPE_PRIORITY: tuple[SemanticType, ...] = (
    SemanticType.INTEGER,
    SemanticType.FLOAT,
    SemanticType.BOOLEAN,
    SemanticType.DATE,
    SemanticType.DATETIME,
    SemanticType.TIME,
    SemanticType.EMAIL,
    SemanticType.URL,
    SemanticType.IP,
)


# =============================================================================
# Configuration
# =============================================================================

class AnalyzerConfig(BaseModel):
    """
    Options an analyzer is built from.

    Values are checked when a CSVAnalyzer is constructed, so that bad
    options surface as InvalidConfigurationError rather than a pydantic
    ValidationError.

    Example:
        {"sample_size": 1000, "delimiter": null}
    """

    model_config = ConfigDict(frozen=True)

    sample_size: int | None = Field(
        default=None,
        description="Max values analyzed per column (None = every value)"
    )

    delimiter: str | None = Field(
        default=None,
        description="Explicit field separator (None = auto-detect)"
    )


# =============================================================================
# Column Report Model
# =============================================================================

class ColumnReport(BaseModel):
    """
    Finalized profile of a single CSV column.

    Example:
        {
            "name": "id",
            "type_name": "integer",
            "confidence": 1.0,
            "subtypes": ["float"],
            "format_examples": ["1", "2"],
            "total_count": 2,
            "analyzed_count": 2,
            "unique_values": 2,
            "null_count": 0,
            "min_value": "1",
            "max_value": "2"
        }
    """

    # -------------------------------------------------------------------------
    # Type Inference
    # -------------------------------------------------------------------------

    name: str = Field(
        ...,
        description="Column name from the CSV header"
    )

    type_name: SemanticType = Field(
        default=SemanticType.STRING,
        description="Dominant type chosen for the column"
    )

    confidence: float = Field(
        default=0.0,
        ge=0.0,
        le=1.0,
        description="Fraction of analyzed non-null values matching type_name"
    )

    subtypes: list[SemanticType] = Field(
        default_factory=list,
        description="Other types matching a significant share of values"
    )

    format_examples: list[str] = Field(
        default_factory=list,
        description="Up to 5 distinct values, in order of first occurrence"
    )

    # -------------------------------------------------------------------------
    # Counts
    # -------------------------------------------------------------------------

    total_count: int = Field(
        default=0,
        ge=0,
        description="Data rows that have a value (possibly empty) in this column"
    )

    analyzed_count: int = Field(
        default=0,
        ge=0,
        description="Values passed to classification (capped by sample_size)"
    )

    valid_count: int = Field(
        default=0,
        ge=0,
        description="Analyzed values that are not null"
    )

    unique_values: int = Field(
        default=0,
        ge=0,
        description="Distinct non-null analyzed values"
    )

    unique_values_exact: bool = Field(
        default=True,
        description="False when distinct tracking hit its cap (count is a lower bound)"
    )

    null_count: int = Field(
        default=0,
        ge=0,
        description="Analyzed values that are empty or blank"
    )

    # -------------------------------------------------------------------------
    # Extrema
    # -------------------------------------------------------------------------

    min_value: str | None = Field(
        default=None,
        description="Smallest value under the ordering of type_name"
    )

    max_value: str | None = Field(
        default=None,
        description="Largest value under the ordering of type_name"
    )

    min_length: int = Field(default=0, ge=0, description="Shortest value length")
    max_length: int = Field(default=0, ge=0, description="Longest value length")

    @property
    def null_percent(self) -> float:
        """Share of analyzed values that are null, as a percentage."""
        if self.analyzed_count == 0:
            return 0.0
        return self.null_count / self.analyzed_count * 100


# =============================================================================
# Analysis Report Model
# =============================================================================

class AnalysisReport(BaseModel):
    """
    Document-level result of one analysis call.
    """

    row_count: int = Field(
        default=0,
        ge=0,
        description="Data rows (header excluded)"
    )

    column_count: int = Field(
        default=0,
        ge=0,
        description="Columns defined by the header row"
    )

    sample_size: int | None = Field(
        default=None,
        description="Sampling cap the analysis ran with (None = unbounded)"
    )

    detected_delimiter: str = Field(
        default=",",
        description="Field separator used to split the document"
    )

    columns: list[ColumnReport] = Field(
        default_factory=list,
        description="One report per header column, in header order"
    )

    warnings: list[str] = Field(
        default_factory=list,
        description="Notes about rows that did not match the header width"
    )

    def get_column(self, name: str) -> ColumnReport | None:
        """Return the first column with this name, or None."""
        for column in self.columns:
            if column.name == name:
                return column
        return None

    def to_text_summary(self) -> str:
        """
        Render the report as a plain-text table for terminals and logs.
        """
        lines = []

        lines.append("=" * 60)
        lines.append("CSV ANALYSIS")
        lines.append("=" * 60)
        lines.append(f"- Rows: {self.row_count:,}")
        lines.append(f"- Columns: {self.column_count}")
        lines.append(f"- Delimiter: {self.detected_delimiter!r}")
        if self.sample_size is not None:
            lines.append(f"- Sample size: {self.sample_size:,} values per column")
        lines.append("")

        for column in self.columns:
            lines.append(
                f"{column.name}: {column.type_name.value} "
                f"({column.confidence:.1%})"
            )
            if column.subtypes:
                lines.append(f"  subtypes: {', '.join(t.value for t in column.subtypes)}")
            lines.append(
                f"  analyzed {column.analyzed_count}/{column.total_count}, "
                f"unique {column.unique_values}, nulls {column.null_count} ({column.null_percent:.1f}%)"
            )
            if column.min_value is not None:
                lines.append(f"  range: {column.min_value} .. {column.max_value}")

        if self.warnings:
            lines.append("")
            lines.append("## WARNINGS")
            for warning in self.warnings:
                lines.append(f"- {warning}")

        return "\n".join(lines)
