# =============================================================================
# lib/export.py - Report Export
# =============================================================================
# Serializes an AnalysisReport as a spreadsheet-friendly CSV: one row per
# analyzed column, ";"-separated, prefixed with a UTF-8 byte order mark so
# Excel picks the right encoding.
# =============================================================================

import io

import pandas as pd

from core.models.analysis import AnalysisReport, ColumnReport, SemanticType

BOM = "\ufeff"
EXPORT_SEPARATOR = ";"

EXPORT_COLUMNS = [
    "Column",
    "Type",
    "Confidence",
    "Analyzed Values",
    "Subtypes",
    "Examples",
    "Total Values",
    "Unique Values",
    "Null Values",
    "Min",
    "Max",
    "Min Length",
    "Max Length",
]

TYPE_LABELS = {
    SemanticType.INTEGER: "Integer",
    SemanticType.FLOAT: "Decimal",
    SemanticType.BOOLEAN: "Boolean",
    SemanticType.DATE: "Date",
    SemanticType.DATETIME: "Date & Time",
    SemanticType.TIME: "Time",
    SemanticType.EMAIL: "Email",
    SemanticType.URL: "URL",
    SemanticType.IP: "IP Address",
    SemanticType.STRING: "Text",
    SemanticType.NULL: "Null",
}


def type_label(semantic_type: SemanticType) -> str:
    return TYPE_LABELS.get(semantic_type, semantic_type.value)


def format_confidence(confidence: float) -> str:
    """0.875 -> '87.5%'"""
    return f"{confidence * 100:.1f}%"


def format_analyzed_values(analyzed: int, total: int) -> str:
    """'<analyzed> (<share of total>%)'; a full pass reads '(100%)'."""
    if analyzed == total:
        return f"{analyzed} (100%)"
    return f"{analyzed} ({analyzed / total * 100:.1f}%)"


def _column_row(column: ColumnReport) -> list:
    return [
        column.name,
        type_label(column.type_name),
        format_confidence(column.confidence),
        format_analyzed_values(column.analyzed_count, column.total_count),
        ", ".join(type_label(t) for t in column.subtypes),
        ", ".join(column.format_examples),
        column.total_count,
        column.unique_values,
        column.null_count,
        column.min_value or "",
        column.max_value or "",
        column.min_length,
        column.max_length,
    ]


def report_to_frame(report: AnalysisReport) -> pd.DataFrame:
    """One row per report column, headed by EXPORT_COLUMNS."""
    return pd.DataFrame(
        [_column_row(column) for column in report.columns],
        columns=EXPORT_COLUMNS,
    )


def report_to_csv(report: AnalysisReport) -> str:
    """
    Render the report as export CSV text, BOM included.

    Fields that contain the separator or a quote are quoted by pandas.
    """
    csv_buffer = io.StringIO()
    report_to_frame(report).to_csv(
        csv_buffer,
        index=False,
        sep=EXPORT_SEPARATOR,
        lineterminator="\n",
    )
    return BOM + csv_buffer.getvalue()
