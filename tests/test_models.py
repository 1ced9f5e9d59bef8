# =============================================================================
# tests/test_models.py - Pydantic Model Tests
# =============================================================================
# Unit tests for the analysis models to ensure:
# - Valid data is accepted and parsed correctly
# - Invalid data raises ValidationError
# - Models serialize to JSON properly
# - Default values work as expected
#
# Run with: pytest tests/test_models.py -v
# =============================================================================

import pytest
from pydantic import ValidationError

from core.models import (
    TYPE_PRIORITY,
    AnalysisReport,
    AnalyzerConfig,
    ColumnReport,
    SemanticType,
)


# =============================================================================
# SemanticType
# =============================================================================

class TestSemanticType:
    """Tests for the SemanticType enum."""

    def test_serialized_values(self):
        assert SemanticType.DATETIME.value == "datetime"
        assert SemanticType("ip") == SemanticType.IP

    def test_priority_order(self):
        """Most specific first; String and Null are not ranked."""
        assert TYPE_PRIORITY[0] == SemanticType.INTEGER
        assert TYPE_PRIORITY[1] == SemanticType.FLOAT
        assert SemanticType.STRING not in TYPE_PRIORITY
        assert SemanticType.NULL not in TYPE_PRIORITY
        assert len(TYPE_PRIORITY) == 9


# =============================================================================
# AnalyzerConfig
# =============================================================================

class TestAnalyzerConfig:
    """Tests for AnalyzerConfig model."""

    def test_defaults(self):
        config = AnalyzerConfig()
        assert config.sample_size is None
        assert config.delimiter is None

    def test_is_immutable(self):
        config = AnalyzerConfig(sample_size=10)
        with pytest.raises(ValidationError):
            config.sample_size = 20

    def test_rejects_non_integer_sample_size(self):
        with pytest.raises(ValidationError):
            AnalyzerConfig(sample_size="many")


# =============================================================================
# ColumnReport
# =============================================================================

class TestColumnReport:
    """Tests for ColumnReport model."""

    def test_valid_column_report(self):
        """Test creating a valid ColumnReport."""
        data = {
            "name": "age",
            "type_name": "integer",
            "confidence": 0.98,
            "subtypes": ["float"],
            "format_examples": ["31", "45"],
            "total_count": 100,
            "analyzed_count": 100,
            "valid_count": 95,
            "unique_values": 40,
            "null_count": 5,
            "min_value": "18",
            "max_value": "90",
            "min_length": 2,
            "max_length": 2,
        }

        column = ColumnReport(**data)

        assert column.type_name == SemanticType.INTEGER
        assert column.subtypes == [SemanticType.FLOAT]
        assert column.null_percent == pytest.approx(5.0)
        assert column.unique_values_exact is True

    def test_defaults(self):
        column = ColumnReport(name="empty")
        assert column.type_name == SemanticType.STRING
        assert column.confidence == 0.0
        assert column.min_value is None
        assert column.null_percent == 0.0

    def test_confidence_out_of_range(self):
        with pytest.raises(ValidationError):
            ColumnReport(name="x", confidence=1.5)

    def test_negative_count(self):
        with pytest.raises(ValidationError):
            ColumnReport(name="x", null_count=-1)

    def test_unknown_type(self):
        with pytest.raises(ValidationError):
            ColumnReport(name="x", type_name="currency")

    def test_json_uses_type_values(self):
        dumped = ColumnReport(name="x", type_name=SemanticType.EMAIL).model_dump(mode="json")
        assert dumped["type_name"] == "email"


# =============================================================================
# AnalysisReport
# =============================================================================

class TestAnalysisReport:
    """Tests for AnalysisReport model."""

    @pytest.fixture
    def report(self) -> AnalysisReport:
        return AnalysisReport(
            row_count=1500,
            column_count=2,
            sample_size=1000,
            detected_delimiter=";",
            columns=[
                ColumnReport(
                    name="id",
                    type_name=SemanticType.INTEGER,
                    confidence=1.0,
                    subtypes=[SemanticType.FLOAT],
                    total_count=1500,
                    analyzed_count=1000,
                    unique_values=1000,
                    min_value="1",
                    max_value="1000",
                ),
                ColumnReport(name="note", confidence=1.0),
            ],
            warnings=["2 row(s) had fewer fields than the header"],
        )

    def test_get_column(self, report):
        assert report.get_column("id").type_name == SemanticType.INTEGER
        assert report.get_column("missing") is None

    def test_round_trip_json(self, report):
        restored = AnalysisReport.model_validate_json(report.model_dump_json())
        assert restored == report

    def test_text_summary(self, report):
        summary = report.to_text_summary()

        assert "CSV ANALYSIS" in summary
        assert "- Rows: 1,500" in summary
        assert "- Delimiter: ';'" in summary
        assert "- Sample size: 1,000 values per column" in summary
        assert "id: integer (100.0%)" in summary
        assert "subtypes: float" in summary
        assert "range: 1 .. 1000" in summary
        assert "nulls 0 (0.0%)" in summary
        assert "## WARNINGS" in summary

    def test_text_summary_shows_null_share(self):
        report = AnalysisReport(
            column_count=1,
            columns=[ColumnReport(name="city", total_count=8, analyzed_count=8, null_count=2)],
        )
        assert "nulls 2 (25.0%)" in report.to_text_summary()

    def test_text_summary_without_sampling(self):
        summary = AnalysisReport(column_count=0).to_text_summary()
        assert "Sample size" not in summary
        assert "WARNINGS" not in summary
