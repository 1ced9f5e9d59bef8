# =============================================================================
# lib/accumulator.py - Per-Column Statistics
# =============================================================================
# A ColumnAccumulator consumes the values of one column, one at a time, and
# turns them into a ColumnReport once the document has been read.
#
# The column's type is only known at the end, but extrema have to be compared
# under that type's ordering (numeric for Integer, chronological for Date...).
# Instead of keeping every value around, the accumulator keeps running extrema
# for each orderable type in parallel, plus plain lexicographic extrema, and
# picks the matching pair at finalization.
# =============================================================================

import logging
from dataclasses import dataclass, field
from typing import Any

from core.models.analysis import TYPE_PRIORITY, ColumnReport, SemanticType
from lib.classifier import ORDER_KEYS, matched_types

logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

MAX_FORMAT_EXAMPLES = 5
SUBTYPE_THRESHOLD = 0.05
MAX_TRACKED_DISTINCT = 100_000


# =============================================================================
# Type Resolution
# =============================================================================

def resolve_column_type(
    type_counts: dict[SemanticType, int],
    valid_count: int,
    threshold: float = SUBTYPE_THRESHOLD,
) -> tuple[SemanticType, float, list[SemanticType]]:
    """
    Choose a column's dominant type from per-type match counts.

    The dominant type is the non-String type matched by the largest share
    of non-null values; ties go to the type listed first in TYPE_PRIORITY.
    When no value matched any such type the column is a String column.

    Args:
        type_counts: Number of non-null values matching each type
        valid_count: Number of non-null analyzed values
        threshold: Minimum share for another type to be listed as a subtype

    Returns:
        Tuple of (type_name, confidence, subtypes)
    """
    if valid_count == 0:
        return SemanticType.STRING, 0.0, []

    confidences = {
        semantic_type: type_counts.get(semantic_type, 0) / valid_count
        for semantic_type in TYPE_PRIORITY
    }

    # max() keeps the first of equal maxima, and TYPE_PRIORITY is ordered.
    best_type = max(TYPE_PRIORITY, key=lambda t: confidences[t])
    best_confidence = confidences[best_type]

    if best_confidence == 0:
        return SemanticType.STRING, 1.0, []

    subtypes = [
        semantic_type
        for semantic_type in TYPE_PRIORITY
        if semantic_type != best_type and confidences[semantic_type] >= threshold
    ]
    return best_type, best_confidence, subtypes


# =============================================================================
# Running Extrema
# =============================================================================

@dataclass
class _Extrema:
    """Smallest and largest value seen under one ordering."""
    min_key: Any = None
    min_value: str | None = None
    max_key: Any = None
    max_value: str | None = None

    def update(self, key: Any, value: str) -> None:
        # Strict comparisons: the first occurrence wins on equal keys.
        if self.min_value is None or key < self.min_key:
            self.min_key, self.min_value = key, value
        if self.max_value is None or key > self.max_key:
            self.max_key, self.max_value = key, value


# =============================================================================
# Column Accumulator
# =============================================================================

@dataclass
class ColumnAccumulator:
    """
    Running state for one column during a single analysis call.

    The orchestrator calls count_present() for every row that has a value
    in this column and add() for the values it decides to analyze.
    """
    name: str
    max_tracked_distinct: int = MAX_TRACKED_DISTINCT

    total_count: int = 0
    analyzed_count: int = 0
    null_count: int = 0
    min_length: int | None = None
    max_length: int | None = None
    distinct_overflow: bool = False

    type_counts: dict[SemanticType, int] = field(default_factory=dict)
    distinct_values: set[str] = field(default_factory=set)
    format_examples: list[str] = field(default_factory=list)
    lexical: _Extrema = field(default_factory=_Extrema)
    typed: dict[SemanticType, _Extrema] = field(default_factory=dict)

    @property
    def valid_count(self) -> int:
        return self.analyzed_count - self.null_count

    def count_present(self) -> None:
        """Record that a row has a value for this column."""
        self.total_count += 1

    def add(self, value: str) -> None:
        """
        Analyze one value.

        Args:
            value: Field value, already stripped of surrounding whitespace.
                An empty string is a null.
        """
        self.analyzed_count += 1
        if not value:
            self.null_count += 1
            return

        for semantic_type in matched_types(value):
            self.type_counts[semantic_type] = self.type_counts.get(semantic_type, 0) + 1
            order_key = ORDER_KEYS.get(semantic_type)
            if order_key is not None:
                self.typed.setdefault(semantic_type, _Extrema()).update(order_key(value), value)

        self.lexical.update(value, value)

        if len(self.format_examples) < MAX_FORMAT_EXAMPLES and value not in self.format_examples:
            self.format_examples.append(value)

        length = len(value)
        if self.min_length is None or length < self.min_length:
            self.min_length = length
        if self.max_length is None or length > self.max_length:
            self.max_length = length

        self._track_distinct(value)

    def _track_distinct(self, value: str) -> None:
        if value in self.distinct_values:
            return
        if len(self.distinct_values) >= self.max_tracked_distinct:
            if not self.distinct_overflow:
                logger.debug(
                    f"Column '{self.name}': distinct tracking capped at "
                    f"{self.max_tracked_distinct} values"
                )
            self.distinct_overflow = True
            return
        self.distinct_values.add(value)

    def finalize(self) -> ColumnReport:
        """Resolve the column type and build its report."""
        type_name, confidence, subtypes = resolve_column_type(
            self.type_counts, self.valid_count
        )

        # Only orderable types have typed extrema; the rest compare as text.
        extrema = self.typed.get(type_name, self.lexical)

        logger.debug(
            f"Column '{self.name}': {type_name.value} ({confidence:.2f}), "
            f"subtypes={[t.value for t in subtypes]}"
        )

        return ColumnReport(
            name=self.name,
            type_name=type_name,
            confidence=confidence,
            subtypes=subtypes,
            format_examples=list(self.format_examples),
            total_count=self.total_count,
            analyzed_count=self.analyzed_count,
            valid_count=self.valid_count,
            unique_values=len(self.distinct_values),
            unique_values_exact=not self.distinct_overflow,
            null_count=self.null_count,
            min_value=extrema.min_value,
            max_value=extrema.max_value,
            min_length=self.min_length or 0,
            max_length=self.max_length or 0,
        )
