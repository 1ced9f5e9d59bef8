# =============================================================================
# lib/errors.py - Analysis Errors
# =============================================================================
# Every failure the analysis engine can report. All of them abort the call:
# there is no partial report.
#
# Following the rule "Errors should tell HOW to fix, not just WHAT failed",
# each error carries a suggestion alongside its message.
# =============================================================================

from typing import Any


class AnalysisError(Exception):
    """
    Base error for the analysis engine.

    Attributes:
        code: Machine-readable error code
        message: Human-readable error message
        suggestion: Actionable suggestion for fixing the input
        details: Additional context for debugging
    """

    def __init__(
        self,
        message: str,
        code: str = "ANALYSIS_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f"\n  Suggestion: {self.suggestion}"
        return result

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for API responses."""
        return {
            "code": self.code,
            "message": self.message,
            "suggestion": self.suggestion,
            "details": self.details,
        }


class EmptyInputError(AnalysisError):
    """Raised when the document has no header row."""

    def __init__(self):
        super().__init__(
            "Document is empty: no header row found",
            code="EMPTY_INPUT",
            suggestion="Provide a CSV whose first line names the columns",
        )


class MalformedQuotingError(AnalysisError):
    """Raised when a quoted field is still open at end of input."""

    def __init__(self, line: int):
        super().__init__(
            f"Unterminated quoted field starting on line {line}",
            code="MALFORMED_QUOTING",
            suggestion="Close the quote, or double any quote character inside the field",
            details={"line": line},
        )
        self.line = line


class InvalidConfigurationError(AnalysisError):
    """Raised when an analyzer option has an unusable value."""

    def __init__(self, option: str, value: Any, reason: str):
        super().__init__(
            f"Invalid {option}: {value!r} ({reason})",
            code="INVALID_CONFIGURATION",
            suggestion=f"Fix '{option}' or leave it unset to use the default",
            details={"option": option, "value": repr(value)},
        )
        self.option = option
        self.value = value


class DecodingError(AnalysisError):
    """Raised when file bytes cannot be decoded with any supported encoding."""

    def __init__(self, tried: list[str]):
        super().__init__(
            "Could not decode file as text",
            code="DECODING_FAILED",
            suggestion="Save the file as UTF-8 and try again",
            details={"encodings_tried": tried},
        )
