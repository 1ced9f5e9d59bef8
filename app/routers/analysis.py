# =============================================================================
# app/routers/analysis.py - CSV Analysis Endpoints
# =============================================================================
# Accepts a CSV upload, runs the analysis engine on it, and returns either the
# report as JSON or the report exported as a spreadsheet-friendly CSV.
# =============================================================================

import logging
from pathlib import PurePath
from typing import Annotated

from fastapi import APIRouter, File, Query, UploadFile
from fastapi.responses import StreamingResponse

from app.config import settings
from app.exceptions import FileTooLargeError, InvalidFileTypeError
from core.models.analysis import AnalysisReport, AnalyzerConfig
from lib.analyzer import CSVAnalyzer
from lib.encoding import decode_bytes
from lib.export import report_to_csv

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Helper Functions
# =============================================================================

async def _read_upload(file: UploadFile) -> str:
    """Validate an upload (extension, size) and return its decoded text."""
    filename = file.filename or "data.csv"
    file_ext = "." + filename.split(".")[-1].lower() if "." in filename else ""

    if file_ext not in settings.allowed_extensions_list:
        raise InvalidFileTypeError(filename, settings.allowed_extensions_list)

    content = await file.read()
    file_size_bytes = len(content)
    file_size_mb = file_size_bytes / (1024 * 1024)

    if file_size_bytes > settings.max_upload_size_bytes:
        raise FileTooLargeError(file_size_mb, settings.MAX_UPLOAD_SIZE_MB)

    logger.info(f"Processing upload: {filename} ({file_size_mb:.2f}MB)")

    text, encoding = decode_bytes(content)
    logger.debug(f"Decoded {filename} as {encoding}")
    return text


def _run_analysis(text: str, sample_size: int | None, delimiter: str | None) -> AnalysisReport:
    if sample_size is None:
        sample_size = settings.DEFAULT_SAMPLE_SIZE
    config = AnalyzerConfig(sample_size=sample_size, delimiter=delimiter)
    return CSVAnalyzer(config).analyze(text)


# =============================================================================
# Endpoints
# =============================================================================

@router.post("/analyze", response_model=AnalysisReport)
async def analyze_upload(
    file: Annotated[UploadFile, File(description="CSV file to analyze")],
    sample_size: Annotated[
        int | None,
        Query(description="Max values analyzed per column (default: all)"),
    ] = None,
    delimiter: Annotated[
        str | None,
        Query(description="Field separator (default: auto-detect)"),
    ] = None,
):
    """
    Analyze an uploaded CSV file.

    Detects the delimiter (unless given), infers each column's type with a
    confidence score, and collects per-column statistics.
    """
    text = await _read_upload(file)
    return _run_analysis(text, sample_size, delimiter)


@router.post("/analyze/export")
async def export_analysis(
    file: Annotated[UploadFile, File(description="CSV file to analyze")],
    sample_size: Annotated[
        int | None,
        Query(description="Max values analyzed per column (default: all)"),
    ] = None,
    delimiter: Annotated[
        str | None,
        Query(description="Field separator (default: auto-detect)"),
    ] = None,
):
    """
    Analyze an uploaded CSV file and download the report as CSV.

    The download is ";"-separated with a UTF-8 byte order mark, one row per
    analyzed column.
    """
    text = await _read_upload(file)
    report = _run_analysis(text, sample_size, delimiter)

    stem = PurePath(file.filename or "data.csv").stem
    filename = f"{stem}_analysis.csv"

    return StreamingResponse(
        iter([report_to_csv(report)]),
        media_type="text/csv",
        headers={
            "Content-Disposition": f"attachment; filename={filename}",
        }
    )
