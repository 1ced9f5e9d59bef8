# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up environment variables before any imports
# - Provides common fixtures for testing
# =============================================================================

import os
from pathlib import Path

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("MAX_UPLOAD_SIZE_MB", "1")

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def sample_normal_csv() -> Path:
    """Comma-separated file with one column of each common type."""
    return FIXTURES_DIR / "sample_normal.csv"


@pytest.fixture
def sample_semicolon_csv() -> Path:
    return FIXTURES_DIR / "sample_semicolon.csv"


@pytest.fixture
def sample_with_nulls_csv() -> Path:
    return FIXTURES_DIR / "sample_with_nulls.csv"


@pytest.fixture
def sample_header_only_csv() -> Path:
    return FIXTURES_DIR / "sample_header_only.csv"


@pytest.fixture
def simple_csv_text() -> str:
    return "id,name\n1,Alice\n2,Bob\n"


@pytest.fixture
def client():
    """FastAPI test client. Imported lazily so env vars above apply."""
    from fastapi.testclient import TestClient

    from app.main import app

    with TestClient(app) as test_client:
        yield test_client
