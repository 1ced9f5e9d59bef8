# =============================================================================
# core/ - Shared Contracts
# =============================================================================
# This package contains framework-agnostic definitions:
# - models/: Pydantic schemas for the analysis report and its configuration
#
# Code in this package should NOT import from FastAPI.
# This keeps the models usable by the engine, the API and tests alike.
# =============================================================================
