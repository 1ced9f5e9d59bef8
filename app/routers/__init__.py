# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - analysis.py: CSV upload, analysis and report export endpoints
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import analysis
from . import health

__all__ = [
    "analysis",
    "health",
]
