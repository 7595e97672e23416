# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - projects.py: Public project listing + admin project CRUD/reorder
# - team.py: Public team listing + admin team CRUD/reorder
# - upload.py: Admin image upload/removal
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import projects
from . import team
from . import upload

__all__ = [
    "health",
    "projects",
    "team",
    "upload",
]
