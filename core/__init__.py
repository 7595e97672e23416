# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains framework-agnostic business logic:
# - models/: Pydantic schemas for projects, team members and payloads
# - services/: Ordered-collection CRUD, storage, page cache
# - case_studies.py: Registry of hand-authored case study pages
# - reorder_state.py: Optimistic drag-reorder state machine
#
# Code in this package should NOT import from FastAPI.
# This keeps the logic testable and reusable.
# =============================================================================
