# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - common.py: camelCase base model, reorder/upload/success payloads
# - project.py: Project schemas and case-study resolution
# - team.py: Team member schemas
#
# These models define the "contract" between API and clients.
# =============================================================================

# -----------------------------------------------------------------------------
# Common Models
# -----------------------------------------------------------------------------
from .common import (
    CamelModel,
    DeleteUploadRequest,
    NonEmptyStr,
    ReorderRequest,
    SuccessResponse,
    UploadResponse,
)

# -----------------------------------------------------------------------------
# Project Models - Homepage and case studies
# -----------------------------------------------------------------------------
from .project import (
    CaseStudyKind,
    CaseStudyResolution,
    DeviceType,
    LayoutVariant,
    Project,
    ProjectInput,
)

# -----------------------------------------------------------------------------
# Team Models - About page
# -----------------------------------------------------------------------------
from .team import (
    TeamMember,
    TeamMemberInput,
)

__all__ = [
    # Common
    "CamelModel",
    "DeleteUploadRequest",
    "NonEmptyStr",
    "ReorderRequest",
    "SuccessResponse",
    "UploadResponse",
    # Project
    "CaseStudyKind",
    "CaseStudyResolution",
    "DeviceType",
    "LayoutVariant",
    "Project",
    "ProjectInput",
    # Team
    "TeamMember",
    "TeamMemberInput",
]
