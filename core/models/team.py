# =============================================================================
# core/models/team.py - Team Member Schemas
# =============================================================================
# API contract for the about page's team grid:
# - TeamMemberInput: Body of create/update requests (full replacement)
# - TeamMember: A stored member as returned to clients
# =============================================================================

from datetime import datetime
from typing import Any

from pydantic import Field, field_validator

from .common import CamelModel, NonEmptyStr, blank_to_none


class TeamMemberInput(CamelModel):
    """
    Schema for creating or fully replacing a team member.

    Example:
        {
            "name": "Ana",
            "role": "Product Designer",
            "babyPhoto": "https://.../baby.jpg",
            "adultPhoto": "https://.../adult.jpg",
            "linkedin": "https://linkedin.com/in/ana"
        }
    """

    name: NonEmptyStr
    role: NonEmptyStr
    baby_photo: NonEmptyStr
    adult_photo: NonEmptyStr
    email: str | None = None
    linkedin: str | None = None
    cv_link: str | None = None

    @field_validator("email", "linkedin", "cv_link", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        return blank_to_none(value)

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: str | None) -> str | None:
        if value is not None and "@" not in value:
            raise ValueError("email must contain '@'")
        return value.strip() if value else value

    def to_record(self) -> dict[str, Any]:
        """Map to database columns (rank excluded)."""
        return {
            "name": self.name,
            "role": self.role,
            "baby_photo": self.baby_photo,
            "adult_photo": self.adult_photo,
            "email": self.email,
            "linkedin": self.linkedin,
            "cv_link": self.cv_link,
        }


class TeamMember(CamelModel):
    """A stored team member, in the about page's display order."""

    id: str
    name: str
    role: str
    baby_photo: str
    adult_photo: str
    email: str | None = None
    linkedin: str | None = None
    cv_link: str | None = None
    order: int = Field(..., ge=0, description="Display rank, ascending")
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_record(cls, row: dict[str, Any]) -> "TeamMember":
        """Build from a database row."""
        return cls(
            id=str(row["id"]),
            name=row["name"],
            role=row["role"],
            baby_photo=row["baby_photo"],
            adult_photo=row["adult_photo"],
            email=row.get("email"),
            linkedin=row.get("linkedin"),
            cv_link=row.get("cv_link"),
            order=row["sort_order"],
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
        )
