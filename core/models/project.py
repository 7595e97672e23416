# =============================================================================
# core/models/project.py - Project Schemas
# =============================================================================
# These models define the API contract for portfolio projects:
# - ProjectInput: Body of create/update requests (full replacement)
# - Project: A stored project as returned to clients
# - CaseStudyResolution: Which case-study rendering a project gets
#
# services and industry travel as JSON arrays on the wire and are stored
# as JSON-array strings (see lib.utils.encode_string_list).
# =============================================================================

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import Field, field_validator, model_validator

from lib.utils import decode_string_list, encode_string_list
from .common import CamelModel, NonEmptyStr, blank_to_none


class DeviceType(str, Enum):
    """Device frame the project mockup is shown in."""
    LAPTOP = "laptop"
    MOBILE = "mobile"


class LayoutVariant(str, Enum):
    """
    Arrangement of title, device mockup and metadata on the homepage.

    - A: Centered (title above, device below)
    - B: Left text, right device
    - C: Left device, right text
    - D: Top text, wide device bottom
    - E: Top device, bottom text
    - F: Editorial offset
    """
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    E = "E"
    F = "F"


class CaseStudyKind(str, Enum):
    """
    How a project's case study is rendered.

    - custom: a hand-authored page registered under the project's slug
    - markdown: the project's caseStudy text
    - coming_soon: placeholder
    """
    CUSTOM = "custom"
    MARKDOWN = "markdown"
    COMING_SOON = "coming_soon"


class ProjectInput(CamelModel):
    """
    Schema for creating or fully replacing a project.

    Example:
        {
            "name": "Sematext Cloud",
            "client": "Sematext",
            "startYear": 2021,
            "endYear": null,
            "services": ["UX Design", "UI Design"],
            "industry": ["DevOps"],
            "heroImage": "https://.../hero.png",
            "deviceMockup": "https://.../mockup.png",
            "deviceType": "laptop",
            "layoutVariant": "B",
            "comingSoon": false
        }
    """

    name: NonEmptyStr
    client: NonEmptyStr
    summary: str | None = None

    # Years arrive from form inputs, so numeric strings are accepted
    start_year: int = Field(..., ge=1900, le=2100)
    end_year: int | None = Field(
        default=None,
        ge=1900,
        le=2100,
        description="Last year of the engagement; null means ongoing"
    )

    services: list[str] = Field(default_factory=list)
    industry: list[str] = Field(default_factory=list)

    website: str | None = None
    hero_image: NonEmptyStr
    device_mockup: NonEmptyStr
    device_type: DeviceType
    layout_variant: LayoutVariant

    case_study: str | None = Field(default=None, description="Markdown case study")
    case_study_slug: str | None = Field(
        default=None,
        description="Key of a hand-authored case study page"
    )

    # New projects stay hidden until explicitly published
    coming_soon: bool = True

    @field_validator("summary", "website", "case_study", "case_study_slug", "end_year", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        return blank_to_none(value)

    @field_validator("services", "industry", mode="before")
    @classmethod
    def _accept_text_list(cls, value: Any) -> Any:
        # Plain "UX Design, UI Design" text is split like legacy rows
        if value is None:
            return []
        if isinstance(value, str):
            return decode_string_list(value)
        return value

    @field_validator("services", "industry")
    @classmethod
    def _strip_items(cls, value: list[str]) -> list[str]:
        return [item.strip() for item in value if item.strip()]

    @model_validator(mode="after")
    def _check_year_range(self) -> "ProjectInput":
        if self.end_year is not None and self.end_year < self.start_year:
            raise ValueError("endYear must not be before startYear")
        return self

    def to_record(self) -> dict[str, Any]:
        """Map to database columns (rank excluded)."""
        return {
            "name": self.name,
            "client": self.client,
            "summary": self.summary,
            "start_year": self.start_year,
            "end_year": self.end_year,
            "services": encode_string_list(self.services),
            "industry": encode_string_list(self.industry),
            "website": self.website,
            "hero_image": self.hero_image,
            "device_mockup": self.device_mockup,
            "device_type": self.device_type.value,
            "layout_variant": self.layout_variant.value,
            "case_study": self.case_study,
            "case_study_slug": self.case_study_slug,
            "coming_soon": self.coming_soon,
        }


class Project(CamelModel):
    """
    A stored project.

    Returned by the public listing (in display order), the admin
    endpoints, and every create/update call.
    """

    id: str
    name: str
    client: str
    summary: str | None = None
    start_year: int
    end_year: int | None = None
    services: list[str] = Field(default_factory=list)
    industry: list[str] = Field(default_factory=list)
    website: str | None = None
    hero_image: str
    device_mockup: str
    device_type: DeviceType
    layout_variant: LayoutVariant
    case_study: str | None = None
    case_study_slug: str | None = None
    coming_soon: bool = True
    order: int = Field(..., ge=0, description="Display rank, ascending")
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_record(cls, row: dict[str, Any]) -> "Project":
        """Build from a database row, decoding the list columns."""
        return cls(
            id=str(row["id"]),
            name=row["name"],
            client=row["client"],
            summary=row.get("summary"),
            start_year=row["start_year"],
            end_year=row.get("end_year"),
            services=decode_string_list(row.get("services")),
            industry=decode_string_list(row.get("industry")),
            website=row.get("website"),
            hero_image=row["hero_image"],
            device_mockup=row["device_mockup"],
            device_type=row["device_type"],
            layout_variant=row["layout_variant"],
            case_study=row.get("case_study"),
            case_study_slug=row.get("case_study_slug"),
            coming_soon=row.get("coming_soon", True),
            order=row["sort_order"],
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
        )

    def public_view(self) -> "Project":
        """Copy safe for public pages: case study text hidden while coming soon."""
        if self.coming_soon and self.case_study is not None:
            return self.model_copy(update={"case_study": None})
        return self


class CaseStudyResolution(CamelModel):
    """
    Which case-study rendering a project gets.

    Example:
        {"projectId": "...", "kind": "custom", "slug": "sematext", "content": null}
    """

    project_id: str
    kind: CaseStudyKind
    slug: str | None = None
    content: str | None = Field(default=None, description="Markdown, only for kind=markdown")
    can_open: bool = Field(
        default=False,
        description="Whether the homepage opens this project's case study modal"
    )
