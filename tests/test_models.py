# =============================================================================
# tests/test_models.py - Pydantic Model Tests
# =============================================================================
# Unit tests for the API schemas to ensure:
# - Valid form input is accepted and normalized
# - Invalid input raises ValidationError
# - Records map to and from database columns
# - camelCase is used on the wire
#
# Run with: poetry run pytest tests/test_models.py -v
# =============================================================================

import pytest
from pydantic import ValidationError

from core.models import (
    CaseStudyKind,
    DeleteUploadRequest,
    DeviceType,
    LayoutVariant,
    Project,
    ProjectInput,
    ReorderRequest,
    TeamMember,
    TeamMemberInput,
)
from core import case_studies


def _project_row(**overrides):
    row = {
        "id": "11111111-1111-1111-1111-111111111111",
        "name": "Kindbody",
        "client": "Kindbody",
        "summary": None,
        "start_year": 2020,
        "end_year": None,
        "services": '["UX Design"]',
        "industry": "Healthcare, Fertility",
        "website": None,
        "hero_image": "https://cdn.test/hero.png",
        "device_mockup": "https://cdn.test/mockup.png",
        "device_type": "mobile",
        "layout_variant": "C",
        "case_study": "# Kindbody",
        "case_study_slug": None,
        "coming_soon": True,
        "sort_order": 3,
        "created_at": "2024-01-15T10:00:00+00:00",
        "updated_at": "2024-01-15T10:00:00+00:00",
    }
    row.update(overrides)
    return row


# =============================================================================
# ProjectInput
# =============================================================================

class TestProjectInput:

    def test_valid_payload(self, project_payload):
        data = ProjectInput(**project_payload)

        assert data.name == "Sematext Cloud"
        assert data.start_year == 2021
        assert data.device_type == DeviceType.LAPTOP
        assert data.layout_variant == LayoutVariant.B
        assert data.services == ["UX Design", "UI Design"]

    def test_coming_soon_defaults_to_true(self, project_payload):
        del project_payload["comingSoon"]
        assert ProjectInput(**project_payload).coming_soon is True

    def test_form_strings_are_normalized(self, project_payload):
        """The admin form sends years as text and blanks for empty fields."""
        project_payload.update(
            startYear="2019",
            endYear="",
            website="  ",
            summary="",
            services="Research, Strategy",
        )
        data = ProjectInput(**project_payload)

        assert data.start_year == 2019
        assert data.end_year is None
        assert data.website is None
        assert data.summary is None
        assert data.services == ["Research", "Strategy"]

    def test_list_items_are_trimmed(self, project_payload):
        project_payload["industry"] = [" Fintech ", "", "  "]
        assert ProjectInput(**project_payload).industry == ["Fintech"]

    @pytest.mark.parametrize("field", ["name", "client", "heroImage", "deviceMockup"])
    def test_required_text_rejects_blank(self, project_payload, field):
        project_payload[field] = "   "
        with pytest.raises(ValidationError):
            ProjectInput(**project_payload)

    def test_rejects_unknown_layout(self, project_payload):
        project_payload["layoutVariant"] = "G"
        with pytest.raises(ValidationError):
            ProjectInput(**project_payload)

    def test_rejects_unknown_device(self, project_payload):
        project_payload["deviceType"] = "tablet"
        with pytest.raises(ValidationError):
            ProjectInput(**project_payload)

    def test_rejects_end_before_start(self, project_payload):
        project_payload.update(startYear=2022, endYear=2020)
        with pytest.raises(ValidationError, match="endYear"):
            ProjectInput(**project_payload)

    def test_to_record_uses_columns(self, project_payload):
        record = ProjectInput(**project_payload).to_record()

        assert record["start_year"] == 2021
        assert record["services"] == '["UX Design", "UI Design"]'
        assert record["device_type"] == "laptop"
        assert "sort_order" not in record


# =============================================================================
# Project
# =============================================================================

class TestProject:

    def test_from_record(self):
        project = Project.from_record(_project_row())

        assert project.order == 3
        assert project.services == ["UX Design"]
        assert project.industry == ["Healthcare", "Fertility"]
        assert project.layout_variant == LayoutVariant.C

    def test_serializes_camel_case(self):
        data = Project.from_record(_project_row()).model_dump(mode="json", by_alias=True)

        assert data["startYear"] == 2020
        assert data["heroImage"] == "https://cdn.test/hero.png"
        assert data["comingSoon"] is True
        assert data["order"] == 3

    def test_public_view_hides_unreleased_case_study(self):
        project = Project.from_record(_project_row(coming_soon=True))
        assert project.public_view().case_study is None
        assert project.case_study == "# Kindbody"

    def test_public_view_keeps_released_case_study(self):
        project = Project.from_record(_project_row(coming_soon=False))
        assert project.public_view().case_study == "# Kindbody"


# =============================================================================
# Case study resolution
# =============================================================================

class TestCaseStudies:

    def test_registered_slug_renders_custom_page(self):
        project = Project.from_record(_project_row(case_study_slug="kindbody", coming_soon=False))
        resolution = case_studies.resolve(project)

        assert resolution.kind == CaseStudyKind.CUSTOM
        assert resolution.slug == "kindbody"
        assert resolution.content is None
        assert resolution.can_open is True

    def test_markdown_when_released(self):
        project = Project.from_record(_project_row(coming_soon=False))
        resolution = case_studies.resolve(project)

        assert resolution.kind == CaseStudyKind.MARKDOWN
        assert resolution.content == "# Kindbody"
        assert resolution.can_open is False

    def test_coming_soon_hides_markdown(self):
        project = Project.from_record(_project_row(coming_soon=True))
        resolution = case_studies.resolve(project)

        assert resolution.kind == CaseStudyKind.COMING_SOON
        assert resolution.content is None

    def test_coming_soon_project_never_opens(self):
        project = Project.from_record(_project_row(case_study_slug="sematext", coming_soon=True))
        assert case_studies.can_open(project) is False

    def test_registry(self):
        assert case_studies.is_registered("sematext")
        assert not case_studies.is_registered("unknown")
        assert not case_studies.is_registered(None)
        assert case_studies.known_slugs() == ["example", "kindbody", "sematext"]


# =============================================================================
# Team
# =============================================================================

class TestTeamMember:

    def test_valid_payload(self, member_payload):
        data = TeamMemberInput(**member_payload)

        assert data.baby_photo == "https://cdn.test/ana-baby.jpg"
        assert data.cv_link is None

    def test_rejects_invalid_email(self, member_payload):
        member_payload["email"] = "not-an-email"
        with pytest.raises(ValidationError):
            TeamMemberInput(**member_payload)

    def test_blank_email_is_none(self, member_payload):
        member_payload["email"] = ""
        assert TeamMemberInput(**member_payload).email is None

    @pytest.mark.parametrize("field", ["name", "role", "babyPhoto", "adultPhoto"])
    def test_required_fields(self, member_payload, field):
        del member_payload[field]
        with pytest.raises(ValidationError):
            TeamMemberInput(**member_payload)

    def test_from_record(self):
        member = TeamMember.from_record({
            "id": "m1",
            "name": "Ana",
            "role": "Designer",
            "baby_photo": "b.jpg",
            "adult_photo": "a.jpg",
            "sort_order": 0,
        })
        assert member.order == 0
        assert member.model_dump(by_alias=True)["babyPhoto"] == "b.jpg"


# =============================================================================
# Request payloads
# =============================================================================

class TestPayloads:

    @pytest.mark.parametrize("key", ["ids", "projectIds", "memberIds"])
    def test_reorder_request_keys(self, key):
        assert ReorderRequest.model_validate({key: ["b", "a"]}).ids == ["b", "a"]

    def test_reorder_request_requires_ids(self):
        with pytest.raises(ValidationError):
            ReorderRequest.model_validate({})

    def test_delete_upload_requires_path(self):
        with pytest.raises(ValidationError):
            DeleteUploadRequest(path=" ")
