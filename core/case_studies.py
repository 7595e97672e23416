# =============================================================================
# core/case_studies.py - Case Study Registry
# =============================================================================
# Hand-authored case study pages are built into the frontend and selected by
# a project's caseStudySlug. This registry lists the slugs that exist so the
# admin API can reject typos, and decides which rendering a project gets.
#
# When adding a new case study page, add its slug here.
# =============================================================================

from core.models.project import CaseStudyKind, CaseStudyResolution, Project


CASE_STUDY_SLUGS: dict[str, str] = {
    "example": "Example case study template",
    "sematext": "Sematext",
    "kindbody": "Kindbody",
}


def is_registered(slug: str | None) -> bool:
    """Check whether a slug has a hand-authored page."""
    return slug is not None and slug in CASE_STUDY_SLUGS


def known_slugs() -> list[str]:
    return sorted(CASE_STUDY_SLUGS)


def can_open(project: Project) -> bool:
    """
    Whether the homepage opens the case study modal for this project.

    Coming-soon projects and projects without a slug stay closed.
    """
    return not project.coming_soon and project.case_study_slug is not None


def resolve(project: Project) -> CaseStudyResolution:
    """
    Pick the case study rendering for a project.

    Priority:
    1. custom - slug registered in CASE_STUDY_SLUGS
    2. markdown - caseStudy text present and not coming soon
    3. coming_soon - placeholder
    """
    if is_registered(project.case_study_slug):
        kind = CaseStudyKind.CUSTOM
    elif project.case_study and not project.coming_soon:
        kind = CaseStudyKind.MARKDOWN
    else:
        kind = CaseStudyKind.COMING_SOON

    return CaseStudyResolution(
        project_id=project.id,
        kind=kind,
        slug=project.case_study_slug if kind == CaseStudyKind.CUSTOM else None,
        content=project.case_study if kind == CaseStudyKind.MARKDOWN else None,
        can_open=can_open(project),
    )
