# =============================================================================
# core/services/project_service.py - Project Business Logic
# =============================================================================
# Portfolio projects shown on the homepage, in admin-defined order.
# Adds to the shared collection logic:
# - caseStudySlug must name a registered case study
# - public reads hide case study text while a project is coming soon
# =============================================================================

from app.exceptions import ProjectNotFoundError, UnknownCaseStudySlugError
from core import case_studies
from core.models.project import CaseStudyResolution, Project, ProjectInput
from core.services.collection_service import OrderedCollectionService


class ProjectService(OrderedCollectionService[Project, ProjectInput]):
    """
    Service for project management operations.

    Example:
        project = ProjectService.create(ProjectInput(...))
        ProjectService.reorder([c.id, a.id, b.id])
        ProjectService.list_public()  # [c, a, b]
    """

    table = "projects"
    entity_name = "project"
    entity_plural = "projects"
    model = Project
    not_found_error = ProjectNotFoundError

    public_list_path = "/api/v1/projects"
    listing_paths = ("/", "/admin/projects")

    @classmethod
    def detail_paths(cls, entity_id: str) -> tuple[str, ...]:
        return (f"/projects/{entity_id}", f"/admin/projects/{entity_id}")

    @classmethod
    def validate_input(cls, data: ProjectInput) -> None:
        slug = data.case_study_slug
        if slug is not None and not case_studies.is_registered(slug):
            raise UnknownCaseStudySlugError(slug, case_studies.known_slugs())

    @classmethod
    def list_public(cls) -> list[Project]:
        """Ordered projects as the homepage may show them."""
        return [project.public_view() for project in cls.list_ordered()]

    @classmethod
    def get_public(cls, project_id: str) -> Project:
        """One project as its public page may show it."""
        return cls.get(project_id).public_view()

    @classmethod
    def resolve_case_study(cls, project_id: str) -> CaseStudyResolution:
        """Which case study rendering the project's page should use."""
        return case_studies.resolve(cls.get(project_id))
