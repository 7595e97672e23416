# =============================================================================
# app/routers/projects.py - Project Endpoints
# =============================================================================
# Public (no auth):
#   GET    /projects                     ordered list, cached for 24h
#   GET    /projects/{id}                single project (public view)
#   GET    /projects/{id}/case-study     which case study rendering to use
#
# Admin (require_admin):
#   GET    /admin/projects               ordered list, uncached, full records
#   GET    /admin/projects/{id}
#   POST   /admin/projects               create at the end of the list
#   PUT    /admin/projects/reorder       apply a full permutation
#   PUT    /admin/projects/{id}          full replacement, order untouched
#   DELETE /admin/projects/{id}
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path
from fastapi.responses import JSONResponse

from app.auth import AdminRoute, require_admin
from app.dependencies import PageCacheDep, public_cache_headers
from core.models import (
    CaseStudyResolution,
    Project,
    ProjectInput,
    ReorderRequest,
    SuccessResponse,
)
from core.services.project_service import ProjectService

router = APIRouter()
admin_router = APIRouter(route_class=AdminRoute, dependencies=[Depends(require_admin)])

ProjectId = Annotated[UUID, Path(description="Project UUID")]


# =============================================================================
# Public Endpoints
# =============================================================================

@router.get("", response_model=list[Project])
async def list_projects(cache: PageCacheDep):
    """
    List all projects in display order.

    Served from the page cache until a mutation revalidates it or the
    24h window runs out. Case study text is hidden for coming-soon projects.
    """
    payload = cache.get(ProjectService.public_list_path)

    if payload is None:
        payload = [
            project.model_dump(mode="json", by_alias=True)
            for project in ProjectService.list_public()
        ]
        cache.set(ProjectService.public_list_path, payload)

    return JSONResponse(content=payload, headers=public_cache_headers())


@router.get("/{project_id}", response_model=Project)
async def get_project(project_id: ProjectId):
    """Get one project as its public page shows it."""
    return ProjectService.get_public(str(project_id))


@router.get("/{project_id}/case-study", response_model=CaseStudyResolution)
async def get_case_study(project_id: ProjectId):
    """
    Resolve the project's case study.

    Returns kind "custom" (hand-authored page, see slug), "markdown"
    (content included) or "coming_soon".
    """
    return ProjectService.resolve_case_study(str(project_id))


# =============================================================================
# Admin Endpoints
# =============================================================================

@admin_router.get("", response_model=list[Project])
async def admin_list_projects():
    """List all projects in display order, bypassing the cache."""
    return ProjectService.list_ordered()


@admin_router.get("/{project_id}", response_model=Project)
async def admin_get_project(project_id: ProjectId):
    """Get one project with every field, for the edit form."""
    return ProjectService.get(str(project_id))


@admin_router.post("", response_model=Project)
async def create_project(request: ProjectInput):
    """
    Create a project.

    It is appended to the end of the list (order = current max + 1).
    """
    return ProjectService.create(request)


# Declared before /{project_id} so "reorder" isn't taken for an id
@admin_router.put("/reorder", response_model=SuccessResponse)
async def reorder_projects(request: ReorderRequest):
    """
    Reorder projects.

    Body: {"ids": [...]} with every project id exactly once; the first id
    gets order 0. Applied atomically.
    """
    ProjectService.reorder(request.ids)
    return SuccessResponse()


@admin_router.put("/{project_id}", response_model=Project)
async def update_project(project_id: ProjectId, request: ProjectInput):
    """Replace every field of a project. Its position in the list is kept."""
    return ProjectService.update(str(project_id), request)


@admin_router.delete("/{project_id}", response_model=SuccessResponse)
async def delete_project(project_id: ProjectId):
    """Delete a project. Other projects keep their order."""
    ProjectService.delete(str(project_id))
    return SuccessResponse()
