# =============================================================================
# app/routers/team.py - Team Member Endpoints
# =============================================================================
# Public:  GET /team (ordered, cached for 24h)
# Admin:   GET/POST /admin/team, PUT /admin/team/reorder,
#          GET/PUT/DELETE /admin/team/{id}
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path
from fastapi.responses import JSONResponse

from app.auth import AdminRoute, require_admin
from app.dependencies import PageCacheDep, public_cache_headers
from core.models import ReorderRequest, SuccessResponse, TeamMember, TeamMemberInput
from core.services.team_service import TeamService

router = APIRouter()
admin_router = APIRouter(route_class=AdminRoute, dependencies=[Depends(require_admin)])

MemberId = Annotated[UUID, Path(description="Team member UUID")]


@router.get("", response_model=list[TeamMember])
async def list_team(cache: PageCacheDep):
    """List all team members in display order (cached)."""
    payload = cache.get(TeamService.public_list_path)

    if payload is None:
        payload = [
            member.model_dump(mode="json", by_alias=True)
            for member in TeamService.list_ordered()
        ]
        cache.set(TeamService.public_list_path, payload)

    return JSONResponse(content=payload, headers=public_cache_headers())


@admin_router.get("", response_model=list[TeamMember])
async def admin_list_team():
    return TeamService.list_ordered()


@admin_router.get("/{member_id}", response_model=TeamMember)
async def admin_get_member(member_id: MemberId):
    return TeamService.get(str(member_id))


@admin_router.post("", response_model=TeamMember)
async def create_member(request: TeamMemberInput):
    """Create a team member at the end of the list."""
    return TeamService.create(request)


@admin_router.put("/reorder", response_model=SuccessResponse)
async def reorder_team(request: ReorderRequest):
    """Reorder team members. Body: {"ids": [...]}, every member exactly once."""
    TeamService.reorder(request.ids)
    return SuccessResponse()


@admin_router.put("/{member_id}", response_model=TeamMember)
async def update_member(member_id: MemberId, request: TeamMemberInput):
    """Replace every field of a team member. Their position is kept."""
    return TeamService.update(str(member_id), request)


@admin_router.delete("/{member_id}", response_model=SuccessResponse)
async def delete_member(member_id: MemberId):
    TeamService.delete(str(member_id))
    return SuccessResponse()
