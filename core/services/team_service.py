# =============================================================================
# core/services/team_service.py - Team Member Business Logic
# =============================================================================
# Team members shown on the about page, in admin-defined order.
# =============================================================================

from app.exceptions import TeamMemberNotFoundError
from core.models.team import TeamMember, TeamMemberInput
from core.services.collection_service import OrderedCollectionService


class TeamService(OrderedCollectionService[TeamMember, TeamMemberInput]):
    """Service for team member management operations."""

    table = "team_members"
    entity_name = "team member"
    entity_plural = "team members"
    model = TeamMember
    not_found_error = TeamMemberNotFoundError

    public_list_path = "/api/v1/team"
    listing_paths = ("/about", "/admin/team")
