"""团队成员管理"""

from app.schemas.content import TeamMemberForm, TeamMemberRecord
from .entity_manager import CollectionSpec, EntityManager


class TeamManager(EntityManager):
    name = "团队成员"
    collections = (
        CollectionSpec(
            kind="member",
            table="team_members",
            record=TeamMemberRecord,
            form=TeamMemberForm,
            label="团队成员",
            order_by="display_order",
            ascending=True,
            search_fields=("name", "designation", "specialties"),
        ),
    )
