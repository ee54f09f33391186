"""团队成员接口"""
from fastapi import APIRouter, Depends

from app.api.dependencies import ServiceContainer, get_container
from app.infrastructure.response import success_response
from app.schemas.content import TeamMemberForm
from .crud import list_payload, register_crud

router = APIRouter()


@router.get("")
async def list_team_members(
        q: str = "",  # 姓名/职位/专长关键字
        container: ServiceContainer = Depends(get_container),
):
    manager = container.team
    await manager.refresh()
    return success_response(data=list_payload(manager, manager.filter(q)))


register_crud(router, lambda c: c.team, "member", TeamMemberForm)
