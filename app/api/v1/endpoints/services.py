"""服务项目接口"""
from fastapi import APIRouter, Depends

from app.api.dependencies import ServiceContainer, get_container
from app.infrastructure.response import success_response
from app.schemas.content import ServiceForm
from .crud import list_payload, register_crud

router = APIRouter()


@router.get("")
async def list_services(
        q: str = "",  # 标题/描述关键字
        container: ServiceContainer = Depends(get_container),
):
    manager = container.services
    await manager.refresh()
    return success_response(data=list_payload(manager, manager.filter(q)))


register_crud(router, lambda c: c.services, "service", ServiceForm)
