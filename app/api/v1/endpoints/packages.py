"""套餐接口"""
from fastapi import APIRouter, Depends

from app.api.dependencies import ServiceContainer, get_container
from app.infrastructure.response import success_response
from app.schemas.content import PackageForm
from .crud import list_payload, register_crud

router = APIRouter()


@router.get("")
async def list_packages(
        q: str = "",
        container: ServiceContainer = Depends(get_container),
):
    manager = container.packages
    await manager.refresh()
    return success_response(data=list_payload(manager, manager.filter(q)))


register_crud(router, lambda c: c.packages, "package", PackageForm)
