"""仪表盘接口"""
from fastapi import APIRouter, Depends

from app.api.dependencies import ServiceContainer, get_container
from app.infrastructure.response import result_response

router = APIRouter()


@router.get("/stats")
async def get_dashboard_stats(container: ServiceContainer = Depends(get_container)):
    """各内容数据表的行数"""
    return result_response(await container.dashboard.stats())
