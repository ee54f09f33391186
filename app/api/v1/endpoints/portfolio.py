"""作品集接口：项目与分类"""
from typing import Optional

from fastapi import APIRouter, Depends

from app.api.dependencies import ServiceContainer, get_container
from app.infrastructure.response import success_response
from app.schemas.content import PortfolioCategoryForm, PortfolioProjectForm
from app.services.core.portfolio_manager import CATEGORY, PROJECT
from .crud import list_payload, register_crud

router = APIRouter()


@router.get("/projects")
async def list_projects(
        q: str = "",
        category_id: Optional[int] = None,
        container: ServiceContainer = Depends(get_container),
):
    manager = container.portfolio
    await manager.refresh()
    items = manager.filter(q, PROJECT)
    if category_id is not None:
        items = [item for item in items if item.category_id == category_id]
    return success_response(data=list_payload(manager, items, categories=manager.items(CATEGORY)))


@router.get("/categories")
async def list_categories(container: ServiceContainer = Depends(get_container)):
    manager = container.portfolio
    await manager.refresh()
    return success_response(data=list_payload(manager, manager.items(CATEGORY)))


register_crud(router, lambda c: c.portfolio, PROJECT, PortfolioProjectForm, path="/projects")
register_crud(router, lambda c: c.portfolio, CATEGORY, PortfolioCategoryForm, path="/categories")
