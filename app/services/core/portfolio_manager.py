"""作品集管理：项目与分类"""

from typing import Any, Dict

from pydantic import BaseModel

from app.schemas.content import (
    PortfolioCategoryForm,
    PortfolioCategoryRecord,
    PortfolioProjectForm,
    PortfolioProjectRecord,
)
from .entity_manager import CollectionSpec, EntityManager, drop_blank

PROJECT = "project"
CATEGORY = "category"


class PortfolioManager(EntityManager):
    """
    作品集管理

    项目读取时关联查询所属分类（多对一，可为空）
    """
    name = "作品集"
    collections = (
        CollectionSpec(
            kind=PROJECT,
            table="portfolio_projects",
            record=PortfolioProjectRecord,
            form=PortfolioProjectForm,
            label="项目",
            order_by="created_at",
            ascending=False,
            columns="*, portfolio_categories (id, name)",
            search_fields=("title", "description"),
        ),
        CollectionSpec(
            kind=CATEGORY,
            table="portfolio_categories",
            record=PortfolioCategoryRecord,
            form=PortfolioCategoryForm,
            label="分类",
            order_by="name",
            ascending=True,
        ),
    )

    def prepare_payload(self, kind: str, form: BaseModel) -> Dict[str, Any]:
        payload = form.model_dump(mode="json")
        if kind != PROJECT:
            return payload
        category_id = (payload.get("category_id") or "").strip()
        if not category_id:
            raise ValueError("必须选择项目分类")
        try:
            payload["category_id"] = int(category_id)
        except ValueError:
            raise ValueError(f"无效的分类ID: {category_id}")
        payload["project_images"] = drop_blank(payload.get("project_images"))
        payload["technologies"] = drop_blank(payload.get("technologies"))
        return payload
