"""
首页内容管理

首页文案为单行数据；首屏图片、数据统计、服务预览为三个独立的数据表，
只通过 display_order 在客户端排序，不要求唯一。
"""

from app.schemas.content import (
    HeroImageForm,
    HeroImageRecord,
    HomeContentForm,
    HomeContentRecord,
    HomeServicePreviewForm,
    HomeServicePreviewRecord,
    HomeStatForm,
    HomeStatRecord,
)
from .entity_manager import CollectionSpec, EntityManager, OperationResult

CONTENT = "content"
IMAGE = "image"
STAT = "stat"
SERVICE = "service"


class HomeContentManager(EntityManager):
    name = "首页内容"
    collections = (
        CollectionSpec(
            kind=CONTENT,
            table="home_content",
            record=HomeContentRecord,
            form=HomeContentForm,
            label="首页文案",
            singleton=True,
        ),
        CollectionSpec(
            kind=IMAGE,
            table="hero_images",
            record=HeroImageRecord,
            form=HeroImageForm,
            label="首屏图片",
            order_by="display_order",
        ),
        CollectionSpec(
            kind=STAT,
            table="home_stats",
            record=HomeStatRecord,
            form=HomeStatForm,
            label="首页统计",
            order_by="display_order",
        ),
        CollectionSpec(
            kind=SERVICE,
            table="home_services_preview",
            record=HomeServicePreviewRecord,
            form=HomeServicePreviewForm,
            label="服务预览",
            order_by="display_order",
        ),
    )

    def content_form(self) -> HomeContentForm:
        record = self.current(CONTENT)
        if record is None:
            return HomeContentForm()
        return self.prefill_form(CONTENT, record)

    async def save_content(self, form) -> OperationResult:
        result = await self.save_singleton(CONTENT, form)
        if result.ok:
            result.message = "Content updated successfully!"
        return result
