"""联系方式管理（单行数据）"""

import logging

from pydantic import BaseModel

from app.schemas.content import ContactInfoForm, ContactInfoRecord
from .entity_manager import CollectionSpec, EntityManager, OperationResult

logger = logging.getLogger(__name__)

SAVE_SUCCESS = "Contact information updated successfully!"
SAVE_FAILURE = "Error saving contact information. Please try again."


class ContactManager(EntityManager):
    """
    联系方式管理

    唯一在成功和失败时都返回提示文案的管理器
    """
    name = "联系方式"
    collections = (
        CollectionSpec(
            kind="contact",
            table="contact_info",
            record=ContactInfoRecord,
            form=ContactInfoForm,
            label="联系方式",
            singleton=True,
        ),
    )

    def form(self) -> BaseModel:
        """当前表单内容，无记录时为空表单"""
        record = self.current()
        if record is None:
            return ContactInfoForm()
        return self.prefill_form("contact", record)

    async def save(self, form) -> OperationResult:
        result = await self.save_singleton("contact", form)
        if result.ok:
            result.message = SAVE_SUCCESS
        else:
            logger.error(f"保存联系方式失败: {result.message}")
            result.message = SAVE_FAILURE
        return result
