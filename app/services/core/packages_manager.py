"""套餐管理"""

from typing import Any, Dict

from pydantic import BaseModel

from app.schemas.content import PackageForm, PackageRecord
from .entity_manager import CollectionSpec, EntityManager, drop_blank


class PackagesManager(EntityManager):
    """
    套餐管理

    is_popular 不做唯一性约束，公开站点期望至多一个热门套餐
    """
    name = "套餐"
    collections = (
        CollectionSpec(
            kind="package",
            table="packages",
            record=PackageRecord,
            form=PackageForm,
            label="套餐",
            order_by="created_at",
            ascending=False,
            search_fields=("title", "description"),
        ),
    )

    def prepare_payload(self, kind: str, form: BaseModel) -> Dict[str, Any]:
        payload = form.model_dump(mode="json")
        payload["features"] = drop_blank(payload.get("features"))
        return payload
