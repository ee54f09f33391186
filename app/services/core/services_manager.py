"""服务项目管理"""

from typing import Any, Dict

from pydantic import BaseModel

from app.schemas.content import ServiceForm, ServiceRecord
from .entity_manager import CollectionSpec, EntityManager, drop_blank


class ServicesManager(EntityManager):
    name = "服务"
    collections = (
        CollectionSpec(
            kind="service",
            table="services",
            record=ServiceRecord,
            form=ServiceForm,
            label="服务",
            order_by="created_at",
            ascending=False,
            search_fields=("title", "description"),
        ),
    )

    def prepare_payload(self, kind: str, form: BaseModel) -> Dict[str, Any]:
        payload = form.model_dump(mode="json")
        payload["features"] = drop_blank(payload.get("features"))
        return payload
