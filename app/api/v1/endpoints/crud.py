"""
通用增删改接口

各内容模块共用：新增和编辑都经过管理器的弹窗流程，删除必须携带 confirm=true。
"""
import logging
from typing import Callable, Type

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from app.api.dependencies import ServiceContainer, get_container
from app.infrastructure.response import not_found_response, result_response, success_response
from app.services.core.entity_manager import EntityManager

logger = logging.getLogger(__name__)

ManagerGetter = Callable[[ServiceContainer], EntityManager]


def list_payload(manager: EntityManager, items, **extra) -> dict:
    data = {"items": items, "status": manager.status()}
    data.update(extra)
    return data


async def ensure_loaded(manager: EntityManager, kind: str, item_id: str) -> bool:
    """记录不在当前列表中时先刷新一次"""
    if manager.find(kind, item_id) is None:
        await manager.refresh()
    return manager.find(kind, item_id) is not None


def register_crud(
    router: APIRouter,
    get_manager: ManagerGetter,
    kind: str,
    form_model: Type[BaseModel],
    path: str = "",
):
    """
    为一个数据类型注册 新增 / 编辑表单 / 编辑 / 删除 接口

    Args:
        router: 目标路由
        get_manager: 从服务容器取管理器
        kind: 管理器中的数据类型
        form_model: 表单模型，作为请求体
        path: 路由前缀，如 "/stats"
    """
    async def create_item(
            form: form_model,
            container: ServiceContainer = Depends(get_container),
    ):
        manager = get_manager(container)
        manager.open_modal(kind)
        return result_response(await manager.submit_modal(form))

    async def get_item_form(
            item_id: str,
            container: ServiceContainer = Depends(get_container),
    ):
        manager = get_manager(container)
        if not await ensure_loaded(manager, kind, item_id):
            return not_found_response(manager.spec(kind).label)
        modal = manager.open_modal(kind, item_id)
        return success_response(data={"kind": modal.kind, "id": item_id, "form": modal.form})

    async def update_item(
            item_id: str,
            form: form_model,
            container: ServiceContainer = Depends(get_container),
    ):
        manager = get_manager(container)
        if not await ensure_loaded(manager, kind, item_id):
            return not_found_response(manager.spec(kind).label)
        manager.open_modal(kind, item_id)
        return result_response(await manager.submit_modal(form))

    async def delete_item(
            item_id: str,
            confirm: bool = Query(False, description="删除确认"),
            container: ServiceContainer = Depends(get_container),
    ):
        manager = get_manager(container)
        return result_response(await manager.delete(kind, item_id, confirmed=confirm))

    router.add_api_route(f"{path}", create_item, methods=["POST"])
    router.add_api_route(f"{path}/{{item_id}}/form", get_item_form, methods=["GET"])
    router.add_api_route(f"{path}/{{item_id}}", update_item, methods=["PUT"])
    router.add_api_route(f"{path}/{{item_id}}", delete_item, methods=["DELETE"])
