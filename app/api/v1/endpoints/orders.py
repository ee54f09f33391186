"""订单接口：列表、状态修改、删除"""
from fastapi import APIRouter, Depends, Query

from app.api.dependencies import ServiceContainer, get_container
from app.infrastructure.response import result_response, success_response
from app.schemas.content import OrderStatusUpdate
from app.services.core.orders_manager import ALL
from .crud import list_payload

router = APIRouter()


@router.get("")
async def list_orders(
        q: str = "",  # 客户/邮箱/公司/套餐/订单号关键字
        status: str = Query(ALL, description="all 或订单状态"),
        container: ServiceContainer = Depends(get_container),
):
    manager = container.orders
    await manager.refresh()
    return success_response(data=list_payload(
        manager, manager.filter_orders(q, status), counts=manager.status_counts()
    ))


@router.put("/{item_id}/status")
async def update_order_status(
        item_id: str,
        body: OrderStatusUpdate,
        container: ServiceContainer = Depends(get_container),
):
    return result_response(await container.orders.set_status(item_id, body.status))


@router.delete("/{item_id}")
async def delete_order(
        item_id: str,
        confirm: bool = Query(False, description="删除确认"),
        container: ServiceContainer = Depends(get_container),
):
    return result_response(await container.orders.delete(None, item_id, confirmed=confirm))
