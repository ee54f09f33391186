"""订单管理：查看、修改状态、删除"""

from typing import Dict, Union

from app.infrastructure.data_gateway.base import RowId
from app.schemas.content import OrderRecord, OrderStatus
from .entity_manager import CollectionSpec, EntityManager, OperationResult

ALL = "all"


class OrdersManager(EntityManager):
    """
    订单管理

    订单由公开站点的下单流程创建，除 status 外的字段只读
    """
    name = "订单"
    collections = (
        CollectionSpec(
            kind="order",
            table="orders",
            record=OrderRecord,
            label="订单",
            order_by="created_at",
            ascending=False,
            search_fields=("name", "email", "company", "package_name", "order_id"),
        ),
    )

    async def set_status(self, row_id: RowId, status: Union[OrderStatus, str]) -> OperationResult:
        """
        修改订单状态，只接受 OrderStatus 中的取值
        """
        try:
            status = OrderStatus(status)
        except ValueError:
            return OperationResult.failure(f"无效的订单状态: {status}", code=400)
        return await self._write_fields(
            self.spec(), row_id, {"status": status.value}, f"订单状态已更新为 {status.value}"
        )

    def filter_orders(self, term: str = "", status: str = ALL):
        rows = self.filter(term)
        if status == ALL:
            return rows
        return [row for row in rows if row.status == status]

    def status_counts(self) -> Dict[str, int]:
        counts = {status.value: 0 for status in OrderStatus}
        for row in self.items():
            if row.status in counts:
                counts[row.status] += 1
        return counts
