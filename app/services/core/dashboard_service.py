"""仪表盘统计"""

import asyncio
import logging
from typing import Dict

from app.infrastructure.data_gateway.base import DataGatewayInterface
from app.infrastructure.exceptions import GatewayError
from .entity_manager import OperationResult

logger = logging.getLogger(__name__)

# 统计项 -> 数据表
COUNTED_TABLES = {
    "total_services": "services",
    "total_projects": "portfolio_projects",
    "total_reviews": "reviews",
    "total_orders": "orders",
    "total_messages": "messages",
    "total_team_members": "team_members",
}


class DashboardService:
    def __init__(self, gateway: DataGatewayInterface):
        self.gateway = gateway

    async def stats(self) -> OperationResult:
        """并发统计各数据表行数，任一失败时全部返回0"""
        zero = {key: 0 for key in COUNTED_TABLES}
        try:
            counts = await asyncio.gather(
                *(self.gateway.count(table) for table in COUNTED_TABLES.values())
            )
        except GatewayError as e:
            logger.error(f"获取统计数据失败: {e}")
            return OperationResult.failure(f"获取统计数据失败: {e.message}", data=zero)
        data: Dict[str, int] = {key: count or 0 for key, count in zip(COUNTED_TABLES, counts)}
        return OperationResult.success("获取统计数据成功", data=data)
