"""客户评价管理：评价与评价统计"""

from typing import Optional

from app.infrastructure.data_gateway.base import RowId
from app.schemas.content import ReviewForm, ReviewRecord, ReviewStatForm, ReviewStatRecord
from .entity_manager import CollectionSpec, EntityManager, OperationResult

REVIEW = "review"
STAT = "stat"


class ReviewsManager(EntityManager):
    name = "评价"
    collections = (
        CollectionSpec(
            kind=REVIEW,
            table="reviews",
            record=ReviewRecord,
            form=ReviewForm,
            label="评价",
            order_by="created_at",
            ascending=False,
            search_fields=("name", "company", "project"),
        ),
        # 该表的排序字段名为 order，与其它表的 display_order 不一致，保持原样
        CollectionSpec(
            kind=STAT,
            table="reviews_stats",
            record=ReviewStatRecord,
            form=ReviewStatForm,
            label="评价统计",
            order_by="order",
            ascending=True,
        ),
    )

    async def set_approval(self, row_id: RowId, approved: bool) -> OperationResult:
        """审核开关，只写 approved 字段，重复设置结果不变"""
        message = "评价已通过审核" if approved else "评价已取消审核"
        return await self._write_fields(self.spec(REVIEW), row_id, {"approved": approved}, message)

    def filter_reviews(self, term: str = "", approved: Optional[bool] = None):
        rows = self.filter(term, REVIEW)
        if approved is None:
            return rows
        return [row for row in rows if row.approved == approved]
