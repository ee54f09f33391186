"""
测试订单状态修改与评价审核
"""
import asyncio

import pytest

from app.schemas.content import OrderStatus
from app.services.core import OrdersManager, ReviewsManager
from app.services.core.reviews_manager import STAT
from app.tests.fakes import FakeGateway

ORDERS = [
    {"id": 1, "order_id": "ORD-001", "name": "Ada", "email": "ada@example.com", "package_name": "Starter",
     "status": "pending", "created_at": "2024-01-01T00:00:00"},
    {"id": 2, "order_id": "ORD-002", "name": "Linus", "email": "linus@example.com", "package_name": "Pro",
     "status": "completed", "created_at": "2024-02-01T00:00:00"},
]

REVIEWS = [
    {"id": 1, "name": "Grace", "company": "Navy", "rating": 5, "approved": True},
    {"id": 2, "name": "Alan", "company": "Bletchley", "rating": 4, "approved": False},
]


@pytest.mark.parametrize("status", [s.value for s in OrderStatus])
def test_every_known_status_persists(status):
    gateway = FakeGateway({"orders": ORDERS})
    manager = OrdersManager(gateway)

    async def scenario():
        await manager.refresh()
        return await manager.set_status(1, status)

    result = asyncio.run(scenario())

    assert result.ok
    assert manager.find(None, 1).status == status
    assert manager.find(None, 2).status == "completed"


def test_unknown_status_is_rejected_without_write():
    gateway = FakeGateway({"orders": ORDERS})
    manager = OrdersManager(gateway)

    async def scenario():
        await manager.refresh()
        return await manager.set_status(1, "shipped")

    result = asyncio.run(scenario())

    assert not result.ok
    assert result.code == 400
    assert gateway.writes == []


def test_order_filters_and_counts():
    gateway = FakeGateway({"orders": ORDERS})
    manager = OrdersManager(gateway)
    asyncio.run(manager.refresh())

    assert [o.id for o in manager.filter_orders("", "completed")] == [2]
    assert [o.id for o in manager.filter_orders("ord-001")] == [1]
    assert manager.status_counts() == {"pending": 1, "in_progress": 0, "completed": 1, "cancelled": 0}


@pytest.mark.parametrize("review_id, approved", [(1, True), (2, False)])
def test_approval_toggle_is_idempotent(review_id, approved):
    gateway = FakeGateway({"reviews": REVIEWS, "reviews_stats": []})
    manager = ReviewsManager(gateway)

    async def scenario():
        await manager.refresh()
        await manager.set_approval(review_id, approved)
        return await manager.set_approval(review_id, approved)

    result = asyncio.run(scenario())

    assert result.ok
    assert manager.find(None, review_id).approved is approved
    # 只写 approved 字段
    assert all(write[3] == {"approved": approved} for write in gateway.writes)


def test_review_stats_keep_order_field():
    gateway = FakeGateway({
        "reviews": REVIEWS,
        "reviews_stats": [
            {"id": 1, "number": "98%", "label": "Happy clients", "order": 2},
            {"id": 2, "number": "200+", "label": "Projects", "order": 1},
        ],
    })
    manager = ReviewsManager(gateway)
    asyncio.run(manager.refresh())

    assert [s.label for s in manager.items(STAT)] == ["Projects", "Happy clients"]
    assert [r.name for r in manager.filter_reviews("", approved=False)] == ["Alan"]
