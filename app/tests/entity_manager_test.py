"""
测试内容管理器基础框架
验证列表刷新、写后重新获取、过滤、确认删除、并发读取失败和过期结果丢弃
"""
import asyncio

import pytest

from app.schemas.content import HeroImageForm, ServiceForm
from app.services.core import HomeContentManager, ServicesManager
from app.services.core.entity_manager import ManagerState, text_filter
from app.services.core.home_manager import CONTENT, IMAGE, STAT
from app.tests.fakes import FakeGateway

SERVICES = [
    {"id": 1, "title": "Web Design", "description": "Landing pages", "created_at": "2024-01-01T00:00:00",
     "features": ["SEO"]},
    {"id": 2, "title": "Branding", "description": "Logos and identity", "created_at": "2024-02-01T00:00:00",
     "features": []},
    {"id": 3, "title": "Mobile Apps", "description": "iOS and Android", "created_at": "2024-03-01T00:00:00",
     "features": None},
]


@pytest.fixture
def services_gateway():
    return FakeGateway({"services": SERVICES})


def ids(rows):
    return [row.id for row in rows]


def test_refresh_orders_newest_first(services_gateway):
    manager = ServicesManager(services_gateway)
    assert manager.state == ManagerState.LOADING

    result = asyncio.run(manager.refresh())

    assert result.ok
    assert manager.state == ManagerState.IDLE
    assert ids(manager.items()) == [3, 2, 1]
    assert manager.status()["ok"] is True


def test_create_reflects_new_row_and_keeps_others(services_gateway):
    manager = ServicesManager(services_gateway)

    async def scenario():
        await manager.refresh()
        return await manager.create(None, ServiceForm(title="Hosting", features=["CDN", "", "  "]))

    result = asyncio.run(scenario())

    assert result.ok
    titles = [row.title for row in manager.items()]
    assert sorted(titles) == ["Branding", "Hosting", "Mobile Apps", "Web Design"]
    created = [row for row in manager.items() if row.title == "Hosting"][0]
    # 空白的特性条目在写入前被去掉
    assert created.features == ["CDN"]


def test_update_changes_only_target_row(services_gateway):
    manager = ServicesManager(services_gateway)

    async def scenario():
        await manager.refresh()
        return await manager.update(None, 2, ServiceForm(title="Brand Strategy", description="Positioning"))

    result = asyncio.run(scenario())

    assert result.ok
    by_id = {row.id: row for row in manager.items()}
    assert by_id[2].title == "Brand Strategy"
    assert by_id[1].title == "Web Design"
    assert by_id[3].title == "Mobile Apps"


def test_delete_requires_confirmation(services_gateway):
    manager = ServicesManager(services_gateway)

    async def scenario():
        await manager.refresh()
        unconfirmed = await manager.delete(None, 1)
        confirmed = await manager.delete(None, 1, confirmed=True)
        return unconfirmed, confirmed

    unconfirmed, confirmed = asyncio.run(scenario())

    assert not unconfirmed.ok
    assert unconfirmed.code == 409
    assert confirmed.ok
    assert ids(manager.items()) == [3, 2]
    assert [w for w in services_gateway.writes if w[0] == "delete"] == [("delete", "services", 1)]


def test_write_failure_keeps_modal_open_and_rows(services_gateway):
    manager = ServicesManager(services_gateway)

    async def scenario():
        await manager.refresh()
        manager.open_modal(None, 1)
        services_gateway.failing_tables.add("services")
        return await manager.submit_modal(ServiceForm(title="Changed"))

    result = asyncio.run(scenario())

    assert not result.ok
    assert manager.modal is not None
    assert manager.last_status is result
    assert manager.find(None, 1).title == "Web Design"


def test_modal_prefills_form_from_record(services_gateway):
    manager = ServicesManager(services_gateway)
    asyncio.run(manager.refresh())

    modal = manager.open_modal("service", "1")

    assert not modal.is_create
    assert modal.editing.kind == "service"
    assert modal.form.title == "Web Design"
    assert modal.form.features == ["SEO"]

    manager.close_modal()
    assert manager.modal is None
    with pytest.raises(KeyError):
        manager.open_modal("service", 99)


def test_filter_is_idempotent_and_empty_term_restores(services_gateway):
    manager = ServicesManager(services_gateway)
    asyncio.run(manager.refresh())

    once = manager.filter("LOGO")
    twice = text_filter(once, "LOGO", ("title", "description"))

    assert ids(once) == [2]
    assert ids(twice) == ids(once)
    assert ids(manager.filter("")) == [3, 2, 1]


def test_joined_read_failure_keeps_previous_data():
    gateway = FakeGateway({
        "home_content": [{"id": 1, "hero_title": "Hello"}],
        "hero_images": [{"id": 1, "image_url": "a.png", "display_order": 1}],
        "home_stats": [{"id": 1, "number": "10+", "label": "Years", "display_order": 1}],
        "home_services_preview": [],
    })
    manager = HomeContentManager(gateway)

    async def scenario():
        await manager.refresh()
        gateway.tables["hero_images"].append({"id": 2, "image_url": "b.png", "display_order": 2})
        gateway.failing_tables.add("home_stats")
        return await manager.refresh()

    result = asyncio.run(scenario())

    assert not result.ok
    assert manager.current(CONTENT).hero_title == "Hello"
    # 其它表即使读取成功，结果也被整体丢弃
    assert ids(manager.items(IMAGE)) == [1]
    assert ids(manager.items(STAT)) == [1]
    assert manager.status()["ok"] is False


def test_stale_refresh_is_discarded(services_gateway):
    manager = ServicesManager(services_gateway)

    async def scenario():
        gate = asyncio.Event()
        services_gateway.gates["services"] = gate
        slow = asyncio.create_task(manager.refresh())
        while not services_gateway.waiting:
            await asyncio.sleep(0)

        del services_gateway.gates["services"]
        services_gateway.tables["services"] = services_gateway.tables["services"][:1]
        fresh = await manager.refresh()

        gate.set()
        stale = await slow
        return fresh, stale

    fresh, stale = asyncio.run(scenario())

    assert fresh.ok and stale.ok
    assert ids(manager.items()) == [1]


def test_closed_manager_ignores_late_results(services_gateway):
    manager = ServicesManager(services_gateway)

    async def scenario():
        gate = asyncio.Event()
        services_gateway.gates["services"] = gate
        pending = asyncio.create_task(manager.refresh())
        while not services_gateway.waiting:
            await asyncio.sleep(0)
        manager.close()
        gate.set()
        await pending

    asyncio.run(scenario())

    assert manager.items() == []
    assert manager.state == ManagerState.LOADING


def test_home_child_collection_crud():
    gateway = FakeGateway({
        "home_content": [],
        "hero_images": [{"id": 1, "image_url": "a.png", "display_order": 2}],
        "home_stats": [],
        "home_services_preview": [],
    })
    manager = HomeContentManager(gateway)

    async def scenario():
        await manager.refresh()
        manager.open_modal(IMAGE)
        return await manager.submit_modal(HeroImageForm(image_url="first.png", display_order=1))

    result = asyncio.run(scenario())

    assert result.ok
    assert manager.modal is None
    assert [row.image_url for row in manager.items(IMAGE)] == ["first.png", "a.png"]
