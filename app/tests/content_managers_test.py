"""
测试各内容管理器的特有行为
作品集分类转换、联系方式保存提示、首页文案、留言已读与回复
"""
import asyncio
from unittest.mock import AsyncMock

import pytest

from app.infrastructure.exceptions import ConfigurationError, ReplyDispatchError
from app.schemas.content import ContactInfoForm, HomeContentForm, PortfolioProjectForm
from app.services.core import ContactManager, HomeContentManager, MessagesManager, PortfolioManager
from app.services.core.contact_manager import SAVE_FAILURE, SAVE_SUCCESS
from app.services.core.portfolio_manager import CATEGORY, PROJECT
from app.tests.fakes import FakeGateway


def portfolio_gateway():
    return FakeGateway({
        "portfolio_projects": [
            {"id": 1, "title": "Shop", "category_id": 7, "technologies": ["React"],
             "portfolio_categories": {"id": 7, "name": "Web"}},
        ],
        "portfolio_categories": [{"id": 8, "name": "Mobile"}, {"id": 7, "name": "Web"}],
    })


def test_project_payload_casts_category_and_drops_blanks():
    gateway = portfolio_gateway()
    manager = PortfolioManager(gateway)

    async def scenario():
        await manager.refresh()
        form = PortfolioProjectForm(
            title="App", category_id="8", project_images=["a.png", " "], technologies=["", "Flutter"]
        )
        return await manager.create(PROJECT, form)

    result = asyncio.run(scenario())

    assert result.ok
    _, table, written = gateway.writes[-1]
    assert table == "portfolio_projects"
    assert written["category_id"] == 8
    assert written["project_images"] == ["a.png"]
    assert written["technologies"] == ["Flutter"]
    assert written["aspect_ratio"] == "landscape"


def test_project_without_category_is_rejected():
    gateway = portfolio_gateway()
    manager = PortfolioManager(gateway)

    result = asyncio.run(manager.create(PROJECT, PortfolioProjectForm(title="App")))

    assert not result.ok
    assert result.code == 400
    assert gateway.writes == []


def test_project_edit_form_carries_category_as_text():
    manager = PortfolioManager(portfolio_gateway())
    asyncio.run(manager.refresh())

    modal = manager.open_modal(PROJECT, 1)

    assert modal.form.category_id == "7"
    assert manager.find(PROJECT, 1).portfolio_categories.name == "Web"
    assert [c.name for c in manager.items(CATEGORY)] == ["Mobile", "Web"]


def test_contact_save_creates_then_updates_single_row():
    gateway = FakeGateway({"contact_info": []})
    manager = ContactManager(gateway)

    async def scenario():
        await manager.refresh()
        first = await manager.save(ContactInfoForm(email="hi@example.com"))
        second = await manager.save(ContactInfoForm(email="hello@example.com", social_links={"github": "gh"}))
        return first, second

    first, second = asyncio.run(scenario())

    assert first.message == SAVE_SUCCESS
    assert second.message == SAVE_SUCCESS
    assert len(gateway.tables["contact_info"]) == 1
    assert manager.form().email == "hello@example.com"
    assert manager.form().social_links.github == "gh"


def test_contact_save_failure_message():
    gateway = FakeGateway({"contact_info": []})
    manager = ContactManager(gateway)

    async def scenario():
        await manager.refresh()
        gateway.failing_tables.add("contact_info")
        return await manager.save(ContactInfoForm(email="hi@example.com"))

    result = asyncio.run(scenario())

    assert not result.ok
    assert result.message == SAVE_FAILURE


def test_contact_form_ignores_unknown_platforms():
    gateway = FakeGateway({"contact_info": [
        {"id": 1, "email": None, "social_links": {"twitter": "t", "myspace": "m", "github": None}},
    ]})
    manager = ContactManager(gateway)
    asyncio.run(manager.refresh())

    form = manager.form()

    assert form.email == ""
    assert form.social_links.twitter == "t"
    assert form.social_links.github == ""
    assert not hasattr(form.social_links, "myspace")


def test_home_content_save_updates_existing_row():
    gateway = FakeGateway({
        "home_content": [{"id": 1, "hero_title": "Old", "cta_title": None}],
        "hero_images": [], "home_stats": [], "home_services_preview": [],
    })
    manager = HomeContentManager(gateway)

    async def scenario():
        await manager.refresh()
        return await manager.save_content(HomeContentForm(hero_title="New", cta_title="Call us"))

    result = asyncio.run(scenario())

    assert result.ok
    assert result.message == "Content updated successfully!"
    assert gateway.writes[-1][:3] == ("update", "home_content", 1)
    assert manager.content_form().hero_title == "New"


MESSAGES = [
    {"id": 1, "name": "Ada", "email": "ada@example.com", "subject": "Quote", "message": "How much?",
     "read": False, "received_at": "2024-01-02T00:00:00"},
    {"id": 2, "name": "Bob", "email": "bob@example.com", "subject": "Hi", "message": "Hello",
     "read": True, "received_at": "2024-01-01T00:00:00"},
]


def messages_manager(dispatcher=None):
    gateway = FakeGateway({"messages": MESSAGES})
    return MessagesManager(gateway, dispatcher or AsyncMock()), gateway


def test_opening_unread_message_marks_it_read():
    manager, gateway = messages_manager()

    async def scenario():
        await manager.refresh()
        return await manager.open_message(1)

    result = asyncio.run(scenario())

    assert result.ok
    assert manager.selected.read is True
    assert manager.counts() == {"total": 2, "unread": 0, "read": 2}
    assert gateway.writes == [("update", "messages", 1, {"read": True})]


def test_opening_read_message_does_not_write():
    manager, gateway = messages_manager()

    async def scenario():
        await manager.refresh()
        return await manager.open_message(2)

    asyncio.run(scenario())

    assert gateway.writes == []


def test_reply_sends_message_fields():
    dispatcher = AsyncMock()
    dispatcher.send.return_value = {"id": "email-1"}
    manager, _ = messages_manager(dispatcher)

    async def scenario():
        await manager.refresh()
        return await manager.reply(1, "About 100.", access_token="admin-token")

    result = asyncio.run(scenario())

    assert result.ok
    assert result.message == "Email sent to ada@example.com"
    dispatcher.send.assert_awaited_once_with(
        name="Ada",
        email="ada@example.com",
        subject="Quote",
        original_message="How much?",
        reply_body="About 100.",
        access_token="admin-token",
    )


@pytest.mark.parametrize("error, code, message", [
    (ConfigurationError("Backend URL is not defined in environment variables."), 500,
     "Backend URL is not defined in environment variables."),
    (ReplyDispatchError("boom", status=500), 502, "boom"),
])
def test_reply_failures_are_reported(error, code, message):
    dispatcher = AsyncMock()
    dispatcher.send.side_effect = error
    manager, _ = messages_manager(dispatcher)

    async def scenario():
        await manager.refresh()
        return await manager.reply(1, "About 100.")

    result = asyncio.run(scenario())

    assert not result.ok
    assert result.code == code
    assert result.message == message
    assert manager.last_status is result


def test_empty_reply_is_not_sent():
    dispatcher = AsyncMock()
    manager, _ = messages_manager(dispatcher)

    async def scenario():
        await manager.refresh()
        return await manager.reply(1, "   ")

    result = asyncio.run(scenario())

    assert result.code == 400
    dispatcher.send.assert_not_awaited()


def test_message_read_filter():
    manager, _ = messages_manager()
    asyncio.run(manager.refresh())

    assert [m.id for m in manager.filter_messages("", "unread")] == [1]
    assert [m.id for m in manager.filter_messages("", "read")] == [2]
    assert [m.id for m in manager.filter_messages("hello")] == [2]
