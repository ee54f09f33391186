"""
测试回复派发器
缺少服务地址时不发请求；服务端错误时透传服务端的错误信息
"""
import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import pytest

from app.infrastructure.exceptions import ConfigurationError, ReplyDispatchError
from app.infrastructure.external_apis import ReplyDispatcher
from app.infrastructure.external_apis.reply_client import GENERIC_FAILURE


def mock_session(status, payload):
    """构造 aiohttp.ClientSession 的替身，session.post 返回指定状态和JSON"""
    response = MagicMock()
    response.status = status
    response.json = AsyncMock(return_value=payload)

    post_ctx = MagicMock()
    post_ctx.__aenter__ = AsyncMock(return_value=response)
    post_ctx.__aexit__ = AsyncMock(return_value=False)

    session = MagicMock()
    session.post = MagicMock(return_value=post_ctx)

    session_ctx = MagicMock()
    session_ctx.__aenter__ = AsyncMock(return_value=session)
    session_ctx.__aexit__ = AsyncMock(return_value=False)
    return session_ctx, session


def send(dispatcher, access_token=None):
    return asyncio.run(dispatcher.send(
        name="Ada",
        email="ada@example.com",
        subject="Quote",
        original_message="How much?",
        reply_body="About 100.",
        access_token=access_token,
    ))


def test_missing_base_url_fails_before_any_request():
    dispatcher = ReplyDispatcher(base_url="")

    with patch("app.infrastructure.external_apis.reply_client.aiohttp.ClientSession") as client_session:
        with pytest.raises(ConfigurationError) as exc_info:
            send(dispatcher)

    client_session.assert_not_called()
    assert "Backend URL is not defined" in str(exc_info.value)


def test_error_status_surfaces_server_message():
    session_ctx, _ = mock_session(500, {"message": "boom"})
    dispatcher = ReplyDispatcher(base_url="https://mail.example.com")

    with patch("app.infrastructure.external_apis.reply_client.aiohttp.ClientSession", return_value=session_ctx):
        with pytest.raises(ReplyDispatchError) as exc_info:
            send(dispatcher)

    assert exc_info.value.message == "boom"
    assert exc_info.value.status == 500


def test_error_without_message_uses_generic_text():
    session_ctx, _ = mock_session(502, None)
    dispatcher = ReplyDispatcher(base_url="https://mail.example.com")

    with patch("app.infrastructure.external_apis.reply_client.aiohttp.ClientSession", return_value=session_ctx):
        with pytest.raises(ReplyDispatchError) as exc_info:
            send(dispatcher)

    assert exc_info.value.message == GENERIC_FAILURE


def test_success_posts_reply_body_and_returns_data():
    session_ctx, session = mock_session(200, {"data": {"id": "email-1"}})
    dispatcher = ReplyDispatcher(base_url="https://mail.example.com/")

    with patch("app.infrastructure.external_apis.reply_client.aiohttp.ClientSession", return_value=session_ctx):
        data = send(dispatcher)

    assert data == {"id": "email-1"}
    args, kwargs = session.post.call_args
    assert args[0] == "https://mail.example.com/send-reply-email"
    assert kwargs["json"] == {
        "name": "Ada",
        "email": "ada@example.com",
        "subject": "Quote",
        "originalMessage": "How much?",
        "replyBody": "About 100.",
    }
    assert kwargs["headers"] is None


def test_operator_token_is_sent_as_bearer():
    session_ctx, session = mock_session(200, {"data": {"id": "email-1"}})
    dispatcher = ReplyDispatcher(base_url="https://mail.example.com")

    with patch("app.infrastructure.external_apis.reply_client.aiohttp.ClientSession", return_value=session_ctx):
        send(dispatcher, access_token="admin-token")

    _, kwargs = session.post.call_args
    assert kwargs["headers"] == {"Authorization": "Bearer admin-token"}


def test_network_error_becomes_dispatch_error():
    session_ctx, session = mock_session(200, {})
    session.post.side_effect = aiohttp.ClientConnectionError("refused")
    dispatcher = ReplyDispatcher(base_url="https://mail.example.com")

    with patch("app.infrastructure.external_apis.reply_client.aiohttp.ClientSession", return_value=session_ctx):
        with pytest.raises(ReplyDispatchError) as exc_info:
            send(dispatcher)

    assert exc_info.value.message == GENERIC_FAILURE
