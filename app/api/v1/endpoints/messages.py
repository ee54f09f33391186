"""留言接口：列表、查看、已读/未读、回复、删除"""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.api.dependencies import ServiceContainer, get_access_token, get_container
from app.infrastructure.response import result_response, success_response
from app.schemas.content import ReadToggle, ReplyRequest
from app.services.core.messages_manager import READ_FILTERS
from .crud import ensure_loaded, list_payload

router = APIRouter()


@router.get("")
async def list_messages(
        q: str = "",
        read: str = Query("all", description="all / read / unread"),
        container: ServiceContainer = Depends(get_container),
):
    if read not in READ_FILTERS:
        read = "all"
    manager = container.messages
    await manager.refresh()
    return success_response(data=list_payload(
        manager, manager.filter_messages(q, read), counts=manager.counts()
    ))


@router.post("/{item_id}/open")
async def open_message(item_id: str, container: ServiceContainer = Depends(get_container)):
    """查看留言，未读留言会被标记为已读"""
    manager = container.messages
    await ensure_loaded(manager, "message", item_id)
    return result_response(await manager.open_message(item_id))


@router.put("/{item_id}/read")
async def toggle_read(
        item_id: str,
        body: ReadToggle,
        container: ServiceContainer = Depends(get_container),
):
    return result_response(await container.messages.mark_read(item_id, body.read))


@router.post("/{item_id}/reply")
async def reply_message(
        item_id: str,
        body: ReplyRequest,
        access_token: Optional[str] = Depends(get_access_token),
        container: ServiceContainer = Depends(get_container),
):
    manager = container.messages
    await ensure_loaded(manager, "message", item_id)
    return result_response(await manager.reply(item_id, body.reply_body, access_token=access_token))


@router.delete("/{item_id}")
async def delete_message(
        item_id: str,
        confirm: bool = Query(False, description="删除确认"),
        container: ServiceContainer = Depends(get_container),
):
    return result_response(await container.messages.delete(None, item_id, confirmed=confirm))
