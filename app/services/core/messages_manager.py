"""
联系留言管理

留言由公开站点的联系表单写入。打开未读留言时自动标记为已读；
回复通过外部邮件服务发送，本系统不保存已发送的回复。
"""

import logging
from typing import Dict, Optional

from app.infrastructure.data_gateway.base import DataGatewayInterface, RowId
from app.infrastructure.exceptions import ConfigurationError, ReplyDispatchError
from app.infrastructure.external_apis.reply_client import ReplyDispatcher
from app.schemas.content import MessageRecord
from .entity_manager import CollectionSpec, EntityManager, OperationResult

logger = logging.getLogger(__name__)

READ_FILTERS = ("all", "read", "unread")


class MessagesManager(EntityManager):
    name = "留言"
    collections = (
        CollectionSpec(
            kind="message",
            table="messages",
            record=MessageRecord,
            label="留言",
            order_by="received_at",
            ascending=False,
            search_fields=("name", "email", "subject", "message"),
        ),
    )

    def __init__(self, gateway: DataGatewayInterface, dispatcher: Optional[ReplyDispatcher] = None):
        super().__init__(gateway)
        self.dispatcher = dispatcher or ReplyDispatcher()
        self.selected: Optional[MessageRecord] = None

    async def mark_read(self, row_id: RowId, read: bool) -> OperationResult:
        message = "留言已标记为已读" if read else "留言已标记为未读"
        return await self._write_fields(self.spec(), row_id, {"read": read}, message)

    async def open_message(self, row_id: RowId) -> OperationResult:
        """选中留言，未读时标记为已读"""
        record = self.find(None, row_id)
        if record is None:
            return OperationResult.failure(f"留言 {row_id} 不存在", code=404)
        self.selected = record
        if not record.read:
            result = await self.mark_read(record.id, True)
            if not result.ok:
                return result
            self.selected = self.find(None, record.id) or record
        return OperationResult.success("获取留言成功", data=self.selected)

    async def reply(self, row_id: RowId, reply_body: str, access_token: Optional[str] = None) -> OperationResult:
        """
        回复留言

        回复内容为空时不发送；配置缺失或服务端失败时返回失败结果，错误信息取服务端返回值。
        access_token 为操作者的访问令牌，随请求转发给邮件服务
        """
        record = self.find(None, row_id)
        if record is None:
            return OperationResult.failure(f"留言 {row_id} 不存在", code=404)
        if not reply_body or not reply_body.strip():
            return OperationResult.failure("回复内容不能为空", code=400)

        try:
            data = await self.dispatcher.send(
                name=record.name or "",
                email=record.email or "",
                subject=record.subject or "",
                original_message=record.message or "",
                reply_body=reply_body,
                access_token=access_token,
            )
        except ConfigurationError as e:
            logger.error(f"回复留言失败，配置缺失: {e}")
            return self._record(OperationResult.failure(str(e), code=500))
        except ReplyDispatchError as e:
            logger.error(f"回复留言失败: {e.message}")
            return self._record(OperationResult.failure(e.message, code=502))
        return self._record(OperationResult.success(f"Email sent to {record.email}", data=data))

    def filter_messages(self, term: str = "", read_filter: str = "all"):
        rows = self.filter(term)
        if read_filter == "read":
            return [row for row in rows if row.read]
        if read_filter == "unread":
            return [row for row in rows if not row.read]
        return rows

    def counts(self) -> Dict[str, int]:
        rows = self.items()
        unread = sum(1 for row in rows if not row.read)
        return {"total": len(rows), "unread": unread, "read": len(rows) - unread}
