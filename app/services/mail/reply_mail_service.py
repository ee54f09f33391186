"""
回复邮件发送函数

接收 {name, email, subject, message, replyBody}，组装HTML邮件（回复正文在上，
原始留言引用在下），通过 Resend 发送。返回 (HTTP状态码, {data} 或 {error})。
"""

import html
import logging
from typing import Any, Dict, Optional, Tuple

from app.infrastructure.exceptions import ConfigurationError
from app.infrastructure.external_apis.resend_client import MailSendError, ResendClient
from app.schemas.mail import ReplyEmailRequest

logger = logging.getLogger(__name__)


def compose_reply_html(name: str, email: str, subject: str, message: str, reply_body: str) -> str:
    """组装回复邮件HTML，用户输入内容均做转义"""
    name, email, subject, message, reply_body = (
        html.escape(value or "") for value in (name, email, subject, message, reply_body)
    )
    return (
        f"<p>Dear {name},</p>\n"
        f"<p>{reply_body}</p>\n"
        "<br/>\n"
        "<p>--- Original Message ---</p>\n"
        f"<p>From: {name} ({email})</p>\n"
        f"<p>Subject: {subject}</p>\n"
        f"<p>{message}</p>\n"
    )


class ReplyMailService:
    def __init__(self, client: Optional[ResendClient] = None):
        self.client = client or ResendClient()

    async def send(self, request: ReplyEmailRequest) -> Tuple[int, Dict[str, Any]]:
        body = compose_reply_html(
            request.name, request.email, request.subject, request.message, request.replyBody
        )
        try:
            data = await self.client.send_email(
                to=request.email,
                subject=f"Re: {request.subject}",
                html=body,
            )
        except (ConfigurationError, MailSendError) as e:
            logger.error(f"❌ 回复邮件发送失败 {request.email}: {e}")
            return 500, {"error": str(e)}
        return 200, {"data": data}
