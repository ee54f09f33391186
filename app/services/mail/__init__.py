"""回复邮件发送服务"""

from .reply_mail_service import ReplyMailService, compose_reply_html

__all__ = ["ReplyMailService", "compose_reply_html"]
