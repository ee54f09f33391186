"""Resend 邮件发送API客户端。"""

import logging
from typing import Any, Dict, List, Optional, Union

import aiohttp

from app.core.config import settings
from app.infrastructure.exceptions import ConfigurationError, InfrastructureError

logger = logging.getLogger(__name__)


class MailSendError(InfrastructureError):
    """邮件服务拒绝发送"""
    pass


class ResendClient:
    """
    用于通过 Resend API 发送邮件的客户端。
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_base: Optional[str] = None,
        sender: Optional[str] = None,
    ):
        self.api_key = api_key or settings.RESEND_API_KEY
        self.api_base = (api_base or settings.RESEND_API_BASE).rstrip("/")
        self.sender = sender or settings.MESSAGE_SENDER_EMAIL

    async def send_email(
        self,
        to: Union[str, List[str]],
        subject: str,
        html: str,
    ) -> Dict[str, Any]:
        """
        发送一封HTML邮件

        Returns:
            dict: Resend 返回的数据（包含邮件id）

        Raises:
            ConfigurationError: 未配置 RESEND_API_KEY
            MailSendError: Resend 返回错误
        """
        if not self.api_key:
            raise ConfigurationError("未配置Resend API密钥，请在环境变量中设置RESEND_API_KEY")

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Accept": "application/json",
        }
        body = {
            "from": self.sender,
            "to": to,
            "subject": subject,
            "html": html,
        }
        url = f"{self.api_base}/emails"
        logger.debug(f"API请求: POST {url} to={to}")

        try:
            async with aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=settings.TIMEOUT)
            ) as session:
                async with session.post(url, json=body, headers=headers) as response:
                    try:
                        payload = await response.json(content_type=None)
                    except ValueError:
                        payload = None
                    if response.status >= 400:
                        message = payload.get("message") if isinstance(payload, dict) else None
                        raise MailSendError(message or f"Resend 返回状态码 {response.status}")
        except aiohttp.ClientError as e:
            raise MailSendError(f"Resend API调用失败: {str(e)}")

        logger.info(f"✅ 邮件发送成功: {to}")
        return payload
