"""回复邮件服务的API客户端。"""

import logging
from typing import Any, Dict, Optional

import aiohttp

from app.core.config import settings
from app.infrastructure.exceptions import ConfigurationError, ReplyDispatchError

logger = logging.getLogger(__name__)

GENERIC_FAILURE = "Failed to send reply via backend."


class ReplyDispatcher:
    """
    将运营人员撰写的回复发送到外部邮件服务。

    不重试，也不在本系统内保存已发送的回复。
    """

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[int] = None):
        """
        Args:
            base_url: 回复服务基础地址 (默认: 从配置 BACKEND_URL 获取)
            timeout: 请求超时秒数
        """
        self.base_url = base_url if base_url is not None else settings.BACKEND_URL
        self.timeout = timeout or settings.TIMEOUT

    async def send(
        self,
        name: str,
        email: str,
        subject: str,
        original_message: str,
        reply_body: str,
        access_token: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        发送回复

        Args:
            access_token: 操作者的访问令牌，邮件服务要求 Bearer 认证

        Returns:
            dict: 服务端返回的 data 字段

        Raises:
            ConfigurationError: 未配置 BACKEND_URL，此时不发出任何网络请求
            ReplyDispatchError: 服务端返回非成功状态或网络错误
        """
        if not self.base_url:
            raise ConfigurationError("Backend URL is not defined in environment variables.")

        url = f"{self.base_url.rstrip('/')}/send-reply-email"
        body = {
            "name": name,
            "email": email,
            "subject": subject,
            "originalMessage": original_message,
            "replyBody": reply_body,
        }
        headers = {"Authorization": f"Bearer {access_token}"} if access_token else None
        logger.debug(f"API请求: POST {url}")

        try:
            async with aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            ) as session:
                async with session.post(url, json=body, headers=headers) as response:
                    payload = await self._read_json(response)
                    if response.status < 200 or response.status >= 300:
                        message = payload.get("message") if isinstance(payload, dict) else None
                        logger.error(f"❌ 回复发送失败 {email}: HTTP {response.status} {message}")
                        raise ReplyDispatchError(message or GENERIC_FAILURE, status=response.status)
        except aiohttp.ClientError as e:
            logger.error(f"❌ 回复服务请求错误: {str(e)}")
            raise ReplyDispatchError(GENERIC_FAILURE)

        logger.info(f"✅ 回复已发送至 {email}")
        return payload.get("data") if isinstance(payload, dict) else None

    @staticmethod
    async def _read_json(response) -> Any:
        try:
            return await response.json(content_type=None)
        except ValueError:
            return None
