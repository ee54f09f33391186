"""
登录会话持有者

应用启动时创建一次：查询当前身份并订阅认证状态变化；应用关闭时释放订阅。
初始查询与订阅回调是同一个状态的两个写入方，每次写入在发起时领取递增序号，
只有不早于最近一次已应用序号的写入才生效，因此先发起后返回的初始查询不会覆盖
之后到达的认证事件。

HTTP 请求不使用进程会话中的身份，而是按请求携带的访问令牌逐个解析（resolve）。
"""

import logging
from typing import Optional

from app.infrastructure.data_gateway.base import AuthInterface, AuthSession, Principal, Unsubscribe
from app.infrastructure.exceptions import GatewayError

logger = logging.getLogger(__name__)


class AuthSessionHolder:
    def __init__(self, auth: AuthInterface):
        self._auth = auth
        self.principal: Optional[Principal] = None
        self.loading = True
        self._unsubscribe: Optional[Unsubscribe] = None
        self._issued = 0
        self._applied = 0

    def _ticket(self) -> int:
        self._issued += 1
        return self._issued

    def _apply(self, ticket: int, principal: Optional[Principal]) -> bool:
        if ticket < self._applied:
            logger.info(f"丢弃过期的会话写入 #{ticket}（已应用 #{self._applied}）")
            return False
        self._applied = ticket
        self.principal = principal
        return True

    async def initialize(self) -> None:
        """订阅认证状态变化并查询当前身份；查询结束后 loading 置为 False"""
        self._unsubscribe = self._auth.on_auth_state_change(self._on_auth_state_change)
        ticket = self._ticket()
        try:
            principal = await self._auth.get_user()
        except GatewayError as e:
            logger.error(f"获取当前用户失败: {e}")
            principal = None
        self._apply(ticket, principal)
        self.loading = False
        logger.info(f"会话初始化完成: {principal.email if principal else '未登录'}")

    def _on_auth_state_change(self, event: str, principal: Optional[Principal]) -> None:
        logger.info(f"认证状态变化: {event}")
        self._apply(self._ticket(), principal)

    async def sign_in(self, email: str, password: str) -> AuthSession:
        """
        Returns:
            AuthSession: 身份和本次登录签发的访问令牌

        Raises:
            AuthenticationError: 登录失败，信息取自认证服务
        """
        ticket = self._ticket()
        session = await self._auth.sign_in_with_password(email, password)
        self._apply(ticket, session.principal)
        return session

    async def sign_out(self, access_token: Optional[str] = None) -> None:
        """
        退出登录

        带令牌时只吊销该令牌，进程会话中的身份属于同一用户时一并清除；
        不带令牌时退出进程会话并立即清除身份，不等待状态变化通知
        """
        if access_token:
            principal = await self.resolve(access_token)
            await self._auth.sign_out(access_token)
            if principal is None or self.principal is None or principal.id != self.principal.id:
                return
        else:
            await self._auth.sign_out()
        self._apply(self._ticket(), None)

    async def resolve(self, access_token: Optional[str]) -> Optional[Principal]:
        """
        按请求携带的访问令牌解析身份，每个请求独立判断

        Raises:
            GatewayError: 认证服务不可达
        """
        if not access_token:
            return None
        return await self._auth.get_user_for_token(access_token)

    def shutdown(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    @property
    def is_authenticated(self) -> bool:
        return self.principal is not None
