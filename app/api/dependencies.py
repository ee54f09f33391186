"""
API Dependencies

Provides the service container created at application startup and the
route guard dependency protecting every admin endpoint.
"""

import logging
from typing import List, Optional

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.infrastructure.data_gateway import DataGatewayInterface, GatewayFactory, Principal
from app.infrastructure.exceptions import GatewayError
from app.infrastructure.external_apis import ReplyDispatcher
from app.services.core import (
    AuthSessionHolder,
    ContactManager,
    DashboardService,
    EntityManager,
    HomeContentManager,
    MessagesManager,
    OrdersManager,
    PackagesManager,
    PortfolioManager,
    ReviewsManager,
    ServicesManager,
    TeamManager,
)
from app.services.core.route_guard import ADMIN_PATH, LOGIN_PATH, GuardDecision, decide
from app.services.mail import ReplyMailService

logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Service container for the whole console

    Created once at application start; every manager lives for the
    lifetime of the process, like a mounted screen.
    """

    def __init__(
        self,
        gateway: DataGatewayInterface,
        dispatcher: Optional[ReplyDispatcher] = None,
        mail: Optional[ReplyMailService] = None,
    ):
        self.gateway = gateway
        self.auth = AuthSessionHolder(gateway.auth)
        self.dashboard = DashboardService(gateway)
        self.services = ServicesManager(gateway)
        self.home = HomeContentManager(gateway)
        self.portfolio = PortfolioManager(gateway)
        self.team = TeamManager(gateway)
        self.reviews = ReviewsManager(gateway)
        self.packages = PackagesManager(gateway)
        self.orders = OrdersManager(gateway)
        self.messages = MessagesManager(gateway, dispatcher)
        self.contact = ContactManager(gateway)
        self.mail = mail or ReplyMailService()

    @property
    def managers(self) -> List[EntityManager]:
        return [
            self.services,
            self.home,
            self.portfolio,
            self.team,
            self.reviews,
            self.packages,
            self.orders,
            self.messages,
            self.contact,
        ]

    async def startup(self) -> None:
        await self.auth.initialize()

    def shutdown(self) -> None:
        self.auth.shutdown()
        for manager in self.managers:
            manager.close()


def build_container() -> ServiceContainer:
    """
    Build the container on the default gateway

    Raises:
        ConfigurationError: hosting credentials are missing
    """
    return ServiceContainer(GatewayFactory.get_default_gateway())


def get_container(request: Request) -> ServiceContainer:
    container = getattr(request.app.state, "container", None)
    if container is None:
        raise HTTPException(status_code=503, detail="服务尚未初始化")
    return container


bearer_scheme = HTTPBearer(auto_error=False)


def get_access_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[str]:
    """请求头 Authorization: Bearer <token> 中的访问令牌"""
    return credentials.credentials if credentials else None


async def get_request_principal(
    access_token: Optional[str] = Depends(get_access_token),
    container: ServiceContainer = Depends(get_container),
) -> Optional[Principal]:
    """
    当前请求的身份，由请求自带的令牌解析，与其它客户端的登录无关

    认证服务不可达时返回 503
    """
    try:
        return await container.auth.resolve(access_token)
    except GatewayError as e:
        logger.error(f"校验访问令牌失败: {e}")
        raise HTTPException(status_code=503, detail="认证服务不可用")


def require_admin(
    principal: Optional[Principal] = Depends(get_request_principal),
    container: ServiceContainer = Depends(get_container),
) -> Principal:
    """
    Route guard for admin endpoints

    loading -> 503, no valid bearer token -> 401 pointing to the login page
    """
    decision = decide(container.auth.loading, principal, ADMIN_PATH)
    if decision == GuardDecision.SHOW_LOADING:
        raise HTTPException(status_code=503, detail="会话加载中")
    if decision == GuardDecision.REDIRECT_LOGIN:
        raise HTTPException(status_code=401, detail="未登录", headers={"Location": LOGIN_PATH})
    return principal
