"""路由守卫：根据会话状态决定显示加载、跳转登录、跳转后台或放行"""

from enum import Enum
from typing import Optional

from app.infrastructure.data_gateway.base import Principal

LOGIN_PATH = "/login"
ADMIN_PATH = "/admin"


class GuardDecision(str, Enum):
    SHOW_LOADING = "loading"
    REDIRECT_LOGIN = "redirect_login"
    REDIRECT_ADMIN = "redirect_admin"
    RENDER = "render"


def decide(loading: bool, principal: Optional[Principal], path: str) -> GuardDecision:
    """
    | loading | principal | /login          | /admin/*        |
    |---------|-----------|-----------------|-----------------|
    | True    | -         | loading         | loading         |
    | False   | present   | redirect_admin  | render          |
    | False   | absent    | render          | redirect_login  |

    根路径 / 总是跳转到后台首页，其余路径按受保护页面处理。
    """
    if path in ("", "/"):
        return GuardDecision.REDIRECT_ADMIN
    if loading:
        return GuardDecision.SHOW_LOADING
    if path.rstrip("/") == LOGIN_PATH:
        return GuardDecision.REDIRECT_ADMIN if principal else GuardDecision.RENDER
    return GuardDecision.RENDER if principal else GuardDecision.REDIRECT_LOGIN


def redirect_target(decision: GuardDecision) -> Optional[str]:
    if decision == GuardDecision.REDIRECT_LOGIN:
        return LOGIN_PATH
    if decision == GuardDecision.REDIRECT_ADMIN:
        return ADMIN_PATH
    return None
