"""
登录认证接口

登录、退出、当前会话，以及按路径给出路由守卫的判断结果。
登录返回访问令牌，其余接口按请求头中的 Bearer 令牌识别调用方。
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends

from app.api.dependencies import (
    ServiceContainer,
    get_access_token,
    get_container,
    get_request_principal,
    require_admin,
)
from app.infrastructure.data_gateway import Principal
from app.infrastructure.exceptions import AuthenticationError, GatewayError
from app.infrastructure.response import error_response, success_response, unauthorized_response
from app.schemas.auth import LoginRequest
from app.services.core.route_guard import decide, redirect_target

logger = logging.getLogger(__name__)

router = APIRouter()


def session_payload(container: ServiceContainer, principal: Optional[Principal]) -> dict:
    return {
        "loading": container.auth.loading,
        "user": {"id": principal.id, "email": principal.email} if principal else None,
    }


@router.post("/login")
async def login(body: LoginRequest, container: ServiceContainer = Depends(get_container)):
    try:
        session = await container.auth.sign_in(body.email, body.password)
    except AuthenticationError as e:
        return unauthorized_response(e.message)
    except GatewayError as e:
        logger.error(f"登录失败: {e}")
        return error_response(msg=e.message, code=500)
    data = session_payload(container, session.principal)
    data["access_token"] = session.access_token
    data["token_type"] = "bearer"
    return success_response(data=data, msg="登录成功")


@router.post("/logout")
async def logout(
        principal: Principal = Depends(require_admin),
        access_token: Optional[str] = Depends(get_access_token),
        container: ServiceContainer = Depends(get_container),
):
    """吊销当前请求的令牌，不影响其它客户端"""
    try:
        await container.auth.sign_out(access_token)
    except GatewayError as e:
        logger.error(f"退出登录失败 {principal.email}: {e}")
        return error_response(msg=e.message, code=500)
    return success_response(data=session_payload(container, None), msg="已退出登录")


@router.get("/session")
async def get_session(
        principal: Optional[Principal] = Depends(get_request_principal),
        container: ServiceContainer = Depends(get_container),
):
    return success_response(data=session_payload(container, principal))


@router.get("/guard")
async def check_route(
        path: str = "/admin",
        principal: Optional[Principal] = Depends(get_request_principal),
        container: ServiceContainer = Depends(get_container),
):
    """给出访问某个页面路径时的守卫结果：加载中 / 跳转 / 渲染"""
    decision = decide(container.auth.loading, principal, path)
    return success_response(data={
        "path": path,
        "decision": decision.value,
        "redirect": redirect_target(decision),
    })
