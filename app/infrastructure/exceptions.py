"""
Custom exceptions for the Infrastructure layer.
"""
from typing import Optional


class InfrastructureError(Exception):
    """Base class for exceptions in the infrastructure layer."""
    pass


class ConfigurationError(InfrastructureError):
    """部署配置缺失或无效"""
    pass


class GatewayError(InfrastructureError):
    """数据网关（数据表、对象存储、认证）调用失败"""

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code


class AuthenticationError(GatewayError):
    """登录或会话操作失败"""
    pass


class ReplyDispatchError(InfrastructureError):
    """回复邮件发送失败，message 为服务端返回的错误信息或通用提示"""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status = status
