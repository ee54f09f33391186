"""
Supabase Data Gateway Adapter

Implements DataGatewayInterface on the Supabase Python client.
The client is blocking, so every call is moved to a worker thread.
Provider errors and transport errors (httpx) both surface as GatewayError.
"""

import asyncio
import logging
from typing import Any, List, Optional

import httpx
from supabase import (
    AuthError,
    Client,
    PostgrestAPIError,
    StorageException,
    create_client,
)

from app.infrastructure.exceptions import AuthenticationError, GatewayError
from .base import (
    AuthInterface,
    AuthSession,
    AuthStateCallback,
    DataGatewayInterface,
    GatewayConfig,
    Principal,
    Row,
    RowId,
    Unsubscribe,
)

logger = logging.getLogger(__name__)


def _to_principal(user: Any) -> Optional[Principal]:
    if user is None:
        return None
    return Principal(id=str(user.id), email=getattr(user, "email", None))


def _api_error(target: str, action: str, e: Exception) -> GatewayError:
    message = getattr(e, "message", None) or str(e) or type(e).__name__
    logger.error(f"❌ {action} {target} 失败: {message}")
    return GatewayError(message, code=getattr(e, "code", None))


def _transport_error(action: str, e: httpx.HTTPError) -> GatewayError:
    message = str(e) or type(e).__name__
    logger.error(f"❌ {action}失败，认证服务不可达: {message}")
    return GatewayError(message)


class SupabaseAuth(AuthInterface):
    """Supabase auth wrapper"""

    def __init__(self, client: Client):
        self.client = client

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        try:
            response = await asyncio.to_thread(
                self.client.auth.sign_in_with_password,
                {"email": email, "password": password},
            )
        except AuthError as e:
            logger.warning(f"登录失败 {email}: {e.message}")
            raise AuthenticationError(e.message, code=getattr(e, "code", None))
        except httpx.HTTPError as e:
            raise _transport_error("登录", e)
        principal = _to_principal(response.user)
        if principal is None or response.session is None:
            raise AuthenticationError("登录未返回用户信息")
        logger.info(f"✅ 登录成功: {principal.email}")
        return AuthSession(principal=principal, access_token=response.session.access_token)

    async def sign_out(self, access_token: Optional[str] = None) -> None:
        try:
            if access_token:
                await asyncio.to_thread(self.client.auth.admin.sign_out, access_token)
            else:
                await asyncio.to_thread(self.client.auth.sign_out)
        except AuthError as e:
            raise AuthenticationError(e.message, code=getattr(e, "code", None))
        except httpx.HTTPError as e:
            raise _transport_error("退出登录", e)

    async def get_user(self) -> Optional[Principal]:
        try:
            session = await asyncio.to_thread(self.client.auth.get_session)
            if session is None:
                return None
            response = await asyncio.to_thread(self.client.auth.get_user)
        except AuthError as e:
            raise AuthenticationError(e.message, code=getattr(e, "code", None))
        except httpx.HTTPError as e:
            raise _transport_error("获取当前用户", e)
        if response is None:
            return None
        return _to_principal(response.user)

    async def get_user_for_token(self, access_token: str) -> Optional[Principal]:
        try:
            response = await asyncio.to_thread(self.client.auth.get_user, access_token)
        except AuthError as e:
            logger.warning(f"令牌无效或已过期: {e.message}")
            return None
        except httpx.HTTPError as e:
            raise _transport_error("校验令牌", e)
        if response is None:
            return None
        return _to_principal(response.user)

    def on_auth_state_change(self, callback: AuthStateCallback) -> Unsubscribe:
        def _listener(event, session):
            callback(str(event), _to_principal(session.user) if session else None)

        subscription = self.client.auth.on_auth_state_change(_listener)
        return subscription.unsubscribe


class SupabaseAdapter(DataGatewayInterface):
    """
    Supabase implementation of DataGatewayInterface
    """

    def __init__(self, config: GatewayConfig):
        self.config = config
        self.client: Client = create_client(config.url, config.anon_key)
        self._auth = SupabaseAuth(self.client)

    @property
    def auth(self) -> AuthInterface:
        return self._auth

    async def select(
        self,
        table: str,
        columns: str = "*",
        order_by: Optional[str] = None,
        ascending: bool = True,
    ) -> List[Row]:
        def _run():
            query = self.client.table(table).select(columns)
            if order_by:
                query = query.order(order_by, desc=not ascending)
            return query.execute()

        try:
            response = await asyncio.to_thread(_run)
        except (PostgrestAPIError, httpx.HTTPError) as e:
            raise _api_error(table, "查询", e)
        logger.debug(f"查询 {table}: {len(response.data or [])} 行")
        return response.data or []

    async def select_single(self, table: str, columns: str = "*") -> Optional[Row]:
        def _run():
            return self.client.table(table).select(columns).limit(1).execute()

        try:
            response = await asyncio.to_thread(_run)
        except (PostgrestAPIError, httpx.HTTPError) as e:
            raise _api_error(table, "查询", e)
        return response.data[0] if response.data else None

    async def insert(self, table: str, row: Row) -> Row:
        def _run():
            return self.client.table(table).insert(row).execute()

        try:
            response = await asyncio.to_thread(_run)
        except (PostgrestAPIError, httpx.HTTPError) as e:
            raise _api_error(table, "新增", e)
        logger.info(f"✅ 新增 {table} 成功")
        return response.data[0] if response.data else {}

    async def update(self, table: str, row_id: RowId, values: Row) -> List[Row]:
        def _run():
            return self.client.table(table).update(values).eq("id", row_id).execute()

        try:
            response = await asyncio.to_thread(_run)
        except (PostgrestAPIError, httpx.HTTPError) as e:
            raise _api_error(table, "更新", e)
        logger.info(f"✅ 更新 {table}/{row_id} 成功")
        return response.data or []

    async def delete(self, table: str, row_id: RowId) -> None:
        def _run():
            return self.client.table(table).delete().eq("id", row_id).execute()

        try:
            await asyncio.to_thread(_run)
        except (PostgrestAPIError, httpx.HTTPError) as e:
            raise _api_error(table, "删除", e)
        logger.info(f"✅ 删除 {table}/{row_id} 成功")

    async def count(self, table: str) -> int:
        def _run():
            return self.client.table(table).select("*", count="exact", head=True).execute()

        try:
            response = await asyncio.to_thread(_run)
        except (PostgrestAPIError, httpx.HTTPError) as e:
            raise _api_error(table, "统计", e)
        return response.count or 0

    async def upload(
        self,
        bucket: str,
        path: str,
        content: bytes,
        content_type: Optional[str] = None,
    ) -> None:
        file_options = {"content-type": content_type} if content_type else None

        def _run():
            return self.client.storage.from_(bucket).upload(
                path=path, file=content, file_options=file_options
            )

        try:
            await asyncio.to_thread(_run)
        except (StorageException, httpx.HTTPError) as e:
            raise _api_error(f"{bucket}/{path}", "文件上传", e)
        logger.info(f"✅ 文件上传成功: {bucket}/{path}")

    async def get_public_url(self, bucket: str, path: str) -> str:
        try:
            return self.client.storage.from_(bucket).get_public_url(path)
        except (StorageException, httpx.HTTPError) as e:
            raise _api_error(f"{bucket}/{path}", "获取公开URL", e)
