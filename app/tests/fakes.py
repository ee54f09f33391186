"""
测试用的内存版数据网关和认证服务

FakeAuth 按访问令牌识别用户，ADMIN_TOKEN 预先签发给 ADMIN。
FakeGateway 是内存版数据网关：按表保存行，支持按表注入失败、
按文件名注入上传失败，以及用 asyncio.Event 暂停某个表的读取。
"""
import asyncio
import copy
from typing import Any, Dict, List, Optional

from app.infrastructure.data_gateway.base import AuthInterface, AuthSession, DataGatewayInterface, Principal
from app.infrastructure.exceptions import AuthenticationError, GatewayError

ADMIN = Principal(id="user-1", email="admin@example.com")
PASSWORD = "secret"
ADMIN_TOKEN = "admin-token"


class FakeAuth(AuthInterface):
    def __init__(self, user: Optional[Principal] = None):
        self.user = user
        self.callbacks = []
        self.user_gate: Optional[asyncio.Event] = None
        self.sign_out_calls = 0
        # 已签发的访问令牌
        self.tokens: Dict[str, Principal] = {ADMIN_TOKEN: ADMIN}

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        if password != PASSWORD:
            raise AuthenticationError("Invalid login credentials")
        self.user = Principal(id="user-1", email=email)
        token = f"token-{email}-{len(self.tokens)}"
        self.tokens[token] = self.user
        return AuthSession(principal=self.user, access_token=token)

    async def sign_out(self, access_token: Optional[str] = None) -> None:
        self.sign_out_calls += 1
        if access_token:
            self.tokens.pop(access_token, None)
        else:
            self.user = None

    async def get_user_for_token(self, access_token: str) -> Optional[Principal]:
        return self.tokens.get(access_token)

    async def get_user(self) -> Optional[Principal]:
        user = self.user
        if self.user_gate is not None:
            await self.user_gate.wait()
        return user

    def on_auth_state_change(self, callback):
        self.callbacks.append(callback)
        return lambda: self.callbacks.remove(callback)

    def emit(self, event: str, principal: Optional[Principal]) -> None:
        for callback in list(self.callbacks):
            callback(event, principal)


class FakeGateway(DataGatewayInterface):
    def __init__(self, tables: Optional[Dict[str, List[Dict[str, Any]]]] = None):
        self.tables: Dict[str, List[Dict[str, Any]]] = {
            name: [dict(row) for row in rows] for name, rows in (tables or {}).items()
        }
        self.failing_tables = set()
        self.failing_uploads = set()
        self.gates: Dict[str, asyncio.Event] = {}
        self.waiting = 0
        self.uploads: List[tuple] = []
        self.writes: List[tuple] = []
        self._auth = FakeAuth()
        self._next_id = 1000

    @property
    def auth(self) -> FakeAuth:
        return self._auth

    def _check(self, table: str) -> None:
        if table in self.failing_tables:
            raise GatewayError(f"{table} unavailable")

    async def select(self, table, columns="*", order_by=None, ascending=True):
        gate = self.gates.get(table)
        self._check(table)
        rows = copy.deepcopy(self.tables.get(table, []))
        if gate is not None:
            self.waiting += 1
            await gate.wait()
            self.waiting -= 1
        if order_by:
            rows.sort(key=lambda row: (row.get(order_by) is None, row.get(order_by)), reverse=not ascending)
        return rows

    async def select_single(self, table, columns="*"):
        rows = await self.select(table, columns)
        return rows[0] if rows else None

    async def insert(self, table, row):
        self._check(table)
        self._next_id += 1
        stored = dict(row, id=self._next_id, created_at=f"2024-01-01T00:00:{self._next_id % 60:02d}")
        self.tables.setdefault(table, []).append(stored)
        self.writes.append(("insert", table, dict(row)))
        return dict(stored)

    async def update(self, table, row_id, values):
        self._check(table)
        self.writes.append(("update", table, row_id, dict(values)))
        updated = []
        for row in self.tables.get(table, []):
            if str(row["id"]) == str(row_id):
                row.update(values)
                updated.append(dict(row))
        return updated

    async def delete(self, table, row_id):
        self._check(table)
        self.writes.append(("delete", table, row_id))
        self.tables[table] = [row for row in self.tables.get(table, []) if str(row["id"]) != str(row_id)]

    async def count(self, table):
        self._check(table)
        return len(self.tables.get(table, []))

    async def upload(self, bucket, path, content, content_type=None):
        if any(path.endswith(f"-{name}") for name in self.failing_uploads):
            raise GatewayError(f"upload rejected: {path}")
        self.uploads.append((bucket, path, content, content_type))
        return path

    async def get_public_url(self, bucket, path):
        return f"https://cdn.example.com/{bucket}/{path}"
