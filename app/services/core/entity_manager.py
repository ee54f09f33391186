"""
内容管理器基础框架

每个管理界面对应一个 EntityManager：一个主数据表加零个或多个从属数据表，
提供列表获取、客户端文本过滤、新增/编辑（弹窗）、确认后删除。
所有写操作成功后都会重新获取列表，不做乐观更新。
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Type, Union

from pydantic import BaseModel, ValidationError

from app.infrastructure.data_gateway.base import DataGatewayInterface, RowId
from app.infrastructure.exceptions import GatewayError

logger = logging.getLogger(__name__)


class ManagerState(str, Enum):
    LOADING = "loading"
    IDLE = "idle"


@dataclass
class OperationResult:
    """操作结果，返回给调用方并作为界面可见的状态"""
    ok: bool
    message: str = "操作成功"
    data: Any = None
    code: int = 200

    @classmethod
    def success(cls, message: str = "操作成功", data: Any = None) -> "OperationResult":
        return cls(ok=True, message=message, data=data, code=200)

    @classmethod
    def failure(cls, message: str, code: int = 500, data: Any = None) -> "OperationResult":
        return cls(ok=False, message=message, data=data, code=code)

    def to_dict(self) -> Dict[str, Any]:
        return {"ok": self.ok, "message": self.message, "code": self.code}


@dataclass(frozen=True)
class CollectionSpec:
    """
    管理器中一个数据表（kind）的描述

    singleton 为 True 时表中至多一行，读取结果为单条记录或 None
    """
    kind: str
    table: str
    record: Type[BaseModel]
    form: Optional[Type[BaseModel]] = None
    label: str = ""
    order_by: Optional[str] = None
    ascending: bool = True
    columns: str = "*"
    search_fields: Tuple[str, ...] = ()
    singleton: bool = False


@dataclass(frozen=True)
class EditingItem:
    """正在编辑的记录，kind 标明记录类型"""
    kind: str
    data: BaseModel


@dataclass
class ModalState:
    """
    弹窗状态

    editing 为 None 时走新增路径，否则走更新路径并用记录预填表单
    """
    kind: str
    editing: Optional[EditingItem] = None
    form: Optional[BaseModel] = None

    @property
    def is_create(self) -> bool:
        return self.editing is None


def text_filter(rows: Iterable[BaseModel], term: str, fields: Sequence[str]) -> List[BaseModel]:
    """
    客户端文本过滤：在指定字段上做不区分大小写的子串匹配

    空字段不参与匹配；空关键字返回全部行。
    """
    rows = list(rows)
    if not term:
        return rows
    needle = term.lower()
    matched = []
    for row in rows:
        for field in fields:
            value = getattr(row, field, None)
            if isinstance(value, str) and needle in value.lower():
                matched.append(row)
                break
    return matched


def drop_blank(values: Optional[Iterable[str]]) -> List[str]:
    """去掉列表中的空白项，保持原有顺序"""
    return [value for value in (values or []) if value and value.strip()]


class EntityManager:
    """
    内容管理器基类

    子类声明 name 和 collections（第一个为主数据表）。
    """

    name: str = ""
    collections: Tuple[CollectionSpec, ...] = ()

    def __init__(self, gateway: DataGatewayInterface):
        self.gateway = gateway
        self.state = ManagerState.LOADING
        self.rows: Dict[str, List[BaseModel]] = {}
        self.single: Dict[str, Optional[BaseModel]] = {}
        for spec in self.collections:
            if spec.singleton:
                self.single[spec.kind] = None
            else:
                self.rows[spec.kind] = []
        self.modal: Optional[ModalState] = None
        self.last_status: Optional[OperationResult] = None
        self._specs = {spec.kind: spec for spec in self.collections}
        self._generation = 0
        self._closed = False

    # ---------------- 读取 ----------------

    @property
    def primary(self) -> CollectionSpec:
        return self.collections[0]

    def spec(self, kind: Optional[str] = None) -> CollectionSpec:
        if kind is None:
            return self.primary
        if kind not in self._specs:
            raise KeyError(f"{self.name} 不包含数据类型: {kind}")
        return self._specs[kind]

    async def _read(self, spec: CollectionSpec) -> Union[List[BaseModel], Optional[BaseModel]]:
        if spec.singleton:
            row = await self.gateway.select_single(spec.table, spec.columns)
            return spec.record.model_validate(row) if row else None
        rows = await self.gateway.select(
            spec.table,
            columns=spec.columns,
            order_by=spec.order_by,
            ascending=spec.ascending,
        )
        return [spec.record.model_validate(row) for row in rows]

    async def refresh(self) -> OperationResult:
        """
        并发读取管理器的全部数据表

        任一读取失败则整体失败，丢弃其它结果并保留原有数据；
        发起后若有更新的刷新或管理器已关闭，结果直接丢弃。
        """
        self._generation += 1
        generation = self._generation
        try:
            results = await asyncio.gather(*(self._read(spec) for spec in self.collections))
        except (GatewayError, ValidationError) as e:
            logger.error(f"获取{self.name}数据失败: {e}")
            result = OperationResult.failure(f"获取{self.name}数据失败: {e}")
            if self._is_current(generation):
                self.last_status = result
            return result

        if not self._is_current(generation):
            logger.info(f"{self.name} 刷新结果已过期，已丢弃")
            return OperationResult.success("刷新结果已过期，未应用")

        for spec, value in zip(self.collections, results):
            if spec.singleton:
                self.single[spec.kind] = value
            else:
                self.rows[spec.kind] = value
        self.state = ManagerState.IDLE
        result = OperationResult.success(f"获取{self.name}数据成功")
        self.last_status = result
        return result

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation and not self._closed

    def close(self) -> None:
        """界面卸载：之后返回的读取结果都不再应用"""
        self._closed = True
        self._generation += 1

    def items(self, kind: Optional[str] = None) -> List[BaseModel]:
        return list(self.rows[self.spec(kind).kind])

    def current(self, kind: Optional[str] = None) -> Optional[BaseModel]:
        return self.single[self.spec(kind).kind]

    def find(self, kind: Optional[str], row_id: RowId) -> Optional[BaseModel]:
        spec = self.spec(kind)
        if spec.singleton:
            record = self.single[spec.kind]
            return record if record is not None and str(record.id) == str(row_id) else None
        for record in self.rows[spec.kind]:
            if str(record.id) == str(row_id):
                return record
        return None

    def filter(self, term: str = "", kind: Optional[str] = None) -> List[BaseModel]:
        spec = self.spec(kind)
        return text_filter(self.items(spec.kind), term, spec.search_fields)

    # ---------------- 写入 ----------------

    def prepare_payload(self, kind: str, form: BaseModel) -> Dict[str, Any]:
        """表单转为写入数据，子类按 kind 覆盖（过滤空项、类型转换等）"""
        return form.model_dump(mode="json")

    def _coerce_form(self, spec: CollectionSpec, form: Union[BaseModel, Dict[str, Any]]) -> BaseModel:
        if isinstance(form, dict):
            return spec.form.model_validate(form)
        return form

    def _resolve_id(self, kind: str, row_id: RowId) -> RowId:
        record = self.find(kind, row_id)
        return record.id if record is not None else row_id

    async def create(self, kind: Optional[str], form: Union[BaseModel, Dict[str, Any]]) -> OperationResult:
        spec = self.spec(kind)
        try:
            payload = self.prepare_payload(spec.kind, self._coerce_form(spec, form))
        except (ValueError, ValidationError) as e:
            return self._record(OperationResult.failure(f"{spec.label}数据无效: {e}", code=400))
        try:
            row = await self.gateway.insert(spec.table, payload)
        except GatewayError as e:
            logger.error(f"保存{spec.label}失败: {e}")
            return self._record(OperationResult.failure(f"保存{spec.label}失败: {e.message}"))
        return await self._after_write(f"{spec.label}已创建", row)

    async def update(
        self,
        kind: Optional[str],
        row_id: RowId,
        form: Union[BaseModel, Dict[str, Any]],
    ) -> OperationResult:
        spec = self.spec(kind)
        try:
            payload = self.prepare_payload(spec.kind, self._coerce_form(spec, form))
        except (ValueError, ValidationError) as e:
            return self._record(OperationResult.failure(f"{spec.label}数据无效: {e}", code=400))
        return await self._write_fields(spec, row_id, payload, f"{spec.label}已更新")

    async def _write_fields(
        self,
        spec: CollectionSpec,
        row_id: RowId,
        values: Dict[str, Any],
        message: str,
    ) -> OperationResult:
        try:
            rows = await self.gateway.update(spec.table, self._resolve_id(spec.kind, row_id), values)
        except GatewayError as e:
            logger.error(f"更新{spec.label} {row_id} 失败: {e}")
            return self._record(OperationResult.failure(f"更新{spec.label}失败: {e.message}"))
        return await self._after_write(message, rows[0] if rows else None)

    async def delete(self, kind: Optional[str], row_id: RowId, confirmed: bool = False) -> OperationResult:
        """删除前必须确认，未确认时不做任何操作"""
        spec = self.spec(kind)
        if not confirmed:
            return OperationResult.failure(f"删除{spec.label}前需要确认", code=409)
        try:
            await self.gateway.delete(spec.table, self._resolve_id(spec.kind, row_id))
        except GatewayError as e:
            logger.error(f"删除{spec.label} {row_id} 失败: {e}")
            return self._record(OperationResult.failure(f"删除{spec.label}失败: {e.message}"))
        return await self._after_write(f"{spec.label}已删除")

    async def save_singleton(self, kind: Optional[str], form: Union[BaseModel, Dict[str, Any]]) -> OperationResult:
        """单行数据表：已有记录则更新，否则新增"""
        spec = self.spec(kind)
        existing = self.single[spec.kind]
        if existing is None:
            return await self.create(spec.kind, form)
        return await self.update(spec.kind, existing.id, form)

    async def _after_write(self, message: str, data: Any = None) -> OperationResult:
        refreshed = await self.refresh()
        if not refreshed.ok:
            message = f"{message}，但刷新列表失败"
        return self._record(OperationResult.success(message, data=data))

    def _record(self, result: OperationResult) -> OperationResult:
        self.last_status = result
        return result

    # ---------------- 弹窗 ----------------

    def prefill_form(self, kind: str, record: BaseModel) -> BaseModel:
        values = {
            key: value
            for key, value in record.model_dump(exclude={"id", "created_at"}).items()
            if value is not None
        }
        return self.spec(kind).form.model_validate(values)

    def open_modal(self, kind: Optional[str] = None, row_id: Optional[RowId] = None) -> ModalState:
        """
        打开新增或编辑弹窗

        Raises:
            KeyError: 编辑的记录不在当前列表中
        """
        spec = self.spec(kind)
        if row_id is None:
            self.modal = ModalState(kind=spec.kind)
            return self.modal
        record = self.find(spec.kind, row_id)
        if record is None:
            raise KeyError(f"{spec.label} {row_id} 不存在")
        self.modal = ModalState(
            kind=spec.kind,
            editing=EditingItem(kind=spec.kind, data=record),
            form=self.prefill_form(spec.kind, record),
        )
        return self.modal

    def close_modal(self) -> None:
        self.modal = None

    async def submit_modal(self, form: Union[BaseModel, Dict[str, Any]]) -> OperationResult:
        """提交弹窗：成功后关闭，失败时保持打开"""
        modal = self.modal
        if modal is None:
            return OperationResult.failure("没有打开的编辑弹窗", code=400)
        if modal.is_create:
            result = await self.create(modal.kind, form)
        else:
            result = await self.update(modal.kind, modal.editing.data.id, form)
        if result.ok:
            self.modal = None
        return result

    def status(self) -> Optional[Dict[str, Any]]:
        return self.last_status.to_dict() if self.last_status else None
