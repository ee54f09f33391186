"""
图片上传助手

将本地选择的文件或粘贴的远程URL转换为可存储的图片URL。
文件模式下逐个上传到对象存储，单个文件失败时跳过并继续处理其余文件；
URL模式下输入内容原样回传，不做任何校验。
"""

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Sequence

from app.core.config import settings
from app.infrastructure.data_gateway.base import DataGatewayInterface
from app.infrastructure.exceptions import GatewayError

logger = logging.getLogger(__name__)


class InputMode(str, Enum):
    FILE = "file"
    URL = "url"


@dataclass
class SelectedFile:
    """待上传的本地文件"""
    filename: str
    content: bytes
    content_type: Optional[str] = None


class ImageUploader:
    """
    图片上传助手

    维护自己的预览状态，与调用方独立；调用方提供新的初始URL时重置。
    """

    def __init__(
        self,
        gateway: DataGatewayInterface,
        on_upload: Callable[[str], None],
        initial_image_url: Optional[str] = None,
        multiple: bool = False,
        bucket: Optional[str] = None,
        path_prefix: Optional[str] = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Args:
            gateway: 数据网关，提供对象存储
            on_upload: 每得到一个URL调用一次
            initial_image_url: 初始图片URL，存在时默认进入URL模式
            multiple: 是否允许一次选择多个文件
            bucket: 存储桶，默认取配置
            path_prefix: 对象路径前缀，默认取配置
            clock: 时间源（秒），用于生成对象路径
        """
        self.gateway = gateway
        self.on_upload = on_upload
        self.multiple = multiple
        self.bucket = bucket or settings.STORAGE_BUCKET
        self.path_prefix = settings.UPLOAD_PATH_PREFIX if path_prefix is None else path_prefix
        self._clock = clock
        self.uploading = False
        self.preview_url: Optional[str] = None
        self.url_input = ""
        self.mode = InputMode.FILE
        self.set_initial_image_url(initial_image_url)

    def set_initial_image_url(self, url: Optional[str]) -> None:
        """调用方提供新的初始URL时，重置预览、输入框和模式"""
        self.preview_url = url or None
        self.url_input = url or ""
        self.mode = InputMode.URL if url else InputMode.FILE

    def select_mode(self, mode: InputMode) -> None:
        self.mode = InputMode(mode)

    def object_path(self, filename: str) -> str:
        """对象路径: <前缀>/<上传时间戳毫秒>-<原文件名>"""
        name = f"{int(self._clock() * 1000)}-{filename}"
        return f"{self.path_prefix}/{name}" if self.path_prefix else name

    async def upload_files(self, files: Sequence[SelectedFile]) -> List[str]:
        """
        文件模式：批量上传并回调

        Args:
            files: 选择的文件，multiple为False时只处理第一个

        Returns:
            List[str]: 实际回传给调用方的URL
        """
        if self.mode != InputMode.FILE:
            raise ValueError("当前为URL模式，不能上传文件")
        if not files:
            return []
        if not self.multiple:
            files = files[:1]

        self.uploading = True
        stored_paths = []
        try:
            for selected in files:
                path = self.object_path(selected.filename)
                try:
                    await self.gateway.upload(
                        self.bucket, path, selected.content, selected.content_type
                    )
                except GatewayError as e:
                    logger.error(f"❌ 图片上传失败，跳过 {selected.filename}: {e}")
                    continue
                stored_paths.append(path)

            urls = []
            for path in stored_paths:
                try:
                    urls.append(await self.gateway.get_public_url(self.bucket, path))
                except GatewayError as e:
                    logger.error(f"❌ 获取公开URL失败 {path}: {e}")
        finally:
            self.uploading = False

        if not urls:
            return []

        if self.multiple:
            for url in urls:
                self.on_upload(url)
            return urls

        self.preview_url = urls[0]
        self.on_upload(urls[0])
        return urls[:1]

    def type_url(self, text: str) -> None:
        """URL模式：每次输入都视为一次完成的上传，原样回传"""
        self.url_input = text
        self.preview_url = text
        self.on_upload(text)
