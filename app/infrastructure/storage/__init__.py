"""存储基础设施组件导出"""

from .image_uploader import ImageUploader, InputMode, SelectedFile

__all__ = [
    "ImageUploader",
    "InputMode",
    "SelectedFile",
]
