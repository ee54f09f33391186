"""图片上传接口"""
import logging
from typing import List

from fastapi import APIRouter, Depends, File, Form, UploadFile
from pydantic import BaseModel

from app.api.dependencies import ServiceContainer, get_container
from app.infrastructure.response import error_response, success_response
from app.infrastructure.storage import ImageUploader, InputMode, SelectedFile

logger = logging.getLogger(__name__)

router = APIRouter()


class ImageUrlInput(BaseModel):
    url: str


@router.post("")
async def upload_images(
        files: List[UploadFile] = File(...),
        multiple: bool = Form(False),
        container: ServiceContainer = Depends(get_container),
):
    """
    上传图片到对象存储

    multiple 为 False 时只处理第一个文件；单个文件失败会被跳过，
    返回的 urls 按选择顺序排列
    """
    urls: List[str] = []
    uploader = ImageUploader(container.gateway, urls.append, multiple=multiple)
    selected = [
        SelectedFile(
            filename=upload.filename or "image",
            content=await upload.read(),
            content_type=upload.content_type,
        )
        for upload in files
    ]
    await uploader.upload_files(selected)
    if not urls:
        return error_response(msg="图片上传失败", code=502, data={"urls": []})
    return success_response(data={"urls": urls, "preview_url": uploader.preview_url})


@router.post("/url")
async def use_image_url(body: ImageUrlInput, container: ServiceContainer = Depends(get_container)):
    """URL 模式：原样回传输入的地址"""
    urls: List[str] = []
    uploader = ImageUploader(container.gateway, urls.append)
    uploader.select_mode(InputMode.URL)
    uploader.type_url(body.url)
    return success_response(data={"urls": urls, "preview_url": uploader.preview_url})
