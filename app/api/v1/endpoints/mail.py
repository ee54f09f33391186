"""回复邮件发送函数，供回复派发器调用"""
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.api.dependencies import ServiceContainer, get_container
from app.schemas.mail import ReplyEmailRequest

router = APIRouter()


@router.post("/send-reply-email")
async def send_reply_email(
        body: ReplyEmailRequest,
        container: ServiceContainer = Depends(get_container),
):
    """返回 {data} 或 {error}，HTTP 状态码与结果一致"""
    status_code, payload = await container.mail.send(body)
    return JSONResponse(content=payload, status_code=status_code)
