from pydantic import AliasChoices, BaseModel, Field


class ReplyEmailRequest(BaseModel):
    """
    回复邮件函数的请求体

    message 同时接受 originalMessage，后者是回复派发器实际发送的字段名
    """
    name: str
    email: str
    subject: str = ""
    message: str = Field(default="", validation_alias=AliasChoices("message", "originalMessage"))
    replyBody: str
