import os
import json
from typing import List, Optional, Union

from dotenv import load_dotenv
from pydantic_settings import BaseSettings
from pydantic import field_validator

from app.infrastructure.exceptions import ConfigurationError

project_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
env_path = os.path.join(project_root, '.env')
load_dotenv(env_path)


class Settings(BaseSettings):
    # 基本设置
    API_V1_STR: str = "/api"
    PROJECT_NAME: str = "SiteAdmin"

    # CORS 设置
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173", "*"]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> List[str]:
        if isinstance(v, str):
            # 优先按JSON数组解析，失败则按逗号分隔
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                return [i.strip() for i in v.split(",") if i.strip()]

        if isinstance(v, list):
            return v

        return []

    # 托管后端（数据网关）凭据，启动时必须存在
    SUPABASE_URL: Optional[str] = os.getenv("SUPABASE_URL")
    SUPABASE_ANON_KEY: Optional[str] = os.getenv("SUPABASE_ANON_KEY")

    # 对象存储
    STORAGE_BUCKET: str = os.getenv("STORAGE_BUCKET", "images")
    UPLOAD_PATH_PREFIX: str = os.getenv("UPLOAD_PATH_PREFIX", "public")

    # 回复邮件服务地址，发送时才校验
    BACKEND_URL: Optional[str] = os.getenv("BACKEND_URL")

    # 邮件发送函数配置
    RESEND_API_KEY: Optional[str] = os.getenv("RESEND_API_KEY")
    RESEND_API_BASE: str = os.getenv("RESEND_API_BASE", "https://api.resend.com")
    MESSAGE_SENDER_EMAIL: str = os.getenv("MESSAGE_SENDER_EMAIL", "onboarding@resend.dev")

    # 服务器启动配置
    HOST: str = "0.0.0.0"
    PORT: int = 8092
    RELOAD: bool = True
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    TIMEOUT: int = int(os.getenv("TIMEOUT", 30))

    def require_hosting_credentials(self) -> None:
        """
        校验托管后端凭据

        异常:
            ConfigurationError: 缺少 SUPABASE_URL 或 SUPABASE_ANON_KEY
        """
        missing = [
            name for name in ("SUPABASE_URL", "SUPABASE_ANON_KEY")
            if not getattr(self, name)
        ]
        if missing:
            raise ConfigurationError(f"缺少托管后端环境变量: {', '.join(missing)}")

    class Config:
        case_sensitive = True
        env_file = ".env"


# 创建设置实例
settings = Settings()
