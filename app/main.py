from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging
import sys
import traceback

from app.api.dependencies import build_container, require_admin
from app.api.v1.api import api_router
from app.api.v1.endpoints import mail
from app.core.config import settings
from app.infrastructure.exceptions import ConfigurationError
from app.infrastructure.response import error_response, standard_response

# 降低watchfiles日志级别，避免频繁输出
logging.getLogger('watchfiles').setLevel(logging.ERROR)
logging.getLogger('watchfiles.main').setLevel(logging.ERROR)
logging.getLogger('httpx').setLevel(logging.WARNING)
logging.getLogger('hpack').setLevel(logging.WARNING)

# 配置日志
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.PROJECT_NAME,
    version="0.1.0",
    description="站点内容管理后台API"
)

# 配置CORS - 重要: 必须在其他中间件之前添加
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["*"]
)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """HTTP异常统一包装为 {code, data, msg}，保留状态码和响应头"""
    return JSONResponse(
        content=error_response(msg=str(exc.detail), code=exc.status_code),
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg")}
        for error in exc.errors()
    ]
    return JSONResponse(
        content=error_response(msg="请求参数无效", code=422, data=errors),
        status_code=422,
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"请求处理错误: {str(exc)}")
    logger.error(traceback.format_exc())
    return JSONResponse(
        content=error_response(msg="服务器内部错误", code=500),
        status_code=500,
    )


# 包含API路由
app.include_router(api_router, prefix=settings.API_V1_STR)
# 回复邮件函数挂在根路径下，调用方需携带操作者令牌
app.include_router(mail.router, tags=["邮件"], dependencies=[Depends(require_admin)])


@app.on_event("startup")
async def startup_container():
    """
    应用启动时连接托管后端并恢复登录会话

    缺少托管后端凭据属于致命错误，直接终止启动
    """
    logger.info("正在初始化服务容器...")
    try:
        container = build_container()
    except ConfigurationError as e:
        logger.error(f"服务容器初始化失败: {str(e)}")
        raise
    app.state.container = container
    await container.startup()
    logger.info("服务容器初始化成功")


@app.on_event("shutdown")
async def shutdown_container():
    container = getattr(app.state, "container", None)
    if container is not None:
        container.shutdown()
        logger.info("服务容器已关闭")


@app.get("/")
async def root():
    """健康检查接口"""
    return standard_response(
        data={
            "status": "online",
            "version": "0.1.0"
        },
        msg="SiteAdmin API服务正在运行"
    )

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT, reload=settings.RELOAD)
