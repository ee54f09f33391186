from fastapi import APIRouter, Depends

from app.api.dependencies import require_admin
from app.api.v1.endpoints import (
    auth,
    contact,
    dashboard,
    home,
    messages,
    orders,
    packages,
    portfolio,
    reviews,
    services,
    team,
    uploads,
)


api_router = APIRouter()

# 登录相关接口无需守卫
api_router.include_router(auth.router, prefix="/auth", tags=["认证"])

# 管理后台接口，均需已登录
admin = [Depends(require_admin)]
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["仪表盘"], dependencies=admin)
api_router.include_router(services.router, prefix="/services", tags=["服务"], dependencies=admin)
api_router.include_router(home.router, prefix="/home", tags=["首页"], dependencies=admin)
api_router.include_router(portfolio.router, prefix="/portfolio", tags=["作品集"], dependencies=admin)
api_router.include_router(team.router, prefix="/team", tags=["团队"], dependencies=admin)
api_router.include_router(reviews.router, prefix="/reviews", tags=["评价"], dependencies=admin)
api_router.include_router(packages.router, prefix="/packages", tags=["套餐"], dependencies=admin)
api_router.include_router(orders.router, prefix="/orders", tags=["订单"], dependencies=admin)
api_router.include_router(messages.router, prefix="/messages", tags=["留言"], dependencies=admin)
api_router.include_router(contact.router, prefix="/contact", tags=["联系方式"], dependencies=admin)
api_router.include_router(uploads.router, prefix="/uploads", tags=["图片上传"], dependencies=admin)
