"""首页内容接口：首页文案、首屏图片、首页统计、服务预览"""
from fastapi import APIRouter, Depends

from app.api.dependencies import ServiceContainer, get_container
from app.infrastructure.response import result_response, success_response
from app.schemas.content import HeroImageForm, HomeContentForm, HomeServicePreviewForm, HomeStatForm
from app.services.core.entity_manager import ManagerState
from app.services.core.home_manager import CONTENT, IMAGE, SERVICE, STAT
from .crud import register_crud

router = APIRouter()


@router.get("")
async def get_home(container: ServiceContainer = Depends(get_container)):
    """一次并发读取首页的四个数据表"""
    manager = container.home
    await manager.refresh()
    return success_response(data={
        "content": manager.current(CONTENT),
        "form": manager.content_form(),
        "images": manager.items(IMAGE),
        "stats": manager.items(STAT),
        "services_preview": manager.items(SERVICE),
        "status": manager.status(),
    })


@router.put("/content")
async def save_home_content(
        form: HomeContentForm,
        container: ServiceContainer = Depends(get_container),
):
    manager = container.home
    if manager.state == ManagerState.LOADING:
        await manager.refresh()
    return result_response(await manager.save_content(form))


register_crud(router, lambda c: c.home, IMAGE, HeroImageForm, path="/images")
register_crud(router, lambda c: c.home, STAT, HomeStatForm, path="/stats")
register_crud(router, lambda c: c.home, SERVICE, HomeServicePreviewForm, path="/services-preview")
