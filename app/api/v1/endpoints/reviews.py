"""客户评价接口：评价、审核、评价统计"""
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app.api.dependencies import ServiceContainer, get_container
from app.infrastructure.response import result_response, success_response
from app.schemas.content import ReviewForm, ReviewStatForm
from app.services.core.reviews_manager import REVIEW, STAT
from .crud import list_payload, register_crud

router = APIRouter()


class ApprovalUpdate(BaseModel):
    approved: bool


@router.get("")
async def list_reviews(
        q: str = "",  # 姓名/公司/项目关键字
        approved: Optional[bool] = None,
        container: ServiceContainer = Depends(get_container),
):
    manager = container.reviews
    await manager.refresh()
    return success_response(data=list_payload(
        manager, manager.filter_reviews(q, approved), stats=manager.items(STAT)
    ))


@router.get("/stats")
async def list_review_stats(container: ServiceContainer = Depends(get_container)):
    manager = container.reviews
    await manager.refresh()
    return success_response(data=list_payload(manager, manager.items(STAT)))


@router.put("/{item_id}/approval")
async def set_review_approval(
        item_id: str,
        body: ApprovalUpdate,
        container: ServiceContainer = Depends(get_container),
):
    return result_response(await container.reviews.set_approval(item_id, body.approved))


register_crud(router, lambda c: c.reviews, STAT, ReviewStatForm, path="/stats")
register_crud(router, lambda c: c.reviews, REVIEW, ReviewForm)
