"""联系方式接口"""
from fastapi import APIRouter, Depends

from app.api.dependencies import ServiceContainer, get_container
from app.infrastructure.response import result_response, success_response
from app.schemas.content import ContactInfoForm
from app.services.core.entity_manager import ManagerState

router = APIRouter()


@router.get("")
async def get_contact_info(container: ServiceContainer = Depends(get_container)):
    manager = container.contact
    await manager.refresh()
    return success_response(data={
        "record": manager.current(),
        "form": manager.form(),
        "status": manager.status(),
    })


@router.put("")
async def save_contact_info(
        form: ContactInfoForm,
        container: ServiceContainer = Depends(get_container),
):
    manager = container.contact
    if manager.state == ManagerState.LOADING:
        await manager.refresh()
    return result_response(await manager.save(form))
