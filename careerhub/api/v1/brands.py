# careerhub/api/v1/brands.py
from fastapi import APIRouter, Depends

from careerhub.api.deps import get_current_user, require_super_admin
from careerhub.models.recruitment import BrandIn
from careerhub.models.users import NavigationSettingUpdate
from careerhub.services import jobs

router = APIRouter()


@router.get("/brands")
async def list_brands():
    rows = await jobs.list_brands()
    return {"items": rows, "count": len(rows)}


@router.post("/brands", status_code=201)
async def create_brand(payload: BrandIn, _: dict = Depends(require_super_admin)):
    bid = await jobs.create_brand(payload.model_dump())
    return {"id": bid}


@router.put("/brands/{brand_id}")
async def update_brand(brand_id: str, payload: BrandIn, _: dict = Depends(require_super_admin)):
    await jobs.update_brand(brand_id, payload.model_dump())
    return {"id": brand_id, **payload.model_dump()}


@router.delete("/brands/{brand_id}")
async def delete_brand(brand_id: str, _: dict = Depends(require_super_admin)):
    await jobs.delete_brand(brand_id)
    return {"deleted": True}


@router.get("/navigation/{role}")
async def get_navigation(role: str, _: dict = Depends(get_current_user)):
    return await jobs.get_navigation(role)


@router.put("/navigation/{role}")
async def put_navigation(role: str, payload: NavigationSettingUpdate, _: dict = Depends(require_super_admin)):
    return await jobs.set_navigation(role, payload.visible_menu_items)
