# app/routers/profile_router.py
from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.database import get_db
from app.core.security import get_current_user
from app.models.user import User
from app.routers.upload_router import get_asset_service
from app.services.asset_service import AssetService
from app.services.profile_service import ProfileService
from app.schemas.profile_schema import ProfileOut, ProfileUpdate

import logging

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/profiles",
    tags=["Profiles"],
    dependencies=[Depends(get_current_user)]
)

# 路徑名稱 -> Profile 欄位
ASSET_PATHS = {
    "picture": "profile_picture_url",
    "resume": "resume_url",
}

class AssetUrlUpdate(BaseModel):
    url: str | None = None


def _asset_field(asset: str) -> str:
    field = ASSET_PATHS.get(asset)
    if field is None:
        raise HTTPException(status.HTTP_404_NOT_FOUND, f"不支援的檔案類型: {asset}")
    return field


@router.get("/me", response_model=ProfileOut)
async def get_my_profile(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    獲取當前登入者的 Profile。
    """
    service = ProfileService(db)
    return await service.get_my_profile(current_user)

@router.put("/me", response_model=ProfileOut)
async def update_my_profile(
    update_data: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    更新當前登入者的 Profile (基本資料 / 社群連結)，只會修改有傳入的欄位
    """
    service = ProfileService(db)
    return await service.update_my_profile(current_user, update_data)

@router.put("/me/{asset}", response_model=ProfileOut)
async def set_my_asset(
    asset: str,
    update_data: AssetUrlUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    將已上傳的檔案 URL 寫入 Profile (asset: picture / resume)
    """
    service = ProfileService(db)
    return await service.set_asset_field(current_user, _asset_field(asset), update_data.url)

@router.delete("/me/{asset}", response_model=ProfileOut)
async def delete_my_asset(
    asset: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    assets: AssetService = Depends(get_asset_service)
):
    """
    移除頭像 / 履歷：嘗試刪除檔案後清空欄位 (檔案刪除失敗不影響結果)
    """
    service = ProfileService(db)
    profile = await service.clear_asset_field(current_user, _asset_field(asset), assets)
    logger.info(f"Cleared {asset} for user {current_user.user_id}")
    return profile
