# app/services/profile_service.py
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException, status
from app.models.profile import Profile
from app.models.user import User
from app.repositories.profile_repo import ProfileRepository
from app.schemas.profile_schema import ProfileUpdate, PROFILE_ASSET_FIELDS
from app.services.asset_service import AssetService

class ProfileService:
    def __init__(self, db: AsyncSession):
        self.repo = ProfileRepository(db)
        self.db = db

    async def get_my_profile(self, user: User) -> Profile:
        """取得登入者的 Profile (註冊時就會建立)"""
        profile = await self.repo.get_profile_by_user_id(user.user_id)
        if not profile:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "Profile 尚未建立")
        return profile

    async def update_my_profile(self, user: User, update_data: ProfileUpdate) -> Profile:
        """
        業務邏輯：更新 Profile (基本資料 / 社群連結 / 檔案 URL)
        """
        profile = await self.get_my_profile(user)

        # 只包含 "有被傳入" 欄位的 dict
        update_dict = update_data.model_dump(exclude_unset=True)
        return await self.repo.update_profile(profile, update_dict)

    async def set_asset_field(self, user: User, field: str, url: str | None) -> Profile:
        """將已上傳檔案的 URL 寫入 Profile 欄位"""
        if field not in PROFILE_ASSET_FIELDS:
            raise HTTPException(status.HTTP_400_BAD_REQUEST, f"不支援的欄位: {field}")
        profile = await self.get_my_profile(user)
        return await self.repo.update_profile(profile, {field: url})

    async def clear_asset_field(self, user: User, field: str, assets: AssetService) -> Profile:
        """
        移除頭像 / 履歷：
        1. 盡力刪除 Blob Store 上的檔案 (失敗只記錄)
        2. 無論檔案是否刪除成功，都清空欄位
        """
        profile = await self.get_my_profile(user)
        if field not in PROFILE_ASSET_FIELDS:
            raise HTTPException(status.HTTP_400_BAD_REQUEST, f"不支援的欄位: {field}")

        await assets.delete(getattr(profile, field))
        return await self.repo.update_profile(profile, {field: None})
