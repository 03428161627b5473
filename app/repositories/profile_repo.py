# app/repositories/profile_repo.py
import logging
import uuid
from typing import Any, Dict
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from app.models.profile import Profile

logger = logging.getLogger(__name__)


def portfolio_owner_query():
    """
    作品集擁有者 = 最早建立的 Profile 的 user_id
    (公開頁面的清單都以此為範圍，其他帳號的資料不會出現)
    """
    return (
        select(Profile.user_id)
        .order_by(Profile.created_at.asc(), Profile.profile_id.asc())
        .limit(1)
    )


class ProfileRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_profile_by_user_id(self, user_id: str) -> Profile | None:
        stmt = select(Profile).where(Profile.user_id == user_id)
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def get_first_profile(self) -> Profile | None:
        """
        公開頁面使用：取最早建立的一筆 Profile (作品集擁有者)
        """
        stmt = select(Profile).order_by(Profile.created_at.asc(), Profile.profile_id.asc()).limit(1)
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def create_blank_profile(self, user_id: str, email: str | None = None) -> Profile:
        """
        註冊帳號時建立空白 Profile (之後只會被更新)
        (注意) commit 由呼叫端負責
        """
        new_profile = Profile(
            profile_id=str(uuid.uuid4()),
            user_id=user_id,
            email=email
        )
        self.db.add(new_profile)
        return new_profile

    async def update_profile(self, profile: Profile, update_dict: Dict[str, Any]) -> Profile:
        """更新 Profile，只修改有傳入的欄位"""
        for key, value in update_dict.items():
            setattr(profile, key, value)

        try:
            await self.db.commit()
            await self.db.refresh(profile)
            return profile
        except Exception as e:
            await self.db.rollback()
            logger.error(f"更新 Profile ({profile.profile_id}) 失敗: {e}", exc_info=True)
            raise
