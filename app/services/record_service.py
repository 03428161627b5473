# app/services/record_service.py
# 經歷 / 作品 / 技能分類 的單筆 CRUD (不經過編輯器，直接寫入)
from typing import Any, List
from fastapi import HTTPException, status
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.repositories.owned_record_repo import OwnedRecordRepository
from app.repositories.experience_repo import ExperienceRepository
from app.repositories.project_repo import ProjectRepository
from app.repositories.skill_repo import SkillCategoryRepository

class OwnedRecordService:
    label: str = ""

    def __init__(self, repo: OwnedRecordRepository):
        self.repo = repo

    async def list_mine(self, user: User) -> List[Any]:
        return await self.repo.list_by_owner(user.user_id)

    async def create(self, user: User, data: BaseModel) -> Any:
        return await self.repo.create(user.user_id, data.model_dump())

    async def update(self, user: User, record_id: str, data: BaseModel) -> Any:
        """
        只更新有傳入的欄位；找不到 (或不屬於自己) 回傳 404
        """
        record = await self.repo.update(record_id, user.user_id, data.model_dump(exclude_unset=True))
        if record is None:
            raise HTTPException(status.HTTP_404_NOT_FOUND, f"{self.label}不存在")
        return record

    async def delete(self, user: User, record_id: str) -> None:
        deleted = await self.repo.delete(record_id, user.user_id)
        if not deleted:
            raise HTTPException(status.HTTP_404_NOT_FOUND, f"{self.label}不存在")


class ExperienceService(OwnedRecordService):
    label = "經歷"

    def __init__(self, db: AsyncSession):
        super().__init__(ExperienceRepository(db))


class ProjectService(OwnedRecordService):
    label = "作品"

    def __init__(self, db: AsyncSession):
        super().__init__(ProjectRepository(db))


class SkillCategoryService(OwnedRecordService):
    label = "技能分類"

    def __init__(self, db: AsyncSession):
        super().__init__(SkillCategoryRepository(db))
