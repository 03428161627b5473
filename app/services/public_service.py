# app/services/public_service.py
# 公開首頁的唯讀資料：讀取失敗時回傳空內容，讓頁面顯示預設文字而不是錯誤
import logging
from typing import Any, Awaitable, Callable, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession

from app.repositories.profile_repo import ProfileRepository
from app.repositories.experience_repo import ExperienceRepository
from app.repositories.project_repo import ProjectRepository
from app.repositories.skill_repo import SkillCategoryRepository
from app.schemas.public_schema import PublicPortfolioOut

logger = logging.getLogger(__name__)

class PublicService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.profile_repo = ProfileRepository(db)
        self.experience_repo = ExperienceRepository(db)
        self.project_repo = ProjectRepository(db)
        self.skill_repo = SkillCategoryRepository(db)

    async def _safe_read(self, name: str, read: Callable[[], Awaitable[Any]], fallback: Any) -> Any:
        """執行讀取，失敗時記錄錯誤並回傳 fallback"""
        try:
            return await read()
        except Exception as e:
            logger.error(f"讀取公開資料失敗 ({name}): {e}", exc_info=True)
            # 讓同一個 session 可以繼續執行後面的查詢
            try:
                await self.db.rollback()
            except Exception as rollback_error:
                logger.warning(f"Rollback 失敗: {rollback_error}")
            return fallback

    async def get_profile(self) -> Optional[Any]:
        # 作品集擁有者 = 第一筆 Profile
        return await self._safe_read("profile", self.profile_repo.get_first_profile, None)

    async def get_experience(self) -> List[Any]:
        return await self._safe_read("experience", self.experience_repo.list_for_portfolio_owner, [])

    async def get_projects(self) -> List[Any]:
        return await self._safe_read("projects", self.project_repo.list_for_portfolio_owner, [])

    async def get_skills(self) -> List[Any]:
        return await self._safe_read("skills", self.skill_repo.list_for_portfolio_owner, [])

    async def get_public_view(self) -> PublicPortfolioOut:
        """
        彙整公開頁面所需的全部資料 (各部分互不影響)
        """
        return PublicPortfolioOut.model_validate(
            {
                "profile": await self.get_profile(),
                "experience": await self.get_experience(),
                "projects": await self.get_projects(),
                "skills": await self.get_skills(),
            },
            from_attributes=True,
        )
