# app/routers/public_router.py
# 公開 (不需登入) 的唯讀 API，供作品集首頁使用
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from app.core.database import get_db
from app.services.public_service import PublicService
from app.schemas.public_schema import PublicPortfolioOut
from app.schemas.profile_schema import PublicProfileOut
from app.schemas.experience_schema import ExperienceOut
from app.schemas.project_schema import ProjectOut
from app.schemas.skill_schema import SkillCategoryOut

router = APIRouter(
    prefix="/public",
    tags=["Public"]
)

@router.get("/portfolio", response_model=PublicPortfolioOut)
async def get_portfolio(db: AsyncSession = Depends(get_db)):
    """
    首頁所需的全部資料 (Profile + 經歷 + 作品 + 技能)。
    任何一部分讀取失敗只會讓該部分為空，不會回傳錯誤。
    """
    return await PublicService(db).get_public_view()

@router.get("/profile", response_model=Optional[PublicProfileOut])
async def get_public_profile(db: AsyncSession = Depends(get_db)):
    return await PublicService(db).get_profile()

@router.get("/experience", response_model=List[ExperienceOut])
async def get_public_experience(db: AsyncSession = Depends(get_db)):
    return await PublicService(db).get_experience()

@router.get("/projects", response_model=List[ProjectOut])
async def get_public_projects(db: AsyncSession = Depends(get_db)):
    return await PublicService(db).get_projects()

@router.get("/skills", response_model=List[SkillCategoryOut])
async def get_public_skills(db: AsyncSession = Depends(get_db)):
    return await PublicService(db).get_skills()
