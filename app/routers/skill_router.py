# app/routers/skill_router.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from app.core.database import get_db
from app.core.security import get_current_user
from app.models.user import User
from app.services.record_service import SkillCategoryService
from app.schemas.skill_schema import SkillCategoryCreate, SkillCategoryUpdate, SkillCategoryOut

router = APIRouter(
    prefix="/skills",
    tags=["Skills"],
    dependencies=[Depends(get_current_user)]
)

@router.get("/", response_model=List[SkillCategoryOut])
async def list_my_skills(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return await SkillCategoryService(db).list_mine(current_user)

@router.post("/", response_model=SkillCategoryOut, status_code=status.HTTP_201_CREATED)
async def create_skill_category(
    data: SkillCategoryCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return await SkillCategoryService(db).create(current_user, data)

@router.put("/{skill_id}", response_model=SkillCategoryOut)
async def update_skill_category(
    skill_id: str,
    data: SkillCategoryUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return await SkillCategoryService(db).update(current_user, skill_id, data)

@router.delete("/{skill_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_skill_category(
    skill_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    await SkillCategoryService(db).delete(current_user, skill_id)
