# app/routers/experience_router.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from app.core.database import get_db
from app.core.security import get_current_user
from app.models.user import User
from app.services.record_service import ExperienceService
from app.schemas.experience_schema import ExperienceCreate, ExperienceUpdate, ExperienceOut

router = APIRouter(
    prefix="/experience",
    tags=["Experience"],
    dependencies=[Depends(get_current_user)]
)

@router.get("/", response_model=List[ExperienceOut])
async def list_my_experience(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    獲取自己的所有經歷 (新 -> 舊)
    """
    return await ExperienceService(db).list_mine(current_user)

@router.post("/", response_model=ExperienceOut, status_code=status.HTTP_201_CREATED)
async def create_experience(
    data: ExperienceCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return await ExperienceService(db).create(current_user, data)

@router.put("/{experience_id}", response_model=ExperienceOut)
async def update_experience(
    experience_id: str,
    data: ExperienceUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return await ExperienceService(db).update(current_user, experience_id, data)

@router.delete("/{experience_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_experience(
    experience_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    await ExperienceService(db).delete(current_user, experience_id)
