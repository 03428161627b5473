# app/routers/project_router.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

# 匯入核心依賴
from app.core.database import get_db
from app.core.security import get_current_user
from app.models.user import User

# 匯入 Service 和 Schemas
from app.services.record_service import ProjectService
from app.schemas.project_schema import ProjectCreate, ProjectOut, ProjectUpdate

router = APIRouter(
    prefix="/projects",
    tags=["Projects"],
    # (重要) 該模組下的所有 API 都需要登入
    dependencies=[Depends(get_current_user)]
)

@router.get("/", response_model=List[ProjectOut])
async def list_my_projects(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    獲取自己的所有作品 (新 -> 舊)
    """
    return await ProjectService(db).list_mine(current_user)

@router.post("/", response_model=ProjectOut, status_code=status.HTTP_201_CREATED)
async def create_project(
    project_data: ProjectCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    新增作品。`image_url` 請先透過 /uploads 上傳取得。
    """
    return await ProjectService(db).create(current_user, project_data)

@router.put("/{project_id}", response_model=ProjectOut)
async def update_project(
    project_id: str,
    project_data: ProjectUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return await ProjectService(db).update(current_user, project_id, project_data)

@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(
    project_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    await ProjectService(db).delete(current_user, project_id)
