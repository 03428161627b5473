# app/schemas/project_schema.py
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime

# 1. 基礎欄位 (對應 Model)
class ProjectBase(BaseModel):
    title: str = Field("", max_length=255)
    description: str = ""
    image_url: Optional[str] = Field(None, max_length=500)
    # 技術標籤：保留順序，可重複
    technologies: List[str] = []

# 2. 建立作品時的 Request Body (Input)
class ProjectCreate(ProjectBase):
    pass

# 3. 更新作品時的 Request Body (Input)
# (所有欄位皆可選)
class ProjectUpdate(BaseModel):
    title: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    image_url: Optional[str] = Field(None, max_length=500)
    technologies: Optional[List[str]] = None

# 4. 回傳給前端的作品資料 (Output)
class ProjectOut(ProjectBase):
    project_id: str
    user_id: str
    description: Optional[str] = None
    technologies: Optional[List[str]] = []
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True # 啟用 ORM 模式
