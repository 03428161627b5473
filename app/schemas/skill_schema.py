# app/schemas/skill_schema.py
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime

class SkillCategoryBase(BaseModel):
    category: str = Field("", max_length=100)
    skill_list: List[str] = []

class SkillCategoryCreate(SkillCategoryBase):
    pass

class SkillCategoryUpdate(BaseModel):
    category: Optional[str] = Field(None, max_length=100)
    skill_list: Optional[List[str]] = None

class SkillCategoryOut(SkillCategoryBase):
    skill_id: str
    user_id: str
    skill_list: Optional[List[str]] = []
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
