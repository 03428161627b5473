# app/schemas/public_schema.py
from pydantic import BaseModel
from typing import List, Optional
from app.schemas.profile_schema import PublicProfileOut
from app.schemas.experience_schema import ExperienceOut
from app.schemas.project_schema import ProjectOut
from app.schemas.skill_schema import SkillCategoryOut

class PublicPortfolioOut(BaseModel):
    """
    公開首頁所需的全部資料
    任何一部分讀取失敗時會是 None / []，而不是整個請求失敗
    """
    profile: Optional[PublicProfileOut] = None
    experience: List[ExperienceOut] = []
    projects: List[ProjectOut] = []
    skills: List[SkillCategoryOut] = []

    class Config:
        from_attributes = True
