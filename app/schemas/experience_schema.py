# app/schemas/experience_schema.py
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

class ExperienceBase(BaseModel):
    position: str = Field("", max_length=255)
    company: str = Field("", max_length=255)
    duration: str = Field("", max_length=100)
    description: str = ""

class ExperienceCreate(ExperienceBase):
    pass

# 更新時所有欄位皆可選
class ExperienceUpdate(BaseModel):
    position: Optional[str] = Field(None, max_length=255)
    company: Optional[str] = Field(None, max_length=255)
    duration: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = None

class ExperienceOut(ExperienceBase):
    experience_id: str
    user_id: str
    description: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
