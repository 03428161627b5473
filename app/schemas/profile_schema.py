# app/schemas/profile_schema.py
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional

# 可以透過 PUT /profiles/me 修改的欄位
PROFILE_FIELDS = (
    "name", "email", "about_text",
    "github_url", "linkedin_url", "twitter_url", "whatsapp",
    "profile_picture_url", "resume_url",
)

# 指向 Blob Store 檔案的欄位
PROFILE_ASSET_FIELDS = ("profile_picture_url", "resume_url")

class ProfileBase(BaseModel):
    name: str | None = Field(None, max_length=100)
    email: str | None = Field(None, max_length=255)
    about_text: str | None = None
    github_url: str | None = Field(None, max_length=500)
    linkedin_url: str | None = Field(None, max_length=500)
    twitter_url: str | None = Field(None, max_length=500)
    whatsapp: str | None = Field(None, max_length=50)
    profile_picture_url: str | None = Field(None, max_length=500, description="頭像 URL")
    resume_url: str | None = Field(None, max_length=500, description="履歷 PDF URL")

class ProfileUpdate(ProfileBase):
    pass # 更新時全為選填

class ProfileOut(ProfileBase):
    profile_id: str
    user_id: str
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

# 公開頁面用：不暴露內部 ID
class PublicProfileOut(ProfileBase):
    class Config:
        from_attributes = True
