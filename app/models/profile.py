# app/models/profile.py
from sqlalchemy import Column, String, TEXT, ForeignKey, CHAR, TIMESTAMP, func
from sqlalchemy.orm import relationship
from app.core.database import Base

class Profile(Base):
    __tablename__ = "profiles"
    profile_id = Column(CHAR(36), primary_key=True)
    # 每個使用者只會有一筆 (unique)
    user_id = Column(CHAR(36), ForeignKey("users.user_id", ondelete="CASCADE"), unique=True, nullable=False, index=True)
    name = Column(String(100))
    email = Column(String(255))
    about_text = Column(TEXT)

    # 社群連結
    github_url = Column(String(500))
    linkedin_url = Column(String(500))
    twitter_url = Column(String(500))
    whatsapp = Column(String(50))

    # 檔案 URL (實際檔案在 Blob Store)
    profile_picture_url = Column(String(500))
    resume_url = Column(String(500))

    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    # 1-to-1 反向關聯到 User
    user = relationship("User", back_populates="profile")
