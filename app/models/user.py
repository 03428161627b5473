# models/user.py
from sqlalchemy import Column, String, Boolean, CHAR, TIMESTAMP, func
from sqlalchemy.orm import relationship
from app.core.database import Base

class User(Base):
    """作品集擁有者 (後台管理帳號)"""
    __tablename__ = "users"

    # 基本欄位
    user_id = Column(CHAR(36), primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    is_active = Column(Boolean, default=True)
    created_at = Column(TIMESTAMP, server_default=func.now())

    # 關聯設定
    # 一個使用者只有一份 Profile
    profile = relationship(
        "Profile", # <-- 使用字串
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan"
    )

    experiences = relationship("Experience", back_populates="user", cascade="all, delete-orphan")
    projects = relationship("Project", back_populates="user", cascade="all, delete-orphan")
    skill_categories = relationship("SkillCategory", back_populates="user", cascade="all, delete-orphan")
