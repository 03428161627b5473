# app/models/skill_category.py
from sqlalchemy import Column, String, ForeignKey, CHAR, JSON, TIMESTAMP, func
from sqlalchemy.orm import relationship
from app.core.database import Base

class SkillCategory(Base):
    __tablename__ = "skills"
    skill_id = Column(CHAR(36), primary_key=True)
    user_id = Column(CHAR(36), ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    category = Column(String(100), nullable=False, default="")
    # 技能名稱列表 (依使用者輸入順序)
    skill_list = Column(JSON, default=list)
    created_at = Column(TIMESTAMP, server_default=func.now(), index=True)
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="skill_categories")
