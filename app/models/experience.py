# app/models/experience.py
from sqlalchemy import Column, String, TEXT, ForeignKey, CHAR, TIMESTAMP, func
from sqlalchemy.orm import relationship
from app.core.database import Base

class Experience(Base):
    __tablename__ = "experience"

    experience_id = Column(CHAR(36), primary_key=True)
    user_id = Column(CHAR(36), ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(String(255), nullable=False, default="")
    company = Column(String(255), nullable=False, default="")
    # 自由格式，例如 "2021 - Present"
    duration = Column(String(100), nullable=False, default="")
    description = Column(TEXT)
    created_at = Column(TIMESTAMP, server_default=func.now(), index=True)
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="experiences")
