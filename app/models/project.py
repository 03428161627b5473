# models/project.py
from sqlalchemy import Column, String, TEXT, TIMESTAMP, ForeignKey, CHAR, JSON, func
from sqlalchemy.orm import relationship
from app.core.database import Base

class Project(Base):
    # 告訴 SQLAlchemy，這個類別對應到資料庫中名為 projects 的表格 (table)
    __tablename__ = "projects"

    project_id = Column(CHAR(36), primary_key=True)
    user_id = Column(CHAR(36), ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False, default="")
    description = Column(TEXT)
    image_url = Column(String(500))
    # 使用技術標籤：保留順序，不強制唯一
    technologies = Column(JSON, default=list)
    created_at = Column(TIMESTAMP, server_default=func.now(), index=True)
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="projects")
