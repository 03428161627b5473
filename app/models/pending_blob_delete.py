# app/models/pending_blob_delete.py

import uuid
from sqlalchemy import Column, String, TEXT, INT, CHAR, TIMESTAMP, func
from app.core.database import Base

class PendingBlobDelete(Base):
    """
    刪除失敗的檔案 URL，留待之後的清理 (sweep) 重試
    """
    __tablename__ = "pending_blob_deletes"

    intent_id = Column(CHAR(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    url = Column(String(500), nullable=False, unique=True)
    last_error = Column(TEXT)
    attempts = Column(INT, default=1, nullable=False)
    created_at = Column(TIMESTAMP, server_default=func.now())
