# app/models/contact_message.py

import uuid
from sqlalchemy import Column, String, TEXT, CHAR, TIMESTAMP, func
from app.core.database import Base

class ContactMessage(Base):
    """訪客透過聯絡表單送出的訊息 (不屬於任何使用者)"""
    __tablename__ = "contact_messages"

    message_id = Column(CHAR(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False)
    subject = Column(String(255), nullable=False)
    message = Column(TEXT, nullable=False)
    created_at = Column(TIMESTAMP, server_default=func.now(), index=True)
