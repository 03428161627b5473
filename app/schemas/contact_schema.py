# app/schemas/contact_schema.py
from pydantic import BaseModel, EmailStr, Field
from datetime import datetime
from typing import Optional

# 訪客送出的聯絡表單
class ContactMessageCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    subject: str = Field(..., min_length=1, max_length=255)
    message: str = Field(..., min_length=1)

class ContactMessageOut(ContactMessageCreate):
    message_id: str
    email: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

# 送出結果 (成功/失敗都回 200，由 success 判斷)
class ContactResult(BaseModel):
    success: bool
    message: str
