# app/schemas/upload_schema.py
from pydantic import BaseModel
from typing import Optional

class UploadResultOut(BaseModel):
    success: bool
    url: Optional[str] = None
    message: str

    class Config:
        from_attributes = True

class BlobDeleteRequest(BaseModel):
    url: str

class BlobDeleteOut(BaseModel):
    # attempted=False 代表 URL 不屬於我們的儲存服務，沒有動作
    attempted: bool
    deleted: bool

class SweepResultOut(BaseModel):
    deleted: int
    remaining: int
