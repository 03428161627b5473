# app/schemas/editor_schema.py
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional
from datetime import datetime

# 工作清單中的一筆資料
class WorkingEntryOut(BaseModel):
    entry_id: str
    state: str = Field(..., description="pending (尚未儲存) / persisted (已存在於資料庫)")
    record_id: Optional[str] = None
    fields: Dict[str, Any]
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class OperationResultOut(BaseModel):
    success: bool
    message: str
    failed: List[str] = []

    class Config:
        from_attributes = True

# 編輯器操作後的回應：結果 + 目前的工作清單
class EditorStateOut(BaseModel):
    result: Optional[OperationResultOut] = None
    entries: List[WorkingEntryOut] = []

class ProfileEditorOut(BaseModel):
    result: Optional[OperationResultOut] = None
    profile: Optional[Dict[str, Any]] = None

# --- Request Body ---

class FieldUpdate(BaseModel):
    field: str
    value: Any = None

class ListItemCreate(BaseModel):
    value: str = ""

class ListItemUpdate(BaseModel):
    value: str
