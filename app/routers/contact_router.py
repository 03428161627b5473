# app/routers/contact_router.py
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from app.core.database import get_db
from app.core.security import get_current_user
from app.services.contact_service import ContactService
from app.schemas.contact_schema import ContactMessageCreate, ContactMessageOut, ContactResult

router = APIRouter(prefix="/contact", tags=["Contact"])

@router.post("", response_model=ContactResult)
async def submit_contact_message(
    data: ContactMessageCreate,
    db: AsyncSession = Depends(get_db)
):
    """
    (公開) 聯絡表單。儲存失敗時回傳 success=false，而不是 5xx。
    """
    return await ContactService(db).submit_message(data)

@router.get(
    "/messages",
    response_model=List[ContactMessageOut],
    dependencies=[Depends(get_current_user)],
    summary="後台查看聯絡訊息"
)
async def list_contact_messages(db: AsyncSession = Depends(get_db)):
    return await ContactService(db).list_messages()
