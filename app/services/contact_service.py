# app/services/contact_service.py

import logging
from typing import List
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.contact_message import ContactMessage
from app.repositories.contact_repo import ContactMessageRepository
from app.schemas.contact_schema import ContactMessageCreate, ContactResult

logger = logging.getLogger(__name__)

class ContactService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = ContactMessageRepository(db)

    async def submit_message(self, data: ContactMessageCreate) -> ContactResult:
        """
        (公開) 儲存訪客的聯絡訊息；失敗時不拋出錯誤，回傳 success=False
        """
        new_message = ContactMessage(
            name=data.name,
            email=data.email,
            subject=data.subject,
            message=data.message,
        )
        try:
            await self.repo.create_message(new_message)
        except Exception as e:
            logger.error(f"聯絡表單儲存失敗: {e}", exc_info=True)
            return ContactResult(success=False, message="發生錯誤，請稍後再試。")

        logger.info(f"收到聯絡訊息 from {data.email}, Subject: {data.subject}")
        return ContactResult(success=True, message="已收到您的訊息！")

    async def list_messages(self) -> List[ContactMessage]:
        """
        (後台) 查看聯絡訊息
        """
        return await self.repo.list_messages()
