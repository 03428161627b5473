# app/repositories/contact_repo.py

import logging
from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.models.contact_message import ContactMessage

logger = logging.getLogger(__name__)

class ContactMessageRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_message(self, message: ContactMessage) -> ContactMessage:
        """
        新增一筆聯絡訊息
        """
        try:
            self.db.add(message)
            await self.db.flush()
            await self.db.refresh(message)
            await self.db.commit()
            return message
        except Exception as e:
            await self.db.rollback()
            logger.error(f"建立聯絡訊息失敗: {e}", exc_info=True)
            raise

    async def list_messages(self, limit: int = 100) -> List[ContactMessage]:
        """
        獲取聯絡訊息 (依時間降序排列)
        """
        stmt = (
            select(ContactMessage)
            .order_by(ContactMessage.created_at.desc())
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return result.scalars().all()
