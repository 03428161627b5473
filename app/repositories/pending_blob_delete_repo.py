# app/repositories/pending_blob_delete_repo.py

import logging
from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.models.pending_blob_delete import PendingBlobDelete

logger = logging.getLogger(__name__)

class PendingBlobDeleteRepository:
    """記錄刪除失敗的檔案 URL (清理佇列)"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def record(self, url: str, error: str) -> None:
        stmt = select(PendingBlobDelete).where(PendingBlobDelete.url == url)
        result = await self.db.execute(stmt)
        intent = result.scalars().first()

        if intent is None:
            self.db.add(PendingBlobDelete(url=url, last_error=error))
        else:
            intent.attempts += 1
            intent.last_error = error

        try:
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

    async def list_pending(self) -> List[PendingBlobDelete]:
        stmt = select(PendingBlobDelete).order_by(PendingBlobDelete.created_at.asc())
        result = await self.db.execute(stmt)
        return result.scalars().all()

    async def resolve(self, intent: PendingBlobDelete) -> None:
        """刪除成功，移出佇列"""
        await self.db.delete(intent)
        await self.db.commit()

    async def mark_failed(self, intent: PendingBlobDelete, error: str) -> None:
        intent.attempts += 1
        intent.last_error = error
        await self.db.commit()
