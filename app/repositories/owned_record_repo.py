# app/repositories/owned_record_repo.py
# 依擁有者 (user_id) 區隔的清單資料共用 CRUD
import logging
import uuid
from typing import Any, Dict, List, Optional
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.repositories.profile_repo import portfolio_owner_query

logger = logging.getLogger(__name__)

class OwnedRecordRepository:
    # 子類別需指定
    model = None
    id_column: str = ""

    def __init__(self, db: AsyncSession):
        self.db = db

    @property
    def _id_attr(self):
        return getattr(self.model, self.id_column)

    async def list_by_owner(self, user_id: str) -> List[Any]:
        """
        查詢特定擁有者的所有資料 (依建立時間降序排列)
        """
        stmt = (
            select(self.model)
            .where(self.model.user_id == user_id)
            .order_by(self.model.created_at.desc())
        )
        result = await self.db.execute(stmt)
        return result.scalars().all()

    async def list_for_portfolio_owner(self) -> List[Any]:
        """
        公開頁面用：只列出作品集擁有者的資料 (依建立時間降序排列)
        """
        stmt = (
            select(self.model)
            .where(self.model.user_id == portfolio_owner_query().scalar_subquery())
            .order_by(self.model.created_at.desc())
        )
        result = await self.db.execute(stmt)
        return result.scalars().all()

    async def get_by_id(self, record_id: str, user_id: str) -> Optional[Any]:
        stmt = select(self.model).where(
            self._id_attr == record_id,
            self.model.user_id == user_id
        )
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def create(self, user_id: str, data: Dict[str, Any]) -> Any:
        """
        新增一筆資料，ID 由這裡產生
        """
        record = self.model(**data, user_id=user_id)
        setattr(record, self.id_column, str(uuid.uuid4()))
        try:
            self.db.add(record)
            await self.db.commit()
            # 取得 DB 產生的預設值 (例如 created_at)
            await self.db.refresh(record)
            return record
        except Exception as e:
            await self.db.rollback()
            logger.error(f"新增 {self.model.__tablename__} 失敗: {e}", exc_info=True)
            raise

    async def update(self, record_id: str, user_id: str, data: Dict[str, Any]) -> Optional[Any]:
        """
        更新一筆資料；找不到 (或不屬於此擁有者) 時回傳 None
        """
        record = await self.get_by_id(record_id, user_id)
        if record is None:
            return None

        for key, value in data.items():
            setattr(record, key, value)

        try:
            await self.db.commit()
            await self.db.refresh(record)
            return record
        except Exception as e:
            await self.db.rollback()
            logger.error(f"更新 {self.model.__tablename__} ({record_id}) 失敗: {e}", exc_info=True)
            raise

    async def delete(self, record_id: str, user_id: str) -> bool:
        """
        刪除一筆資料，回傳是否真的有刪到
        """
        stmt = delete(self.model).where(
            self._id_attr == record_id,
            self.model.user_id == user_id
        )
        try:
            result = await self.db.execute(stmt)
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"刪除 {self.model.__tablename__} ({record_id}) 失敗: {e}", exc_info=True)
            raise
        return result.rowcount > 0
