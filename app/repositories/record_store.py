# app/repositories/record_store.py
# 給清單編輯器使用的 Record Store：
# 編輯器的生命週期比一個 HTTP request 長，所以每次呼叫都開一個新的 session
from typing import Any, Callable, Dict, List, Optional, Type

from sqlalchemy.ext.asyncio import AsyncSession

from app.repositories.owned_record_repo import OwnedRecordRepository
from app.repositories.profile_repo import ProfileRepository
from app.schemas.profile_schema import PROFILE_FIELDS


class RecordNotFoundError(Exception):
    """指定的 (id, owner) 在資料庫中不存在"""


def to_record(obj: Any, id_column: str) -> Dict[str, Any]:
    """ORM 物件 -> dict (id 統一放在 "id")"""
    record = {
        column.name: getattr(obj, column.name)
        for column in obj.__table__.columns
    }
    record["id"] = record.pop(id_column)
    return record


class SessionRecordStore:
    def __init__(self, repository_cls: Type[OwnedRecordRepository], session_factory: Callable[[], AsyncSession]):
        self.repository_cls = repository_cls
        self.session_factory = session_factory

    async def list(self, owner_id: str) -> List[Dict[str, Any]]:
        async with self.session_factory() as db:
            repo = self.repository_cls(db)
            records = await repo.list_by_owner(owner_id)
            return [to_record(r, repo.id_column) for r in records]

    async def insert(self, owner_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        async with self.session_factory() as db:
            repo = self.repository_cls(db)
            record = await repo.create(owner_id, fields)
            return to_record(record, repo.id_column)

    async def update(self, record_id: str, owner_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        async with self.session_factory() as db:
            repo = self.repository_cls(db)
            record = await repo.update(record_id, owner_id, fields)
            if record is None:
                raise RecordNotFoundError(f"{repo.model.__tablename__}: {record_id}")
            return to_record(record, repo.id_column)

    async def delete(self, record_id: str, owner_id: str) -> None:
        async with self.session_factory() as db:
            await self.repository_cls(db).delete(record_id, owner_id)


class ProfileRecordStore:
    """Profile 專用：get / update，不提供 insert 與 delete"""

    def __init__(self, session_factory: Callable[[], AsyncSession]):
        self.session_factory = session_factory

    async def get(self, owner_id: str) -> Optional[Dict[str, Any]]:
        async with self.session_factory() as db:
            profile = await ProfileRepository(db).get_profile_by_user_id(owner_id)
            return None if profile is None else to_record(profile, "profile_id")

    async def update(self, owner_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        async with self.session_factory() as db:
            repo = ProfileRepository(db)
            profile = await repo.get_profile_by_user_id(owner_id)
            if profile is None:
                raise RecordNotFoundError(f"profiles: user {owner_id}")
            update_dict = {k: v for k, v in fields.items() if k in PROFILE_FIELDS}
            profile = await repo.update_profile(profile, update_dict)
            return to_record(profile, "profile_id")
