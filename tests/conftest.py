import asyncio
import os
import sys
from datetime import datetime, timedelta

import pytest

# Ensure the backend package (app) is on sys.path for imports during tests
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Settings() 需要這兩個環境變數；測試不會真的連線資料庫
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")

# 讓所有 ORM model 都註冊到 Base，relationship("...") 才能解析
from app.models import user, profile, experience, project, skill_category, contact_message, pending_blob_delete  # noqa: E402,F401
from app.services.editor_registry import EditorRegistry  # noqa: E402


class StoreFailure(Exception):
    pass


class FakeRecordStore:
    """記憶體版 Record Store，記錄每一次呼叫"""

    def __init__(self, records=None):
        self.records = [dict(r) for r in (records or [])]
        self.calls = []
        self.fail_on = set()
        self.fail_ids = set()
        self._next = len(self.records)

    def count(self, operation):
        return sum(1 for call in self.calls if call[0] == operation)

    def _check(self, operation, record_id=None):
        if operation in self.fail_on or (record_id is not None and record_id in self.fail_ids):
            raise StoreFailure(f"{operation} failed")

    async def list(self, owner_id):
        self.calls.append(("list", owner_id))
        self._check("list")
        owned = [dict(r) for r in self.records if r["user_id"] == owner_id]
        return sorted(owned, key=lambda r: r["created_at"], reverse=True)

    async def insert(self, owner_id, fields):
        self.calls.append(("insert", owner_id, dict(fields)))
        self._check("insert")
        self._next += 1
        record = {
            "id": f"rec-{self._next}",
            "user_id": owner_id,
            "created_at": datetime(2024, 1, 1) + timedelta(minutes=self._next),
            **fields,
        }
        self.records.append(record)
        return dict(record)

    async def update(self, record_id, owner_id, fields):
        self.calls.append(("update", record_id, owner_id, dict(fields)))
        self._check("update", record_id)
        for record in self.records:
            if record["id"] == record_id and record["user_id"] == owner_id:
                record.update(fields)
                return dict(record)
        raise StoreFailure(f"{record_id} not found")

    async def delete(self, record_id, owner_id):
        self.calls.append(("delete", record_id, owner_id))
        self._check("delete", record_id)
        self.records = [
            r for r in self.records
            if not (r["id"] == record_id and r["user_id"] == owner_id)
        ]


class SlowListStore:
    """list 會先讓出 event loop，模擬較慢的資料庫"""

    def __init__(self, inner):
        self.inner = inner

    async def list(self, owner_id):
        await asyncio.sleep(0.01)
        return await self.inner.list(owner_id)

    async def insert(self, owner_id, fields):
        return await self.inner.insert(owner_id, fields)

    async def update(self, record_id, owner_id, fields):
        return await self.inner.update(record_id, owner_id, fields)

    async def delete(self, record_id, owner_id):
        return await self.inner.delete(record_id, owner_id)


class InMemoryEditorRegistry(EditorRegistry):
    """不連資料庫的 EditorRegistry，每個編輯器各自一個 FakeRecordStore"""

    def __init__(self):
        super().__init__(session_factory=None)
        self.stores = []

    def _make_list_store(self, kind):
        store = SlowListStore(FakeRecordStore())
        self.stores.append(store)
        return store


def make_record(record_id, owner_id="owner-1", minutes=0, **fields):
    return {
        "id": record_id,
        "user_id": owner_id,
        "created_at": datetime(2023, 6, 1) + timedelta(minutes=minutes),
        **fields,
    }


@pytest.fixture
def fake_store_cls():
    return FakeRecordStore


@pytest.fixture
def record_factory():
    return make_record


@pytest.fixture
def store_failure():
    return StoreFailure


@pytest.fixture
def memory_registry():
    return InMemoryEditorRegistry()
