# app/services/editor_registry.py
# 保存每位使用者的編輯器 (工作清單跨越多個 request)
import asyncio
import logging
from typing import Callable, Dict, Tuple
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import AsyncSessionLocal
from app.repositories.experience_repo import ExperienceRepository
from app.repositories.project_repo import ProjectRepository
from app.repositories.skill_repo import SkillCategoryRepository
from app.repositories.record_store import SessionRecordStore, ProfileRecordStore
from app.schemas.profile_schema import PROFILE_FIELDS
from app.services.list_manager import (
    ENTITY_DEFINITIONS, ListReconciliationManager, SingletonRecordManager
)

logger = logging.getLogger(__name__)

# 每種清單對應的 Repository
REPOSITORIES = {
    "experience": ExperienceRepository,
    "projects": ProjectRepository,
    "skills": SkillCategoryRepository,
}


class UnknownEditorError(KeyError):
    pass


class EditorRegistry:
    """結構: {(owner_id, kind): ListReconciliationManager}, {owner_id: SingletonRecordManager}"""

    def __init__(self, session_factory: Callable[[], AsyncSession]):
        self.session_factory = session_factory
        self._list_editors: Dict[Tuple[str, str], ListReconciliationManager] = {}
        self._profile_editors: Dict[str, SingletonRecordManager] = {}
        # 同一個編輯器只能被建立一次 (兩個 request 同時第一次開啟時)
        self._open_lock = asyncio.Lock()

    def _make_list_store(self, kind: str):
        return SessionRecordStore(REPOSITORIES[kind], self.session_factory)

    def _make_profile_store(self):
        return ProfileRecordStore(self.session_factory)

    async def open_list_editor(self, owner_id: str, kind: str) -> ListReconciliationManager:
        """取得編輯器；第一次開啟時會先從資料庫載入"""
        if kind not in ENTITY_DEFINITIONS:
            raise UnknownEditorError(kind)

        key = (owner_id, kind)
        editor = self._list_editors.get(key)
        if editor is not None:
            return editor

        async with self._open_lock:
            editor = self._list_editors.get(key)
            if editor is None:
                editor = ListReconciliationManager(ENTITY_DEFINITIONS[kind], self._make_list_store(kind), owner_id)
                await editor.load()
                self._list_editors[key] = editor
                logger.info(f"Opened {kind} editor for owner {owner_id}")
        return editor

    async def open_profile_editor(self, owner_id: str) -> SingletonRecordManager:
        editor = self._profile_editors.get(owner_id)
        if editor is not None:
            return editor

        async with self._open_lock:
            editor = self._profile_editors.get(owner_id)
            if editor is None:
                editor = SingletonRecordManager(PROFILE_FIELDS, self._make_profile_store(), owner_id)
                await editor.load()
                self._profile_editors[owner_id] = editor
        return editor

    def close_all(self, owner_id: str) -> None:
        """捨棄該使用者所有未儲存的工作清單"""
        for key in [k for k in self._list_editors if k[0] == owner_id]:
            del self._list_editors[key]
        self._profile_editors.pop(owner_id, None)


# 實例化
editor_registry = EditorRegistry(AsyncSessionLocal)

def get_editor_registry() -> EditorRegistry:
    """FastAPI Dependency (測試時可覆寫)"""
    return editor_registry
