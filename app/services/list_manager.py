# app/services/list_manager.py
# 後台「清單編輯器」的核心：
# 使用者在記憶體中的工作清單 (working list) 上新增 / 修改 / 刪除，
# 按下「儲存」時才一次比對並寫回 Record Store。
import asyncio
import copy
import enum
import logging
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Protocol, Tuple

logger = logging.getLogger(__name__)

TEMP_ID_PREFIX = "tmp-"


class UnknownFieldError(ValueError):
    """欄位名稱不屬於此類型的資料"""


class InvalidFieldValueError(ValueError):
    """欄位值的型別不符 (e.g. 列表欄位收到數字)"""


class EntryState(str, enum.Enum):
    # 只存在於記憶體，尚未寫入資料庫
    PENDING = "pending"
    # 已由 Record Store 指派 ID
    PERSISTED = "persisted"


@dataclass
class WorkingEntry:
    entry_id: str
    state: EntryState
    fields: Dict[str, Any]
    created_at: Optional[datetime] = None

    @property
    def is_pending(self) -> bool:
        return self.state == EntryState.PENDING

    @property
    def record_id(self) -> Optional[str]:
        """暫存項目沒有資料庫 ID"""
        return None if self.is_pending else self.entry_id


@dataclass
class OperationResult:
    success: bool
    message: str
    # 失敗的 entry_id 列表 (儲存 / 刪除時使用)
    failed: List[str] = field(default_factory=list)


class RecordStore(Protocol):
    """
    依擁有者 (owner) 區隔的清單型資料儲存。
    回傳的 record 為 dict，至少包含 "id"、"created_at" 與各欄位。
    """

    async def list(self, owner_id: str) -> List[Mapping[str, Any]]: ...

    async def insert(self, owner_id: str, fields: Dict[str, Any]) -> Mapping[str, Any]: ...

    async def update(self, record_id: str, owner_id: str, fields: Dict[str, Any]) -> Mapping[str, Any]: ...

    async def delete(self, record_id: str, owner_id: str) -> None: ...


class SingletonStore(Protocol):
    """每個擁有者只有一筆資料 (Profile)，只能讀取與更新"""

    async def get(self, owner_id: str) -> Optional[Mapping[str, Any]]: ...

    async def update(self, owner_id: str, fields: Dict[str, Any]) -> Mapping[str, Any]: ...


@dataclass(frozen=True)
class EntityDefinition:
    """描述一種可編輯的清單資料：有哪些欄位、預設值、哪些是字串列表"""
    kind: str
    label: str
    defaults: Dict[str, Any]
    list_fields: Tuple[str, ...] = ()

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(self.defaults.keys())

    def blank_fields(self) -> Dict[str, Any]:
        return copy.deepcopy(self.defaults)

    def check_field(self, field_name: str) -> None:
        if field_name not in self.defaults:
            raise UnknownFieldError(f"{self.label} 沒有欄位 '{field_name}'")

    def check_list_field(self, field_name: str) -> None:
        if field_name not in self.list_fields:
            raise UnknownFieldError(f"{self.label} 的 '{field_name}' 不是列表欄位")

    def fields_from_record(self, record: Mapping[str, Any]) -> Dict[str, Any]:
        """資料庫的 NULL 以預設值取代 (e.g. description -> "")"""
        fields = {}
        for name, default in self.defaults.items():
            value = record.get(name)
            fields[name] = copy.deepcopy(default) if value is None else copy.deepcopy(value)
        return fields

    def coerce(self, field_name: str, value: Any) -> Any:
        if field_name not in self.list_fields:
            if isinstance(value, (list, dict)):
                raise InvalidFieldValueError(f"{self.label} 的 '{field_name}' 不接受列表或物件")
            return value

        if value is None:
            return []
        # 列表欄位也接受逗號分隔的字串 ("React, Next.js")
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        if isinstance(value, (list, tuple)) and not any(isinstance(item, (list, dict)) for item in value):
            return ["" if item is None else str(item) for item in value]
        raise InvalidFieldValueError(f"{self.label} 的 '{field_name}' 需為字串列表")


EXPERIENCE = EntityDefinition(
    kind="experience",
    label="經歷",
    defaults={"position": "", "company": "", "duration": "", "description": ""},
)

PROJECTS = EntityDefinition(
    kind="projects",
    label="作品",
    defaults={"title": "", "description": "", "image_url": "", "technologies": []},
    list_fields=("technologies",),
)

SKILLS = EntityDefinition(
    kind="skills",
    label="技能分類",
    defaults={"category": "", "skill_list": []},
    list_fields=("skill_list",),
)

ENTITY_DEFINITIONS: Dict[str, EntityDefinition] = {
    definition.kind: definition for definition in (EXPERIENCE, PROJECTS, SKILLS)
}


def new_temp_id() -> str:
    return f"{TEMP_ID_PREFIX}{uuid.uuid4().hex}"


class ListReconciliationManager:
    """
    管理一位擁有者的一種清單資料 (經歷 / 作品 / 技能分類)。

    - 新增、修改欄位只動記憶體
    - 刪除已存在的項目會立即呼叫 store.delete，成功後才從清單移除
    - save() 對暫存項目 insert、對已存在項目 update，結束後一律重新 load()
    - load / delete / save 透過同一把 asyncio.Lock 依序執行
    """

    def __init__(self, definition: EntityDefinition, store: RecordStore, owner_id: str):
        self.definition = definition
        self.store = store
        self.owner_id = owner_id
        self._entries: List[WorkingEntry] = []
        self._lock = asyncio.Lock()

    # --- 讀取 ---

    def entries(self) -> List[WorkingEntry]:
        return [replace(entry, fields=copy.deepcopy(entry.fields)) for entry in self._entries]

    def get_entry(self, entry_id: str) -> Optional[WorkingEntry]:
        entry = self._find(entry_id)
        if entry is None:
            return None
        return replace(entry, fields=copy.deepcopy(entry.fields))

    def _find(self, entry_id: str) -> Optional[WorkingEntry]:
        for entry in self._entries:
            if entry.entry_id == entry_id:
                return entry
        return None

    async def load(self) -> OperationResult:
        async with self._lock:
            return await self._load_unlocked()

    async def _load_unlocked(self) -> OperationResult:
        label = self.definition.label
        try:
            records = await self.store.list(self.owner_id)
        except Exception as e:
            logger.error(f"載入{label}失敗 (owner={self.owner_id}): {e}", exc_info=True)
            self._entries = []
            return OperationResult(False, f"無法載入{label}資料")

        self._entries = [
            WorkingEntry(
                entry_id=str(record["id"]),
                state=EntryState.PERSISTED,
                fields=self.definition.fields_from_record(record),
                created_at=record.get("created_at"),
            )
            for record in records
        ]
        return OperationResult(True, f"已載入 {len(self._entries)} 筆{label}")

    # --- 記憶體內的編輯 (不呼叫 store) ---

    def add_blank(self) -> WorkingEntry:
        entry = WorkingEntry(
            entry_id=new_temp_id(),
            state=EntryState.PENDING,
            fields=self.definition.blank_fields(),
        )
        self._entries.append(entry)
        return replace(entry, fields=copy.deepcopy(entry.fields))

    def update_field(self, entry_id: str, field_name: str, value: Any) -> bool:
        self.definition.check_field(field_name)
        value = self.definition.coerce(field_name, value)
        entry = self._find(entry_id)
        if entry is None:
            return False
        entry.fields[field_name] = value
        return True

    def append_list_item(self, entry_id: str, field_name: str, value: str = "") -> bool:
        self.definition.check_list_field(field_name)
        entry = self._find(entry_id)
        if entry is None:
            return False
        entry.fields[field_name].append(value)
        return True

    def update_list_item(self, entry_id: str, field_name: str, index: int, value: str) -> bool:
        self.definition.check_list_field(field_name)
        entry = self._find(entry_id)
        if entry is None or not 0 <= index < len(entry.fields[field_name]):
            return False
        entry.fields[field_name][index] = value
        return True

    def remove_list_item(self, entry_id: str, field_name: str, index: int) -> bool:
        self.definition.check_list_field(field_name)
        entry = self._find(entry_id)
        if entry is None or not 0 <= index < len(entry.fields[field_name]):
            return False
        del entry.fields[field_name][index]
        return True

    # --- 會呼叫 store 的操作 ---

    async def delete_entity(self, entry_id: str) -> OperationResult:
        label = self.definition.label
        async with self._lock:
            entry = self._find(entry_id)
            if entry is None:
                return OperationResult(False, f"找不到此{label}", failed=[entry_id])

            if entry.is_pending:
                self._entries.remove(entry)
                return OperationResult(True, f"已移除{label}")

            try:
                await self.store.delete(entry.record_id, self.owner_id)
            except Exception as e:
                # 刪除失敗：清單保持原狀，項目仍然可見
                logger.error(f"刪除{label}失敗 (id={entry.record_id}): {e}", exc_info=True)
                return OperationResult(False, f"刪除{label}失敗", failed=[entry_id])

            self._entries.remove(entry)
            return OperationResult(True, f"已刪除{label}")

    async def save(self) -> OperationResult:
        """
        逐筆 insert / update (各自獨立，不包成單一交易)，
        部分失敗不會回滾已成功的寫入。結束後一定重新 load()。
        """
        label = self.definition.label
        async with self._lock:
            failed: List[str] = []
            for entry in list(self._entries):
                fields = copy.deepcopy(entry.fields)
                try:
                    if entry.is_pending:
                        await self.store.insert(self.owner_id, fields)
                    else:
                        await self.store.update(entry.record_id, self.owner_id, fields)
                except Exception as e:
                    logger.error(f"儲存{label}失敗 (entry={entry.entry_id}): {e}", exc_info=True)
                    failed.append(entry.entry_id)

            reload_result = await self._load_unlocked()

            if failed:
                return OperationResult(False, f"有 {len(failed)} 筆{label}儲存失敗", failed=failed)
            if not reload_result.success:
                return OperationResult(False, f"{label}已儲存，但重新載入失敗")
            return OperationResult(True, f"{label}已儲存")


class SingletonRecordManager:
    """
    單筆資料 (Profile) 的編輯器：只有 load / update_field / save，
    不會新增或刪除資料本身。
    """

    def __init__(self, field_names: Tuple[str, ...], store: SingletonStore, owner_id: str, label: str = "個人資料"):
        self.field_names = field_names
        self.store = store
        self.owner_id = owner_id
        self.label = label
        self._fields: Optional[Dict[str, Any]] = None
        self._lock = asyncio.Lock()

    def snapshot(self) -> Optional[Dict[str, Any]]:
        return None if self._fields is None else dict(self._fields)

    async def load(self) -> OperationResult:
        async with self._lock:
            return await self._load_unlocked()

    async def _load_unlocked(self) -> OperationResult:
        try:
            record = await self.store.get(self.owner_id)
        except Exception as e:
            logger.error(f"載入{self.label}失敗 (owner={self.owner_id}): {e}", exc_info=True)
            self._fields = None
            return OperationResult(False, f"無法載入{self.label}")

        if record is None:
            self._fields = None
            return OperationResult(False, f"{self.label}尚未建立")

        self._fields = {name: record.get(name) for name in self.field_names}
        return OperationResult(True, f"已載入{self.label}")

    def update_field(self, field_name: str, value: Any) -> bool:
        if field_name not in self.field_names:
            raise UnknownFieldError(f"{self.label} 沒有欄位 '{field_name}'")
        if self._fields is None:
            return False
        self._fields[field_name] = value
        return True

    async def save(self) -> OperationResult:
        async with self._lock:
            if self._fields is None:
                return OperationResult(False, f"請先載入{self.label}")

            saved = True
            try:
                await self.store.update(self.owner_id, dict(self._fields))
            except Exception as e:
                logger.error(f"儲存{self.label}失敗 (owner={self.owner_id}): {e}", exc_info=True)
                saved = False

            reload_result = await self._load_unlocked()
            if not saved:
                return OperationResult(False, f"儲存{self.label}失敗")
            if not reload_result.success:
                return OperationResult(False, f"{self.label}已儲存，但重新載入失敗")
            return OperationResult(True, f"{self.label}已儲存")
