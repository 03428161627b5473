# app/services/asset_service.py
# 檔案上傳 / 刪除流程
# 上傳只回傳 URL，要由呼叫端自己填進欄位並「儲存」才會寫入資料庫
import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from app.core.blob_store import BlobStore
from app.services.list_manager import ListReconciliationManager

logger = logging.getLogger(__name__)


class UploadValidationError(ValueError):
    """上傳前的檢查失敗 (資料夾不存在、檔案類型不符...)"""


@dataclass(frozen=True)
class FolderPolicy:
    folder: str
    description: str
    content_type_prefix: str = ""
    content_type_contains: str = ""

    def accepts(self, content_type: Optional[str]) -> bool:
        content_type = (content_type or "").lower()
        if self.content_type_prefix and not content_type.startswith(self.content_type_prefix):
            return False
        if self.content_type_contains and self.content_type_contains not in content_type:
            return False
        return True


FOLDER_POLICIES = {
    "resumes": FolderPolicy("resumes", "請上傳 PDF 檔案", content_type_contains="pdf"),
    "profile-pictures": FolderPolicy("profile-pictures", "請上傳圖片檔案", content_type_prefix="image/"),
    "project-images": FolderPolicy("project-images", "請上傳圖片檔案", content_type_prefix="image/"),
}


@dataclass
class UploadResult:
    success: bool
    message: str
    url: Optional[str] = None
    # "validation" / "storage"，成功時為 None
    reason: Optional[str] = None


@dataclass
class BlobDeleteOutcome:
    attempted: bool
    deleted: bool


class CleanupQueue(Protocol):
    async def record(self, url: str, error: str) -> None: ...

    async def list_pending(self) -> list: ...

    async def resolve(self, intent) -> None: ...

    async def mark_failed(self, intent, error: str) -> None: ...


class AssetService:
    def __init__(self, blob_store: BlobStore, cleanup_queue: Optional[CleanupQueue] = None):
        self.blob_store = blob_store
        self.cleanup_queue = cleanup_queue

    def validate_upload(self, data: bytes, content_type: Optional[str], folder: str) -> FolderPolicy:
        policy = FOLDER_POLICIES.get(folder)
        if policy is None:
            raise UploadValidationError(f"不支援的資料夾: {folder}")
        if not data:
            raise UploadValidationError("檔案是空的")
        if not policy.accepts(content_type):
            raise UploadValidationError(policy.description)
        return policy

    async def upload(self, data: bytes, filename: str, content_type: Optional[str], folder: str) -> UploadResult:
        try:
            self.validate_upload(data, content_type, folder)
        except UploadValidationError as e:
            logger.info(f"Upload rejected ({folder}, {content_type}): {e}")
            return UploadResult(False, str(e), reason="validation")

        try:
            url = await self.blob_store.upload(data, folder, filename, content_type)
        except Exception as e:
            logger.error(f"檔案上傳失敗 ({folder}/{filename}): {e}", exc_info=True)
            return UploadResult(False, "檔案上傳失敗，請稍後再試", reason="storage")

        return UploadResult(True, "檔案已上傳，請按「儲存」以保存變更", url=url)

    async def delete(self, url: Optional[str]) -> BlobDeleteOutcome:
        """
        盡力刪除：只處理屬於我們 Blob Store 的 URL，失敗只記錄不拋出，
        並放入清理佇列等待之後重試。
        """
        if not self.blob_store.owns(url):
            return BlobDeleteOutcome(attempted=False, deleted=False)

        try:
            await self.blob_store.delete(url)
            return BlobDeleteOutcome(attempted=True, deleted=True)
        except Exception as e:
            logger.warning(f"檔案刪除失敗，已加入清理佇列 ({url}): {e}")
            await self._enqueue_cleanup(url, str(e))
            return BlobDeleteOutcome(attempted=True, deleted=False)

    async def _enqueue_cleanup(self, url: str, error: str) -> None:
        if self.cleanup_queue is None:
            return
        try:
            await self.cleanup_queue.record(url, error)
        except Exception as e:
            logger.error(f"無法寫入清理佇列 ({url}): {e}", exc_info=True)

    async def sweep_pending_deletes(self) -> tuple[int, int]:
        """
        重試清理佇列中的刪除，回傳 (成功數, 剩餘數)
        """
        if self.cleanup_queue is None:
            return 0, 0

        deleted = remaining = 0
        for intent in await self.cleanup_queue.list_pending():
            try:
                await self.blob_store.delete(intent.url)
            except Exception as e:
                logger.warning(f"清理重試失敗 ({intent.url}): {e}")
                await self.cleanup_queue.mark_failed(intent, str(e))
                remaining += 1
                continue
            await self.cleanup_queue.resolve(intent)
            deleted += 1

        logger.info(f"Blob sweep finished: deleted={deleted}, remaining={remaining}")
        return deleted, remaining

    async def detach_from_entry(self, manager: ListReconciliationManager, entry_id: str, field_name: str) -> bool:
        """
        移除清單項目上的檔案 (e.g. 作品圖片)：先嘗試刪檔，無論成功與否都清空欄位。
        欄位變更仍需「儲存」才會寫入資料庫。
        """
        entry = manager.get_entry(entry_id)
        if entry is None:
            return False
        await self.delete(entry.fields.get(field_name))
        return manager.update_field(entry_id, field_name, "")
