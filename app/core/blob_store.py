# app/core/blob_store.py
# 二進位檔案 (圖片 / 履歷) 的儲存服務
# 記錄只保存 URL，檔案本身由這裡負責上傳與刪除
import logging
import uuid
from pathlib import Path
from typing import Optional

import aiofiles
import aiofiles.os

from app.core.config import settings

logger = logging.getLogger(__name__)


class BlobStoreError(Exception):
    """Blob Store 操作失敗 (檔案過大、I/O 錯誤、非法路徑...)"""


class BlobStore:
    """
    URL 定址的檔案儲存介面。
    - upload: 存入檔案並回傳可長期使用的 URL
    - delete: 依 URL 刪除 (冪等，檔案不存在視為成功)
    - owns: 判斷 URL 是否屬於此儲存服務
    """

    base_url: str = ""

    async def upload(self, data: bytes, folder: str, filename: str, content_type: Optional[str]) -> str:
        raise NotImplementedError

    async def delete(self, url: str) -> None:
        raise NotImplementedError

    def owns(self, url: Optional[str]) -> bool:
        if not url or not self.base_url:
            return False
        return url.startswith(self.base_url.rstrip("/") + "/")


class LocalBlobStore(BlobStore):
    """
    將檔案存放在本機目錄，並由 FastAPI 的 StaticFiles 對外提供
    檔名一律改為 uuid，避免覆蓋與路徑注入
    """

    def __init__(self, root_dir: str | Path, base_url: str, max_bytes: int):
        self.root_dir = Path(root_dir).resolve()
        self.base_url = base_url.rstrip("/")
        self.max_bytes = max_bytes

    def _resolve(self, url: str) -> Path:
        relative = url[len(self.base_url) + 1:]
        path = (self.root_dir / relative).resolve()
        # 不允許跳出 root_dir (e.g. ../../etc/passwd)
        if self.root_dir not in path.parents:
            raise BlobStoreError(f"非法的檔案路徑: {url}")
        return path

    async def upload(self, data: bytes, folder: str, filename: str, content_type: Optional[str]) -> str:
        if len(data) > self.max_bytes:
            raise BlobStoreError(f"檔案過大 ({len(data)} bytes)，上限為 {self.max_bytes} bytes")

        extension = Path(filename or "").suffix.lower()
        stored_name = f"{uuid.uuid4()}{extension}"
        target_dir = self.root_dir / folder
        try:
            await aiofiles.os.makedirs(target_dir, exist_ok=True)
            async with aiofiles.open(target_dir / stored_name, 'wb') as f:
                await f.write(data)
        except OSError as e:
            raise BlobStoreError(f"檔案儲存失敗: {e}") from e

        logger.info(f"Stored blob {folder}/{stored_name} ({len(data)} bytes, {content_type})")
        return f"{self.base_url}/{folder}/{stored_name}"

    async def delete(self, url: str) -> None:
        if not self.owns(url):
            raise BlobStoreError(f"URL 不屬於此儲存服務: {url}")
        path = self._resolve(url)
        try:
            await aiofiles.os.remove(path)
        except FileNotFoundError:
            # 冪等：已經不存在就當作刪除成功
            return
        except OSError as e:
            raise BlobStoreError(f"檔案刪除失敗: {e}") from e
        logger.info(f"Deleted blob {path}")


# 實例化儲存服務
blob_store = LocalBlobStore(
    root_dir=settings.UPLOAD_DIR,
    base_url=settings.BLOB_BASE_URL,
    max_bytes=settings.MAX_UPLOAD_BYTES,
)

def get_blob_store() -> BlobStore:
    """FastAPI Dependency: 取得 Blob Store (測試時可覆寫)"""
    return blob_store
