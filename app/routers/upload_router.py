# app/routers/upload_router.py
import logging
from fastapi import APIRouter, Depends, HTTPException, status, UploadFile, File, Form
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.blob_store import BlobStore, get_blob_store
from app.core.database import get_db
from app.core.security import get_current_user
from app.repositories.pending_blob_delete_repo import PendingBlobDeleteRepository
from app.services.asset_service import AssetService
from app.schemas.upload_schema import (
    UploadResultOut, BlobDeleteRequest, BlobDeleteOut, SweepResultOut
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/uploads",
    tags=["Uploads"],
    dependencies=[Depends(get_current_user)]
)

def get_asset_service(
    db: AsyncSession = Depends(get_db),
    blob_store: BlobStore = Depends(get_blob_store)
) -> AssetService:
    """FastAPI Dependency: 組合 Blob Store 與清理佇列"""
    return AssetService(blob_store, PendingBlobDeleteRepository(db))


@router.post("", response_model=UploadResultOut, status_code=status.HTTP_201_CREATED)
async def upload_file(
    file: UploadFile = File(...),
    folder: str = Form(...),
    assets: AssetService = Depends(get_asset_service)
):
    """
    上傳檔案 (必須傳送 form-data)。

    - folder: resumes (僅限 PDF) / profile-pictures / project-images (僅限圖片)
    - 只回傳 URL，不會寫入任何資料；請自行填入欄位後儲存。
    """
    content = await file.read()
    result = await assets.upload(content, file.filename or "", file.content_type, folder)

    if not result.success:
        status_code = (
            status.HTTP_400_BAD_REQUEST if result.reason == "validation"
            else status.HTTP_502_BAD_GATEWAY
        )
        raise HTTPException(status_code=status_code, detail=result.message)

    return result


@router.delete("", response_model=BlobDeleteOut)
async def delete_file(
    request_data: BlobDeleteRequest,
    assets: AssetService = Depends(get_asset_service)
):
    """
    盡力刪除檔案。不屬於本站儲存空間的 URL 不會被處理；
    刪除失敗不會回傳錯誤，會放入清理佇列。
    """
    outcome = await assets.delete(request_data.url)
    return BlobDeleteOut(attempted=outcome.attempted, deleted=outcome.deleted)


@router.post("/sweep", response_model=SweepResultOut)
async def sweep_pending_deletes(
    assets: AssetService = Depends(get_asset_service)
):
    """
    重試清理佇列中之前刪除失敗的檔案
    """
    deleted, remaining = await assets.sweep_pending_deletes()
    return SweepResultOut(deleted=deleted, remaining=remaining)
