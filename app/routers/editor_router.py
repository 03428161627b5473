# app/routers/editor_router.py
# 後台清單編輯器：所有變更先存在伺服器端的工作清單，按下「儲存」才寫入資料庫
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status

from app.core.security import get_current_user
from app.models.user import User
from app.routers.upload_router import get_asset_service
from app.services.asset_service import AssetService
from app.services.editor_registry import EditorRegistry, UnknownEditorError, get_editor_registry
from app.services.list_manager import (
    InvalidFieldValueError, ListReconciliationManager, OperationResult, UnknownFieldError
)
from app.schemas.editor_schema import (
    EditorStateOut, ProfileEditorOut, WorkingEntryOut, OperationResultOut,
    FieldUpdate, ListItemCreate, ListItemUpdate
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/editor",
    tags=["Admin Editor"],
    dependencies=[Depends(get_current_user)]
)

# 每種清單中指向 Blob Store 檔案的欄位
ASSET_FIELDS = {
    "projects": ("image_url",),
}


def _state(editor: ListReconciliationManager, result: Optional[OperationResult] = None) -> EditorStateOut:
    return EditorStateOut(
        result=OperationResultOut.model_validate(result, from_attributes=True) if result else None,
        entries=[
            WorkingEntryOut(
                entry_id=entry.entry_id,
                state=entry.state.value,
                record_id=entry.record_id,
                fields=entry.fields,
                created_at=entry.created_at,
            )
            for entry in editor.entries()
        ],
    )

def _local_result(changed: bool, message: str) -> OperationResult:
    # 記憶體內的編輯：找不到項目時不做任何事
    if changed:
        return OperationResult(True, message)
    return OperationResult(False, "找不到指定的項目，未做任何變更")

async def _open(registry: EditorRegistry, user: User, kind: str) -> ListReconciliationManager:
    try:
        return await registry.open_list_editor(user.user_id, kind)
    except UnknownEditorError:
        raise HTTPException(status.HTTP_404_NOT_FOUND, f"不支援的編輯器: {kind}")


# -----------------------------------------------------------------
# Profile 編輯器 (單筆資料，需定義在 /{kind} 之前)
# -----------------------------------------------------------------

@router.get("/profile", response_model=ProfileEditorOut)
async def get_profile_editor(
    current_user: User = Depends(get_current_user),
    registry: EditorRegistry = Depends(get_editor_registry)
):
    editor = await registry.open_profile_editor(current_user.user_id)
    return ProfileEditorOut(profile=editor.snapshot())

@router.post("/profile/load", response_model=ProfileEditorOut)
async def load_profile_editor(
    current_user: User = Depends(get_current_user),
    registry: EditorRegistry = Depends(get_editor_registry)
):
    editor = await registry.open_profile_editor(current_user.user_id)
    result = await editor.load()
    return ProfileEditorOut(
        result=OperationResultOut.model_validate(result, from_attributes=True),
        profile=editor.snapshot()
    )

@router.patch("/profile", response_model=ProfileEditorOut)
async def update_profile_field(
    update: FieldUpdate,
    current_user: User = Depends(get_current_user),
    registry: EditorRegistry = Depends(get_editor_registry)
):
    editor = await registry.open_profile_editor(current_user.user_id)
    try:
        changed = editor.update_field(update.field, update.value)
    except UnknownFieldError as e:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, str(e))
    result = OperationResult(True, "已修改，請按「儲存」") if changed else OperationResult(False, "請先載入個人資料")
    return ProfileEditorOut(
        result=OperationResultOut.model_validate(result, from_attributes=True),
        profile=editor.snapshot()
    )

@router.post("/profile/save", response_model=ProfileEditorOut)
async def save_profile_editor(
    current_user: User = Depends(get_current_user),
    registry: EditorRegistry = Depends(get_editor_registry)
):
    editor = await registry.open_profile_editor(current_user.user_id)
    result = await editor.save()
    return ProfileEditorOut(
        result=OperationResultOut.model_validate(result, from_attributes=True),
        profile=editor.snapshot()
    )


# -----------------------------------------------------------------
# 清單編輯器 (kind: experience / projects / skills)
# -----------------------------------------------------------------

@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def discard_all_drafts(
    current_user: User = Depends(get_current_user),
    registry: EditorRegistry = Depends(get_editor_registry)
):
    """
    捨棄所有未儲存的變更 (下次開啟時重新從資料庫載入)
    """
    registry.close_all(current_user.user_id)

@router.get("/{kind}", response_model=EditorStateOut)
async def get_working_list(
    kind: str,
    current_user: User = Depends(get_current_user),
    registry: EditorRegistry = Depends(get_editor_registry)
):
    """
    目前的工作清單 (包含尚未儲存的變更)
    """
    editor = await _open(registry, current_user, kind)
    return _state(editor)

@router.post("/{kind}/load", response_model=EditorStateOut)
async def reload_working_list(
    kind: str,
    current_user: User = Depends(get_current_user),
    registry: EditorRegistry = Depends(get_editor_registry)
):
    """
    從資料庫重新載入 (未儲存的變更會被捨棄)
    """
    editor = await _open(registry, current_user, kind)
    result = await editor.load()
    return _state(editor, result)

@router.post("/{kind}/entries", response_model=EditorStateOut, status_code=status.HTTP_201_CREATED)
async def add_blank_entry(
    kind: str,
    current_user: User = Depends(get_current_user),
    registry: EditorRegistry = Depends(get_editor_registry)
):
    """
    新增一筆空白項目 (只在記憶體中，儲存時才會寫入)
    """
    editor = await _open(registry, current_user, kind)
    entry = editor.add_blank()
    return _state(editor, OperationResult(True, f"已新增項目 {entry.entry_id}"))

@router.patch("/{kind}/entries/{entry_id}", response_model=EditorStateOut)
async def update_entry_field(
    kind: str,
    entry_id: str,
    update: FieldUpdate,
    current_user: User = Depends(get_current_user),
    registry: EditorRegistry = Depends(get_editor_registry)
):
    editor = await _open(registry, current_user, kind)
    try:
        changed = editor.update_field(entry_id, update.field, update.value)
    except (UnknownFieldError, InvalidFieldValueError) as e:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, str(e))
    return _state(editor, _local_result(changed, "已修改，請按「儲存」"))

@router.post("/{kind}/entries/{entry_id}/{field}/items", response_model=EditorStateOut)
async def append_list_item(
    kind: str,
    entry_id: str,
    field: str,
    item: ListItemCreate,
    current_user: User = Depends(get_current_user),
    registry: EditorRegistry = Depends(get_editor_registry)
):
    """
    在列表欄位 (technologies / skill_list) 末尾加入一個值
    """
    editor = await _open(registry, current_user, kind)
    try:
        changed = editor.append_list_item(entry_id, field, item.value)
    except UnknownFieldError as e:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, str(e))
    return _state(editor, _local_result(changed, "已新增"))

@router.put("/{kind}/entries/{entry_id}/{field}/items/{index}", response_model=EditorStateOut)
async def update_list_item(
    kind: str,
    entry_id: str,
    field: str,
    index: int,
    item: ListItemUpdate,
    current_user: User = Depends(get_current_user),
    registry: EditorRegistry = Depends(get_editor_registry)
):
    editor = await _open(registry, current_user, kind)
    try:
        changed = editor.update_list_item(entry_id, field, index, item.value)
    except UnknownFieldError as e:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, str(e))
    return _state(editor, _local_result(changed, "已修改"))

@router.delete("/{kind}/entries/{entry_id}/{field}/items/{index}", response_model=EditorStateOut)
async def remove_list_item(
    kind: str,
    entry_id: str,
    field: str,
    index: int,
    current_user: User = Depends(get_current_user),
    registry: EditorRegistry = Depends(get_editor_registry)
):
    editor = await _open(registry, current_user, kind)
    try:
        changed = editor.remove_list_item(entry_id, field, index)
    except UnknownFieldError as e:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, str(e))
    return _state(editor, _local_result(changed, "已移除"))

@router.delete("/{kind}/entries/{entry_id}/assets/{field}", response_model=EditorStateOut)
async def remove_entry_asset(
    kind: str,
    entry_id: str,
    field: str,
    current_user: User = Depends(get_current_user),
    registry: EditorRegistry = Depends(get_editor_registry),
    assets: AssetService = Depends(get_asset_service)
):
    """
    移除項目上的檔案 (e.g. 作品圖片)：嘗試刪除檔案並清空欄位，仍需「儲存」
    """
    if field not in ASSET_FIELDS.get(kind, ()):
        raise HTTPException(status.HTTP_400_BAD_REQUEST, f"{kind} 沒有檔案欄位 '{field}'")
    editor = await _open(registry, current_user, kind)
    changed = await assets.detach_from_entry(editor, entry_id, field)
    return _state(editor, _local_result(changed, "檔案已移除，請按「儲存」"))

@router.delete("/{kind}/entries/{entry_id}", response_model=EditorStateOut)
async def delete_entry(
    kind: str,
    entry_id: str,
    current_user: User = Depends(get_current_user),
    registry: EditorRegistry = Depends(get_editor_registry)
):
    """
    刪除項目：尚未儲存的只從清單移除；已存在的會立即從資料庫刪除
    """
    editor = await _open(registry, current_user, kind)
    result = await editor.delete_entity(entry_id)
    return _state(editor, result)

@router.post("/{kind}/save", response_model=EditorStateOut)
async def save_working_list(
    kind: str,
    current_user: User = Depends(get_current_user),
    registry: EditorRegistry = Depends(get_editor_registry)
):
    """
    儲存：新項目 insert、既有項目 update，完成後重新載入
    """
    editor = await _open(registry, current_user, kind)
    result = await editor.save()
    logger.info(f"Saved {kind} for user {current_user.user_id}: {result.message}")
    return _state(editor, result)
