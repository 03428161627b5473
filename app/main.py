import logging
import os
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app.core.config import settings
from app.core.database import create_tables
from app.routers import (
    auth_router, user_router, public_router, contact_router,
    profile_router, experience_router, project_router, skill_router,
    editor_router, upload_router
)

# --- 匯入所有 Model 檔案 ---
# 都在應用程式啟動時被 SQLAlchemy 註冊。
from app.models import user
from app.models import profile
from app.models import experience
from app.models import project
from app.models import skill_category
from app.models import contact_message
from app.models import pending_blob_delete


# 設定基礎日誌
logging.basicConfig(level=settings.LOG_LEVEL, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__) # 建立一個 logger 實例

@asynccontextmanager
async def lifespan(app: FastAPI):
    # 不處理 migration，只確保資料表存在
    await create_tables()
    logger.info("Database tables ready")
    yield

app = FastAPI(title="Portfolio API", lifespan=lifespan)

# --- 設定 CORS (跨來源資源共用) ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"], # 允許所有 HTTP 方法
    allow_headers=["*"], # 允許所有 HTTP 標頭
)

# --- 上傳檔案 (Blob Store) 以靜態檔案提供 ---
os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
app.mount("/static/uploads", StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")

# --- 根路徑 ---
@app.get("/")
def read_root():
    return {"status": "success", "message": "Backend is running!"}

# --- 載入 API 路由 ---
app.include_router(auth_router.router)
app.include_router(user_router.router)
app.include_router(public_router.router)
app.include_router(contact_router.router)
app.include_router(profile_router.router)
app.include_router(experience_router.router)
app.include_router(project_router.router)
app.include_router(skill_router.router)
app.include_router(editor_router.router)
app.include_router(upload_router.router)
