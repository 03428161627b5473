# app/core/config.py
# 應用程式設定 (例如資料庫連線字串、JWT 秘鑰、檔案上傳位置等)
from typing import List
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    # 資料庫設定
    DATABASE_URL: str
    # (可選) 設為 True 會在 console 印出 SQL 語句
    SQL_ECHO: bool = False
    # JWT 設定
    JWT_SECRET_KEY: str
    # JWT 演算法
    JWT_ALGORITHM: str = "HS256"
    # 存取令牌過期時間（分鐘）
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # 日誌等級
    LOG_LEVEL: str = "INFO"
    # 允許的 CORS 來源 (生產環境應限制)
    CORS_ORIGINS: List[str] = ["*"]
    # 預設只允許建立第一個 (作品集擁有者) 帳號，之後關閉註冊
    ALLOW_OPEN_REGISTRATION: bool = False

    # --- 檔案儲存 (Blob Store) ---
    # 上傳檔案實際存放的目錄
    UPLOAD_DIR: str = "static/uploads"
    # 對外的 URL 前綴，只有此前綴的 URL 才會被視為「我們的」檔案
    BLOB_BASE_URL: str = "http://localhost:8000/static/uploads"
    # 單一檔案大小上限 (bytes)
    MAX_UPLOAD_BYTES: int = 4_500_000

    # 環境變數檔案 
    class Config:
        env_file = ".env"

# 建立設定實例
settings = Settings()
