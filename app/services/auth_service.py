from sqlalchemy.ext.asyncio import AsyncSession
from app.repositories.user_repo import UserRepository
from app.repositories.profile_repo import ProfileRepository
from app.core.config import settings
from app.core.security import verify_password, create_access_token, get_password_hash
from app.models.user import User
from fastapi import HTTPException, status
from app.schemas.user_schema import UserCreate
import uuid

class AuthService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.user_repo = UserRepository(db)
        self.profile_repo = ProfileRepository(db)

    async def authenticate_user(self, email: str, password: str) -> User | None:
        """
        驗證使用者帳號密碼。
        成功回傳 User 物件，失敗回傳 None。
        """
        user = await self.user_repo.get_user_by_email(email)

        # 1. 檢查使用者是否存在
        if not user:
            return None

        # 2. 檢查是否被停權
        if not user.is_active:
            return None

        # 3. 檢查密碼是否正確
        if not verify_password(plain_password=password, hashed_password=user.password_hash):
            return None

        return user

    async def register_user(self, user_create: UserCreate) -> User:
        """
        處理使用者註冊，並同時建立空白 Profile
        """
        # 0. 作品集只有一位擁有者：已有帳號時關閉註冊
        if not settings.ALLOW_OPEN_REGISTRATION and await self.user_repo.has_any_user():
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="註冊已關閉",
            )

        # 1. 檢查 Email 是否已被註冊
        existing_user = await self.user_repo.get_user_by_email(user_create.email)
        if existing_user:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="此 Email 已經被註冊",
            )

        # 2. 建立 User ORM 模型
        new_user = User(
            user_id=str(uuid.uuid4()),
            email=user_create.email,
            password_hash=get_password_hash(user_create.password),
        )

        # 3. User 與 Profile 在同一個交易中建立
        try:
            await self.user_repo.add_user(new_user)
            await self.profile_repo.create_blank_profile(new_user.user_id, email=new_user.email)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        await self.db.refresh(new_user)
        return new_user

    def create_login_token(self, user: User) -> str:
        """
        為指定使用者建立 access token
        """
        access_token = create_access_token(
            data={
                "sub": user.email, # 'sub' 是 JWT 的標準欄位
                "user_id": str(user.user_id),
            }
        )
        return access_token
