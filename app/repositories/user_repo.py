# app/repositories/user_repo.py
# 負責與使用者相關的資料庫操作
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from app.models.user import User

class UserRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_user_by_email(self, email: str) -> User | None:
        """
        透過 email 查詢使用者
        """
        stmt = select(User).where(User.email == email)
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def add_user(self, user: User) -> User:
        """
        將使用者加入 session (commit 由呼叫端負責，
        讓 User 與空白 Profile 在同一個交易中建立)
        """
        self.db.add(user)
        await self.db.flush()
        return user

    async def has_any_user(self) -> bool:
        """
        是否已經有任何帳號 (用來在第一個帳號建立後關閉註冊)
        """
        stmt = select(User.user_id).limit(1)
        result = await self.db.execute(stmt)
        return result.scalars().first() is not None

    async def get_user_by_id(self, user_id: str) -> User | None:
        """
        透過 user_id 查詢使用者
        """
        stmt = select(User).where(User.user_id == user_id)
        result = await self.db.execute(stmt)
        return result.scalars().first()
