import asyncio
import uuid
from datetime import datetime

import pytest
from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import settings
from app.core.database import Base
from app.models.profile import Profile
from app.models.user import User
from app.repositories.experience_repo import ExperienceRepository
from app.repositories.project_repo import ProjectRepository
from app.repositories.profile_repo import ProfileRepository
from app.repositories.record_store import ProfileRecordStore, SessionRecordStore
from app.schemas.profile_schema import PROFILE_FIELDS
from app.schemas.user_schema import UserCreate
from app.services.auth_service import AuthService
from app.services.list_manager import (
    EXPERIENCE, PROJECTS, EntryState, ListReconciliationManager, SingletonRecordManager
)
from app.services.public_service import PublicService

OWNER = "11111111-1111-1111-1111-111111111111"


async def make_session_factory():
    # 記憶體 SQLite，所有連線共用同一個資料庫
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as db:
        db.add(User(user_id=OWNER, email="owner@example.com", password_hash="x"))
        db.add(Profile(profile_id=str(uuid.uuid4()), user_id=OWNER, name="Owner"))
        await db.commit()
    return engine, session_factory


def test_editor_round_trip_against_database():
    async def scenario():
        engine, session_factory = await make_session_factory()
        store = SessionRecordStore(ExperienceRepository, session_factory)
        manager = ListReconciliationManager(EXPERIENCE, store, OWNER)

        await manager.load()
        assert manager.entries() == []

        entry = manager.add_blank()
        manager.update_field(entry.entry_id, "position", "Engineer")
        manager.update_field(entry.entry_id, "company", "Acme")
        save_result = await manager.save()

        saved = manager.entries()
        assert save_result.success
        assert len(saved) == 1
        assert saved[0].state == EntryState.PERSISTED
        assert saved[0].entry_id != entry.entry_id
        assert saved[0].fields["company"] == "Acme"

        manager.update_field(saved[0].entry_id, "duration", "2020 - 2024")
        await manager.save()
        assert manager.entries()[0].fields["duration"] == "2020 - 2024"

        delete_result = await manager.delete_entity(saved[0].entry_id)
        assert delete_result.success
        assert await store.list(OWNER) == []

        await engine.dispose()

    asyncio.run(scenario())


def test_update_of_other_owners_record_fails():
    async def scenario():
        engine, session_factory = await make_session_factory()
        store = SessionRecordStore(ProjectRepository, session_factory)
        record = await store.insert(OWNER, {"title": "Mine", "description": "", "image_url": "", "technologies": ["a", "b"]})

        intruder = ListReconciliationManager(PROJECTS, store, "someone-else")
        await intruder.load()
        assert intruder.entries() == []

        try:
            await store.update(record["id"], "someone-else", {"title": "Stolen"})
            raised = False
        except Exception:
            raised = True

        rows = await store.list(OWNER)
        await engine.dispose()
        return raised, rows

    raised, rows = asyncio.run(scenario())

    assert raised
    assert rows[0]["title"] == "Mine"
    assert rows[0]["technologies"] == ["a", "b"]


def test_profile_editor_updates_singleton():
    async def scenario():
        engine, session_factory = await make_session_factory()
        store = ProfileRecordStore(session_factory)
        editor = SingletonRecordManager(PROFILE_FIELDS, store, OWNER)

        load_result = await editor.load()
        editor.update_field("about_text", "Hello there")
        editor.update_field("github_url", "https://github.com/owner")
        save_result = await editor.save()

        snapshot = editor.snapshot()
        await engine.dispose()
        return load_result, save_result, snapshot

    load_result, save_result, snapshot = asyncio.run(scenario())

    assert load_result.success
    assert save_result.success
    assert snapshot["name"] == "Owner"
    assert snapshot["about_text"] == "Hello there"
    assert snapshot["github_url"] == "https://github.com/owner"


def test_public_view_only_lists_the_portfolio_owner_content():
    other = "22222222-2222-2222-2222-222222222222"

    async def scenario():
        engine, session_factory = await make_session_factory()
        async with session_factory() as db:
            # 後來註冊的第二個帳號
            db.add(User(user_id=other, email="other@portfolio.dev", password_hash="x"))
            db.add(Profile(profile_id=str(uuid.uuid4()), user_id=other, name="Other",
                           created_at=datetime(2999, 1, 1)))
            await db.commit()

        async with session_factory() as db:
            projects = ProjectRepository(db)
            await projects.create(OWNER, {"title": "Mine", "description": "", "image_url": "", "technologies": []})
            await projects.create(other, {"title": "Spam", "description": "", "image_url": "", "technologies": []})
            await ExperienceRepository(db).create(other, {"position": "x", "company": "y", "duration": "", "description": ""})

        async with session_factory() as db:
            view = await PublicService(db).get_public_view()

        await engine.dispose()
        return view

    view = asyncio.run(scenario())

    assert view.profile.name == "Owner"
    assert [p.title for p in view.projects] == ["Mine"]
    assert view.experience == []


def test_registration_closes_after_the_first_account(monkeypatch):
    new_account = UserCreate(email="second@portfolio.dev", password="secret123")

    async def register(session_factory):
        async with session_factory() as db:
            return await AuthService(db).register_user(new_account)

    async def scenario():
        engine, session_factory = await make_session_factory()
        try:
            with pytest.raises(HTTPException) as closed:
                await register(session_factory)

            monkeypatch.setattr(settings, "ALLOW_OPEN_REGISTRATION", True)
            user = await register(session_factory)
            async with session_factory() as db:
                profile = await ProfileRepository(db).get_profile_by_user_id(user.user_id)
        finally:
            await engine.dispose()
        return closed.value, user, profile

    closed, user, profile = asyncio.run(scenario())

    assert closed.status_code == 403
    assert user.email == "second@portfolio.dev"
    assert profile is not None
