import asyncio
import types
from datetime import datetime

from app.services.public_service import PublicService


class FakeSession:
    def __init__(self):
        self.rollbacks = 0

    async def rollback(self):
        self.rollbacks += 1


class BrokenRepo:
    async def get_first_profile(self):
        raise ConnectionError("database unreachable")

    async def list_for_portfolio_owner(self):
        raise ConnectionError("database unreachable")


class StaticRepo:
    def __init__(self, rows=None, profile=None):
        self.rows = rows or []
        self.profile = profile

    async def get_first_profile(self):
        return self.profile

    async def list_for_portfolio_owner(self):
        return self.rows


def make_service(profile_repo, experience_repo, project_repo, skill_repo):
    db = FakeSession()
    service = PublicService(db)
    service.profile_repo = profile_repo
    service.experience_repo = experience_repo
    service.project_repo = project_repo
    service.skill_repo = skill_repo
    return service, db


def test_unreachable_store_yields_empty_view():
    broken = BrokenRepo()
    service, db = make_service(broken, broken, broken, broken)

    view = asyncio.run(service.get_public_view())

    assert view.profile is None
    assert view.experience == []
    assert view.projects == []
    assert view.skills == []
    assert db.rollbacks == 4


def test_each_part_fails_independently():
    profile = types.SimpleNamespace(
        name="Ada", email="ada@example.com", about_text="Hi",
        github_url=None, linkedin_url=None, twitter_url=None, whatsapp=None,
        profile_picture_url=None, resume_url="https://blobs.example.com/resumes/cv.pdf",
    )
    project = types.SimpleNamespace(
        project_id="p1", user_id="u1", title="Compiler", description="",
        image_url=None, technologies=["Python", "LLVM"], created_at=datetime(2024, 5, 1),
    )
    service, _ = make_service(
        StaticRepo(profile=profile),
        BrokenRepo(),
        StaticRepo(rows=[project]),
        BrokenRepo(),
    )

    view = asyncio.run(service.get_public_view())

    assert view.profile.name == "Ada"
    assert view.profile.resume_url.endswith("cv.pdf")
    assert view.experience == []
    assert [p.title for p in view.projects] == ["Compiler"]
    assert view.projects[0].technologies == ["Python", "LLVM"]
    assert view.skills == []


def test_individual_getters_never_raise():
    broken = BrokenRepo()
    service, _ = make_service(broken, broken, broken, broken)

    assert asyncio.run(service.get_profile()) is None
    assert asyncio.run(service.get_experience()) == []
    assert asyncio.run(service.get_projects()) == []
    assert asyncio.run(service.get_skills()) == []
