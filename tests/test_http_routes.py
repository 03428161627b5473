import types

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.core.blob_store import BlobStore, BlobStoreError
from app.core.security import get_current_user
from app.routers import editor_router, upload_router
from app.services.asset_service import AssetService
from app.services.editor_registry import get_editor_registry

BASE_URL = "https://blobs.example.com/uploads"


class MemoryBlobStore(BlobStore):
    def __init__(self):
        self.base_url = BASE_URL
        self.uploads = []
        self.fail_upload = False

    async def upload(self, data, folder, filename, content_type):
        if self.fail_upload:
            raise BlobStoreError("disk full")
        self.uploads.append((folder, filename))
        return f"{self.base_url}/{folder}/{len(self.uploads)}"

    async def delete(self, url):
        pass


def make_app(registry, blob_store, signed_in=True):
    app = FastAPI()
    app.include_router(editor_router.router)
    app.include_router(upload_router.router)
    app.dependency_overrides[get_editor_registry] = lambda: registry
    app.dependency_overrides[upload_router.get_asset_service] = lambda: AssetService(blob_store)
    if signed_in:
        app.dependency_overrides[get_current_user] = lambda: types.SimpleNamespace(user_id="owner-1")
    return app


@pytest.fixture
def blob_store():
    return MemoryBlobStore()


@pytest.fixture
def client(memory_registry, blob_store):
    with TestClient(make_app(memory_registry, blob_store)) as test_client:
        yield test_client


def add_project(client):
    response = client.post("/editor/projects/entries")
    assert response.status_code == 201
    return response.json()["entries"][-1]["entry_id"]


def test_editor_edits_stay_in_working_list(client, memory_registry):
    entry_id = add_project(client)

    response = client.patch(
        f"/editor/projects/entries/{entry_id}",
        json={"field": "technologies", "value": "FastAPI, SQLAlchemy"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["result"]["success"]
    assert body["entries"][0]["state"] == "pending"
    assert body["entries"][0]["fields"]["technologies"] == ["FastAPI", "SQLAlchemy"]
    assert memory_registry.stores[0].inner.count("insert") == 0


def test_editor_unknown_field_is_400(client):
    entry_id = add_project(client)

    response = client.patch(f"/editor/projects/entries/{entry_id}", json={"field": "owner", "value": "x"})

    assert response.status_code == 400


def test_editor_non_list_value_for_list_field_is_400(client):
    entry_id = add_project(client)

    response = client.patch(f"/editor/projects/entries/{entry_id}", json={"field": "technologies", "value": 5})
    append = client.post(f"/editor/projects/entries/{entry_id}/technologies/items", json={"value": "React"})

    assert response.status_code == 400
    assert append.status_code == 200
    assert append.json()["entries"][0]["fields"]["technologies"] == ["React"]


def test_editor_unknown_kind_is_404(client):
    assert client.get("/editor/blog-posts").status_code == 404


def test_upload_validation_failure_is_400(client, blob_store):
    response = client.post(
        "/uploads",
        files={"file": ("cv.docx", b"not a pdf", "application/msword")},
        data={"folder": "resumes"},
    )

    assert response.status_code == 400
    assert blob_store.uploads == []


def test_upload_storage_failure_is_502(client, blob_store):
    blob_store.fail_upload = True

    response = client.post(
        "/uploads",
        files={"file": ("me.png", b"\x89PNG", "image/png")},
        data={"folder": "profile-pictures"},
    )

    assert response.status_code == 502


def test_pdf_resume_upload_returns_url(client):
    response = client.post(
        "/uploads",
        files={"file": ("cv.pdf", b"%PDF-1.7", "application/pdf")},
        data={"folder": "resumes"},
    )

    assert response.status_code == 201
    assert response.json()["url"].startswith(f"{BASE_URL}/resumes/")


def test_admin_routes_require_a_token(memory_registry, blob_store):
    app = make_app(memory_registry, blob_store, signed_in=False)

    with TestClient(app) as anonymous:
        editor = anonymous.get("/editor/projects")
        sweep = anonymous.post("/uploads/sweep")

    assert editor.status_code == 401
    assert sweep.status_code == 401
    assert memory_registry.stores == []
