import asyncio
import types

from app.core.blob_store import BlobStore, BlobStoreError
from app.services.asset_service import AssetService
from app.services.list_manager import PROJECTS, ListReconciliationManager

BASE_URL = "https://blobs.example.com/uploads"


class FakeBlobStore(BlobStore):
    def __init__(self):
        self.base_url = BASE_URL
        self.uploads = []
        self.deletes = []
        self.fail_delete = False
        self.fail_upload = False

    async def upload(self, data, folder, filename, content_type):
        self.uploads.append((folder, filename, content_type))
        if self.fail_upload:
            raise BlobStoreError("disk full")
        return f"{self.base_url}/{folder}/stored-{len(self.uploads)}"

    async def delete(self, url):
        self.deletes.append(url)
        if self.fail_delete:
            raise BlobStoreError("timeout")


class FakeCleanupQueue:
    def __init__(self):
        self.intents = []
        self.resolved = []

    async def record(self, url, error):
        self.intents.append(types.SimpleNamespace(url=url, last_error=error, attempts=1))

    async def list_pending(self):
        return list(self.intents)

    async def resolve(self, intent):
        self.intents.remove(intent)
        self.resolved.append(intent.url)

    async def mark_failed(self, intent, error):
        intent.attempts += 1
        intent.last_error = error


def test_non_pdf_resume_rejected_before_blob_store_call():
    blob_store = FakeBlobStore()
    service = AssetService(blob_store)

    result = asyncio.run(service.upload(b"hello", "resume.docx", "application/msword", "resumes"))

    assert not result.success
    assert result.reason == "validation"
    assert blob_store.uploads == []


def test_pdf_resume_upload_returns_url_only():
    blob_store = FakeBlobStore()
    service = AssetService(blob_store)

    result = asyncio.run(service.upload(b"%PDF-1.7", "cv.pdf", "application/pdf", "resumes"))

    assert result.success
    assert result.url.startswith(f"{BASE_URL}/resumes/")
    assert blob_store.uploads == [("resumes", "cv.pdf", "application/pdf")]


def test_image_folder_rejects_pdf_and_unknown_folder():
    blob_store = FakeBlobStore()
    service = AssetService(blob_store)

    wrong_type = asyncio.run(service.upload(b"%PDF", "cv.pdf", "application/pdf", "project-images"))
    unknown = asyncio.run(service.upload(b"\x89PNG", "a.png", "image/png", "secrets"))
    empty = asyncio.run(service.upload(b"", "a.png", "image/png", "profile-pictures"))

    assert not wrong_type.success
    assert not unknown.success
    assert not empty.success
    assert blob_store.uploads == []


def test_upload_storage_failure_is_reported():
    blob_store = FakeBlobStore()
    blob_store.fail_upload = True
    service = AssetService(blob_store)

    result = asyncio.run(service.upload(b"\x89PNG", "a.png", "image/png", "profile-pictures"))

    assert not result.success
    assert result.reason == "storage"
    assert result.url is None


def test_delete_ignores_foreign_urls():
    blob_store = FakeBlobStore()
    service = AssetService(blob_store)

    outcome = asyncio.run(service.delete("https://images.unsplash.com/photo-123"))
    placeholder = asyncio.run(service.delete("/placeholder.svg"))
    missing = asyncio.run(service.delete(None))

    assert not outcome.attempted
    assert not placeholder.attempted
    assert not missing.attempted
    assert blob_store.deletes == []


def test_delete_failure_is_swallowed_and_queued():
    blob_store = FakeBlobStore()
    blob_store.fail_delete = True
    queue = FakeCleanupQueue()
    service = AssetService(blob_store, queue)
    url = f"{BASE_URL}/project-images/abc.png"

    outcome = asyncio.run(service.delete(url))

    assert outcome.attempted
    assert not outcome.deleted
    assert [i.url for i in queue.intents] == [url]


def test_sweep_retries_pending_deletes():
    blob_store = FakeBlobStore()
    blob_store.fail_delete = True
    queue = FakeCleanupQueue()
    service = AssetService(blob_store, queue)
    asyncio.run(service.delete(f"{BASE_URL}/resumes/a.pdf"))

    still_failing = asyncio.run(service.sweep_pending_deletes())
    blob_store.fail_delete = False
    recovered = asyncio.run(service.sweep_pending_deletes())

    assert still_failing == (0, 1)
    assert recovered == (1, 0)
    assert queue.resolved == [f"{BASE_URL}/resumes/a.pdf"]


def test_detach_clears_field_even_when_blob_delete_fails(fake_store_cls):
    blob_store = FakeBlobStore()
    blob_store.fail_delete = True
    service = AssetService(blob_store, FakeCleanupQueue())
    store = fake_store_cls()
    manager = ListReconciliationManager(PROJECTS, store, "owner-1")
    entry = manager.add_blank()
    manager.update_field(entry.entry_id, "image_url", f"{BASE_URL}/project-images/x.png")

    detached = asyncio.run(service.detach_from_entry(manager, entry.entry_id, "image_url"))

    assert detached
    assert manager.get_entry(entry.entry_id).fields["image_url"] == ""
    assert blob_store.deletes == [f"{BASE_URL}/project-images/x.png"]
    # 只改記憶體，沒有寫入資料庫
    assert store.calls == []
