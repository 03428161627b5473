import asyncio

import pytest

from app.core.blob_store import BlobStoreError, LocalBlobStore

BASE_URL = "http://localhost:8000/static/uploads"


def test_upload_writes_file_and_returns_url(tmp_path):
    store = LocalBlobStore(tmp_path, BASE_URL, max_bytes=1024)

    url = asyncio.run(store.upload(b"%PDF-1.4 data", "resumes", "My CV.PDF", "application/pdf"))

    assert url.startswith(f"{BASE_URL}/resumes/")
    assert url.endswith(".pdf")
    stored = tmp_path / "resumes" / url.rsplit("/", 1)[1]
    assert stored.read_bytes() == b"%PDF-1.4 data"
    assert store.owns(url)


def test_upload_over_size_limit_fails(tmp_path):
    store = LocalBlobStore(tmp_path, BASE_URL, max_bytes=4)

    with pytest.raises(BlobStoreError):
        asyncio.run(store.upload(b"too large", "project-images", "a.png", "image/png"))

    assert not (tmp_path / "project-images").exists()


def test_delete_is_idempotent(tmp_path):
    store = LocalBlobStore(tmp_path, BASE_URL, max_bytes=1024)
    url = asyncio.run(store.upload(b"img", "profile-pictures", "me.jpg", "image/jpeg"))

    asyncio.run(store.delete(url))
    asyncio.run(store.delete(url))

    assert list((tmp_path / "profile-pictures").iterdir()) == []


def test_delete_refuses_paths_outside_root(tmp_path):
    store = LocalBlobStore(tmp_path / "uploads", BASE_URL, max_bytes=1024)

    with pytest.raises(BlobStoreError):
        asyncio.run(store.delete(f"{BASE_URL}/../secret.txt"))


def test_owns_only_matches_base_url(tmp_path):
    store = LocalBlobStore(tmp_path, BASE_URL, max_bytes=1024)

    assert not store.owns("http://localhost:8000/static/uploads-evil/a.png")
    assert not store.owns("https://cdn.example.com/a.png")
    assert not store.owns("")


def test_upload_reports_folder_that_cannot_be_created(tmp_path):
    # 同名的檔案佔住了資料夾的位置
    (tmp_path / "resumes").write_bytes(b"")
    store = LocalBlobStore(tmp_path, BASE_URL, max_bytes=1024)

    with pytest.raises(BlobStoreError):
        asyncio.run(store.upload(b"%PDF", "resumes", "cv.pdf", "application/pdf"))
