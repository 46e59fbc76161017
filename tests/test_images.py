import cloudinary.exceptions
import cloudinary.uploader
import pytest
from sqlalchemy.orm import Session

from conftest import auth_headers
from roomivo.core.config import settings


@pytest.fixture
def fake_cloudinary(monkeypatch):
    """Replace the Cloudinary upload/destroy calls and record what they receive."""
    calls = {"upload": [], "destroy": []}
    results = {"destroy": {"result": "ok"}}

    def fake_upload(file, **options):
        calls["upload"].append({"content": file.read(), **options})
        public_id = f"{options['folder']}/abc123"
        return {
            "public_id": public_id,
            "secure_url": f"https://res.cloudinary.com/demo/image/upload/{public_id}.jpg",
        }

    def fake_destroy(public_id, **options):
        calls["destroy"].append({"public_id": public_id, **options})
        return results["destroy"]

    monkeypatch.setattr(cloudinary.uploader, "upload", fake_upload)
    monkeypatch.setattr(cloudinary.uploader, "destroy", fake_destroy)
    return calls, results


def _user_folder(user_id: int) -> str:
    return f"{settings.cloudinary_folder}/{user_id}"


# ============================================================================
# UPLOAD TESTS
# ============================================================================


def test_upload_image(client, db: Session, landlord_token: str, landlord_user_dict: dict, fake_cloudinary):
    calls, _ = fake_cloudinary
    response = client.post(
        "/api/images/upload",
        files={"image": ("flat.jpg", b"\xff\xd8\xff fake jpeg", "image/jpeg")},
        headers=auth_headers(landlord_token),
    )
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["publicId"] == f"{_user_folder(landlord_user_dict['id'])}/abc123"
    assert data["imageUrl"].startswith("https://")

    assert len(calls["upload"]) == 1
    assert calls["upload"][0]["content"] == b"\xff\xd8\xff fake jpeg"
    assert calls["upload"][0]["folder"] == _user_folder(landlord_user_dict["id"])
    assert calls["upload"][0]["resource_type"] == "image"


def test_upload_rejects_non_image(client, db: Session, landlord_token: str, fake_cloudinary):
    calls, _ = fake_cloudinary
    response = client.post(
        "/api/images/upload",
        files={"image": ("notes.txt", b"hello", "text/plain")},
        headers=auth_headers(landlord_token),
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Only image files allowed"
    assert calls["upload"] == []


def test_upload_rejects_large_file(client, db: Session, landlord_token: str, fake_cloudinary, monkeypatch):
    monkeypatch.setattr(settings, "max_upload_bytes", 10)
    response = client.post(
        "/api/images/upload",
        files={"image": ("big.png", b"x" * 11, "image/png")},
        headers=auth_headers(landlord_token),
    )
    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_upload_without_file(client, db: Session, landlord_token: str, fake_cloudinary):
    response = client.post("/api/images/upload", headers=auth_headers(landlord_token))
    assert response.status_code == 400
    assert response.json()["detail"] == "No image provided"


def test_upload_requires_auth(client, db: Session, fake_cloudinary):
    response = client.post(
        "/api/images/upload",
        files={"image": ("flat.jpg", b"data", "image/jpeg")},
    )
    assert response.status_code == 401


def test_upload_provider_failure(client, db: Session, landlord_token: str, monkeypatch):
    def failing_upload(file, **options):
        raise cloudinary.exceptions.Error("Invalid API key")

    monkeypatch.setattr(cloudinary.uploader, "upload", failing_upload)
    response = client.post(
        "/api/images/upload",
        files={"image": ("flat.jpg", b"data", "image/jpeg")},
        headers=auth_headers(landlord_token),
    )
    assert response.status_code == 502
    assert response.json() == {"detail": "Failed to upload image", "code": "EXTERNAL_SERVICE_ERROR"}


# ============================================================================
# DELETE TESTS
# ============================================================================


def test_delete_own_image(client, db: Session, landlord_token: str, landlord_user_dict: dict, fake_cloudinary):
    calls, _ = fake_cloudinary
    public_id = f"{_user_folder(landlord_user_dict['id'])}/abc123"
    response = client.delete(f"/api/images/delete/{public_id}", headers=auth_headers(landlord_token))
    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Image deleted"}
    assert calls["destroy"][0]["public_id"] == public_id


def test_delete_someone_elses_image(client, db: Session, landlord_token: str, another_landlord_user_dict: dict, fake_cloudinary):
    calls, _ = fake_cloudinary
    public_id = f"{_user_folder(another_landlord_user_dict['id'])}/abc123"
    response = client.delete(f"/api/images/delete/{public_id}", headers=auth_headers(landlord_token))
    assert response.status_code == 403
    assert calls["destroy"] == []


def test_delete_missing_image(client, db: Session, landlord_token: str, landlord_user_dict: dict, fake_cloudinary):
    _, results = fake_cloudinary
    results["destroy"] = {"result": "not found"}
    public_id = f"{_user_folder(landlord_user_dict['id'])}/missing"
    response = client.delete(f"/api/images/delete/{public_id}", headers=auth_headers(landlord_token))
    assert response.status_code == 404
