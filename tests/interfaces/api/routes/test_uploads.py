"""File uploads on local disk storage."""

from __future__ import annotations

from tests.conftest import login


def test_single_upload_is_stored_and_described(client, accounts, student_headers) -> None:
    response = client.post(
        "/api/upload/single",
        files={"file": ("notes.txt", b"lecture notes", "text/plain")},
        headers=student_headers,
    )

    assert response.status_code == 201
    body = response.json()
    assert body["originalName"] == "notes.txt"
    assert body["size"] == len(b"lecture notes")
    assert body["url"].startswith("/uploads/files/")
    info = client.get(f"/api/upload/{body['fileId']}/info", headers=student_headers)
    assert info.json()["fileId"] == body["fileId"]
    assert client.get(body["url"]).content == b"lecture notes"


def test_image_endpoint_rejects_other_types(client, accounts, student_headers) -> None:
    response = client.post(
        "/api/upload/image",
        files={"image": ("notes.txt", b"text", "text/plain")},
        headers=student_headers,
    )

    assert response.status_code == 400


def test_document_endpoint_checks_extension(client, accounts, student_headers) -> None:
    accepted = client.post(
        "/api/upload/document",
        files={"document": ("thesis.pdf", b"%PDF-1.4", "application/pdf")},
        headers=student_headers,
    )
    rejected = client.post(
        "/api/upload/document",
        files={"document": ("run.exe", b"MZ", "application/octet-stream")},
        headers=student_headers,
    )

    assert accepted.status_code == 201
    assert rejected.status_code == 400


def test_oversized_image_is_rejected(client, accounts, student_headers) -> None:
    response = client.post(
        "/api/upload/image",
        files={"image": ("big.png", b"0" * (5 * 1024 * 1024 + 1), "image/png")},
        headers=student_headers,
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "File too large. Maximum size is 5MB"


def test_only_uploader_or_admin_may_delete(client, accounts, student_headers, admin_headers) -> None:
    file_id = client.post(
        "/api/upload/single",
        files={"file": ("a.txt", b"a", "text/plain")},
        headers=student_headers,
    ).json()["fileId"]
    other_headers = login(client, accounts.other_student.email)

    assert client.delete(f"/api/upload/{file_id}", headers=other_headers).status_code == 404
    assert client.delete(f"/api/upload/{file_id}", headers=admin_headers).status_code == 204
    assert client.get(f"/api/upload/{file_id}/info", headers=student_headers).status_code == 404


def test_avatar_upload_updates_profile(client, accounts, student_headers) -> None:
    response = client.post(
        "/api/common/upload-avatar",
        files={"avatar": ("me.png", b"\x89PNG", "image/png")},
        headers=student_headers,
    )

    assert response.status_code == 200
    avatar = response.json()["avatar"]
    me = client.get("/api/auth/me", headers=student_headers).json()
    assert me["profile"]["avatar"] == avatar
