"""HTTP tests for uploading, listing and deleting files."""

from fastapi.testclient import TestClient

from chainvault.app import App
from chainvault.web.server import create_fastapi_app
from conftest import auth_headers, login


def upload(client, token: str, content: bytes = b"hello", filename: str = "hello.txt", content_type: str = "text/plain"):
    return client.post(
        "/api/files/upload", headers=auth_headers(token), files={"file": (filename, content, content_type)}
    )


def audit_log(client, admin_token: str) -> list[dict]:
    return client.get("/api/admin/audit", headers=auth_headers(admin_token)).json()


class TestUpload:
    def test_upload_then_list(self, client, account, admin_account, content_store):
        token = login(client, account)
        content = b"\x01" * (5 * 1024 * 1024)

        response = upload(client, token, content, "photo.jpg", "image/jpeg")
        assert response.status_code == 201
        uploaded = response.json()
        assert uploaded["filename"] == "photo.jpg"
        assert uploaded["fileSize"] == len(content)
        assert uploaded["fileType"] == "image/jpeg"
        assert uploaded["cid"].startswith("bafk")
        assert len(content_store.stored) == 1

        files = client.get("/api/files", headers=auth_headers(token)).json()
        assert [f["id"] for f in files] == [uploaded["id"]]

        audit = audit_log(client, login(client, admin_account))
        assert len(audit) == 1
        assert audit[0]["action"] == "FILE_UPLOAD"
        assert audit[0]["fileId"] == uploaded["id"]
        assert audit[0]["metadata"] == {"filename": "photo.jpg", "cid": uploaded["cid"]}

    def test_list_newest_first(self, client, account):
        token = login(client, account)
        first = upload(client, token, b"one", "one.txt").json()
        second = upload(client, token, b"two", "two.txt").json()
        files = client.get("/api/files", headers=auth_headers(token)).json()
        assert [f["id"] for f in files] == [second["id"], first["id"]]

    def test_list_only_own_files(self, client, account, other_account):
        upload(client, login(client, account))
        other_token = login(client, other_account)
        assert client.get("/api/files", headers=auth_headers(other_token)).json() == []

    def test_oversize_upload(self, client, account, content_store):
        token = login(client, account)
        response = upload(client, token, b"x" * (10 * 1024 * 1024 + 1), "big.bin")
        assert response.status_code == 400
        assert content_store.stored == []

    def test_empty_upload(self, client, account):
        response = upload(client, login(client, account), b"", "empty.txt")
        assert response.status_code == 400

    def test_missing_file_field(self, client, account):
        response = client.post("/api/files/upload", headers=auth_headers(login(client, account)))
        assert response.status_code == 400

    def test_storage_failure(self, client, account, content_store):
        token = login(client, account)
        content_store.fail = True
        response = upload(client, token)
        assert response.status_code == 500
        assert response.json()["type"] == "upstream_storage_error"
        assert client.get("/api/files", headers=auth_headers(token)).json() == []

    def test_upload_requires_token(self, client, content_store):
        response = client.post("/api/files/upload", files={"file": ("a.txt", b"a", "text/plain")})
        assert response.status_code == 401
        assert content_store.stored == []

    def test_missing_pinning_token(self, config, repository, account):
        unconfigured = config.model_copy(update={"pinning_api_token": None})
        app_instance = App(unconfigured, repository=repository)
        with TestClient(create_fastapi_app(app_instance, unconfigured)) as client:
            response = upload(client, login(client, account))
            assert response.status_code == 500
            assert client.get("/api/files", headers=auth_headers(login(client, account))).json() == []


class TestDelete:
    def test_delete_own_file(self, client, account, admin_account):
        token = login(client, account)
        file_id = upload(client, token).json()["id"]

        response = client.delete(f"/api/files/{file_id}", headers=auth_headers(token))
        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert client.get("/api/files", headers=auth_headers(token)).json() == []

        audit = audit_log(client, login(client, admin_account))
        assert [record["action"] for record in audit] == ["FILE_DELETE", "FILE_UPLOAD"]
        assert audit[0]["fileId"] == file_id

    def test_delete_foreign_file(self, client, account, other_account, admin_account):
        token = login(client, account)
        file_id = upload(client, token).json()["id"]

        response = client.delete(f"/api/files/{file_id}", headers=auth_headers(login(client, other_account)))
        assert response.status_code == 403
        assert response.json()["type"] == "access_denied"

        assert [f["id"] for f in client.get("/api/files", headers=auth_headers(token)).json()] == [file_id]
        assert [record["action"] for record in audit_log(client, login(client, admin_account))] == ["FILE_UPLOAD"]

    def test_delete_missing_file(self, client, account):
        token = login(client, account)
        response = client.delete("/api/files/00000000-0000-0000-0000-000000000000", headers=auth_headers(token))
        assert response.status_code == 404

    def test_delete_requires_token(self, client, account):
        file_id = upload(client, login(client, account)).json()["id"]
        assert client.delete(f"/api/files/{file_id}").status_code == 401


class TestDeleteIds:
    def test_malformed_id_is_not_found(self, client, account):
        response = client.delete("/api/files/not-a-uuid", headers=auth_headers(login(client, account)))
        assert response.status_code == 404
        assert response.json()["type"] == "not_found"

    def test_token_checked_before_id(self, client):
        response = client.delete("/api/files/not-a-uuid", headers=auth_headers("garbage"))
        assert response.status_code == 403
