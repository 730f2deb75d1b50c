"""HTTP tests for admin-only endpoints."""

from conftest import auth_headers, login


def upload(client, token: str, filename: str):
    response = client.post(
        "/api/files/upload", headers=auth_headers(token), files={"file": (filename, filename.encode(), "text/plain")}
    )
    assert response.status_code == 201, response.text
    return response.json()


class TestAdminEndpoints:
    def test_regular_user_forbidden(self, client, account):
        token = login(client, account)
        for path in ("/api/admin/files", "/api/admin/audit"):
            response = client.get(path, headers=auth_headers(token))
            assert response.status_code == 403
            assert response.json()["message"] == "Admin access required"

    def test_requires_token(self, client):
        assert client.get("/api/admin/files").status_code == 401
        assert client.get("/api/admin/audit").status_code == 401

    def test_all_files_with_owner_wallets(self, client, account, other_account, admin_account):
        mine = upload(client, login(client, account), "mine.txt")
        theirs = upload(client, login(client, other_account), "theirs.txt")

        response = client.get("/api/admin/files", headers=auth_headers(login(client, admin_account)))
        assert response.status_code == 200
        files = response.json()
        assert [(f["id"], f["walletAddress"]) for f in files] == [
            (theirs["id"], other_account.address),
            (mine["id"], account.address),
        ]

    def test_audit_log_newest_first(self, client, account, admin_account):
        token = login(client, account)
        first = upload(client, token, "first.txt")
        second = upload(client, token, "second.txt")

        audit = client.get("/api/admin/audit", headers=auth_headers(login(client, admin_account))).json()
        assert [record["fileId"] for record in audit] == [second["id"], first["id"]]
        assert {record["action"] for record in audit} == {"FILE_UPLOAD"}

    def test_admin_profile(self, client, admin_account):
        token = login(client, admin_account)
        assert client.get("/api/profile", headers=auth_headers(token)).json()["isAdmin"] is True


def test_audit_endpoint_returns_latest_fifty(client, account, admin_account):
    token = login(client, account)
    for index in range(52):
        upload(client, token, f"file{index}.txt")

    audit = client.get("/api/admin/audit", headers=auth_headers(login(client, admin_account))).json()
    assert len(audit) == 50
    assert audit[0]["metadata"]["filename"] == "file51.txt"
    assert audit[-1]["metadata"]["filename"] == "file2.txt"
