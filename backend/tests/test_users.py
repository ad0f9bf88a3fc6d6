from bson import ObjectId

from conftest import PASSWORD


def test_find_users_by_emails_partitions(client, alice, bob):
    resp = client.post(
        "/users/by-emails",
        json={"emails": ["nobody@example.com", "bob@example.com"]},
        headers=alice["headers"],
    )
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["notFoundEmails"] == ["nobody@example.com"]
    assert data["foundUsers"] == [
        {"userId": bob["user"]["id"], "email": "bob@example.com", "username": "bob", "fullname": "Bob Roe"}
    ]


def test_find_users_by_emails_rejects_self_invite(client, alice, bob):
    resp = client.post(
        "/users/by-emails",
        json={"emails": ["bob@example.com", "alice@example.com"]},
        headers=alice["headers"],
    )
    assert resp.status_code == 400
    assert resp.json()["message"] == "You cannot invite yourself."


def test_find_users_by_emails_validates_input(client, alice):
    for body in ({}, {"emails": []}, {"emails": "bob@example.com"}):
        resp = client.post("/users/by-emails", json=body, headers=alice["headers"])
        assert resp.status_code == 400
        assert resp.json()["message"] == "Email list is required and must be an array."

    resp = client.post("/users/by-emails", json={"emails": ["bad", "also bad@x.io"]}, headers=alice["headers"])
    assert resp.status_code == 400
    assert resp.json()["message"] == "Email is invalid: bad, also bad@x.io"


def test_find_users_by_emails_skips_deactivated(client, alice, bob):
    client.delete("/profile", headers=bob["headers"])

    resp = client.post("/users/by-emails", json={"emails": ["bob@example.com"]}, headers=alice["headers"])
    assert resp.json()["data"] == {"foundUsers": [], "notFoundEmails": ["bob@example.com"]}


def test_get_all_users_requires_admin(client, alice):
    resp = client.get("/users", headers=alice["headers"])
    assert resp.status_code == 403
    assert resp.json() == {"status": "fail", "message": "Admin access required."}


def test_get_all_users_as_admin(client, admin, alice, skills):
    client.patch("/profile", json={"skills": ["react"]}, headers=alice["headers"])

    resp = client.get("/users", headers=admin["headers"])
    assert resp.status_code == 200
    body = resp.json()
    assert body["results"] == 2
    by_name = {u["username"]: u for u in body["data"]["users"]}
    assert by_name["alice"]["skills"][0]["value"] == "react"
    assert by_name["alice"]["skills"][0]["label"] == "React"


def test_get_user_by_id(client, alice, bob):
    resp = client.get(f"/users/{bob['user']['id']}", headers=alice["headers"])
    assert resp.status_code == 200
    user = resp.json()["data"]["user"]
    assert user["username"] == "bob"
    assert user["createdAt"]
    assert "password" not in user


def test_get_user_by_id_bad_and_missing(client, alice):
    assert client.get("/users/not-an-id", headers=alice["headers"]).status_code == 400
    assert client.get(f"/users/{ObjectId()}", headers=alice["headers"]).status_code == 404


def test_update_user_by_id_guards(client, admin, alice):
    resp = client.patch(f"/users/{admin['user']['id']}", json={"role": "user"}, headers=admin["headers"])
    assert resp.status_code == 400
    assert resp.json()["message"] == "You cannot change your own role."

    resp = client.patch(f"/users/{alice['user']['id']}", json={"role": "superuser"}, headers=admin["headers"])
    assert resp.status_code == 400

    resp = client.patch("/users/123", json={"role": "user"}, headers=admin["headers"])
    assert resp.status_code == 400

    resp = client.patch(f"/users/{ObjectId()}", json={"role": "user"}, headers=admin["headers"])
    assert resp.status_code == 404

    resp = client.patch(f"/users/{alice['user']['id']}", json={"role": "user"}, headers=alice["headers"])
    assert resp.status_code == 403


def test_update_user_by_id_promotes_and_soft_deletes(client, admin, alice):
    resp = client.patch(
        f"/users/{alice['user']['id']}",
        json={"role": "adminSystem", "fullname": "ignored"},
        headers=admin["headers"],
    )
    assert resp.status_code == 200
    user = resp.json()["data"]["user"]
    assert user["role"] == "adminSystem"
    assert user["fullname"] == "Alice Doe"

    resp = client.patch(f"/users/{alice['user']['id']}", json={"isDeleted": True}, headers=admin["headers"])
    assert resp.json()["data"]["user"]["isDeleted"] is True
    login = client.post("/auth/login", json={"email": "alice@example.com", "password": PASSWORD})
    assert login.status_code == 401


def test_delete_admin_user_is_rejected(client, admin, alice):
    client.patch(f"/users/{alice['user']['id']}", json={"role": "adminSystem"}, headers=admin["headers"])

    resp = client.delete(f"/users/{alice['user']['id']}", headers=admin["headers"])
    assert resp.status_code == 400
    assert resp.json()["message"] == "Cannot delete another admin user."


def test_delete_user_removes_board_membership(client, admin, alice, bob):
    board = client.post("/boards", json={"name": "Team"}, headers=alice["headers"]).json()["data"]["board"]
    client.post(f"/boards/{board['id']}/members", json={"emails": ["bob@example.com"]}, headers=alice["headers"])

    resp = client.delete(f"/users/{bob['user']['id']}", headers=admin["headers"])
    assert resp.status_code == 200
    assert resp.json() == {"status": "success", "message": "User deleted successfully."}

    members = client.get(f"/boards/{board['id']}", headers=alice["headers"]).json()["data"]["board"]["members"]
    assert members == [alice["user"]["id"]]
    assert client.get(f"/users/{bob['user']['id']}", headers=alice["headers"]).status_code == 404


def test_delete_user_requires_admin(client, alice, bob):
    resp = client.delete(f"/users/{bob['user']['id']}", headers=alice["headers"])
    assert resp.status_code == 403


def test_find_users_by_emails_rejects_trailing_newline(client, alice, bob):
    resp = client.post("/users/by-emails", json={"emails": ["bob@example.com\n"]}, headers=alice["headers"])
    assert resp.status_code == 400
    assert resp.json()["message"].startswith("Email is invalid:")
