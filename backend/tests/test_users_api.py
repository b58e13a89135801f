# /api/users 라우터 통합 테스트 (TestClient, 시드 사용자 3명)
import re
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import pytest


def test_list_users_returns_seed(client):
    response = client.get("/api/users")
    assert response.status_code == 200
    body = response.json()
    assert [u["id"] for u in body["users"]] == [1, 2, 3]
    first = body["users"][0]
    assert set(first) == {"id", "name", "email", "createdAt", "updatedAt"}
    assert body["pagination"] == {
        "currentPage": 1,
        "totalPages": 1,
        "totalUsers": 3,
        "hasNext": False,
        "hasPrev": False,
    }


def test_list_users_pagination(client):
    body = client.get("/api/users?page=1&limit=2").json()
    assert [u["name"] for u in body["users"]] == ["John Doe", "Jane Smith"]
    assert body["pagination"]["totalPages"] == 2
    assert body["pagination"]["hasNext"] is True
    assert body["pagination"]["hasPrev"] is False


def test_list_users_bad_paging_values_fall_back(client):
    body = client.get("/api/users?page=abc&limit=0").json()
    assert body["pagination"]["currentPage"] == 1
    assert len(body["users"]) == 3


def test_list_users_name_filter(client):
    body = client.get("/api/users?name=john").json()
    assert [u["name"] for u in body["users"]] == ["John Doe", "Bob Johnson"]
    assert body["pagination"]["totalUsers"] == 2


def test_list_users_empty_result_is_success(client):
    response = client.get("/api/users?email=nobody")
    assert response.status_code == 200
    assert response.json()["users"] == []
    assert response.json()["pagination"]["totalPages"] == 0


def test_get_user(client):
    response = client.get("/api/users/1")
    assert response.status_code == 200
    assert response.json()["name"] == "John Doe"


@pytest.mark.parametrize("method", ["get", "delete"])
def test_unknown_id_is_404(client, method):
    response = getattr(client, method)("/api/users/999")
    assert response.status_code == 404
    assert response.json() == {"error": "User not found"}


@pytest.mark.parametrize("method", ["get", "delete"])
@pytest.mark.parametrize("raw_id", ["invalid", "1abc", "1.0"])
def test_malformed_id_is_400(client, method, raw_id):
    response = getattr(client, method)(f"/api/users/{raw_id}")
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid user ID format"}


def test_create_user(client):
    response = client.post("/api/users", json={"name": " Test User ", "email": " Test@Example.com"})
    # 앞 공백이 있는 이메일은 형식 오류
    assert response.status_code == 400

    response = client.post("/api/users", json={"name": " Test User ", "email": "Test@Example.com"})
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "User created successfully"
    assert body["user"]["id"] == 4
    assert body["user"]["name"] == "Test User"
    assert body["user"]["email"] == "test@example.com"
    assert "createdAt" in body["user"] and "updatedAt" in body["user"]
    assert client.get("/api/users/4").status_code == 200


def test_create_user_missing_fields(client):
    response = client.post("/api/users", json={})
    assert response.status_code == 400
    assert response.json() == {
        "error": "Validation failed",
        "details": {"name": "Name is required", "email": "Email is required"},
    }


def test_create_user_without_body(client):
    response = client.post("/api/users")
    assert response.status_code == 400
    assert response.json()["error"] == "Validation failed"


def test_create_user_short_name(client):
    response = client.post("/api/users", json={"name": "A", "email": "bad"})
    assert response.status_code == 400
    assert response.json() == {"error": "Name must be a string with at least 2 characters"}


def test_create_user_invalid_email(client):
    response = client.post("/api/users", json={"name": "Test User", "email": "invalid-email"})
    assert response.status_code == 400
    assert response.json() == {"error": "Please provide a valid email address"}


def test_create_user_duplicate_email(client):
    response = client.post("/api/users", json={"name": "John Again", "email": "JOHN@EXAMPLE.COM"})
    assert response.status_code == 409
    assert response.json() == {"error": "User with this email already exists"}
    assert client.get("/api/stats").json()["totalUsers"] == 3


def test_create_user_non_object_body(client):
    response = client.post("/api/users", json=["not", "an", "object"])
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid request body"}


def test_update_only_name(client):
    before = client.get("/api/users/2").json()
    later = datetime.now(tz=timezone.utc) + timedelta(minutes=1)
    with patch("userdir.models.user.utcnow", return_value=later):
        response = client.put("/api/users/2", json={"name": "Only Name Updated"})
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "User updated successfully"
    assert body["user"]["name"] == "Only Name Updated"
    assert body["user"]["email"] == "jane@example.com"
    assert body["user"]["createdAt"] == before["createdAt"]
    assert body["user"]["updatedAt"] != before["updatedAt"]


def test_update_both_fields(client):
    response = client.put("/api/users/1", json={"name": "John Updated", "email": "John.Updated@Example.com"})
    assert response.status_code == 200
    assert response.json()["user"]["email"] == "john.updated@example.com"


def test_update_invalid_fields(client):
    response = client.put("/api/users/1", json={"name": "J"})
    assert response.status_code == 400
    assert response.json() == {"error": "Name must be a string with at least 2 characters"}

    response = client.put("/api/users/1", json={"email": "nope"})
    assert response.status_code == 400
    assert response.json() == {"error": "Please provide a valid email address"}


def test_update_null_name_is_rejected(client):
    response = client.put("/api/users/1", json={"name": None})
    assert response.status_code == 400
    assert client.get("/api/users/1").json()["name"] == "John Doe"


def test_update_duplicate_email(client):
    response = client.put("/api/users/1", json={"email": "Jane@example.com"})
    assert response.status_code == 409
    assert response.json() == {"error": "Another user with this email already exists"}


def test_update_errors_by_id(client):
    assert client.put("/api/users/abc", json={"name": "Valid"}).json() == {"error": "Invalid user ID format"}
    response = client.put("/api/users/999", json={"name": "Valid"})
    assert response.status_code == 404
    assert response.json() == {"error": "User not found"}


def test_delete_user(client):
    response = client.delete("/api/users/3")
    assert response.status_code == 200
    assert response.json() == {
        "message": "User deleted successfully",
        "deletedUser": {"id": 3, "name": "Bob Johnson", "email": "bob@example.com"},
    }
    assert client.get("/api/users/3").status_code == 404

    created = client.post("/api/users", json={"name": "Bob Again", "email": "bob@example.com"})
    assert created.json()["user"]["id"] == 4


ISO_MILLIS = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$")


def test_duplicate_email_with_trailing_newline_is_rejected(client):
    response = client.post("/api/users", json={"name": "Dup John", "email": "john@example.com\n"})
    assert response.status_code == 400
    assert response.json() == {"error": "Please provide a valid email address"}

    response = client.put("/api/users/2", json={"email": "john@example.com\n"})
    assert response.status_code == 400

    emails = [u["email"] for u in client.get("/api/users").json()["users"]]
    assert emails == ["john@example.com", "jane@example.com", "bob@example.com"]


def test_huge_numbers_do_not_fail(client):
    response = client.get("/api/users", params={"page": "9" * 5000})
    assert response.status_code == 200
    assert response.json()["users"] == []

    response = client.get("/api/users", params={"limit": "9" * 5000})
    assert response.status_code == 200
    assert len(response.json()["users"]) == 3

    response = client.get("/api/users/" + "9" * 5000)
    assert response.status_code == 404
    assert response.json() == {"error": "User not found"}


def test_non_ascii_digit_id_is_malformed(client):
    response = client.get("/api/users/١")
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid user ID format"}


def test_user_timestamps_use_millisecond_iso(client):
    user = client.get("/api/users/1").json()
    assert ISO_MILLIS.match(user["createdAt"])
    assert ISO_MILLIS.match(user["updatedAt"])
    assert ISO_MILLIS.match(client.get("/api/stats").json()["timestamp"])


def test_update_checks_id_before_body(client):
    response = client.put("/api/users/abc", content="[1, 2]", headers={"Content-Type": "application/json"})
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid user ID format"}

    response = client.put("/api/users/999", content="{broken", headers={"Content-Type": "application/json"})
    assert response.status_code == 404

    response = client.put("/api/users/1", content="{broken", headers={"Content-Type": "application/json"})
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid request body"}


def test_update_with_empty_body_only_refreshes_timestamp(client):
    response = client.put("/api/users/1")
    assert response.status_code == 200
    assert response.json()["user"]["name"] == "John Doe"
