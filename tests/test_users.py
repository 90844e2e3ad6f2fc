"""
Tests for Account Endpoints

Tests cover:
- POST /users - Create an account
- PUT /users/{user_id}/password - Change password
- DELETE /users/{user_id} - Delete an account
"""

import pytest
from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from catalog.models import User
from catalog.services.security import PasswordHasher


def count_users(db: Session) -> int:
    return db.execute(select(func.count()).select_from(User)).scalar()


# =============================================================================
# Test: POST /users
# =============================================================================


class TestCreateUser:
    """Tests for POST /users endpoint."""

    def test_create_user_success(
        self,
        client: TestClient,
        auth_headers: dict,
        db_session: Session,
        password_hasher: PasswordHasher,
    ):
        response = client.post(
            "/users",
            json={"username": "carol", "display_name": "Carol", "password": "pa55word"},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["username"] == "carol"
        assert data["display_name"] == "Carol"
        assert "id" in data
        assert "created_at" in data
        assert "password" not in data
        assert "hashed_password" not in data

        stored = db_session.get(User, data["id"])
        assert stored.hashed_password != "pa55word"
        assert password_hasher.verify("pa55word", stored.hashed_password)

    def test_create_user_lowercases_username(self, client: TestClient, auth_headers: dict):
        response = client.post(
            "/users",
            json={"username": "Carol", "display_name": "Carol", "password": "pa55word"},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["username"] == "carol"

    def test_create_user_duplicate_username(
        self, client: TestClient, sample_user: User, auth_headers: dict, db_session: Session
    ):
        response = client.post(
            "/users",
            json={"username": "ALICE", "display_name": "Another Alice", "password": "other"},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "Failed to create user"}
        assert count_users(db_session) == 1

    def test_display_name_not_unique(
        self, client: TestClient, sample_user: User, auth_headers: dict
    ):
        response = client.post(
            "/users",
            json={"username": "alice2", "display_name": "Alice", "password": "pw"},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_201_CREATED

    @pytest.mark.parametrize(
        "payload",
        [
            {"username": "1carol", "display_name": "Carol", "password": "pw"},
            {"username": "ca", "display_name": "Carol", "password": "pw"},
            {"username": "carol", "display_name": "   ", "password": "pw"},
            {"username": "carol", "display_name": "Carol"},
            {"username": "carol", "password": "pw"},
            {"username": "carol", "display_name": "Carol", "password": ""},
            {"username": "carol", "display_name": "Carol", "password": "x" * 73},
            {"username": "carol", "display_name": "Carol", "password": "ab\u0000cd"},
            {"username": "carol", "display_name": "Carol", "password": "pw", "is_admin": True},
        ],
    )
    def test_create_user_invalid_body(
        self, client: TestClient, auth_headers: dict, db_session: Session, payload: dict
    ):
        response = client.post("/users", json=payload, headers=auth_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "Failed to create user"}
        assert count_users(db_session) == 1  # only the caller's account


# =============================================================================
# Test: PUT /users/{user_id}/password
# =============================================================================


class TestUpdatePassword:
    """Tests for PUT /users/{user_id}/password endpoint."""

    def test_update_password_success(
        self, client: TestClient, sample_user: User, auth_headers: dict
    ):
        response = client.put(
            f"/users/{sample_user.id}/password",
            json={"password": "n3w-passw0rd"},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"message": "Password updated successfully"}

        old_login = client.post("/auth/login", json={"username": "alice", "password": "s3cret!"})
        assert old_login.status_code == status.HTTP_401_UNAUTHORIZED

        new_login = client.post(
            "/auth/login", json={"username": "alice", "password": "n3w-passw0rd"}
        )
        assert new_login.status_code == status.HTTP_200_OK

    def test_same_password_gets_new_hash(
        self, client: TestClient, sample_user: User, auth_headers: dict, db_session: Session
    ):
        old_hash = sample_user.hashed_password

        response = client.put(
            f"/users/{sample_user.id}/password",
            json={"password": "s3cret!"},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        db_session.refresh(sample_user)
        assert sample_user.hashed_password != old_hash

    def test_existing_token_survives_password_change(
        self, client: TestClient, sample_user: User, auth_headers: dict
    ):
        client.put(
            f"/users/{sample_user.id}/password",
            json={"password": "changed"},
            headers=auth_headers,
        )

        response = client.get("/auth/me", headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK

    def test_update_password_user_not_found(self, client: TestClient, auth_headers: dict):
        response = client.put(
            "/users/99999/password",
            json={"password": "whatever"},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"error": "User not found"}

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"password": ""},
            {"password": "é" * 37},  # 74 bytes
            {"password": "ab\u0000cd"},
            {"password": "ok", "current_password": "s3cret!"},
        ],
    )
    def test_update_password_invalid_body(
        self, client: TestClient, sample_user: User, auth_headers: dict, payload: dict
    ):
        response = client.put(
            f"/users/{sample_user.id}/password",
            json=payload,
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "Failed to update password"}

    def test_change_other_accounts_password(
        self, client: TestClient, second_user: User, auth_headers: dict
    ):
        """Any authenticated caller may manage any account."""
        response = client.put(
            f"/users/{second_user.id}/password",
            json={"password": "taken-over"},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        login = client.post("/auth/login", json={"username": "bob", "password": "taken-over"})
        assert login.status_code == status.HTTP_200_OK


# =============================================================================
# Test: DELETE /users/{user_id}
# =============================================================================


class TestDeleteUser:
    """Tests for DELETE /users/{user_id} endpoint."""

    def test_delete_user_success(
        self, client: TestClient, second_user: User, auth_headers: dict, db_session: Session
    ):
        user_id = second_user.id

        response = client.delete(f"/users/{user_id}", headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"message": "User deleted successfully"}
        assert db_session.get(User, user_id) is None

        login = client.post("/auth/login", json={"username": "bob", "password": "hunter22"})
        assert login.status_code == status.HTTP_401_UNAUTHORIZED

    def test_delete_self(
        self, client: TestClient, sample_user: User, auth_headers: dict, db_session: Session
    ):
        response = client.delete(f"/users/{sample_user.id}", headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        assert count_users(db_session) == 0

    def test_delete_user_not_found(self, client: TestClient, auth_headers: dict):
        response = client.delete("/users/99999", headers=auth_headers)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"error": "User not found"}

    def test_delete_user_twice(
        self, client: TestClient, second_user: User, auth_headers: dict
    ):
        user_id = second_user.id

        first = client.delete(f"/users/{user_id}", headers=auth_headers)
        second = client.delete(f"/users/{user_id}", headers=auth_headers)

        assert first.status_code == status.HTTP_200_OK
        assert second.status_code == status.HTTP_404_NOT_FOUND

    def test_delete_user_invalid_id(self, client: TestClient, auth_headers: dict):
        response = client.delete("/users/not-a-number", headers=auth_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "Failed to delete user"}
