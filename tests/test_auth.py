import pytest
from fastapi import status
from jose import jwt
from app.core.config import settings
from conftest import auth


class TestAuthentication:
    """Test authentication endpoints"""

    def test_login_success(self, client, employee_user):
        """Test successful login"""
        response = client.post(
            "/auth/login",
            json={"username": "john.doe", "password": "employee123"}
        )
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert "access_token" in data
        assert data["token_type"] == "bearer"

    def test_token_claims(self, client, manager_user):
        """Token carries id, username and role"""
        response = client.post(
            "/auth/login",
            json={"username": "maria.manager", "password": "manager123"}
        )
        payload = jwt.decode(
            response.json()["access_token"], settings.SECRET_KEY, algorithms=[settings.ALGORITHM]
        )
        assert payload["sub"] == manager_user.id
        assert payload["username"] == "maria.manager"
        assert payload["role"] == "manager"
        assert "exp" in payload

    def test_login_unknown_username(self, client):
        """Test login with unknown username"""
        response = client.post(
            "/auth/login",
            json={"username": "nobody", "password": "wrong"}
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_login_invalid_password(self, client, employee_user):
        """Test login with invalid password"""
        response = client.post(
            "/auth/login",
            json={"username": "john.doe", "password": "wrongpassword"}
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_get_current_user(self, client, employee_token):
        """Test getting current user information"""
        response = client.get("/auth/me", headers=auth(employee_token))
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["email"] == "john.doe@company.com"
        assert data["role"] == "employee"
        assert "password_hash" not in data

    def test_get_current_user_unauthorized(self, client):
        """Test getting current user without token"""
        response = client.get("/auth/me")
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_get_current_user_invalid_token(self, client):
        """Test getting current user with invalid token"""
        response = client.get("/auth/me", headers={"Authorization": "Bearer invalid_token"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_token_of_deleted_user_rejected(self, client, db_session, employee_user, employee_token):
        db_session.delete(employee_user)
        db_session.commit()

        response = client.get("/auth/me", headers=auth(employee_token))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_logout(self, client, employee_token):
        """Test logout"""
        response = client.post("/auth/logout", headers=auth(employee_token))
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["message"] == "Successfully logged out"


class TestHealth:
    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["docs"] == "/docs"

    def test_health(self, client):
        response = client.get("/health")
        assert response.json() == {"status": "healthy"}
