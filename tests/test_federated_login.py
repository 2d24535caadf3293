import pytest
from fastapi import status
from urllib.parse import urlparse, parse_qs
from app.main import app
from app.core.azure import AzureADClient, AzureAuthError, FederatedIdentity, get_azure_client
from app.core.config import settings
from app.models.user import User, UserRole


class FakeAzureClient:
    """Stands in for the identity provider exchange"""

    client_id = "client-id"
    tenant_id = "tenant-id"

    def __init__(self, identity=None, error=None):
        self.identity = identity
        self.error = error
        self.codes = []

    def get_auth_url(self, state=None):
        return "https://login.microsoftonline.com/tenant-id/oauth2/v2.0/authorize?client_id=client-id"

    def exchange_code(self, code):
        self.codes.append(code)
        if self.error:
            raise self.error
        return self.identity


@pytest.fixture
def fake_azure(client):
    fake = FakeAzureClient()
    app.dependency_overrides[get_azure_client] = lambda: fake
    return fake


class TestAuthorizeUrl:
    def test_builds_authorize_url(self):
        azure = AzureADClient(
            client_id="abc",
            client_secret="secret",
            tenant_id="my-tenant",
            redirect_uri="http://localhost:5002/auth/callback",
        )
        url = urlparse(azure.get_auth_url())
        params = parse_qs(url.query)

        assert url.netloc == "login.microsoftonline.com"
        assert url.path == "/my-tenant/oauth2/v2.0/authorize"
        assert params["client_id"] == ["abc"]
        assert params["response_type"] == ["code"]
        assert params["redirect_uri"] == ["http://localhost:5002/auth/callback"]
        assert "openid" in params["scope"][0].split()

    def test_redirect_endpoint(self, client, fake_azure):
        response = client.get("/auth/azure", follow_redirects=False)
        assert response.status_code == status.HTTP_307_TEMPORARY_REDIRECT
        assert response.headers["location"].startswith("https://login.microsoftonline.com/")


class TestCallback:
    """Azure AD callback resolves the email to a registered user"""

    def test_known_user_gets_token_and_landing_page(self, client, fake_azure, hr_user):
        fake_azure.identity = FederatedIdentity(email=hr_user.email, first_name="Harper", last_name="Hr")

        response = client.get("/auth/callback", params={"code": "abc123"})
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["token_type"] == "bearer"
        assert data["redirect_to"] == "/hr"
        assert data["user"]["id"] == hr_user.id
        assert fake_azure.codes == ["abc123"]

        me = client.get("/auth/me", headers={"Authorization": f"Bearer {data['access_token']}"})
        assert me.json()["username"] == "harper.hr"

    def test_employee_lands_on_root(self, client, fake_azure, employee_user):
        fake_azure.identity = FederatedIdentity(email=employee_user.email, first_name="John", last_name="Doe")

        response = client.get("/auth/callback", params={"code": "xyz"})
        assert response.json()["redirect_to"] == "/"

    def test_unknown_user_rejected(self, client, fake_azure, db_session):
        fake_azure.identity = FederatedIdentity(email="stranger@company.com", first_name="Some", last_name="One")

        response = client.get("/auth/callback", params={"code": "xyz"})
        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()["detail"] == "User not found in system. Please contact your administrator."
        assert db_session.query(User).count() == 0

    def test_bootstrap_manager_created_on_first_login(self, client, fake_azure, db_session, monkeypatch):
        monkeypatch.setattr(settings, "BOOTSTRAP_MANAGER_EMAIL", "boss@company.com")
        fake_azure.identity = FederatedIdentity(email="boss@company.com", first_name="Alex", last_name="Boss")

        response = client.get("/auth/callback", params={"code": "xyz"})
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["redirect_to"] == "/manager"

        user = db_session.query(User).filter(User.email == "boss@company.com").one()
        assert user.role == UserRole.MANAGER
        assert user.username == "alex.boss"
        assert user.employee_id == settings.BOOTSTRAP_MANAGER_EMPLOYEE_ID
        assert user.designation == "Manager"
        assert user.department == "Management"

        # Second login reuses the account
        client.get("/auth/callback", params={"code": "again"})
        assert db_session.query(User).count() == 1

    def test_exchange_failure(self, client, fake_azure):
        fake_azure.error = AzureAuthError("Failed to acquire token")

        response = client.get("/auth/callback", params={"code": "bad"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_missing_code(self, client, fake_azure):
        response = client.get("/auth/callback")
        assert response.status_code == 422
