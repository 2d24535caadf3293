"""Azure AD (Microsoft Entra ID) authorization-code flow."""
import logging
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlencode
import httpx
from app.core.config import settings

logger = logging.getLogger(__name__)

SCOPES = ["user.read", "openid", "profile", "email"]
GRAPH_ME_URL = "https://graph.microsoft.com/v1.0/me"


class AzureAuthError(Exception):
    """Raised when the identity provider exchange fails."""


@dataclass(frozen=True)
class FederatedIdentity:
    email: str
    first_name: str
    last_name: str
    display_name: Optional[str] = None


class AzureADClient:
    def __init__(
        self,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        tenant_id: Optional[str] = None,
        redirect_uri: Optional[str] = None,
        timeout: float = 10.0,
    ):
        self.client_id = client_id or settings.AZURE_CLIENT_ID
        self.client_secret = client_secret or settings.AZURE_CLIENT_SECRET
        self.tenant_id = tenant_id or settings.AZURE_TENANT_ID
        self.redirect_uri = redirect_uri or settings.AZURE_REDIRECT_URI
        self.timeout = timeout

    @property
    def authority(self) -> str:
        return f"https://login.microsoftonline.com/{self.tenant_id}/oauth2/v2.0"

    def get_auth_url(self, state: Optional[str] = None) -> str:
        params = {
            "client_id": self.client_id,
            "response_type": "code",
            "redirect_uri": self.redirect_uri,
            "response_mode": "query",
            "scope": " ".join(SCOPES),
        }
        if state:
            params["state"] = state
        return f"{self.authority}/authorize?{urlencode(params)}"

    def exchange_code(self, code: str) -> FederatedIdentity:
        """Redeem an authorization code and read the signed-in user's profile."""
        try:
            with httpx.Client(timeout=self.timeout) as client:
                token_response = client.post(
                    f"{self.authority}/token",
                    data={
                        "client_id": self.client_id,
                        "client_secret": self.client_secret,
                        "grant_type": "authorization_code",
                        "code": code,
                        "redirect_uri": self.redirect_uri,
                        "scope": " ".join(SCOPES),
                    },
                )
                token_response.raise_for_status()
                access_token = token_response.json()["access_token"]

                me_response = client.get(
                    GRAPH_ME_URL,
                    headers={"Authorization": f"Bearer {access_token}"},
                )
                me_response.raise_for_status()
                profile = me_response.json()
        except httpx.HTTPStatusError as http_err:
            logger.error("Azure AD returned %s: %s", http_err.response.status_code, http_err.response.text)
            raise AzureAuthError("Failed to acquire token") from http_err
        except (httpx.RequestError, KeyError, ValueError) as e:
            logger.error("Azure AD exchange failed: %s", e)
            raise AzureAuthError("Failed to acquire token") from e

        email = profile.get("userPrincipalName") or profile.get("mail")
        if not email:
            raise AzureAuthError("Identity provider did not return an email")

        return FederatedIdentity(
            email=email,
            first_name=profile.get("givenName") or "",
            last_name=profile.get("surname") or "",
            display_name=profile.get("displayName"),
        )


def get_azure_client() -> AzureADClient:
    return AzureADClient()
