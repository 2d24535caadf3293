import logging
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session
from app.db.session import get_db
from app.models.user import User
from app.schemas import UserLogin, Token, UserResponse, FederatedLoginResponse, MessageResponse
from app.api.dependencies import get_current_user
from app.core.azure import AzureADClient, AzureAuthError, get_azure_client
from app.services import auth as auth_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/login", response_model=Token)
def login(user_login: UserLogin, db: Session = Depends(get_db)):
    """Login endpoint."""
    user = auth_service.authenticate(db, user_login.username, user_login.password)

    if not user:
        logger.warning("Failed login attempt for %s", user_login.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return {"access_token": auth_service.issue_token(user), "token_type": "bearer"}


@router.get("/me", response_model=UserResponse)
def get_me(current_user: User = Depends(get_current_user)):
    """Get current user information."""
    return current_user


@router.post("/logout", response_model=MessageResponse)
def logout(_: User = Depends(get_current_user)):
    """Logout endpoint (client should discard token)."""
    return {"message": "Successfully logged out"}


@router.get("/azure")
def azure_login(azure: AzureADClient = Depends(get_azure_client)):
    """Redirect to the Microsoft sign-in page."""
    if not azure.client_id or not azure.tenant_id:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Azure AD login is not configured"
        )
    return RedirectResponse(azure.get_auth_url())


@router.get("/callback", response_model=FederatedLoginResponse)
def azure_callback(
    code: str,
    db: Session = Depends(get_db),
    azure: AzureADClient = Depends(get_azure_client)
):
    """Complete the Azure AD sign-in and issue a local token."""
    try:
        identity = azure.exchange_code(code)
    except AzureAuthError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e)
        )

    user = auth_service.federated_login(db, identity)

    return {
        "access_token": auth_service.issue_token(user),
        "token_type": "bearer",
        "redirect_to": auth_service.landing_page(user),
        "user": UserResponse.model_validate(user),
    }
