"""Local and federated login."""
import logging
import secrets
from datetime import timedelta
from typing import Optional
from sqlalchemy.orm import Session
from app.core.azure import FederatedIdentity
from app.core.config import settings
from app.core.exceptions import AccessDenied
from app.core.security import create_access_token, get_password_hash, verify_password
from app.models.user import User, UserRole
from app.services.users import get_user_by_email, get_user_by_username, make_username

logger = logging.getLogger(__name__)

LANDING_PAGES = {
    UserRole.MANAGER: "/manager",
    UserRole.HR: "/hr",
    UserRole.EMPLOYEE: "/",
}


def authenticate(db: Session, username: str, password: str) -> Optional[User]:
    user = get_user_by_username(db, username)
    if not user or not verify_password(password, user.password_hash):
        return None
    return user


def issue_token(user: User) -> str:
    return create_access_token(
        data={"sub": str(user.id), "username": user.username, "role": user.role.value},
        expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )


def landing_page(user: User) -> str:
    return LANDING_PAGES[user.role]


def _bootstrap_manager(db: Session, identity: FederatedIdentity) -> User:
    user = User(
        employee_id=settings.BOOTSTRAP_MANAGER_EMPLOYEE_ID,
        username=make_username(identity.first_name, identity.last_name),
        # Federated accounts never sign in with a local password
        password_hash=get_password_hash(secrets.token_urlsafe(32)),
        first_name=identity.first_name,
        last_name=identity.last_name,
        email=identity.email,
        designation="Manager",
        department="Management",
        role=UserRole.MANAGER,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Bootstrapped manager account %s from federated login", user.email)
    return user


def federated_login(db: Session, identity: FederatedIdentity) -> User:
    """Resolve an identity-provider login to a registered user.

    Unregistered emails are refused, except the configured bootstrap account,
    which is created as a manager on its first sign-in.
    """
    user = get_user_by_email(db, identity.email)
    if user:
        return user

    bootstrap_email = settings.BOOTSTRAP_MANAGER_EMAIL
    if bootstrap_email and identity.email.lower() == bootstrap_email.lower():
        return _bootstrap_manager(db, identity)

    logger.warning("Federated login refused for unregistered email %s", identity.email)
    raise AccessDenied("User not found in system. Please contact your administrator.")
