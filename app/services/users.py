"""Identity store: user lookup, provisioning, update and deletion."""
import logging
from typing import List, Optional
from sqlalchemy.orm import Session
from app.core.config import settings
from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.core.security import get_password_hash
from app.models.user import User, UserRole
from app.schemas import UserCreate, UserUpdate

logger = logging.getLogger(__name__)


def make_username(first_name: str, last_name: str) -> str:
    return f"{first_name.lower()}.{last_name.lower()}"


def get_user(db: Session, user_id: str) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_username(db: Session, username: str) -> Optional[User]:
    return db.query(User).filter(User.username == username).first()


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()


def get_user_or_404(db: Session, user_id: str) -> User:
    user = get_user(db, user_id)
    if not user:
        raise NotFoundError("User not found")
    return user


def list_users(db: Session, role: Optional[UserRole] = None) -> List[User]:
    query = db.query(User)
    if role:
        query = query.filter(User.role == role)
    return query.order_by(User.first_name, User.last_name).all()


def _ensure_unique(db: Session, *, username: str, email: str, employee_id: str, exclude_id: Optional[str] = None):
    checks = (
        (User.username == username, "Username already taken"),
        (User.email == email, "Email already registered"),
        (User.employee_id == employee_id, "Employee ID already in use"),
    )
    for condition, message in checks:
        query = db.query(User).filter(condition)
        if exclude_id:
            query = query.filter(User.id != exclude_id)
        if query.first():
            raise ValidationError(message)


def create_user(db: Session, user_create: UserCreate) -> User:
    username = user_create.username or make_username(user_create.first_name, user_create.last_name)
    _ensure_unique(db, username=username, email=user_create.email, employee_id=user_create.employee_id)

    user = User(
        employee_id=user_create.employee_id,
        username=username,
        password_hash=get_password_hash(user_create.password or settings.DEFAULT_USER_PASSWORD),
        first_name=user_create.first_name,
        last_name=user_create.last_name,
        email=user_create.email,
        designation=user_create.designation,
        department=user_create.department,
        role=user_create.role,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Created user %s (%s) with role %s", user.username, user.id, user.role.value)
    return user


def update_user(db: Session, user_id: str, user_update: UserUpdate) -> User:
    user = get_user_or_404(db, user_id)
    update_data = user_update.model_dump(exclude_unset=True, exclude_none=True)

    # Keep the username in step with a renamed user unless one was given
    if ("first_name" in update_data or "last_name" in update_data) and "username" not in update_data:
        update_data["username"] = make_username(
            update_data.get("first_name", user.first_name),
            update_data.get("last_name", user.last_name),
        )

    _ensure_unique(
        db,
        username=update_data.get("username", user.username),
        email=update_data.get("email", user.email),
        employee_id=update_data.get("employee_id", user.employee_id),
        exclude_id=user.id,
    )

    if user.role == UserRole.MANAGER and update_data.get("role", UserRole.MANAGER) != UserRole.MANAGER:
        _ensure_other_manager(db, user, "demote")

    for field, value in update_data.items():
        setattr(user, field, value)

    db.commit()
    db.refresh(user)
    logger.info("Updated user %s: %s", user.id, ", ".join(sorted(update_data)))
    return user


def _ensure_other_manager(db: Session, user: User, action: str = "delete"):
    remaining = db.query(User).filter(User.role == UserRole.MANAGER, User.id != user.id).count()
    if remaining == 0:
        logger.warning("Refused to remove last manager %s", user.id)
        raise ConflictError(f"Cannot {action} the last manager user")


def delete_user(db: Session, user_id: str, current_user: User) -> None:
    user = get_user_or_404(db, user_id)

    if user.id == current_user.id:
        raise ValidationError("Cannot delete your own account")

    if user.role == UserRole.MANAGER:
        _ensure_other_manager(db, user)

    db.delete(user)
    db.commit()
    logger.info("Deleted user %s by %s", user_id, current_user.id)
