from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./work_hours.db"
    SECRET_KEY: str = "change-me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 1440  # 24 hours

    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5002"]

    # Password given to provisioned users when the manager leaves it blank
    DEFAULT_USER_PASSWORD: str = "defaultPassword123"

    # First day of the week used by the personal hours rollup ("sunday" or "monday")
    STATS_WEEK_START: str = "sunday"
    # Allow reviewers to overwrite an approved/rejected decision
    ALLOW_RE_REVIEW: bool = False

    # Azure AD (Microsoft Entra ID) federated login
    AZURE_CLIENT_ID: Optional[str] = None
    AZURE_CLIENT_SECRET: Optional[str] = None
    AZURE_TENANT_ID: Optional[str] = None
    AZURE_REDIRECT_URI: str = "http://localhost:5002/auth/callback"

    # Account created as manager on its first federated login
    BOOTSTRAP_MANAGER_EMAIL: Optional[str] = None
    BOOTSTRAP_MANAGER_EMPLOYEE_ID: str = "MGR002"

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
