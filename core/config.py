from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # -------------------------------------------------
    # General
    # -------------------------------------------------
    PROJECT_NAME: str = "Rentas Access API"
    ENV: str = "development"

    # -------------------------------------------------
    # Identity / profile endpoint (external collaborator)
    # -------------------------------------------------
    IDENTITY_API_URL: str = "http://localhost:3000"
    PROFILE_PATH: str = "/auth/profile"
    PROFILE_TIMEOUT_SECONDS: float = 12.0

    # Where unauthenticated visitors are sent
    ENTRY_POINT_PATH: str = "/"

    # -------------------------------------------------
    # Frontend domains (CORS auto-built below)
    # -------------------------------------------------
    FRONTEND_DOMAINS: List[str] = [
        "http://localhost:3001",
        "http://127.0.0.1:3001",
    ]

    BACKEND_CORS_ORIGINS: List[str] = []

    # -------------------------------------------------
    # Model Config
    # -------------------------------------------------
    model_config = SettingsConfigDict(case_sensitive=True)

    @property
    def profile_url(self) -> str:
        base = (self.IDENTITY_API_URL or "").rstrip("/")
        path = self.PROFILE_PATH if self.PROFILE_PATH.startswith("/") else f"/{self.PROFILE_PATH}"
        return f"{base}{path}"


# Instantiate settings
settings = Settings()

# -------------------------------------------------
# Build CORS list dynamically after loading settings
# -------------------------------------------------
cors_origins = []

for domain in settings.FRONTEND_DOMAINS:
    domain = domain.strip()
    if not domain:
        continue
    if not domain.startswith("http"):
        domain = f"https://{domain}"
    cors_origins.append(domain.rstrip("/"))

# remove duplicates
settings.BACKEND_CORS_ORIGINS = sorted(list(set(cors_origins)))
