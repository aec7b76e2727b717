"""Application configuration via environment variables."""

from pathlib import Path
from typing import Dict, List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    # Backend
    API_URL: str = "http://localhost:8080/api"
    API_BASE_URL: str = "http://localhost:8080"
    TENANT_HEADER: str = "X-Organization-UUID"
    REQUEST_TIMEOUT_SECONDS: float = 30.0

    # Per-resource path suffixes, appended to API_URL
    ENDPOINTS: Dict[str, str] = {
        "auth": "/auth",
        "users": "/users",
        "employees": "/employees",
        "organizations": "/organizations",
        "departments": "/departments",
        "positions": "/positions",
        "leaves": "/leaves",
        "documents": "/documents",
        "rotas": "/rotas",
        "attendance": "/attendance",
        "notifications": "/notifications",
        "dashboard": "/dashboard",
        "root_dashboard": "/root/dashboard",
        "search": "/search",
        "smtp_configuration": "/smtp-configuration",
        "alert_config": "/alert-config",
    }

    # File uploads: scans and multi-page PDFs run up to 20MB
    MAX_UPLOAD_SIZE_MB: int = 20
    ALLOWED_DOCUMENT_TYPES: List[str] = [".pdf", ".jpg", ".jpeg", ".png"]
    ALLOWED_IMAGE_TYPES: List[str] = [".jpg", ".jpeg", ".png", ".gif"]
    # Rota spreadsheets and photos of printed rotas
    MAX_ROTA_UPLOAD_SIZE_MB: int = 10

    # Pagination
    DEFAULT_PAGE_SIZE: int = 10
    PAGE_SIZE_OPTIONS: List[int] = [5, 10, 25, 50, 100]

    # Session
    SESSION_FILE: str = str(Path.home() / ".ems_client" / "session.json")
    NOTIFICATION_POLL_SECONDS: float = 30.0

    # App
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "info"

    def endpoint(self, name: str) -> str:
        """Full URL of a resource, e.g. ``endpoint("leaves")``."""
        return f"{self.API_URL.rstrip('/')}{self.ENDPOINTS[name]}"

    @property
    def max_upload_bytes(self) -> int:
        return self.MAX_UPLOAD_SIZE_MB * 1024 * 1024

    @property
    def max_rota_upload_bytes(self) -> int:
        return self.MAX_ROTA_UPLOAD_SIZE_MB * 1024 * 1024

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


settings = Settings()
