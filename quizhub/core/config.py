import os
from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class Settings:
    mongodb_uri: str
    mongodb_database: str
    host: str
    port: int
    cors_origins: List[str]
    jwt_secret_key: str
    jwt_algorithm: str
    jwt_expire_minutes: int
    admin_emails: List[str]
    log_level: str
    debug: bool


def _env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


def _load_cors_origins() -> List[str]:
    raw = os.getenv("CORS_ORIGINS", "")
    if raw:
        return [item.strip() for item in raw.split(",") if item.strip()]
    return ["http://localhost:5173", "http://localhost:5174"]


def load_settings() -> Settings:
    return Settings(
        mongodb_uri=os.getenv("MONGODB_URI", "mongodb://localhost:27017"),
        mongodb_database=os.getenv("MONGODB_DATABASE", "quizhub"),
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "5000")),
        cors_origins=_load_cors_origins(),
        jwt_secret_key=os.getenv("JWT_SECRET_KEY", "change-me"),
        jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
        jwt_expire_minutes=int(os.getenv("JWT_EXPIRE_MINUTES", "1440")),
        admin_emails=[
            item.strip().lower() for item in os.getenv("ADMIN_EMAILS", "").split(",") if item.strip()
        ],
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        debug=_env_flag("DEBUG"),
    )
