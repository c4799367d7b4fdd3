import os
import json


def _parse_cors_origins(value: str | None) -> list[str]:
    if not value:
        return ["*"]

    cleaned = value.strip()
    if not cleaned:
        return ["*"]

    if cleaned.startswith("["):
        try:
            parsed = json.loads(cleaned)
            if isinstance(parsed, list):
                origins = [str(item).strip() for item in parsed if str(item).strip()]
                if origins:
                    return origins
        except json.JSONDecodeError:
            pass

    origins = [item.strip() for item in cleaned.split(",") if item.strip()]
    return origins or ["*"]


def _parse_bool(value: str | None, default: bool) -> bool:
    if value is None or not value.strip():
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite://")
SECRET_KEY = os.environ.get("SECRET_KEY", "gsi-management-secret-key-change-in-production")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.environ.get("ACCESS_TOKEN_EXPIRE_MINUTES", 60 * 24))
CORS_ORIGINS = _parse_cors_origins(os.environ.get("CORS_ORIGINS"))
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
SEED_DATA = _parse_bool(os.environ.get("SEED_DATA"), True)
SEED_ADMIN_PASSWORD = os.environ.get("SEED_ADMIN_PASSWORD", "admin123")
