from fastapi import Header, HTTPException
from scam_scanner.config import get_settings


def require_api_key(x_api_key: str = Header(default="", alias="x-api-key")) -> None:
    settings = get_settings()
    if not settings.auth_enabled:
        return
    if not x_api_key or x_api_key.strip() != settings.api_key:
        raise HTTPException(status_code=401, detail="Unauthorized")
