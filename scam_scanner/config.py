import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from scam_scanner.services.conversation_log import DEFAULT_RECENT

load_dotenv()

DEFAULT_LOG_CAPACITY = 1000


@dataclass(frozen=True)
class Settings:
    api_key: str = ""
    supabase_url: str = ""
    supabase_anon_key: str = ""
    supabase_table: str = "scam_messages"
    conversation_log_capacity: Optional[int] = DEFAULT_LOG_CAPACITY
    environment: str = "production"
    port: int = 3000

    @property
    def auth_enabled(self) -> bool:
        return bool(self.api_key)

    @property
    def persistence_enabled(self) -> bool:
        return bool(self.supabase_url and self.supabase_anon_key)


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"Invalid integer in env var: {name}={raw!r}") from None


def get_settings() -> Settings:
    # No API key means the API runs open (local dashboard use).
    capacity = _int_env("CONVERSATION_LOG_CAPACITY", DEFAULT_LOG_CAPACITY)
    if 0 < capacity < DEFAULT_RECENT:
        raise RuntimeError(f"CONVERSATION_LOG_CAPACITY must be 0 or at least {DEFAULT_RECENT}, got {capacity}")

    return Settings(
        api_key=os.getenv("API_KEY", "").strip(),
        supabase_url=os.getenv("SUPABASE_URL", "").strip().rstrip("/"),
        supabase_anon_key=os.getenv("SUPABASE_ANON_KEY", "").strip(),
        supabase_table=os.getenv("SUPABASE_TABLE", "scam_messages").strip() or "scam_messages",
        conversation_log_capacity=capacity if capacity > 0 else None,
        environment=os.getenv("ENVIRONMENT", "production").strip(),
        port=_int_env("PORT", 3000),
    )
