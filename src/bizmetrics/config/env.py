from __future__ import annotations

import os
from dataclasses import dataclass


def _first_env(*names: str) -> str | None:
    for name in names:
        value = os.getenv(name)
        if value:
            return value
    return None


@dataclass(frozen=True)
class SupabaseConfig:
    url: str | None = None
    anon_key: str | None = None
    timeout_s: float = 15.0

    @property
    def configured(self) -> bool:
        return bool(self.url and self.anon_key)


def get_supabase_config() -> SupabaseConfig:
    # The NEXT_PUBLIC_* names are accepted so an existing .env keeps working
    return SupabaseConfig(
        url=_first_env("SUPABASE_URL", "NEXT_PUBLIC_SUPABASE_URL"),
        anon_key=_first_env("SUPABASE_ANON_KEY", "NEXT_PUBLIC_SUPABASE_ANON_KEY"),
        timeout_s=float(os.getenv("SUPABASE_TIMEOUT_S", "15")),
    )


@dataclass(frozen=True)
class ChatConfig:
    api_key: str | None = None
    base_url: str = "https://api.perplexity.ai"
    model: str = "sonar-reasoning-pro"
    timeout_s: float = 60.0


def get_chat_config() -> ChatConfig:
    return ChatConfig(
        api_key=os.getenv("PERPLEXITY_API_KEY"),
        model=os.getenv("PERPLEXITY_MODEL", "sonar-reasoning-pro"),
        timeout_s=float(os.getenv("PERPLEXITY_TIMEOUT_S", "60")),
    )


@dataclass(frozen=True)
class RelayConfig:
    host: str = "0.0.0.0"
    port: int = 8000


def get_relay_config() -> RelayConfig:
    return RelayConfig(
        host=os.getenv("CHAT_RELAY_HOST", "0.0.0.0"),
        port=int(os.getenv("CHAT_RELAY_PORT", "8000")),
    )
