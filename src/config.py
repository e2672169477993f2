"""Application settings loaded from environment variables."""

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PRINCIPAL_ALIASES: tuple[str, ...] = (
    "葛望平",
    "葛董",
    "董事長",
    "Ge Wang Ping",
    "Chairman",
)

DEFAULT_DELEGATE_ALIASES: tuple[str, ...] = (
    "蔡怡穎",
    "總經理",
    "林秀玲",
    "特助",
    "Cai Yi Ying",
    "Lin Xiu Ling",
    "General Manager",
    "Special Assistant",
)

# Principal name + instruction verb, then generic imperative verbs.
DEFAULT_RELAY_KEYWORDS: tuple[str, ...] = (
    "葛董指示", "葛董交辦", "葛董交代", "葛董要求", "葛董希望",
    "葛董務必", "葛董說", "葛董的意見", "葛董認為",
    "董事長指示", "董事長交辦", "董事長交代", "董事長要求",
    "董事長希望", "董事長務必", "董事長說", "董事長的意見",
    "Chairman said", "Chairman instructed", "Chairman requested",
    "Chairman asked", "Chairman wants",
    "完成", "執行", "繳交", "處理", "安排", "準備",
    "要求完成", "務必完成", "希望完成", "需要執行", "必須執行",
    "complete", "execute", "submit", "handle", "arrange", "prepare",
)


def _env_file() -> str | None:
    if os.getenv("PYTEST_CURRENT_TEST"):
        return None
    return ".env"


def _split_csv(raw: str) -> tuple[str, ...]:
    return tuple(item.strip() for item in raw.split(",") if item.strip())


class Settings(BaseSettings):
    """Recorder configuration. All values come from environment variables."""

    # LINE Messaging API
    line_channel_access_token: str = Field(default="")
    line_channel_secret: str = Field(default="")
    line_api_base_url: str = Field(default="https://api.line.me")
    line_api_timeout: float = Field(default=10.0)

    # Anthropic (external classifier)
    anthropic_api_key: str = Field(default="")
    classifier_model: str = Field(default="claude-haiku-4-5-20251001")
    classifier_max_tokens: int = Field(default=150)
    classifier_temperature: float = Field(default=0.3)
    classifier_timeout: float = Field(default=30.0)

    # Database
    database_path: Path = Field(default=Path("data/records.db"))

    # Webhook server
    webhook_host: str = Field(default="0.0.0.0")
    webhook_port: int = Field(default=3000)

    # Reports
    display_timezone: str = Field(default="Asia/Taipei")

    # Speaker roster and relay keywords (comma-separated; empty → built-in defaults)
    principal_aliases: str = Field(default="")
    delegate_aliases: str = Field(default="")
    relay_keywords: str = Field(default="")

    # Logging
    log_level: str = Field(default="INFO")

    model_config = SettingsConfigDict(env_file=_env_file(), env_file_encoding="utf-8")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        if os.getenv("PYTEST_CURRENT_TEST"):
            return (init_settings,)
        return (init_settings, env_settings, dotenv_settings, file_secret_settings)

    def get_principal_aliases(self) -> tuple[str, ...]:
        """Parse PRINCIPAL_ALIASES, falling back to the built-in roster."""
        return _split_csv(self.principal_aliases) or DEFAULT_PRINCIPAL_ALIASES

    def get_delegate_aliases(self) -> tuple[str, ...]:
        """Parse DELEGATE_ALIASES, falling back to the built-in roster."""
        return _split_csv(self.delegate_aliases) or DEFAULT_DELEGATE_ALIASES

    def get_relay_keywords(self) -> tuple[str, ...]:
        """Parse RELAY_KEYWORDS, falling back to the built-in keyword list."""
        return _split_csv(self.relay_keywords) or DEFAULT_RELAY_KEYWORDS


settings = Settings()
