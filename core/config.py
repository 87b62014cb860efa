"""Configuration models and loading."""

import json
import re
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator

from core.exceptions import ConfigurationError

CONFIG_DIR = Path.home() / ".config" / "prerender-proxy"
CONFIG_FILE = CONFIG_DIR / "config.json"

DEFAULT_CRAWLER_USER_AGENTS = [
    "googlebot",
    "yahoo",
    "bingbot",
    "baiduspider",
    "facebookexternalhit",
    "twitterbot",
    "rogerbot",
    "linkedinbot",
    "embedly",
    "quora link preview",
    "showyoubot",
    "outbrain",
    "pinterest",
    "developers.google.com/+/web/snippet",
]

DEFAULT_IGNORED_EXTENSIONS = [
    ".js", ".css", ".xml", ".less", ".png", ".jpg", ".jpeg", ".gif", ".pdf",
    ".doc", ".txt", ".ico", ".rss", ".zip", ".mp3", ".rar", ".exe", ".wmv",
    ".avi", ".ppt", ".mpg", ".mpeg", ".tif", ".wav", ".mov", ".psd", ".ai",
    ".xls", ".mp4", ".m4a", ".swf", ".dat", ".dmg", ".iso", ".flv", ".m4v",
    ".torrent",
]


class ProxySettings(BaseModel, frozen=True):
    host: str = "127.0.0.1"
    port: int = 8080
    debug: bool = True


class OriginSettings(BaseModel, frozen=True):
    base_url: str = "http://127.0.0.1:3000"
    timeout: float = 60.0


class BackendSettings(BaseModel, frozen=True):
    base_url: str = "http://service.prerender.io"
    token: str = ""
    timeout: float = 30.0


class PrerenderSettings(BaseModel, frozen=True):
    crawler_user_agents: list[str] = Field(
        default_factory=lambda: list(DEFAULT_CRAWLER_USER_AGENTS)
    )
    ignored_extensions: list[str] = Field(
        default_factory=lambda: list(DEFAULT_IGNORED_EXTENSIONS)
    )
    whitelisted_urls: list[str] = Field(default_factory=list)
    blacklisted_urls: list[str] = Field(default_factory=list)

    @field_validator("whitelisted_urls", "blacklisted_urls")
    @classmethod
    def _check_patterns(cls, patterns: list[str]) -> list[str]:
        """Reject patterns that do not compile as regular expressions."""
        for pattern in patterns:
            try:
                re.compile(pattern, re.IGNORECASE)
            except re.error as e:
                raise ValueError(f"invalid pattern {pattern!r}: {e}") from e
        return patterns


class Config(BaseModel, frozen=True):
    proxy: ProxySettings = Field(default_factory=ProxySettings)
    origin: OriginSettings = Field(default_factory=OriginSettings)
    backend: BackendSettings = Field(default_factory=BackendSettings)
    prerender: PrerenderSettings = Field(default_factory=PrerenderSettings)


def load_config(config_file: Path = CONFIG_FILE) -> Config:
    """Load configuration from JSON file, creating default if needed."""
    if not config_file.exists():
        config_file.parent.mkdir(parents=True, exist_ok=True)
        default = Config()
        config_file.write_text(default.model_dump_json(indent=2))
        return default

    try:
        data = json.loads(config_file.read_text())
    except json.JSONDecodeError:
        # Backup corrupted config and recreate default
        backup = config_file.with_suffix(".json.bak")
        config_file.rename(backup)
        default = Config()
        config_file.write_text(default.model_dump_json(indent=2))
        return default

    try:
        return Config.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration in {config_file}: {e}") from e
