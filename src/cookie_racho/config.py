"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Constructor arguments  (the CLI passes its options here)
  2. Environment variables  (COOKIE_RACHO__FETCHER__TIMEOUT_SECONDS=10)
  3. cookie-racho.yaml      (searched in cwd, then the platform config dir)
  4. Hardcoded defaults

The config file is optional; every field has a default.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from cookie_racho.sites import get_site_by_id

_APP_NAME = "cookie-racho"
_DEFAULT_CACHE_DIR = platformdirs.user_cache_dir(_APP_NAME)
_DEFAULT_DB_PATH = str(Path(_DEFAULT_CACHE_DIR) / "cache.sqlite")

DEFAULT_USER_AGENT = "cookie-racho/1.0"
DEFAULT_ACCEPT_LANGUAGE = "fr-FR,fr;q=0.9,en;q=0.8"


def _find_config_file() -> str | None:
    """Return the path of the first cookie-racho.yaml found, or None."""
    candidates = [
        Path(f"{_APP_NAME}.yaml"),
        Path(platformdirs.user_config_dir(_APP_NAME)) / f"{_APP_NAME}.yaml",
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class CacheSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    enabled: bool = True
    db_path: str = _DEFAULT_DB_PATH
    extract_ttl_hours: float = Field(default=7 * 24, gt=0)
    search_ttl_hours: float = Field(default=24, gt=0)

    @property
    def extract_ttl_ms(self) -> int:
        return int(self.extract_ttl_hours * 3_600_000)

    @property
    def search_ttl_ms(self) -> int:
        return int(self.search_ttl_hours * 3_600_000)


class FetcherSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    timeout_seconds: float = Field(default=30.0, gt=0)
    user_agent: str = DEFAULT_USER_AGENT
    accept_language: str = DEFAULT_ACCEPT_LANGUAGE
    rate_limit_ms: int = Field(default=1500, ge=0)
    # None derives the jitter from the rate limit: min(500, rate_limit_ms // 3)
    jitter_ms: int | None = Field(default=None, ge=0)

    @property
    def timeout_ms(self) -> int:
        return int(self.timeout_seconds * 1000)

    @property
    def effective_jitter_ms(self) -> int:
        if self.jitter_ms is not None:
            return self.jitter_ms
        return min(500, self.rate_limit_ms // 3)


class SearchSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    # Empty means every known site, in registry order
    sites: list[str] = []
    max_results: int = Field(default=10, gt=0)
    max_results_per_site: int = Field(default=5, gt=0)

    @field_validator("sites")
    @classmethod
    def validate_sites(cls, v: list[str]) -> list[str]:
        for site_id in v:
            if get_site_by_id(site_id) is None:
                raise ValueError(f"Unknown site id: {site_id}")
        return v


class LoggingSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    format: Literal["json", "text"] = "text"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: COOKIE_RACHO__CACHE__ENABLED=false
        env_prefix="COOKIE_RACHO__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    cache: CacheSettings = CacheSettings()
    fetcher: FetcherSettings = FetcherSettings()
    search: SearchSettings = SearchSettings()
    logging: LoggingSettings = LoggingSettings()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
        **kwargs: Any,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,  # Constructor args (highest priority)
            env_settings,  # Environment variables
            YamlConfigSettingsSource(settings_cls),  # YAML file
            # dotenv and file secrets intentionally excluded
        )
