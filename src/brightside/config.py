"""Unified configuration loaded from .brightside.toml, env vars, and CLI flags.

Loading order: defaults → TOML file → env vars → CLI flags.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path

from pydantic import BaseModel, Field

from brightside.news.reading_time import ReadingSpeed
from brightside.news.sources import READER_URL

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".brightside.toml"
CONFIG_SEARCH_PATHS = [
    Path("."),
]
GLOBAL_CONFIG_PATH = Path.home() / ".config" / "brightside" / "config.toml"


class StorageConfig(BaseModel):
    """[storage] section."""

    data_dir: str = "./.brightside"
    history_filename: str = ".reading-history.json"

    @property
    def history_path(self) -> Path:
        return Path(self.data_dir).expanduser() / self.history_filename


class NewsConfig(BaseModel):
    """[news] section."""

    newsapi_key: str = ""
    guardian_api_key: str = ""
    nyt_api_key: str = ""
    reader_url: str = READER_URL
    fetch_timeout: int = 15

    @property
    def is_configured(self) -> bool:
        return bool(self.newsapi_key or self.guardian_api_key or self.nyt_api_key)


class RecommendationsConfig(BaseModel):
    """[recommendations] section."""

    limit: int = 15


class InsightsConfig(BaseModel):
    """[insights] section."""

    calendar_days: int = 90


class SummaryConfig(BaseModel):
    """[summary] section."""

    model: str | None = None
    timeout: int = 120
    max_chars: int = 3000
    min_chars: int = 100


class ReadingConfig(BaseModel):
    """[reading] section."""

    reading_speed: ReadingSpeed = ReadingSpeed.NORMAL


class BrightsideConfig(BaseModel):
    """Top-level configuration model."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    news: NewsConfig = Field(default_factory=NewsConfig)
    recommendations: RecommendationsConfig = Field(default_factory=RecommendationsConfig)
    insights: InsightsConfig = Field(default_factory=InsightsConfig)
    summary: SummaryConfig = Field(default_factory=SummaryConfig)
    reading: ReadingConfig = Field(default_factory=ReadingConfig)


def load_config(path: str | Path | None = None) -> BrightsideConfig:
    """Load configuration from a TOML file.

    Search order:
    1. Explicit path (if provided)
    2. .brightside.toml in CWD
    3. ~/.config/brightside/config.toml

    Then overlay environment variables.

    Args:
        path: Explicit path to a TOML file.

    Returns:
        Merged BrightsideConfig.
    """
    data: dict[str, object] = {}

    if path is not None:
        toml_path = Path(path)
        if toml_path.exists():
            data = _load_toml(toml_path)
        else:
            logger.warning("Config file not found: %s", toml_path)
    else:
        for search_dir in CONFIG_SEARCH_PATHS:
            candidate = search_dir / CONFIG_FILENAME
            if candidate.exists():
                data = _load_toml(candidate)
                logger.info("Loaded config from %s", candidate)
                break
        if not data and GLOBAL_CONFIG_PATH.exists():
            data = _load_toml(GLOBAL_CONFIG_PATH)
            logger.info("Loaded config from %s", GLOBAL_CONFIG_PATH)

    config = BrightsideConfig.model_validate(data) if data else BrightsideConfig()

    return _apply_env_vars(config)


def merge_cli_overrides(config: BrightsideConfig, **cli_kwargs: object) -> BrightsideConfig:
    """Overlay explicitly-set CLI flags onto the config.

    Only overrides values where the CLI flag was explicitly provided
    (i.e., not None).
    """
    data = config.model_dump()

    mapping: dict[str, tuple[str, str]] = {
        "data_dir": ("storage", "data_dir"),
        "limit": ("recommendations", "limit"),
        "calendar_days": ("insights", "calendar_days"),
        "model": ("summary", "model"),
        "reading_speed": ("reading", "reading_speed"),
    }

    for key, value in cli_kwargs.items():
        if value is None or key not in mapping:
            continue
        section, field = mapping[key]
        data[section][field] = value

    return BrightsideConfig.model_validate(data)


def _load_toml(path: Path) -> dict[str, object]:
    """Load a TOML file and return the data dict."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as exc:
        logger.warning("Failed to parse %s: %s", path, exc)
        return {}


def _apply_env_vars(config: BrightsideConfig) -> BrightsideConfig:
    """Apply environment variable overrides to config."""
    data = config.model_dump()

    env_mapping: dict[str, tuple[str, str]] = {
        "NEWSAPI_KEY": ("news", "newsapi_key"),
        "GUARDIAN_API_KEY": ("news", "guardian_api_key"),
        "NYT_API_KEY": ("news", "nyt_api_key"),
        "BRIGHTSIDE_DATA_DIR": ("storage", "data_dir"),
        "BRIGHTSIDE_MODEL": ("summary", "model"),
    }

    for env_var, (section, field) in env_mapping.items():
        value = os.environ.get(env_var)
        if value is not None:
            data[section][field] = value

    return BrightsideConfig.model_validate(data)
