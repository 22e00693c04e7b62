"""Runtime settings read from the environment (and a local .env file)."""
from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

SERVER_NAME = "vietnamese-news-rss"
SERVER_VERSION = "1.0.0"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    log_level: str = "INFO"
    log_json: bool = False


def load_settings() -> Settings:
    """
    Load settings from VN_NEWS_* environment variables.

    A .env file in the working directory is read first; real environment
    variables take precedence over it.
    """
    load_dotenv()
    return Settings(
        log_level=os.getenv("VN_NEWS_LOG_LEVEL", "INFO").strip().upper() or "INFO",
        log_json=os.getenv("VN_NEWS_LOG_JSON", "").strip().lower() in _TRUTHY,
    )
