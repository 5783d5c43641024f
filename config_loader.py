# config_loader.py
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

ROOT = Path(__file__).resolve().parent

DEFAULT_ORG = "code-423n4"
DEFAULT_API_BASE = "https://api.github.com"
DEFAULT_RAW_BASE = "https://raw.githubusercontent.com"
GITHUB_API_VERSION = "2022-11-28"
USER_AGENT = "Code-423n4"


class ConfigError(ValueError):
    """Raised when a required setting is missing from the environment/.env."""


@dataclass(frozen=True)
class GitHubConfig:
    token: str
    org: str = DEFAULT_ORG
    api_base: str = DEFAULT_API_BASE
    raw_base: str = DEFAULT_RAW_BASE
    api_version: str = GITHUB_API_VERSION
    user_agent: str = USER_AGENT
    branch: str = "main"


def load_config(org: Optional[str] = None, env_file: Optional[Path] = None) -> GitHubConfig:
    load_dotenv(env_file or ROOT / ".env")
    token = (os.getenv("GITHUB_TOKEN") or "").strip()
    if not token:
        raise ConfigError("⚠️ GITHUB_TOKEN not found. Put it in .env as GITHUB_TOKEN=github_pat_xxx")

    return GitHubConfig(
        token=token,
        org=org or DEFAULT_ORG,
        api_base=(os.getenv("GITHUB_BASE_URL") or DEFAULT_API_BASE).strip().rstrip("/"),
        raw_base=(os.getenv("GITHUB_RAW_BASE_URL") or DEFAULT_RAW_BASE).strip().rstrip("/"),
    )
