"""Runtime settings: config/settings.yaml overlaid with environment variables."""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

CONFIG_PATH = Path(os.environ.get("PAPERFEED_CONFIG", "config/settings.yaml"))

# Fetch defaults
CACHE_TTL_HOURS = 24
HTTP_TIMEOUT = 30.0
USER_AGENT = "Mozilla/5.0 (compatible; paperfeed/0.1)"

# arXiv defaults
ARXIV_PAGE_SIZE = 500
ARXIV_DEFAULT_LIMIT = 1000

# Text generation defaults (OpenAI-compatible endpoint)
LLM_BASE_URL = "https://api.openai.com/v1"
LLM_MODEL = "gpt-4o"
LLM_TIMEOUT = 120.0

# Auth / credits
JWT_ALGORITHM = "HS256"
JWT_EXPIRE_DAYS = 7
MAX_CREDITS = 5
CREDITS_FILE = "data/user_credits.json"
CATEGORIES_FILE = "config/categories.yaml"


@lru_cache(maxsize=1)
def load_settings() -> dict[str, Any]:
    """Load settings once per process; missing keys fall back to module defaults."""
    config: dict[str, Any] = {}
    if CONFIG_PATH.exists():
        try:
            config = yaml.safe_load(CONFIG_PATH.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            logger.warning(f"Ignoring unreadable {CONFIG_PATH}: {e}")
            config = {}

    cache_cfg = config.get("cache") or {}
    http_cfg = config.get("http") or {}
    arxiv_cfg = config.get("arxiv") or {}
    llm_cfg = config.get("llm") or {}
    auth_cfg = config.get("auth") or {}
    credits_cfg = config.get("credits") or {}
    categories_cfg = config.get("categories") or {}

    return {
        "cache_ttl_hours": float(cache_cfg.get("ttl_hours", CACHE_TTL_HOURS)),
        "http_timeout": float(http_cfg.get("timeout", HTTP_TIMEOUT)),
        "user_agent": http_cfg.get("user_agent", USER_AGENT),
        "arxiv_page_size": int(arxiv_cfg.get("page_size", ARXIV_PAGE_SIZE)),
        "arxiv_default_limit": int(arxiv_cfg.get("default_limit", ARXIV_DEFAULT_LIMIT)),
        "llm_base_url": os.environ.get("LLM_BASE_URL") or llm_cfg.get("base_url", LLM_BASE_URL),
        "llm_model": llm_cfg.get("model", LLM_MODEL),
        "llm_timeout": float(llm_cfg.get("timeout", LLM_TIMEOUT)),
        "llm_api_key": os.environ.get("OPENAI_API_KEY", ""),
        "jwt_secret": os.environ.get("PAPERFEED_JWT_SECRET") or auth_cfg.get("jwt_secret", ""),
        "jwt_algorithm": auth_cfg.get("jwt_algorithm", JWT_ALGORITHM),
        "jwt_expire_days": int(auth_cfg.get("expire_days", JWT_EXPIRE_DAYS)),
        "max_credits": int(credits_cfg.get("max_credits", MAX_CREDITS)),
        "credits_file": credits_cfg.get("file", CREDITS_FILE),
        "categories_file": categories_cfg.get("file", CATEGORIES_FILE),
    }
