"""Environment-driven settings and logging setup.

Values come from the process environment, after loading a ``.env`` file when one
is present:

    SUPABASE_URL, SUPABASE_ANON_KEY, SUPABASE_TABLE
    ANTHROPIC_API_KEY, INSIGHT_MODEL, INSIGHT_MAX_TOKENS, INSIGHT_CACHE_PATH
    LOG_STORE_PATH, LOG_LEVEL
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from productivity_dashboard.insights import DEFAULT_MAX_TOKENS, DEFAULT_MODEL, FileInsightCache, InsightGenerator
from productivity_dashboard.store import DEFAULT_TABLE, JsonFileLogStore, LogStore, SupabaseLogStore

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_table: str = DEFAULT_TABLE
    anthropic_api_key: str = ""
    insight_model: str = DEFAULT_MODEL
    insight_max_tokens: int = DEFAULT_MAX_TOKENS
    insight_cache_path: str = ".cache/ai_insights.md"
    log_store_path: str = "data/productivity_logs.json"
    log_level: str = "INFO"

    @property
    def uses_supabase(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)

    def build_store(self) -> LogStore:
        if self.uses_supabase:
            return SupabaseLogStore(self.supabase_url, self.supabase_key, table=self.supabase_table)
        return JsonFileLogStore(self.log_store_path)

    def build_insight_generator(self) -> InsightGenerator:
        return InsightGenerator(
            api_key=self.anthropic_api_key,
            model=self.insight_model,
            max_tokens=self.insight_max_tokens,
        )

    def build_insight_cache(self) -> FileInsightCache:
        return FileInsightCache(self.insight_cache_path)


def _int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw in (None, ""):
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got '{raw}'") from exc


def load_settings(env: Optional[Mapping[str, str]] = None, dotenv: bool = True) -> Settings:
    """Read settings from ``env`` (defaults to ``os.environ``)."""

    if env is None:
        if dotenv:
            load_dotenv()
        env = os.environ

    defaults = Settings()
    return Settings(
        supabase_url=env.get("SUPABASE_URL", ""),
        supabase_key=env.get("SUPABASE_ANON_KEY", ""),
        supabase_table=env.get("SUPABASE_TABLE") or defaults.supabase_table,
        anthropic_api_key=env.get("ANTHROPIC_API_KEY", ""),
        insight_model=env.get("INSIGHT_MODEL") or defaults.insight_model,
        insight_max_tokens=_int(env, "INSIGHT_MAX_TOKENS", defaults.insight_max_tokens),
        insight_cache_path=env.get("INSIGHT_CACHE_PATH") or defaults.insight_cache_path,
        log_store_path=env.get("LOG_STORE_PATH") or defaults.log_store_path,
        log_level=(env.get("LOG_LEVEL") or defaults.log_level).upper(),
    )


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach one stderr handler to the package logger."""

    package_logger = logging.getLogger("productivity_dashboard")
    package_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    if not package_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
        package_logger.addHandler(handler)
    return package_logger
