import logging

import pytest

from productivity_dashboard.config import Settings, configure_logging, load_settings
from productivity_dashboard.insights import DEFAULT_MODEL, FileInsightCache
from productivity_dashboard.store import JsonFileLogStore, SupabaseLogStore


def test_defaults_from_empty_env():
    settings = load_settings(env={})
    assert settings == Settings()
    assert settings.insight_model == DEFAULT_MODEL
    assert settings.insight_max_tokens == 2000
    assert not settings.uses_supabase


def test_values_from_env():
    settings = load_settings(
        env={
            "SUPABASE_URL": "https://demo.supabase.co",
            "SUPABASE_ANON_KEY": "anon",
            "SUPABASE_TABLE": "logs",
            "ANTHROPIC_API_KEY": "sk-test",
            "INSIGHT_MODEL": "claude-test",
            "INSIGHT_MAX_TOKENS": "750",
            "LOG_LEVEL": "debug",
        }
    )
    assert settings.uses_supabase
    assert settings.supabase_table == "logs"
    assert settings.insight_max_tokens == 750
    assert settings.log_level == "DEBUG"

    generator = settings.build_insight_generator()
    assert generator.model == "claude-test"
    assert generator.api_key == "sk-test"


def test_bad_integer_is_rejected():
    with pytest.raises(ValueError, match="INSIGHT_MAX_TOKENS"):
        load_settings(env={"INSIGHT_MAX_TOKENS": "lots"})


def test_build_store_choice(tmp_path):
    local = load_settings(env={"LOG_STORE_PATH": str(tmp_path / "logs.json")})
    assert isinstance(local.build_store(), JsonFileLogStore)

    hosted = load_settings(env={"SUPABASE_URL": "https://demo.supabase.co", "SUPABASE_ANON_KEY": "anon"})
    store = hosted.build_store()
    assert isinstance(store, SupabaseLogStore)
    assert store.url == "https://demo.supabase.co"
    assert store.table == "productivity_logs"

    assert isinstance(local.build_insight_cache(), FileInsightCache)


def test_configure_logging_is_idempotent():
    logger = configure_logging("debug")
    configure_logging("debug")
    assert logger.name == "productivity_dashboard"
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
