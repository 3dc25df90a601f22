"""Settings and factory tests."""

import pytest
import structlog

from multisearch.app import create_engine, create_event_bus
from multisearch.config import Settings
from multisearch.logging import configure_logging
from multisearch.sync.engine import SyncContext


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Defaults enable sync in English with an in-memory store."""
    monkeypatch.delenv("MULTISEARCH_ENABLED", raising=False)
    settings = Settings(_env_file=None)

    assert settings.enabled is True
    assert settings.default_language == "en"
    assert settings.database_path == ":memory:"


def test_settings_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Environment variables with the MULTISEARCH_ prefix override defaults."""
    monkeypatch.setenv("MULTISEARCH_ENABLED", "false")
    monkeypatch.setenv("MULTISEARCH_DEFAULT_LANGUAGE", "fr")

    settings = Settings(_env_file=None)

    assert settings.enabled is False
    assert settings.default_language == "fr"


def test_context_from_settings(settings: Settings) -> None:
    """The sync context mirrors the toggle and default language."""
    context = SyncContext.from_settings(settings.model_copy(update={"enabled": False}))

    assert context == SyncContext(enabled=False, default_language="en")


def test_create_engine_initializes_store(settings: Settings) -> None:
    """The factory returns an engine over a ready store."""
    engine = create_engine(settings)

    assert engine.context == SyncContext.from_settings(settings)
    assert engine.store.count() == 0


def test_create_event_bus_uses_limits(settings: Settings) -> None:
    """The factory sizes the bus from settings."""
    bus = create_event_bus(settings.model_copy(update={"event_max_subscribers": 3}))

    assert bus.subscriber_count == 0
    assert bus._max_subscribers == 3


def test_configure_logging_console_renderer() -> None:
    """Console output swaps the JSON renderer for the dev renderer."""
    configure_logging(debug=True, json_output=False)
    try:
        assert structlog.is_configured()
        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)
    finally:
        structlog.reset_defaults()
