from __future__ import annotations

import json
import logging

from secretdesk.config import LogFormat, Settings
from secretdesk.logging import JSONFormatter, configure_logging


def test_settings_read_prefixed_environment(monkeypatch) -> None:
    monkeypatch.setenv("SECRETDESK_URL", "https://conductor.example.com/")
    monkeypatch.setenv("SECRETDESK_API_PREFIX", "api/v2/")
    monkeypatch.setenv("SECRETDESK_CACHE_TTL_SECONDS", "0")
    monkeypatch.setenv("SECRETDESK_LOG_FORMAT", "json")

    settings = Settings()

    assert settings.base_url == "https://conductor.example.com/api/v2"
    assert settings.cache_ttl_seconds == 0
    assert settings.log_format == LogFormat.JSON
    assert not settings.is_production


def test_json_formatter_includes_http_status() -> None:
    record = logging.LogRecord(
        name="secretdesk.engine.backend_api",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="%s %s failed with HTTP %s",
        args=("PUT", "/secrets/a", 500),
        exc_info=None,
    )
    record.http_status = 500

    entry = json.loads(JSONFormatter().format(record))

    assert entry["level"] == "WARNING"
    assert entry["message"] == "PUT /secrets/a failed with HTTP 500"
    assert entry["http_status"] == 500


def test_configure_logging_replaces_root_handlers() -> None:
    root = logging.getLogger()
    saved = root.handlers[:], root.level
    try:
        configure_logging(log_format="json", debug=True)
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JSONFormatter)

        configure_logging()
        assert root.level == logging.INFO
        assert not isinstance(root.handlers[0].formatter, JSONFormatter)
    finally:
        root.handlers[:] = saved[0]
        root.setLevel(saved[1])
