"""Unit tests for structured logging utilities in ``observability``."""

from __future__ import annotations

import logging

import pytest

from lib_shield_config import bind_trace_id, get_logger
from lib_shield_config.observability import TRACE_ID, log_info, make_event


def test_null_handler_present() -> None:
    """Package logger should always include a NullHandler to avoid surprises."""

    logger = get_logger()
    assert any(isinstance(handler, logging.NullHandler) for handler in logger.handlers)


def test_trace_id_in_log(caplog: pytest.LogCaptureFixture) -> None:
    """Structured logs should include the bound trace identifier and contextual fields."""

    caplog.set_level(logging.INFO, logger="lib_shield_config")
    bind_trace_id("trace-123")
    log_info("shield_resolved", entity_key="app:com.x", tier="global")
    record = caplog.records[-1]
    assert getattr(record, "context") == {"trace_id": "trace-123", "entity_key": "app:com.x", "tier": "global"}
    bind_trace_id(None)


def test_bind_trace_id_clears_context() -> None:
    bind_trace_id("trace-temp")
    bind_trace_id(None)
    assert TRACE_ID.get() is None


def test_make_event_merges_optional_payload() -> None:
    assert make_event("domain:a.com", None, {"count": 3}) == {"entity_key": "domain:a.com", "tier": None, "count": 3}
    assert make_event(None, "selection") == {"entity_key": None, "tier": "selection"}
