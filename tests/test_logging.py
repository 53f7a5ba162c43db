"""Structured log lines from utils.logging."""

import logging

import pytest

from utils.logging import log_event


def test_log_event_format(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO):
        log_event(logging.getLogger("test.component"), "info", "post_liked", post_id="p1", likes=3)
    assert "post_liked: post_id=p1 likes=3" in caplog.text


def test_log_event_bare(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO):
        log_event(logging.getLogger("test.component"), "info", "app_start")
    assert caplog.records[-1].getMessage() == "app_start"


def test_request_path_attached(client, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO):
        client.post("/api/posts", json={"text": "Logged with its request path"})
    created = [r.getMessage() for r in caplog.records if r.getMessage().startswith("post_created")]
    assert created
    assert "method=POST path=/api/posts" in created[0]
    assert "Logged with its request path" not in created[0]
