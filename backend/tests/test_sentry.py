import logging

import pytest

from lanescore.utils import sentry


@pytest.fixture
def init_calls(monkeypatch):
    calls = []
    monkeypatch.setattr(sentry.sentry_sdk, "init", lambda **kwargs: calls.append(kwargs))
    return calls


def test_init_skipped_without_dsn(init_calls, caplog):
    with caplog.at_level(logging.INFO, logger=sentry.__name__):
        assert sentry.init_sentry() is False
    assert init_calls == []
    assert "SENTRY_DSN not provided" in caplog.text


def test_init_reads_environment(init_calls, monkeypatch, caplog):
    monkeypatch.setenv("SENTRY_DSN", "https://key@example.invalid/1")
    monkeypatch.setenv("SENTRY_ENVIRONMENT", " staging ")
    monkeypatch.setenv("SENTRY_TRACES_SAMPLE_RATE", "0.25")

    with caplog.at_level(logging.INFO, logger=sentry.__name__):
        assert sentry.init_sentry() is True

    assert len(init_calls) == 1
    kwargs = init_calls[0]
    assert kwargs["dsn"] == "https://key@example.invalid/1"
    assert kwargs["environment"] == "staging"
    assert kwargs["traces_sample_rate"] == 0.25
    assert kwargs["profiles_sample_rate"] == 0.0
    assert "Initialized Sentry (environment=staging)" in caplog.text


@pytest.mark.parametrize(
    "raw, msg",
    [
        ("abc", "not a number"),
        ("-1", "must be between 0 and 1"),
        ("1.5", "must be between 0 and 1"),
        ("nan", "must be between 0 and 1"),
    ],
    ids=["not-a-float", "negative", "above-one", "nan"],
)
def test_bad_sample_rate_falls_back(init_calls, monkeypatch, caplog, raw, msg):
    monkeypatch.setenv("SENTRY_DSN", "https://key@example.invalid/1")
    monkeypatch.setenv("SENTRY_PROFILES_SAMPLE_RATE", raw)

    with caplog.at_level(logging.WARNING, logger=sentry.__name__):
        sentry.init_sentry()

    assert init_calls[0]["profiles_sample_rate"] == 0.0
    assert msg in caplog.text


def test_track_validation_error_without_init_is_harmless():
    sentry.track_validation_error("Frame 7: First throw is required", action="validate_frames")


def test_track_validation_error_reports_message(monkeypatch):
    captured = []
    breadcrumbs = []
    monkeypatch.setattr(
        sentry.sentry_sdk,
        "capture_message",
        lambda message, level=None, **kwargs: captured.append((message, level)),
    )
    monkeypatch.setattr(
        sentry.sentry_sdk, "add_breadcrumb", lambda **kwargs: breadcrumbs.append(kwargs)
    )

    sentry.track_validation_error(
        "x" * 150, action="validate_frames", metadata={"errorCount": 2}
    )

    assert captured == [("x" * 100, "warning")]
    assert breadcrumbs[0]["category"] == "validation"
    assert breadcrumbs[0]["data"] == {"action": "validate_frames", "errorCount": 2}
