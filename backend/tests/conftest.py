import os
import sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from lanescore import config  # noqa: E402


@pytest.fixture(autouse=True)
def default_fifth_week_policy(monkeypatch):
    """Pin the fifth-week policy so LANESCORE_FIFTH_WEEK_POLICY can't leak in."""
    monkeypatch.setattr(config, "FIFTH_WEEK_POLICY", "skip")
    yield


@pytest.fixture(autouse=True)
def no_sentry_env(monkeypatch):
    for name in (
        "SENTRY_DSN",
        "SENTRY_ENVIRONMENT",
        "SENTRY_TRACES_SAMPLE_RATE",
        "SENTRY_PROFILES_SAMPLE_RATE",
    ):
        monkeypatch.delenv(name, raising=False)
    yield
