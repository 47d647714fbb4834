import logging
import os
from typing import Any, Mapping, Optional

import sentry_sdk
from sentry_sdk.integrations.logging import LoggingIntegration

logger = logging.getLogger(__name__)


def _sample_rate_from_env(name: str, default: float = 0.0) -> float:
    """Read a Sentry sample rate, falling back to ``default`` when unusable.

    Sentry only accepts rates from 0 to 1; anything else, ``nan`` included,
    logs a warning instead of failing start-up.
    """
    raw = os.getenv(name)
    if raw is None:
        return default

    try:
        rate = float(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not a number; using %.2f", name, raw, default)
        return default

    if not 0.0 <= rate <= 1.0:
        logger.warning(
            "Ignoring %s=%r: must be between 0 and 1; using %.2f", name, raw, default
        )
        return default
    return rate


def init_sentry() -> bool:
    """Initialize Sentry from the environment.

    Returns ``True`` when the SDK was initialized, ``False`` when
    ``SENTRY_DSN`` is unset.
    """
    dsn = os.getenv("SENTRY_DSN")
    if not dsn:
        logger.info("SENTRY_DSN not provided; skipping Sentry initialization.")
        return False

    environment = (os.getenv("SENTRY_ENVIRONMENT") or "").strip() or None
    traces_sample_rate = _sample_rate_from_env("SENTRY_TRACES_SAMPLE_RATE", default=0.0)
    profiles_sample_rate = _sample_rate_from_env(
        "SENTRY_PROFILES_SAMPLE_RATE", default=0.0
    )

    sentry_sdk.init(
        dsn=dsn,
        integrations=[LoggingIntegration(level=logging.INFO, event_level=logging.ERROR)],
        environment=environment,
        traces_sample_rate=traces_sample_rate,
        profiles_sample_rate=profiles_sample_rate,
    )
    logger.info(
        "Initialized Sentry%s",
        f" (environment={environment})" if environment else "",
    )
    return True


def track_validation_error(
    message: str,
    *,
    action: str,
    metadata: Optional[Mapping[str, Any]] = None,
) -> None:
    """Report a rejected user input. No-op until :func:`init_sentry` ran."""
    data = {"action": action, **(metadata or {})}
    sentry_sdk.add_breadcrumb(
        category="validation",
        message=message[:100],
        level="warning",
        data=data,
    )
    with sentry_sdk.new_scope() as scope:
        scope.set_tag("error_category", "validation")
        scope.set_tag("error_action", action)
        scope.set_context("validation", data)
        sentry_sdk.capture_message(message[:100], level="warning")
