# app/core/sentry_config.py
"""
Sentry configuration for error tracking in production.

Sentry captures exceptions, errors, and performance data from production
environments for monitoring and debugging.
"""

import logging
import os

from app.core.config import IS_PRODUCTION, SERVICE_NAME, SERVICE_VERSION

logger = logging.getLogger(__name__)

SENSITIVE_HEADERS = ("cookie", "authorization", "x-api-key")


def init_sentry() -> bool:
    """
    Initialize Sentry error tracking.

    Returns:
        True if Sentry was initialized successfully, False otherwise.
    """
    sentry_dsn = os.getenv("SENTRY_DSN", "").strip()

    if not IS_PRODUCTION:
        logger.info("Sentry disabled in development mode")
        return False

    if not sentry_dsn:
        logger.warning(
            "SENTRY_DSN not set. Error tracking disabled. "
            "Set SENTRY_DSN environment variable to enable Sentry in production."
        )
        return False

    try:
        import sentry_sdk
        from sentry_sdk.integrations.fastapi import FastApiIntegration
        from sentry_sdk.integrations.logging import LoggingIntegration
        from sentry_sdk.integrations.starlette import StarletteIntegration
    except ImportError:
        logger.warning("Sentry SDK not installed. Install with: pip install 'umbrella-hours[sentry]'")
        return False

    try:
        # Logging integration - send error logs to Sentry
        logging_integration = LoggingIntegration(
            level=logging.INFO,  # Breadcrumbs from INFO and above
            event_level=logging.ERROR,  # Send errors and above as events
        )

        sentry_sdk.init(
            dsn=sentry_dsn,
            integrations=[
                FastApiIntegration(),
                StarletteIntegration(),
                logging_integration,
            ],
            traces_sample_rate=0.1,  # 10% of requests tracked for performance
            sample_rate=1.0,
            release=os.getenv("RELEASE_VERSION", f"{SERVICE_NAME}@{SERVICE_VERSION}"),
            environment=os.getenv("SENTRY_ENVIRONMENT", "production"),
            send_default_pii=False,
            attach_stacktrace=True,
            before_send=before_send_hook,
        )

        env = os.getenv("SENTRY_ENVIRONMENT", "production")
        logger.info(f"Sentry initialized successfully (environment: {env})")
        return True

    except Exception as e:
        logger.error(f"Failed to initialize Sentry: {e}", exc_info=True)
        return False


def before_send_hook(event, hint):
    """
    Filter sensitive data before sending to Sentry.

    Args:
        event: Sentry event data
        hint: Additional context

    Returns:
        Modified event or None to drop the event
    """
    request = event.get("request")
    if not request:
        return event

    headers = request.get("headers")
    if headers:
        for header in list(headers):
            if header.lower() in SENSITIVE_HEADERS:
                headers[header] = "[Filtered]"

    query = request.get("query_string")
    if query and ("password" in query.lower() or "token" in query.lower()):
        request["query_string"] = "[Filtered]"

    return event
