"""Failure reporting shared by the upstream fetchers."""

from typing import Optional
from urllib.parse import urlparse

import sentry_sdk


def get_domain(url: str) -> str:
    """Extract domain from URL for logging."""
    try:
        parsed = urlparse(url)
    except ValueError:
        return "unknown"
    return parsed.netloc.lower().replace("www.", "") or "unknown"


def log_fetch_failure(
    url: str,
    error_type: str,
    error_detail: str,
    feature: str,
    extra_context: Optional[dict] = None,
):
    """Log a degraded upstream call to Sentry with rich context."""
    domain = get_domain(url)

    sentry_sdk.capture_message(
        f"{feature} degraded: {error_type}",
        level="warning",
        extras={
            "url": url,
            "domain": domain,
            "error_type": error_type,
            "error_detail": error_detail,
            **(extra_context or {}),
        },
        tags={
            "feature": feature,
            "error_type": error_type,
            "domain": domain,
        },
    )
    print(f"⚠️ {feature}: {error_type} for {domain} ({error_detail})")
