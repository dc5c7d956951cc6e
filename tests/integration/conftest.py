from __future__ import annotations

import os
import urllib.request

import pytest

from src.adapters.realtime.http_gtfs_realtime_feed_source import DEFAULT_FEED_URL


def _feed_reachable(url: str) -> bool:
    try:
        with urllib.request.urlopen(url, timeout=5) as resp:  # nosec B310
            return 200 <= resp.status < 300
    except Exception:
        return False


@pytest.fixture(scope="session")
def require_live_feed() -> str:
    """URL of a reachable GTFS-realtime vehicle positions feed."""

    url = os.getenv("FEED_URL") or DEFAULT_FEED_URL
    if not _feed_reachable(url):
        msg = f"Vehicle feed not reachable at {url}"

        # Opt-in hard failure for environments that are expected to have network.
        if os.getenv("REQUIRE_LIVE_FEED"):
            pytest.fail(msg, pytrace=False)

        pytest.skip(f"{msg}; skipping integration tests")
    return url
