from __future__ import annotations

import pytest


@pytest.fixture
def anyio_backend() -> str:
    # The scheduler spawns asyncio tasks.
    return "asyncio"
