from __future__ import annotations

from fastapi import Request

from src.adapters.runtime import MapRuntime


def get_map_runtime(request: Request) -> MapRuntime:
    runtime = getattr(request.app.state, "runtime", None)
    if runtime is None:
        raise RuntimeError("Map runtime not initialised")
    return runtime
