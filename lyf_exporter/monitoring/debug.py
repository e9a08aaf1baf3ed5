"""Runtime introspection routes mounted under ``/debug/pprof``."""

from __future__ import annotations

import asyncio
import cProfile
import io
import pstats
import sys
import threading
import traceback

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import PlainTextResponse

debug_router = APIRouter(prefix="/debug/pprof", include_in_schema=False)

_PROFILES = {
    "cmdline": "The command line invocation of the current process",
    "threads": "Stack traces of all current threads",
    "profile": "CPU profile of the event loop thread, ?seconds=N (default 5)",
}

_profile_lock = asyncio.Lock()


@debug_router.get("/", response_class=PlainTextResponse)
async def index() -> str:
    lines = [f"/debug/pprof/{name}: {description}" for name, description in _PROFILES.items()]
    return "\n".join(lines) + "\n"


@debug_router.get("/cmdline", response_class=PlainTextResponse)
async def cmdline() -> str:
    return "\x00".join([sys.executable, *sys.argv])


@debug_router.get("/threads", response_class=PlainTextResponse)
async def threads() -> str:
    names = {thread.ident: thread.name for thread in threading.enumerate()}
    chunks = []
    for ident, frame in sys._current_frames().items():
        header = f"Thread {names.get(ident, 'unknown')} ({ident}):\n"
        chunks.append(header + "".join(traceback.format_stack(frame)))
    return "\n".join(chunks)


@debug_router.get("/profile", response_class=PlainTextResponse)
async def profile(seconds: int = Query(5, ge=1, le=60)) -> str:
    if _profile_lock.locked():
        raise HTTPException(status_code=409, detail="A profile is already running")

    async with _profile_lock:
        profiler = cProfile.Profile()
        profiler.enable()
        try:
            await asyncio.sleep(seconds)
        finally:
            profiler.disable()

    output = io.StringIO()
    stats = pstats.Stats(profiler, stream=output)
    stats.sort_stats(pstats.SortKey.CUMULATIVE).print_stats(50)
    return output.getvalue()


__all__ = ["debug_router"]
