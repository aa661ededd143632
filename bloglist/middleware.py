import logging
import time
from contextvars import ContextVar

from sqlalchemy import event
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger(__name__)

query_count_var: ContextVar[int] = ContextVar("query_count", default=0)


def install_query_counter(engine) -> None:
    """
    Count every SQL statement executed on *engine* into ``query_count_var``.

    Call once per engine (``database.py`` for production, ``conftest.py``
    for the test engine).
    """

    @event.listens_for(engine.sync_engine, "before_cursor_execute")
    def _count_query(conn, cursor, statement, parameters, context, executemany):
        query_count_var.set(query_count_var.get() + 1)


class TimingMiddleware:
    """
    Pure ASGI middleware that stamps each HTTP response with
    ``X-Response-Time-Ms`` and ``X-Query-Count`` and logs one line per
    request at DEBUG.

    Written against raw ASGI rather than ``BaseHTTPMiddleware`` so the
    inner app runs in the same context and the query counter set by the
    engine listener is visible here.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        query_count_var.set(0)
        start = time.perf_counter()

        async def send_wrapper(message: Message) -> None:
            if message["type"] == "http.response.start":
                duration_ms = round((time.perf_counter() - start) * 1000, 2)
                queries = query_count_var.get()
                headers = list(message.get("headers", []))
                headers.append((b"x-response-time-ms", str(duration_ms).encode()))
                headers.append((b"x-query-count", str(queries).encode()))
                message["headers"] = headers
                logger.debug(
                    "%s %s -> %s in %.2fms (%d queries)",
                    scope["method"], scope["path"], message["status"], duration_ms, queries,
                )
            await send(message)

        await self.app(scope, receive, send_wrapper)
