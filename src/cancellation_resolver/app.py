"""FastAPI application exposing the resolver as a webhook.

Run with ``uvicorn cancellation_resolver.app:app``. Every method is routed to
`handle_request` so that non-POST requests get the resolver's own 405 body.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from cancellation_resolver.handler import handle_request

if TYPE_CHECKING:
    from cancellation_resolver.config import FrozenConfig
    from cancellation_resolver.executor import CancellationExecutor

_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]


async def _read_json(request: Request) -> Any:
    raw = await request.body()
    if not raw.strip():
        return None
    try:
        return json.loads(raw)
    except ValueError:
        return raw.decode("utf-8", errors="replace")


def create_app(
    *,
    config: FrozenConfig | None = None,
    executor: CancellationExecutor | None = None,
) -> FastAPI:
    """Build the application.

    Args:
        config: Frozen configuration shared by every request; resolved per
            request from the environment when omitted.
        executor: Pre-built executor, mainly for tests.
    """
    app = FastAPI(title="Cancellation Resolver")

    @app.api_route("/api/cancel", methods=_METHODS)
    async def cancel(request: Request) -> JSONResponse:
        body = await _read_json(request) if request.method == "POST" else None
        response = await handle_request(
            request.method, body, config=config, executor=executor
        )
        headers = {"Allow": "POST"} if response.status_code == 405 else None
        return JSONResponse(
            response.body, status_code=response.status_code, headers=headers
        )

    return app


app = create_app()
