"""Entry point for the FastAPI-powered TMDB dispatcher."""

from __future__ import annotations

import logging
from contextlib import AsyncExitStack, asynccontextmanager

import httpx
from fastapi import FastAPI, Request, Response

from .config import settings
from .models import TypedQuery
from .services.dispatcher import RequestDispatcher
from .utils import install_secret_filter

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app: FastAPI


@asynccontextmanager
async def lifespan(fastapi_app: FastAPI):
    exit_stack = AsyncExitStack()
    tmdb_client = await exit_stack.enter_async_context(
        httpx.AsyncClient(
            base_url=str(settings.tmdb_api_url),
            timeout=httpx.Timeout(settings.upstream_timeout_seconds, connect=5.0),
        )
    )
    install_secret_filter(settings.tmdb_api_key)
    fastapi_app.state.dispatcher = RequestDispatcher.from_settings(
        settings, tmdb_client
    )

    try:
        yield
    finally:  # pragma: no cover - teardown path exercised at runtime
        await exit_stack.aclose()


def create_app() -> FastAPI:
    fastapi_app = FastAPI(
        title=settings.app_name,
        description="Credential-shielding proxy for TMDB discovery, videos and details",
        version="1.0.0",
        lifespan=lifespan,
    )
    register_routes(fastapi_app)
    return fastapi_app


def get_dispatcher(app: FastAPI) -> RequestDispatcher:
    dispatcher = getattr(app.state, "dispatcher", None)
    if not isinstance(dispatcher, RequestDispatcher):
        raise RuntimeError("Request dispatcher not initialised")
    return dispatcher


def register_routes(fastapi_app: FastAPI) -> None:
    @fastapi_app.get("/healthz")
    async def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    @fastapi_app.get(settings.dispatcher_path)
    async def tmdb_proxy(request: Request) -> Response:
        """Render the dispatcher's envelope as the HTTP response verbatim."""

        dispatcher = get_dispatcher(fastapi_app)
        query = TypedQuery.from_query_params(request.query_params)
        envelope = await dispatcher.dispatch(query)
        return Response(
            content=envelope.body,
            status_code=envelope.status_code,
            headers=envelope.headers,
        )


app = create_app()


if __name__ == "__main__":  # pragma: no cover - manual execution
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.server_host,
        port=settings.server_port,
        reload=settings.environment == "development",
    )
