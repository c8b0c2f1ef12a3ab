"""
FastAPI Backend for the Architecture Context Map

Provides REST APIs for:
- Bounded context discovery from catalog entities
- Context relationships (DDD integration patterns) inferred from API usage
- Per-context analysis and dependency lists
"""

from __future__ import annotations

from dotenv import load_dotenv
load_dotenv()

from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.requests import Request
from starlette.responses import Response
from fastapi.middleware.cors import CORSMiddleware

from architecture_api.features.architecture.context_map_provider import SNAPSHOT_SOURCE_NEO4J, snapshot_source
from architecture_api.platform.env import env_str, get_cors_allow_origins
from architecture_api.platform.neo4j import close_neo4j_driver, init_neo4j_driver
from architecture_api.platform.observability.request_logging import (
    RequestTimer,
    http_context,
    new_request_id,
    set_request_id,
)
from architecture_api.platform.observability.smart_logger import SmartLogger


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage the Neo4j connection lifecycle (skipped when serving the demo catalog)."""
    source = snapshot_source()
    SmartLogger.log(
        "INFO",
        "Starting API (lifespan init)",
        category="api.lifespan",
        params={
            "logger_impl": getattr(SmartLogger, "impl_source", "unknown"),
            "snapshot_source": source,
        },
    )
    uses_neo4j = source == SNAPSHOT_SOURCE_NEO4J
    if uses_neo4j:
        init_neo4j_driver(log=True)
    yield
    if uses_neo4j:
        close_neo4j_driver(log=True)
    SmartLogger.log("INFO", "API stopped", category="api.lifespan")


app = FastAPI(
    title="Architecture Context Map API",
    description="Bounded context discovery and DDD context mapping over the service catalog",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_allow_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# -----------------------------------------------------------------------------
# Request Correlation + Logging
# -----------------------------------------------------------------------------

@app.middleware("http")
async def _request_id_middleware(request: Request, call_next):
    """
    Assign a request_id to every inbound HTTP request and emit start/end logs.
    """
    rid = request.headers.get("x-request-id") or new_request_id()
    set_request_id(rid)
    timer = RequestTimer()

    SmartLogger.log(
        "INFO",
        "HTTP request received: starting route execution.",
        category="api.http.start",
        params=http_context(request),
    )

    try:
        response: Response = await call_next(request)
        SmartLogger.log(
            "INFO",
            "HTTP request completed.",
            category="api.http.end",
            params={
                **http_context(request),
                "result": {
                    "status_code": response.status_code,
                    "duration_ms": timer.ms(),
                },
            },
        )
        response.headers["X-Request-Id"] = rid
        return response
    except Exception as e:
        SmartLogger.log(
            "ERROR",
            "HTTP request failed: route raised an exception.",
            category="api.http.error",
            params={
                **http_context(request),
                "error": {"type": type(e).__name__, "message": str(e)},
                "duration_ms": timer.ms(),
            },
        )
        raise
    finally:
        # Avoid leaking request_id into unrelated async contexts.
        set_request_id(None)


"""
Feature routers (business capabilities)
"""
from architecture_api.features.health.router import router as health_router
from architecture_api.features.architecture.router import router as architecture_router

app.include_router(health_router)
app.include_router(architecture_router)


if __name__ == "__main__":
    import uvicorn

    HOST = env_str("API_HOST", "0.0.0.0")
    PORT = int(env_str("API_PORT", "8000"))

    SmartLogger.log("INFO", "Starting API", category="api.main", params={"host": HOST, "port": PORT})
    uvicorn.run("architecture_api.main:app", host=HOST, port=PORT, reload=True)
