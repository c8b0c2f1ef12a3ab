from __future__ import annotations

from fastapi import APIRouter
from starlette.requests import Request

from architecture_api.features.architecture.architecture_contracts import HealthResponse
from architecture_api.features.architecture.context_map_provider import SNAPSHOT_SOURCE_NEO4J, snapshot_source
from architecture_api.platform.neo4j import get_session
from architecture_api.platform.observability.request_logging import http_context
from architecture_api.platform.observability.smart_logger import SmartLogger

router = APIRouter(tags=["health"])

HEALTH_MESSAGE = "Architecture API is running"


@router.get("/api/architecture/health", response_model=HealthResponse, response_model_exclude_none=True)
async def health_check(request: Request) -> HealthResponse:
    """Health check endpoint. Verifies Neo4j connectivity when entities are read from Neo4j."""
    source = snapshot_source()
    SmartLogger.log(
        "INFO",
        "Health check requested.",
        category="api.health.request",
        params={**http_context(request), "snapshot_source": source},
    )
    if source != SNAPSHOT_SOURCE_NEO4J:
        return HealthResponse(status="ok", message=HEALTH_MESSAGE, snapshotSource=source)

    try:
        with get_session() as session:
            session.run("RETURN 1")
        SmartLogger.log(
            "INFO",
            "Health check OK: Neo4j connection verified.",
            category="api.health.ok",
            params={**http_context(request), "neo4j": "connected"},
        )
        return HealthResponse(status="ok", message=HEALTH_MESSAGE, snapshotSource=source, neo4j="connected")
    except Exception as e:
        SmartLogger.log(
            "ERROR",
            "Health check failed: Neo4j connection could not be verified.",
            category="api.health.error",
            params={**http_context(request), "error": {"type": type(e).__name__, "message": str(e)}},
        )
        return HealthResponse(
            status="unhealthy",
            message="Entity store unavailable",
            snapshotSource=source,
            neo4j="disconnected",
            error=str(e),
        )
