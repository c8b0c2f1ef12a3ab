from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from starlette.requests import Request

from context_discovery.context_map import ContextMapService
from context_discovery.relationships import aggregate_relationships

from architecture_api.features.architecture.context_map_provider import get_context_map_service
from architecture_api.platform.observability.request_logging import RequestTimer, http_context
from architecture_api.platform.observability.smart_logger import SmartLogger

router = APIRouter()


@router.get("/context-map")
async def get_context_map(
    request: Request,
    service: ContextMapService = Depends(get_context_map_service),
) -> dict[str, Any]:
    """
    GET /api/architecture/context-map
    Full context map: bounded contexts, relationships and generation metadata.
    """
    SmartLogger.log(
        "INFO",
        "Context map requested: grouping components and inferring relationships.",
        category="api.architecture.context_map.request",
        params=http_context(request),
    )
    timer = RequestTimer()
    try:
        context_map = service.build_map()
    except Exception as e:
        SmartLogger.log(
            "ERROR",
            "Context map generation failed: snapshot could not be loaded.",
            category="api.architecture.context_map.error",
            params={**http_context(request), "error": {"type": type(e).__name__, "message": str(e)}},
        )
        raise HTTPException(status_code=500, detail=f"Failed to generate context map: {str(e)}")

    SmartLogger.log(
        "INFO",
        "Context map returned.",
        category="api.architecture.context_map.done",
        params={
            **http_context(request),
            "summary": {
                "contexts": context_map.metadata.totalContexts,
                "relationships": context_map.metadata.totalRelationships,
            },
            "duration_ms": timer.ms(),
        },
    )
    return context_map.to_dict()


@router.get("/relationships/aggregated")
async def get_aggregated_relationships(
    request: Request,
    service: ContextMapService = Depends(get_context_map_service),
) -> dict[str, Any]:
    """
    GET /api/architecture/relationships/aggregated
    One edge per (upstream, downstream) pair, with every API that links them.
    """
    try:
        context_map = service.build_map()
    except Exception as e:
        SmartLogger.log(
            "ERROR",
            "Aggregated relationships failed: snapshot could not be loaded.",
            category="api.architecture.relationships.error",
            params={**http_context(request), "error": {"type": type(e).__name__, "message": str(e)}},
        )
        raise HTTPException(status_code=500, detail=f"Failed to aggregate relationships: {str(e)}")

    edges = aggregate_relationships(context_map.relationships)
    SmartLogger.log(
        "INFO",
        "Aggregated relationships returned.",
        category="api.architecture.relationships.done",
        params={
            **http_context(request),
            "summary": {"relationships": len(context_map.relationships), "edges": len(edges)},
        },
    )
    return {"edges": [edge.to_dict() for edge in edges], "total": len(edges)}
