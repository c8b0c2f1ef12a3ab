from __future__ import annotations

from typing import Any, Callable, TypeVar

from fastapi import APIRouter, Depends, HTTPException
from starlette.requests import Request

from context_discovery.context_map import ContextMapService
from context_discovery.types import NotFound

from architecture_api.features.architecture.architecture_contracts import ContextListResponse, ContextSummary
from architecture_api.features.architecture.context_map_provider import get_context_map_service
from architecture_api.platform.observability.request_logging import http_context, summarize_for_log
from architecture_api.platform.observability.smart_logger import SmartLogger

router = APIRouter()

T = TypeVar("T")


def _run_query(request: Request, category: str, action: str, query: Callable[[], T]) -> T:
    """Run an engine query; snapshot failures become HTTP 500."""
    try:
        return query()
    except Exception as e:
        SmartLogger.log(
            "ERROR",
            f"{action} failed: snapshot could not be loaded.",
            category=f"{category}.error",
            params={**http_context(request), "error": {"type": type(e).__name__, "message": str(e)}},
        )
        raise HTTPException(status_code=500, detail=f"{action} failed: {str(e)}")


def _not_found(request: Request, category: str, missing: NotFound) -> HTTPException:
    SmartLogger.log(
        "WARNING",
        "Context not found: id did not match any discovered bounded context.",
        category=f"{category}.not_found",
        params={**http_context(request), "inputs": {"context_id": missing.contextId}},
    )
    return HTTPException(status_code=404, detail=f"Context {missing.contextId} not found")


@router.get("/contexts", response_model=ContextListResponse)
async def list_contexts(
    request: Request,
    service: ContextMapService = Depends(get_context_map_service),
) -> ContextListResponse:
    """
    GET /api/architecture/contexts
    All bounded contexts with id, name and member/API counts.
    """
    category = "api.architecture.contexts.list"
    SmartLogger.log("INFO", "Contexts list requested.", category=f"{category}.request", params=http_context(request))

    contexts = _run_query(request, category, "Fetching contexts", service.discover_contexts)
    items = [ContextSummary.from_context(c) for c in contexts]

    SmartLogger.log(
        "INFO",
        "Contexts list returned.",
        category=f"{category}.done",
        params={**http_context(request), "count": len(items)},
    )
    return ContextListResponse(contexts=items, total=len(items))


@router.get("/contexts/{context_id}")
async def get_context_analysis(
    context_id: str,
    request: Request,
    service: ContextMapService = Depends(get_context_map_service),
) -> dict[str, Any]:
    """
    GET /api/architecture/contexts/{id}
    The context plus its upstream (providers it consumes from) and downstream
    (consumers of its APIs) relationships.
    """
    category = "api.architecture.contexts.analysis"
    SmartLogger.log(
        "INFO",
        "Context analysis requested.",
        category=f"{category}.request",
        params={**http_context(request), "inputs": {"context_id": context_id}},
    )

    analysis = _run_query(request, category, "Context analysis", lambda: service.get_context_analysis(context_id))
    if isinstance(analysis, NotFound):
        raise _not_found(request, category, analysis)

    SmartLogger.log(
        "INFO",
        "Context analysis returned.",
        category=f"{category}.done",
        params={
            **http_context(request),
            "inputs": {"context_id": context_id},
            "summary": {
                "upstream": summarize_for_log([r.upstreamContextId for r in analysis.upstream], max_list=20),
                "downstream": summarize_for_log([r.downstreamContextId for r in analysis.downstream], max_list=20),
                "metrics": analysis.metrics.to_dict(),
            },
        },
    )
    return analysis.to_dict()


@router.get("/contexts/{context_id}/dependencies")
async def get_context_dependencies(
    context_id: str,
    request: Request,
    service: ContextMapService = Depends(get_context_map_service),
) -> dict[str, Any]:
    """
    GET /api/architecture/contexts/{id}/dependencies
    Upstream/downstream relationship lists with their counts.
    """
    category = "api.architecture.contexts.dependencies"
    SmartLogger.log(
        "INFO",
        "Context dependencies requested.",
        category=f"{category}.request",
        params={**http_context(request), "inputs": {"context_id": context_id}},
    )

    dependencies = _run_query(request, category, "Context dependencies", lambda: service.get_dependencies(context_id))
    if isinstance(dependencies, NotFound):
        raise _not_found(request, category, dependencies)

    SmartLogger.log(
        "INFO",
        "Context dependencies returned.",
        category=f"{category}.done",
        params={
            **http_context(request),
            "inputs": {"context_id": context_id},
            "summary": {
                "upstreamCount": dependencies.upstreamCount,
                "downstreamCount": dependencies.downstreamCount,
            },
        },
    )
    return dependencies.to_dict()
