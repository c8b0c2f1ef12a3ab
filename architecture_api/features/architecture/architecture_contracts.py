from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from context_discovery.types import BoundedContext


class ContextSummary(BaseModel):
    """Compact bounded context row for list views."""

    id: str
    name: str
    domain: Optional[str] = None
    ownerTeam: Optional[str] = None
    sourceUrl: Optional[str] = None
    componentCount: int = 0
    providedApiCount: int = 0
    consumedApiCount: int = 0

    @classmethod
    def from_context(cls, context: BoundedContext) -> "ContextSummary":
        return cls(
            id=context.id,
            name=context.displayName,
            domain=context.domain,
            ownerTeam=context.ownerTeam,
            sourceUrl=context.sourceUrl,
            componentCount=len(context.components),
            providedApiCount=len(context.providedApis),
            consumedApiCount=len(context.consumedApis),
        )


class ContextListResponse(BaseModel):
    contexts: List[ContextSummary] = Field(default_factory=list)
    total: int = 0


class HealthResponse(BaseModel):
    status: str
    message: str
    snapshotSource: str
    neo4j: Optional[str] = None
    error: Optional[str] = None
