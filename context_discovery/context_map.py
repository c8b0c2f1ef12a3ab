"""
Context discovery — context map builder and query facade

``ContextMapService`` runs grouping + inference over a freshly loaded
snapshot on every call. Nothing is cached between calls, so the service can
be shared across threads as long as the accessor is.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, List, Optional

from .grouping import ContextGrouper
from .relationships import RelationshipInferrer
from .snapshot import EntitySnapshot, EntitySnapshotAccessor
from .types import (
    AnalysisLookup,
    BoundedContext,
    ContextAnalysis,
    ContextDependencies,
    ContextLookup,
    ContextMap,
    ContextMapMetadata,
    ContextMetrics,
    DependenciesLookup,
    NotFound,
)

CONTEXT_MAP_VERSION = "1.0"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def build_context_map(snapshot: EntitySnapshot, generated_at: Optional[datetime] = None) -> ContextMap:
    """Group + infer over one snapshot. Pure: the snapshot is only read."""
    contexts = ContextGrouper(snapshot.systems).group(snapshot.components, snapshot.apis)
    relationships = RelationshipInferrer().infer(contexts)
    return ContextMap(
        contexts=contexts,
        relationships=relationships,
        metadata=ContextMapMetadata(
            generatedAt=generated_at or _utc_now(),
            version=CONTEXT_MAP_VERSION,
            totalContexts=len(contexts),
            totalRelationships=len(relationships),
        ),
    )


class ContextMapService:
    """Query facade over the entity snapshot accessor."""

    def __init__(
        self,
        snapshot_accessor: EntitySnapshotAccessor,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Args:
            snapshot_accessor: source of entities; its exceptions propagate unchanged
            clock: returns ``metadata.generatedAt`` (defaults to UTC now)
        """
        self.snapshot_accessor = snapshot_accessor
        self.clock = clock or _utc_now

    def build_map(self) -> ContextMap:
        snapshot = self.snapshot_accessor.load_snapshot()
        return build_context_map(snapshot, generated_at=self.clock())

    def discover_contexts(self) -> List[BoundedContext]:
        snapshot = self.snapshot_accessor.load_snapshot()
        return ContextGrouper(snapshot.systems).group(snapshot.components, snapshot.apis)

    def get_context(self, context_id: str) -> ContextLookup:
        context = self.build_map().find_context(context_id)
        return context if context is not None else NotFound(context_id)

    def get_context_analysis(self, context_id: str) -> AnalysisLookup:
        return self._analyze(self.build_map(), context_id)

    def get_dependencies(self, context_id: str) -> DependenciesLookup:
        analysis = self._analyze(self.build_map(), context_id)
        if isinstance(analysis, NotFound):
            return analysis
        return ContextDependencies(
            contextId=context_id,
            upstream=analysis.upstream,
            downstream=analysis.downstream,
            upstreamCount=len(analysis.upstream),
            downstreamCount=len(analysis.downstream),
        )

    @staticmethod
    def _analyze(context_map: ContextMap, context_id: str) -> AnalysisLookup:
        context = context_map.find_context(context_id)
        if context is None:
            return NotFound(context_id)

        upstream = [r for r in context_map.relationships if r.downstreamContextId == context_id]
        downstream = [r for r in context_map.relationships if r.upstreamContextId == context_id]
        return ContextAnalysis(
            context=context,
            upstream=upstream,
            downstream=downstream,
            metrics=ContextMetrics(
                apiCount=len(context.providedApis) + len(context.consumedApis),
                dependencyCount=len(upstream) + len(downstream),
            ),
        )
