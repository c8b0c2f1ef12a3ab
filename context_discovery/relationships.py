"""
Context discovery — relationship inference

A downstream context that consumes an API provided by another context gets a
directed relationship to that upstream context. Every consumed API yields its
own record; use ``aggregate_relationships`` for a per-pair edge list.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Sequence, Tuple

from .types import (
    AggregatedRelationship,
    ApiReference,
    BoundedContext,
    ContextRelationship,
    ContextRelationshipType,
    RelationshipStrength,
)

OPEN_HOST_API_TYPES = frozenset({"openapi", "grpc"})


def classify_relationship(
    upstream: BoundedContext,
    downstream: BoundedContext,
    api: ApiReference,
) -> ContextRelationshipType:
    """
    1. same (non-empty) domain      -> SHARED_KERNEL
    2. openapi / grpc API           -> OPEN_HOST_SERVICE
    3. anything else                -> CUSTOMER_SUPPLIER
    """
    if upstream.domain and upstream.domain == downstream.domain:
        return ContextRelationshipType.SHARED_KERNEL
    if api.apiType in OPEN_HOST_API_TYPES:
        return ContextRelationshipType.OPEN_HOST_SERVICE
    return ContextRelationshipType.CUSTOMER_SUPPLIER


class RelationshipInferrer:
    """Derives ContextRelationship records from provided/consumed API lists."""

    def infer(self, contexts: Sequence[BoundedContext]) -> List[ContextRelationship]:
        # First context (in grouping order) that provides a given API name.
        providers: Dict[str, BoundedContext] = {}
        for context in contexts:
            for api in context.providedApis:
                providers.setdefault(api.name, context)

        relationships: List[ContextRelationship] = []
        for downstream in contexts:
            for consumed in downstream.consumedApis:
                upstream = providers.get(consumed.name)
                if upstream is None or upstream.id == downstream.id:
                    continue
                relationships.append(
                    ContextRelationship(
                        id=f"rel-{len(relationships) + 1}",
                        upstreamContextId=upstream.id,
                        downstreamContextId=downstream.id,
                        relationshipType=classify_relationship(upstream, downstream, consumed),
                        viaApis=(consumed.entityRef,),
                        strength=RelationshipStrength.MEDIUM,
                    )
                )
        return relationships


def infer_relationships(contexts: Sequence[BoundedContext]) -> List[ContextRelationship]:
    return RelationshipInferrer().infer(contexts)


def aggregate_relationships(relationships: Iterable[ContextRelationship]) -> List[AggregatedRelationship]:
    """Collapse per-API records into one edge per (upstream, downstream) pair, in first-seen order."""
    grouped: Dict[Tuple[str, str], List[ContextRelationship]] = {}
    for rel in relationships:
        grouped.setdefault((rel.upstreamContextId, rel.downstreamContextId), []).append(rel)

    edges: List[AggregatedRelationship] = []
    for (upstream_id, downstream_id), records in grouped.items():
        types: List[ContextRelationshipType] = []
        via: List[str] = []
        for rel in records:
            if rel.relationshipType not in types:
                types.append(rel.relationshipType)
            for ref in rel.viaApis:
                if ref not in via:
                    via.append(ref)
        edges.append(
            AggregatedRelationship(
                upstreamContextId=upstream_id,
                downstreamContextId=downstream_id,
                relationshipTypes=tuple(types),
                viaApis=tuple(via),
                count=len(records),
            )
        )
    return edges
