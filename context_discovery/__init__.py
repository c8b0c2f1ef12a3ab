"""
Context discovery — bounded context and context map engine
"""

from .types import (
    EntityKind,
    ContextRelationshipType,
    RelationshipStrength,
    CatalogEntity,
    SourceReference,
    ComponentReference,
    ApiReference,
    BoundedContext,
    ContextRelationship,
    AggregatedRelationship,
    ContextMap,
    ContextMapMetadata,
    ContextAnalysis,
    ContextMetrics,
    ContextDependencies,
    NotFound,
)
from .snapshot import EntitySnapshot, EntitySnapshotAccessor, InMemorySnapshotAccessor
from .catalog import load_catalog_entities
from .source_reference import resolve_source_reference
from .grouping import DEFAULT_CONTEXT_ID, ContextGrouper, group_components
from .relationships import RelationshipInferrer, aggregate_relationships, infer_relationships
from .context_map import ContextMapService, build_context_map

__all__ = [
    "EntityKind",
    "ContextRelationshipType",
    "RelationshipStrength",
    "CatalogEntity",
    "SourceReference",
    "ComponentReference",
    "ApiReference",
    "BoundedContext",
    "ContextRelationship",
    "AggregatedRelationship",
    "ContextMap",
    "ContextMapMetadata",
    "ContextAnalysis",
    "ContextMetrics",
    "ContextDependencies",
    "NotFound",
    "EntitySnapshot",
    "EntitySnapshotAccessor",
    "InMemorySnapshotAccessor",
    "load_catalog_entities",
    "resolve_source_reference",
    "DEFAULT_CONTEXT_ID",
    "ContextGrouper",
    "group_components",
    "RelationshipInferrer",
    "aggregate_relationships",
    "infer_relationships",
    "ContextMapService",
    "build_context_map",
]
