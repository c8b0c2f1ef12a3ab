"""
Context discovery — type definitions
Catalog entities consumed by the engine and the context map it produces.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, is_dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union


# ==========================================
# Enums
# ==========================================

class EntityKind(str, Enum):
    COMPONENT = "Component"
    API = "API"
    SYSTEM = "System"
    DOMAIN = "Domain"


class ContextRelationshipType(str, Enum):
    """DDD context mapping patterns."""

    SHARED_KERNEL = "SHARED_KERNEL"
    CUSTOMER_SUPPLIER = "CUSTOMER_SUPPLIER"
    CONFORMIST = "CONFORMIST"
    ANTICORRUPTION_LAYER = "ANTICORRUPTION_LAYER"
    OPEN_HOST_SERVICE = "OPEN_HOST_SERVICE"
    PUBLISHED_LANGUAGE = "PUBLISHED_LANGUAGE"
    SEPARATE_WAYS = "SEPARATE_WAYS"
    PARTNERSHIP = "PARTNERSHIP"


class RelationshipStrength(str, Enum):
    WEAK = "WEAK"
    MEDIUM = "MEDIUM"
    STRONG = "STRONG"


# ==========================================
# Serialization
# ==========================================

def to_jsonable(value: Any) -> Any:
    """Convert model objects into plain JSON-compatible structures (camelCase keys)."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_jsonable(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, Mapping):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    return value


class _Serializable:
    def to_dict(self) -> Dict[str, Any]:
        return to_jsonable(self)


# ==========================================
# Catalog input
# ==========================================

@dataclass(frozen=True)
class CatalogEntity(_Serializable):
    """
    A single catalog entity as seen by the engine.

    Only the fields relevant to ``kind`` are populated; everything optional is
    simply ``None`` (or empty) when the catalog does not declare it.
    """

    kind: EntityKind
    name: str
    groupKey: Optional[str] = None
    domainAnnotation: Optional[str] = None
    ownerTeam: Optional[str] = None
    sourceAnnotations: Mapping[str, str] = field(default_factory=dict)
    providesApiRefs: Tuple[str, ...] = ()
    consumesApiRefs: Tuple[str, ...] = ()
    componentType: Optional[str] = None
    apiType: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    # System entities only: the domain the system belongs to.
    domain: Optional[str] = None

    @property
    def entity_ref(self) -> str:
        return f"{self.kind.value.lower()}:default/{self.name}"


# ==========================================
# Context map nodes
# ==========================================

@dataclass(frozen=True)
class SourceReference(_Serializable):
    url: Optional[str] = None
    org: Optional[str] = None
    repo: Optional[str] = None
    path: Optional[str] = None


@dataclass(frozen=True)
class ComponentReference(_Serializable):
    name: str
    entityRef: str
    componentType: Optional[str] = None
    sourceUrl: Optional[str] = None
    sourceOrg: Optional[str] = None
    sourceRepo: Optional[str] = None
    sourcePath: Optional[str] = None


@dataclass(frozen=True)
class ApiReference(_Serializable):
    name: str
    entityRef: str
    apiType: Optional[str] = None


@dataclass
class BoundedContext(_Serializable):
    id: str
    displayName: str
    domain: Optional[str] = None
    components: List[ComponentReference] = field(default_factory=list)
    providedApis: List[ApiReference] = field(default_factory=list)
    consumedApis: List[ApiReference] = field(default_factory=list)
    ownerTeam: Optional[str] = None
    sourceUrl: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class ContextRelationship(_Serializable):
    id: str
    upstreamContextId: str
    downstreamContextId: str
    relationshipType: ContextRelationshipType
    viaApis: Tuple[str, ...] = ()
    strength: RelationshipStrength = RelationshipStrength.MEDIUM


@dataclass(frozen=True)
class AggregatedRelationship(_Serializable):
    """All relationship records between one (upstream, downstream) pair."""

    upstreamContextId: str
    downstreamContextId: str
    relationshipTypes: Tuple[ContextRelationshipType, ...]
    viaApis: Tuple[str, ...]
    count: int


# ==========================================
# Query results
# ==========================================

@dataclass(frozen=True)
class ContextMapMetadata(_Serializable):
    generatedAt: datetime
    version: str
    totalContexts: int
    totalRelationships: int


@dataclass(frozen=True)
class ContextMap(_Serializable):
    contexts: List[BoundedContext]
    relationships: List[ContextRelationship]
    metadata: ContextMapMetadata

    def find_context(self, context_id: str) -> Optional[BoundedContext]:
        return next((c for c in self.contexts if c.id == context_id), None)


@dataclass(frozen=True)
class ContextMetrics(_Serializable):
    apiCount: int
    dependencyCount: int


@dataclass(frozen=True)
class ContextAnalysis(_Serializable):
    context: BoundedContext
    upstream: List[ContextRelationship]
    downstream: List[ContextRelationship]
    metrics: ContextMetrics


@dataclass(frozen=True)
class ContextDependencies(_Serializable):
    contextId: str
    upstream: List[ContextRelationship]
    downstream: List[ContextRelationship]
    upstreamCount: int
    downstreamCount: int


@dataclass(frozen=True)
class NotFound:
    """Lookup outcome for a context id that is not part of the current map."""

    contextId: str


ContextLookup = Union[BoundedContext, NotFound]
AnalysisLookup = Union[ContextAnalysis, NotFound]
DependenciesLookup = Union[ContextDependencies, NotFound]
