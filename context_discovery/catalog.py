"""
Context discovery — catalog descriptor mapping

Converts Backstage-style entity descriptors

    {"kind": "Component",
     "metadata": {"name": ..., "annotations": {...}},
     "spec": {"system": ..., "owner": ..., "providesApis": [...], ...}}

into ``CatalogEntity`` objects. No schema validation happens here: missing
optional fields become ``None``, and descriptors of other kinds (Group, User,
Location, ...) are skipped.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional, Tuple

from .types import CatalogEntity, EntityKind

DOMAIN_ANNOTATION = "backstage.io/domain"

_KINDS = {kind.value.lower(): kind for kind in EntityKind}


def _opt_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _str_tuple(value: Any) -> Tuple[str, ...]:
    if not value:
        return ()
    if isinstance(value, str):
        value = [value]
    return tuple(s for s in (_opt_str(v) for v in value) if s)


def parse_entity_kind(raw: Any) -> Optional[EntityKind]:
    return _KINDS.get(str(raw or "").strip().lower())


def catalog_entity_from_descriptor(descriptor: Mapping[str, Any]) -> Optional[CatalogEntity]:
    """Map one descriptor; returns None for unsupported kinds or nameless entities."""
    kind = parse_entity_kind(descriptor.get("kind"))
    metadata = descriptor.get("metadata") or {}
    spec = descriptor.get("spec") or {}
    name = _opt_str(metadata.get("name"))
    if kind is None or name is None:
        return None

    annotations = {
        str(k): str(v)
        for k, v in (metadata.get("annotations") or {}).items()
        if v is not None
    }

    common = {
        "kind": kind,
        "name": name,
        "ownerTeam": _opt_str(spec.get("owner")),
        "sourceAnnotations": annotations,
        "title": _opt_str(metadata.get("title")),
        "description": _opt_str(metadata.get("description")),
    }

    if kind is EntityKind.COMPONENT:
        return CatalogEntity(
            **common,
            groupKey=_opt_str(spec.get("system")),
            domainAnnotation=_opt_str(annotations.get(DOMAIN_ANNOTATION)),
            providesApiRefs=_str_tuple(spec.get("providesApis")),
            consumesApiRefs=_str_tuple(spec.get("consumesApis")),
            componentType=_opt_str(spec.get("type")),
        )
    if kind is EntityKind.API:
        return CatalogEntity(
            **common,
            groupKey=_opt_str(spec.get("system")),
            apiType=_opt_str(spec.get("type")),
        )
    if kind is EntityKind.SYSTEM:
        return CatalogEntity(**common, domain=_opt_str(spec.get("domain")))
    return CatalogEntity(**common)


def load_catalog_entities(descriptors: Iterable[Mapping[str, Any]]) -> List[CatalogEntity]:
    entities: List[CatalogEntity] = []
    for descriptor in descriptors:
        entity = catalog_entity_from_descriptor(descriptor)
        if entity is not None:
            entities.append(entity)
    return entities
