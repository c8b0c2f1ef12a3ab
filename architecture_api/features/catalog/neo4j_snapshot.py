"""
Neo4j-backed entity snapshot accessor.

Catalog entities are stored as one node per entity:

    (:CatalogEntity {kind, name, title, description, system, domain, owner,
                     type, providesApis: [..], consumesApis: [..],
                     annotations: '<json object>'})

Each ``load_snapshot()`` call reads every Component/API/System/Domain node in
a single query. Nodes that cannot be mapped are skipped with a warning; driver
errors (Neo4j unavailable, auth failure, ...) propagate to the caller.
"""

from __future__ import annotations

import json
import re
from typing import Any, Mapping

from neo4j import Driver

from context_discovery.catalog import catalog_entity_from_descriptor
from context_discovery.snapshot import EntitySnapshot
from context_discovery.types import CatalogEntity, EntityKind

from architecture_api.platform.env import get_entity_label
from architecture_api.platform.neo4j import NEO4J_DATABASE, open_session
from architecture_api.platform.observability.request_logging import RequestTimer
from architecture_api.platform.observability.smart_logger import SmartLogger

_LABEL_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

SUPPORTED_KINDS = [kind.value for kind in EntityKind]


def node_to_descriptor(props: Mapping[str, Any]) -> dict[str, Any]:
    """Rebuild a Backstage-style descriptor from stored node properties."""
    raw_annotations = props.get("annotations")
    if isinstance(raw_annotations, str) and raw_annotations.strip():
        annotations = json.loads(raw_annotations)
        if not isinstance(annotations, dict):
            raise ValueError("annotations must be a JSON object")
    elif isinstance(raw_annotations, Mapping):
        annotations = dict(raw_annotations)
    else:
        annotations = {}

    return {
        "kind": props.get("kind"),
        "metadata": {
            "name": props.get("name"),
            "title": props.get("title"),
            "description": props.get("description"),
            "annotations": annotations,
        },
        "spec": {
            "system": props.get("system"),
            "domain": props.get("domain"),
            "owner": props.get("owner"),
            "type": props.get("type"),
            "providesApis": list(props.get("providesApis") or []),
            "consumesApis": list(props.get("consumesApis") or []),
        },
    }


def descriptor_to_node(descriptor: Mapping[str, Any]) -> dict[str, Any]:
    """Flatten a descriptor into Neo4j-storable properties (inverse of node_to_descriptor)."""
    metadata = descriptor.get("metadata") or {}
    spec = descriptor.get("spec") or {}
    return {
        "kind": descriptor.get("kind"),
        "name": metadata.get("name"),
        "title": metadata.get("title"),
        "description": metadata.get("description"),
        "annotations": json.dumps(metadata.get("annotations") or {}, ensure_ascii=False, sort_keys=True),
        "system": spec.get("system"),
        "domain": spec.get("domain"),
        "owner": spec.get("owner"),
        "type": spec.get("type"),
        "providesApis": list(spec.get("providesApis") or []),
        "consumesApis": list(spec.get("consumesApis") or []),
    }


class Neo4jSnapshotAccessor:
    """Reads catalog entities from Neo4j on every ``load_snapshot()``."""

    def __init__(self, driver: Driver, *, database: str | None = NEO4J_DATABASE, label: str | None = None):
        """
        Args:
            driver: Neo4j driver instance (shared, owned by the app lifespan)
            database: target database; None uses the server default
            label: node label holding catalog entities
        """
        label = label or get_entity_label()
        if not _LABEL_RE.match(label):
            raise ValueError(f"Invalid Neo4j label: {label!r}")
        self.driver = driver
        self.database = database
        self.label = label

    @property
    def query(self) -> str:
        return f"""
        MATCH (e:{self.label})
        WHERE e.kind IN $kinds
        RETURN e {{.*}} AS entity
        ORDER BY e.kind, e.name
        """

    def load_snapshot(self) -> EntitySnapshot:
        timer = RequestTimer()
        entities: list[CatalogEntity] = []
        skipped = 0

        with open_session(self.driver, self.database) as session:
            result = session.run(self.query, kinds=SUPPORTED_KINDS)
            for record in result:
                props = dict(record["entity"])
                try:
                    entity = catalog_entity_from_descriptor(node_to_descriptor(props))
                except (ValueError, TypeError) as e:
                    entity = None
                    SmartLogger.log(
                        "WARNING",
                        "Catalog entity node could not be mapped: skipping.",
                        category="catalog.neo4j.entity.skip",
                        params={
                            "entity": {"kind": props.get("kind"), "name": props.get("name")},
                            "error": {"type": type(e).__name__, "message": str(e)},
                        },
                    )
                if entity is None:
                    skipped += 1
                    continue
                entities.append(entity)

        snapshot = EntitySnapshot.from_entities(entities)
        SmartLogger.log(
            "INFO",
            "Catalog snapshot loaded from Neo4j.",
            category="catalog.neo4j.snapshot.done",
            params={
                "label": self.label,
                "summary": {
                    "components": len(snapshot.components),
                    "apis": len(snapshot.apis),
                    "systems": len(snapshot.systems),
                    "domains": len(snapshot.domains),
                    "skipped": skipped,
                },
                "duration_ms": timer.ms(),
            },
        )
        return snapshot
