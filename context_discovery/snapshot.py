"""
Context discovery — entity snapshot

The engine never fetches entities itself. Callers hand it an
``EntitySnapshotAccessor`` whose ``load_snapshot()`` returns every catalog
entity at one point in time. Accessor failures are not caught here; they
propagate to whoever asked for the computation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Protocol, Tuple, runtime_checkable

from .types import CatalogEntity, EntityKind


@dataclass(frozen=True)
class EntitySnapshot:
    """Immutable, kind-partitioned view over a set of catalog entities."""

    components: Tuple[CatalogEntity, ...] = ()
    apis: Tuple[CatalogEntity, ...] = ()
    systems: Tuple[CatalogEntity, ...] = ()
    domains: Tuple[CatalogEntity, ...] = ()

    @classmethod
    def from_entities(cls, entities: Iterable[CatalogEntity]) -> "EntitySnapshot":
        buckets = {kind: [] for kind in EntityKind}
        for entity in entities:
            buckets[entity.kind].append(entity)
        return cls(
            components=tuple(buckets[EntityKind.COMPONENT]),
            apis=tuple(buckets[EntityKind.API]),
            systems=tuple(buckets[EntityKind.SYSTEM]),
            domains=tuple(buckets[EntityKind.DOMAIN]),
        )

    @property
    def is_empty(self) -> bool:
        return not (self.components or self.apis or self.systems or self.domains)

    def __len__(self) -> int:
        return len(self.components) + len(self.apis) + len(self.systems) + len(self.domains)


@runtime_checkable
class EntitySnapshotAccessor(Protocol):
    def load_snapshot(self) -> EntitySnapshot: ...


class InMemorySnapshotAccessor:
    """Serves a fixed list of entities (tests, demo catalog, pre-fetched data)."""

    def __init__(self, entities: Iterable[CatalogEntity] = ()):
        self._snapshot = EntitySnapshot.from_entities(entities)

    def load_snapshot(self) -> EntitySnapshot:
        return self._snapshot
