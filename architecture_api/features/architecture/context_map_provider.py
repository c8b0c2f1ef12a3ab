"""
Wiring between the HTTP layer and the context discovery engine.

The engine receives its snapshot accessor explicitly; routes obtain the
service through the ``get_context_map_service`` dependency, which tests
override with an in-memory accessor.
"""

from __future__ import annotations

from context_discovery.context_map import ContextMapService
from context_discovery.snapshot import EntitySnapshotAccessor

from architecture_api.features.catalog.demo_catalog import demo_snapshot_accessor
from architecture_api.features.catalog.neo4j_snapshot import Neo4jSnapshotAccessor
from architecture_api.platform.env import use_mock_catalog
from architecture_api.platform.neo4j import get_driver

SNAPSHOT_SOURCE_DEMO = "demo"
SNAPSHOT_SOURCE_NEO4J = "neo4j"


def snapshot_source() -> str:
    return SNAPSHOT_SOURCE_DEMO if use_mock_catalog() else SNAPSHOT_SOURCE_NEO4J


def build_snapshot_accessor() -> EntitySnapshotAccessor:
    if snapshot_source() == SNAPSHOT_SOURCE_DEMO:
        return demo_snapshot_accessor()
    return Neo4jSnapshotAccessor(get_driver())


def get_context_map_service() -> ContextMapService:
    """FastAPI dependency: a fresh service bound to the configured snapshot source."""
    return ContextMapService(build_snapshot_accessor())
