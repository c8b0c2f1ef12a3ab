#!/usr/bin/env python3
"""
Seed the demo catalog into Neo4j (non-interactive)
Usage: python3 docs/scripts/load_catalog.py [--keep-existing]

Writes one (:CatalogEntity) node per demo descriptor so the API can run
against Neo4j with ARCHITECTURE_USE_MOCK_DATA disabled.
"""

from __future__ import annotations

import sys

from neo4j import GraphDatabase

from architecture_api.features.catalog.demo_catalog import generate_demo_descriptors
from architecture_api.features.catalog.neo4j_snapshot import descriptor_to_node
from architecture_api.platform.env import get_entity_label
from architecture_api.platform.neo4j import (
    NEO4J_DATABASE,
    NEO4J_PASSWORD,
    NEO4J_URI,
    NEO4J_USER,
    open_session,
)
from architecture_api.platform.observability.smart_logger import SmartLogger

LOG_CATEGORY = "scripts.load_catalog"


def log(level: str, message: str, params: dict | None = None) -> None:
    SmartLogger.log(level, message, category=LOG_CATEGORY, params=params)


def seed_catalog(driver, label: str, *, keep_existing: bool = False) -> int:
    nodes = [descriptor_to_node(d) for d in generate_demo_descriptors()]

    with open_session(driver, NEO4J_DATABASE) as session:
        session.run(f"CREATE CONSTRAINT catalog_entity_key IF NOT EXISTS FOR (e:{label}) REQUIRE (e.kind, e.name) IS UNIQUE")
        if not keep_existing:
            session.run(f"MATCH (e:{label}) DETACH DELETE e")
            log("INFO", "Existing catalog entities removed.", params={"label": label})
        session.run(
            f"""
            UNWIND $nodes AS node
            MERGE (e:{label} {{kind: node.kind, name: node.name}})
            SET e += node
            """,
            nodes=nodes,
        )
    return len(nodes)


def main() -> int:
    keep_existing = "--keep-existing" in sys.argv[1:]
    label = get_entity_label()

    log("INFO", "Seeding demo catalog into Neo4j.", params={"neo4j_uri": NEO4J_URI, "label": label})
    driver = GraphDatabase.driver(NEO4J_URI, auth=(NEO4J_USER, NEO4J_PASSWORD))
    try:
        driver.verify_connectivity()
        count = seed_catalog(driver, label, keep_existing=keep_existing)
    except Exception as e:
        log("ERROR", "Seeding failed.", params={"error": {"type": type(e).__name__, "message": str(e)}})
        return 1
    finally:
        driver.close()

    log("INFO", "Demo catalog loaded.", params={"entities": count})
    return 0


if __name__ == "__main__":
    sys.exit(main())
