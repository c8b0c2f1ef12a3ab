"""
Shared environment variable helpers and commonly-used settings.

Goal: centralize env parsing rules (truthy handling, stripping, fallbacks) so
feature modules can import consistent behavior instead of duplicating logic.
"""

from __future__ import annotations

import os
from typing import Iterable

from dotenv import load_dotenv

# Load environment variables once for the whole process.
load_dotenv()

_TRUE_VALUES = {"1", "true", "yes", "y", "on"}


def env_str(key: str, default: str | None = None, *, strip: bool = True) -> str | None:
    """Read an environment variable as string with optional stripping."""
    val = os.getenv(key)
    if val is None:
        return default
    if strip:
        val = val.strip()
    return val if val != "" else default


def env_first(keys: Iterable[str], default: str | None = None, *, strip: bool = True) -> str | None:
    """Return the first non-empty environment variable value from keys."""
    for key in keys:
        val = env_str(key, None, strip=strip)
        if val is not None:
            return val
    return default


def env_flag(key: str, default: bool = False) -> bool:
    """Read an environment variable as a boolean flag."""
    val = (os.getenv(key) or "").strip().lower()
    if not val:
        return default
    return val in _TRUE_VALUES


def env_list(key: str, default: list[str] | None = None) -> list[str]:
    """Read a comma-separated environment variable as a list of non-empty items."""
    val = env_str(key, None)
    if val is None:
        return list(default or [])
    return [item.strip() for item in val.split(",") if item.strip()]


# =============================================================================
# Neo4j (catalog entity store)
# =============================================================================

def get_neo4j_uri(default: str = "bolt://localhost:7687") -> str:
    return env_str("NEO4J_URI", default) or default


def get_neo4j_user(default: str = "neo4j") -> str:
    return env_str("NEO4J_USER", default) or default


def get_neo4j_password(default: str = "neo4j") -> str:
    return env_str("NEO4J_PASSWORD", default) or default


def get_neo4j_database() -> str | None:
    """Get target Neo4j database name (supports legacy 'neo4j_database')."""
    db = env_first(["NEO4J_DATABASE", "neo4j_database"], default=None)
    return (db or "").strip() or None


# =============================================================================
# Architecture context map
# =============================================================================

def use_mock_catalog() -> bool:
    """Serve the bundled demo catalog instead of reading entities from Neo4j."""
    return env_flag("ARCHITECTURE_USE_MOCK_DATA", False)


def get_entity_label(default: str = "CatalogEntity") -> str:
    """Neo4j node label under which catalog entities are stored."""
    return env_str("ARCHITECTURE_ENTITY_LABEL", default) or default


def get_cors_allow_origins() -> list[str]:
    return env_list("CORS_ALLOW_ORIGINS", ["*"])
